import uuid


def generate_id() -> str:
    """충돌 가능성이 매우 낮은 16자리 짧은 식별자를 생성합니다."""
    return uuid.uuid4().hex[:16]
