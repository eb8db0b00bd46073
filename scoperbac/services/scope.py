"""
scope 합성 유틸리티.

scope는 역할 네임스페이스와 매핑을 테넌트 단위로 분리하는 파티션 키입니다.
None은 전역 파티션이고, UNSCOPED는 "scope 조건을 걸지 않음"을 뜻합니다.
"""
from typing import Any, Optional

from scoperbac.services.exceptions import UnsupportedReferenceError

SEPARATOR = ":"


class _Unscoped:
    """scope가 바인딩되지 않은 상태를 나타내는 센티넬 (None과 구별됨)"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNSCOPED"

    def __bool__(self):
        return False


UNSCOPED = _Unscoped()


def _type_name(target) -> Optional[str]:
    # SQLAlchemy 매핑 모델이면 클래스 이름을 타입으로 사용합니다.
    cls = type(target)
    if hasattr(cls, "__mapper__") or hasattr(cls, "__scope_type__"):
        return getattr(cls, "__scope_type__", cls.__name__)
    return None


def identify(target: Any, separator: str = SEPARATOR) -> str:
    """
    scope 인자 하나를 토큰 문자열로 변환합니다.

    - 문자열/숫자: 그대로 문자열화
    - id를 가진 딕셔너리: "<id>"
    - id를 가진 모델 객체: "<TypeName>:<id>" (타입 이름이 없으면 "<id>")

    Raises:
        UnsupportedReferenceError: id도 없고 의미 있는 문자열 표현도 없는 값일 때.
    """
    if isinstance(target, (str, int, float)):
        return str(target)

    if isinstance(target, dict):
        entity_id = target.get("id")
        if entity_id:
            return str(entity_id)
        raise UnsupportedReferenceError(f"Unsupported target to identify: {target!r}")

    entity_id = getattr(target, "id", None)
    if entity_id:
        type_name = _type_name(target)
        if type_name:
            return f"{type_name}{separator}{entity_id}"
        return str(entity_id)

    cls = type(target)
    if cls.__str__ is object.__str__ and cls.__repr__ is object.__repr__:
        raise UnsupportedReferenceError(f"Unsupported target to identify: {target!r}")
    if isinstance(target, (list, tuple, set)):
        raise UnsupportedReferenceError(f"Unsupported target to identify: {target!r}")
    return str(target)


def compose(*args: Any) -> Optional[str]:
    """
    여러 scope 인자를 하나의 scope 문자열로 합성합니다.

    인자가 없거나 모두 None이면 전역 scope(None)를 반환합니다.
    각 토큰은 인자 순서대로 ':'로 연결됩니다.

        compose('org', 1) == 'org:1'
        compose(store) == 'Store:<store.id>'
    """
    tokens = [identify(arg) for arg in args if arg is not None]
    if not tokens:
        return None
    return SEPARATOR.join(tokens)
