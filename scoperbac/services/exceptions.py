# scoperbac/services/exceptions.py

class RbacError(Exception):
    """모든 RBAC 엔진 예외의 기반 클래스"""
    pass

# --- Validation Exceptions ---
class ValidationError(RbacError, ValueError):
    """호출 인자의 형태가 올바르지 않을 때 (I/O 이전에 발생)"""
    pass

class UnsupportedReferenceError(RbacError, TypeError):
    """scope 또는 역할 인자를 식별자로 변환할 수 없을 때"""
    pass

# --- Lookup Exceptions ---
class RoleNotFoundError(RbacError):
    """상속 대상 역할을 찾을 수 없을 때"""
    pass
