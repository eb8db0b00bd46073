from scoperbac.factory import create_roles
from scoperbac.services.exceptions import (
    RbacError, ValidationError, UnsupportedReferenceError, RoleNotFoundError
)
from scoperbac.services.refs import ById, ByName, ByIdOrName, Resolved
from scoperbac.services.role_service import RoleService
from scoperbac.services.scope import UNSCOPED, compose

__all__ = [
    "create_roles", "RoleService", "UNSCOPED", "compose",
    "ById", "ByName", "ByIdOrName", "Resolved",
    "RbacError", "ValidationError", "UnsupportedReferenceError", "RoleNotFoundError",
]
