from .role import Role
from .role_mapping import RoleMapping

__all__ = ["Role", "RoleMapping"]
