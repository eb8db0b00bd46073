from .role import IRoleRepository
from .role_mapping import IRoleMappingRepository

__all__ = ["IRoleRepository", "IRoleMappingRepository"]
