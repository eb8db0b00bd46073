from .sqlalchemy_role_repository import SqlalchemyRoleRepository
from .sqlalchemy_role_mapping_repository import SqlalchemyRoleMappingRepository

__all__ = ["SqlalchemyRoleRepository", "SqlalchemyRoleMappingRepository"]
