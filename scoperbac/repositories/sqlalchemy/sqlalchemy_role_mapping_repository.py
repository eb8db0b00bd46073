from scoperbac.database import models
from scoperbac.repositories.interfaces import IRoleMappingRepository
from .base import SqlalchemyCrudRepository

class SqlalchemyRoleMappingRepository(SqlalchemyCrudRepository, IRoleMappingRepository):
    model = models.RoleMapping
