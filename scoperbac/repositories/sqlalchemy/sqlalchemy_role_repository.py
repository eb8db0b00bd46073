from scoperbac.database import models
from scoperbac.repositories.interfaces import IRoleRepository
from .base import SqlalchemyCrudRepository

class SqlalchemyRoleRepository(SqlalchemyCrudRepository, IRoleRepository):
    model = models.Role
