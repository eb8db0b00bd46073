import logging
from typing import Any, Dict, List, Optional

from scoperbac.database import models
from scoperbac.repositories.interfaces import IRoleRepository, IRoleMappingRepository
from scoperbac.services import validation
from scoperbac.services.inheritance_service import InheritanceService
from scoperbac.services.mapping_service import MappingService
from scoperbac.services.resolver import RoleResolver
from scoperbac.services.scope import UNSCOPED, compose

logger = logging.getLogger(__name__)


class RoleService:
    """
    scope 하나에 바인딩된 RBAC 진입점입니다.
    역할 CRUD, 상속 그래프, 역할 매핑 기능을 하나의 scope 안에서 제공합니다.
    """

    def __init__(self, role_repo: IRoleRepository, mapping_repo: IRoleMappingRepository, scope: Any = UNSCOPED):
        """
        RoleService를 초기화합니다.

        Args:
            role_repo: 역할 데이터에 접근하기 위한 리포지토리.
            mapping_repo: 역할 매핑 데이터에 접근하기 위한 리포지토리.
            scope: 바인딩할 scope. None은 전역 scope, UNSCOPED는 scope 조건 없음.
        """
        self.role_repo = role_repo
        self.mapping_repo = mapping_repo
        self._scope = scope
        self.resolver = RoleResolver(role_repo)
        self.inheritance = InheritanceService(role_repo, self.resolver, scope)
        self.mappings = MappingService(mapping_repo, self.resolver, self.inheritance, scope)

    @property
    def scope(self) -> Optional[str]:
        return None if self._scope is UNSCOPED else self._scope

    @property
    def is_scoped(self) -> bool:
        return self._scope is not UNSCOPED

    def scoped(self, *scope_args: Any) -> "RoleService":
        """같은 리포지토리를 공유하며 주어진 scope에 바인딩된 RoleService를 반환합니다."""
        return RoleService(self.role_repo, self.mapping_repo, compose(*scope_args))

    def close(self) -> None:
        """리포지토리가 사용하는 세션을 해제합니다. scoped()로 만든 서비스들도 같은 세션을 공유합니다."""
        self.role_repo.close()
        self.mapping_repo.close()

    def __enter__(self) -> "RoleService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _with_scope(self, where: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        scope_where = {"scope": self._scope}
        return {"and": [where, scope_where]} if where else scope_where

    # --------------------------------------------------------------------------
    ## 역할 CRUD
    # --------------------------------------------------------------------------

    def find(self, filter: Optional[Dict[str, Any]] = None) -> List[models.Role]:
        """필터로 역할을 조회합니다. scope가 바인딩되어 있으면 scope 조건을 AND로 추가합니다."""
        validation.check_filter(filter)
        if self.is_scoped:
            filter = dict(filter or {})
            filter["where"] = self._with_scope(filter.get("where"))
        return self.role_repo.find(filter)

    def count(self, where: Optional[Dict[str, Any]] = None) -> int:
        validation.check_where(where)
        if self.is_scoped:
            where = self._with_scope(where)
        return self.role_repo.count(where)

    def remove(self, where: Any = None) -> int:
        """
        조건에 맞는 역할과 그 역할을 참조하는 모든 매핑을 삭제합니다.
        scope가 바인딩된 경우 문자열은 이름 또는 id로 취급합니다.

        Returns:
            삭제된 역할의 개수.
        """
        if self.is_scoped:
            validation.check_str_or_dict(where, "where", allow_none=True)
            if isinstance(where, str):
                where = {"or": [{"name": where}, {"id": where}]}
            where = self._with_scope(where)
        else:
            validation.check_where(where)

        role_ids = [role.id for role in self.role_repo.find({"where": where, "fields": ["id"]})]
        if not role_ids:
            return 0

        # 매핑을 먼저 지웁니다. 두 단계 사이에서 중단되면 역할이 아닌 매핑이 고아로 남습니다.
        mapping_count = self.mapping_repo.destroy_all({"role_id": {"inq": role_ids}})
        count = self.role_repo.destroy_all({"id": {"inq": role_ids}})
        logger.info("Removed %d role(s) and %d mapping(s) in scope %r", count, mapping_count, self.scope)
        return count

    def add(self, data: Any) -> models.Role:
        """
        역할을 추가합니다. 같은 데이터의 역할이 이미 있으면 그 역할을 반환합니다.
        scope가 바인딩된 경우 문자열은 역할 이름으로 취급하고, scope는 바인딩된 값으로 고정됩니다.
        """
        if self.is_scoped:
            validation.check_str_or_dict(data, "data")
            if isinstance(data, str):
                data = {"name": data}
            data = {**data, "scope": self._scope}
        else:
            validation.check_role_data(data)
        role, created = self.role_repo.find_or_create(data, data)
        if created:
            logger.debug("Created role %r", role)
        return role

    # --------------------------------------------------------------------------
    ## 상속과 부모
    # --------------------------------------------------------------------------

    def inherit(self, role: Any, parents: Any) -> models.Role:
        validation.check_role_arg(role)
        validation.check_roles_arg(parents, "parents")
        return self.inheritance.inherit(role, parents)

    def uninherit(self, role: Any, parents: Any) -> models.Role:
        validation.check_role_arg(role)
        validation.check_roles_arg(parents, "parents")
        return self.inheritance.uninherit(role, parents)

    def set_inherits(self, role: Any, parents: Any) -> models.Role:
        validation.check_role_arg(role)
        validation.check_roles_arg(parents, "parents")
        return self.inheritance.set_inherits(role, parents)

    def resolve(self, roles: Any) -> List[models.Role]:
        """역할 참조를 바인딩된 scope 안의 Role 객체 목록으로 변환합니다."""
        return self.resolver.resolve(roles, scope=self._scope)

    def get_parent_ids(self, roles: Any) -> List[str]:
        return self.inheritance.get_parent_ids(roles)

    def get_parents(self, roles: Any) -> List[models.Role]:
        return self.inheritance.get_parents(roles)

    def recurse_parent_ids(self, roles: Any) -> List[str]:
        return self.inheritance.recurse_parent_ids(roles)

    # --------------------------------------------------------------------------
    ## 역할 매핑
    # --------------------------------------------------------------------------

    def assign(self, roles: Any, users: Any) -> List[models.RoleMapping]:
        return self.mappings.assign(roles, users)

    def unassign(self, roles: Any, users: Any) -> int:
        return self.mappings.unassign(roles, users)

    def find_user_roles(self, user: Any, recursive: bool = False) -> List[str]:
        return self.mappings.find_user_roles(user, recursive)

    def find_role_users(self, role: Any) -> List[str]:
        return self.mappings.find_role_users(role)

    def find_roles_by_users(self, users: Any) -> List[models.RoleMapping]:
        return self.mappings.find_roles_by_users(users)

    def find_users_by_roles(self, roles: Any) -> List[models.RoleMapping]:
        return self.mappings.find_users_by_roles(roles)

    def has_roles(self, user: Any, roles: Any) -> bool:
        return self.mappings.has_roles(user, roles)
