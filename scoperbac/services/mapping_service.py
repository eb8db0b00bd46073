import logging
from typing import Any, Dict, List, Optional

from scoperbac.database import models
from scoperbac.repositories.interfaces import IRoleMappingRepository
from scoperbac.services.inheritance_service import InheritanceService
from scoperbac.services.refs import ById, as_list, unique
from scoperbac.services.resolver import RoleResolver
from scoperbac.services.scope import UNSCOPED

logger = logging.getLogger(__name__)

WILDCARD = "*"


def normalize_user(user: Any) -> Optional[str]:
    """주체 하나를 식별자 문자열로 변환합니다. 객체는 id 필드를 사용합니다."""
    if isinstance(user, str):
        return user or None
    if isinstance(user, bool) or user is None:
        return None
    if isinstance(user, int):
        return str(user)
    user_id = user.get("id") if isinstance(user, dict) else getattr(user, "id", None)
    return str(user_id) if user_id else None


def normalize_users(users: Any) -> List[str]:
    """주체 목록을 중복과 빈 값이 제거된 식별자 목록으로 변환합니다."""
    return unique(uid for uid in (normalize_user(u) for u in as_list(users)) if uid)


def _is_wildcard(value: Any) -> bool:
    return isinstance(value, str) and value == WILDCARD


class MappingService:
    """역할과 주체(사용자) 사이의 매핑을 생성, 삭제, 조회합니다."""

    def __init__(self, mapping_repo: IRoleMappingRepository, resolver: RoleResolver,
                 inheritance: InheritanceService, scope: Any = UNSCOPED):
        self.mapping_repo = mapping_repo
        self.resolver = resolver
        self.inheritance = inheritance
        self.scope = scope

    def _where(self, **conditions) -> Dict[str, Any]:
        where: Dict[str, Any] = {}
        if self.scope is not UNSCOPED:
            where["scope"] = self.scope
        where.update(conditions)
        return where

    def _role_ids(self, roles: Any) -> List[str]:
        return [role.id for role in self.resolver.resolve(roles, scope=self.scope)]

    def assign(self, roles: Any, users: Any) -> List[models.RoleMapping]:
        """
        모든 (역할, 사용자) 쌍에 대해 매핑을 생성하고, 새로 생성된 매핑만 반환합니다.
        이미 존재하는 쌍은 건너뜁니다.
        어느 한쪽이라도 비어 있으면 아무것도 만들지 않고 빈 리스트를 반환합니다.
        """
        resolved = self.resolver.resolve(roles, scope=self.scope)
        user_ids = normalize_users(users)
        if not resolved or not user_ids:
            return []

        # (role_id, user_id)는 scope와 무관하게 유일하므로 scope 조건 없이 조회합니다.
        existing = self.mapping_repo.find({"where": {
            "role_id": {"inq": [role.id for role in resolved]},
            "user_id": {"inq": user_ids},
        }})
        assigned = {(m.role_id, m.user_id) for m in existing}

        items = [
            {"user_id": user_id, "role_id": role.id, "scope": role.scope}
            for role in resolved
            for user_id in user_ids
            if (role.id, user_id) not in assigned
        ]
        if not items:
            return []
        return self.mapping_repo.create(items)

    def unassign(self, roles: Any, users: Any) -> int:
        """
        역할과 사용자의 매핑을 삭제하고 삭제된 개수를 반환합니다.

        roles 또는 users가 '*'이면 해당 쪽은 scope 안의 모든 값과 일치합니다.
        주의: '*'가 아닌 빈 사용자 목록은 사용자 조건을 추가하지 않으므로 넓게 삭제됩니다.
        """
        where = self._where()
        if not _is_wildcard(roles):
            where["role_id"] = {"inq": self._role_ids(roles)}
        if not _is_wildcard(users):
            user_ids = normalize_users(users)
            if user_ids:
                where["user_id"] = {"inq": user_ids}

        count = self.mapping_repo.destroy_all(where)
        logger.info("Unassigned %d role mapping(s) in scope %r", count, self.scope)
        return count

    def find_user_roles(self, user: Any, recursive: bool = False) -> List[str]:
        """
        사용자에게 매핑된 역할 id 목록을 반환합니다.
        recursive가 참이면 그 역할들의 모든 조상 id도 포함합니다.
        """
        user_ids = normalize_users(user)
        if not user_ids:
            return []
        mappings = self.mapping_repo.find({"where": self._where(user_id={"inq": user_ids})})
        role_ids = unique(m.role_id for m in mappings)
        if recursive and role_ids:
            parent_ids = self.inheritance.recurse_parent_ids([ById(rid) for rid in role_ids])
            return unique(role_ids + parent_ids)
        return role_ids

    def find_role_users(self, role: Any) -> List[str]:
        """역할에 매핑된 사용자 id 목록을 중복 없이 반환합니다."""
        return unique(m.user_id for m in self.find_users_by_roles(role))

    def find_roles_by_users(self, users: Any) -> List[models.RoleMapping]:
        user_ids = normalize_users(users)
        if not user_ids:
            return []
        return self.mapping_repo.find({"where": self._where(user_id={"inq": user_ids})})

    def find_users_by_roles(self, roles: Any) -> List[models.RoleMapping]:
        role_ids = self._role_ids(roles)
        if not role_ids:
            return []
        return self.mapping_repo.find({"where": self._where(role_id={"inq": role_ids})})

    def has_roles(self, user: Any, roles: Any) -> bool:
        """
        사용자가 주어진 역할을 **모두** 가지고 있는지 확인합니다. (AND 조건)
        사용자나 역할이 비어 있으면 개수 조회 없이 False를 반환합니다.
        """
        user_id = normalize_user(user)
        if not user_id:
            return False
        role_ids = unique(self._role_ids(roles))
        if not role_ids:
            return False
        count = self.mapping_repo.count(self._where(user_id=user_id, role_id={"inq": role_ids}))
        return count == len(role_ids)
