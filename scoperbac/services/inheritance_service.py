import logging
from typing import Any, List

from scoperbac.database import models
from scoperbac.repositories.interfaces import IRoleRepository
from scoperbac.services.exceptions import RoleNotFoundError, ValidationError
from scoperbac.services.refs import ById, unique
from scoperbac.services.resolver import RoleResolver
from scoperbac.services.scope import UNSCOPED

logger = logging.getLogger(__name__)


class InheritanceService:
    """역할 상속 그래프(자식 -> 부모)를 관리하고 조상 집합을 계산합니다."""

    def __init__(self, role_repo: IRoleRepository, resolver: RoleResolver, scope: Any = UNSCOPED):
        """
        InheritanceService를 초기화합니다.

        Args:
            role_repo: 역할 데이터에 접근하기 위한 리포지토리.
            resolver: 역할 참조를 Role 객체로 변환하는 리졸버.
            scope: 조회 시 적용할 scope. UNSCOPED면 scope 조건을 걸지 않습니다.
        """
        self.role_repo = role_repo
        self.resolver = resolver
        self.scope = scope

    def load_role(self, role: Any) -> models.Role:
        """
        상속 대상 역할 하나를 Role 객체로 가져옵니다.

        Raises:
            RoleNotFoundError: id 또는 이름으로 역할을 찾을 수 없을 때.
            ValidationError: 이름이 여러 역할(예: 여러 scope)과 일치하여 대상을 특정할 수 없을 때.
        """
        if isinstance(role, models.Role):
            return role
        found = self.resolver.resolve(role, scope=self.scope)
        if not found:
            raise RoleNotFoundError(f"Role '{role}' not found.")
        if len(found) > 1:
            raise ValidationError(
                f"Role '{role}' is ambiguous: matched {len(found)} roles. Use the role id or a scoped service."
            )
        return found[0]

    def _resolve_parent_ids(self, role: models.Role, parents: Any) -> List[str]:
        # 부모는 같은 scope 안에서만 찾고, 자기 자신은 제외합니다.
        resolved = self.resolver.resolve(parents, scope=role.scope, predicate=lambda p: p.id != role.id)
        return [parent.id for parent in resolved]

    def inherit(self, role: Any, parents: Any) -> models.Role:
        """부모 역할들을 role.parent_ids에 추가(합집합)하고 저장합니다."""
        role = self.load_role(role)
        parent_ids = self._resolve_parent_ids(role, parents)
        role.parent_ids = unique(list(role.parent_ids or []) + parent_ids)
        return self.role_repo.save(role)

    def uninherit(self, role: Any, parents: Any) -> models.Role:
        """부모 역할들을 role.parent_ids에서 제거하고 저장합니다."""
        role = self.load_role(role)
        removed = set(self._resolve_parent_ids(role, parents))
        role.parent_ids = [pid for pid in (role.parent_ids or []) if pid not in removed]
        return self.role_repo.save(role)

    def set_inherits(self, role: Any, parents: Any) -> models.Role:
        """role.parent_ids를 주어진 부모 역할들로 통째로 교체하고 저장합니다."""
        role = self.load_role(role)
        role.parent_ids = unique(self._resolve_parent_ids(role, parents))
        return self.role_repo.save(role)

    def get_parent_ids(self, roles: Any) -> List[str]:
        """주어진 역할들의 직계 부모 id를 중복 없이 반환합니다."""
        resolved = self.resolver.resolve(roles, scope=self.scope)
        return unique(pid for role in resolved for pid in (role.parent_ids or []))

    def get_parents(self, roles: Any) -> List[models.Role]:
        """주어진 역할들의 직계 부모 Role 객체를 반환합니다."""
        parent_ids = self.get_parent_ids(roles)
        return self.resolver.resolve([ById(pid) for pid in parent_ids], scope=self.scope)

    def recurse_parent_ids(self, roles: Any) -> List[str]:
        """
        주어진 역할들의 모든 조상 id(전이 폐포)를 계산합니다.

        한 단계씩 너비 우선으로 확장하며, 이미 answer에 들어간 id는 다시 확장하지 않습니다.
        따라서 부모 그래프에 순환이 있어도 반드시 종료합니다.
        결과 순서는 발견 순서지만 집합으로 취급해야 합니다.
        """
        answer: List[str] = []
        seen = set()
        frontier = roles
        depth = 0
        while True:
            parent_ids = [pid for pid in self.get_parent_ids(frontier) if pid not in seen]
            if not parent_ids:
                return answer
            depth += 1
            logger.debug("Closure level %d discovered %d role(s)", depth, len(parent_ids))
            answer.extend(parent_ids)
            seen.update(parent_ids)
            frontier = [ById(pid) for pid in parent_ids]
