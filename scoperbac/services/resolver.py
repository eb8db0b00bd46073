import logging
from typing import Any, Callable, Dict, List, Optional

from scoperbac.database import models
from scoperbac.repositories.interfaces import IRoleRepository
from scoperbac.services.refs import ById, ByName, ByIdOrName, Resolved, to_refs, unique
from scoperbac.services.scope import UNSCOPED

logger = logging.getLogger(__name__)

RolePredicate = Callable[[models.Role], bool]


class RoleResolver:
    """id, 이름, Role 객체가 섞인 참조 목록을 Role 객체 목록으로 변환합니다."""

    def __init__(self, role_repo: IRoleRepository):
        self.role_repo = role_repo

    def resolve(self, refs: Any, scope: Any = UNSCOPED,
                predicate: Optional[RolePredicate] = None) -> List[models.Role]:
        """
        역할 참조를 중복 없는 Role 목록으로 변환합니다.

        문자열 참조는 한 번의 조회로 id 또는 이름과 일치하는 역할을 가져옵니다.
        찾지 못한 참조는 결과에서 조용히 빠집니다.

        Args:
            refs: 단일 값 또는 리스트. 각 원소는 id/이름 문자열, Role 객체, 또는 RoleRef.
            scope: 지정하면 해당 scope의 역할만 남깁니다. (None은 전역 scope)
            predicate: 추가로 적용할 필터 함수.

        Returns:
            입력 순서, 그 다음 조회 순서로 정렬된 Role 목록. (id 기준 중복 제거)
        """
        ids, names, direct = [], [], []
        for ref in to_refs(refs):
            if isinstance(ref, Resolved):
                direct.append(ref.role)
            elif isinstance(ref, ById):
                ids.append(ref.value)
            elif isinstance(ref, ByName):
                names.append(ref.value)
            elif isinstance(ref, ByIdOrName):
                ids.append(ref.value)
                names.append(ref.value)

        fetched = self._fetch(ids, names, scope) if ids or names else []

        seen: Dict[str, models.Role] = {}
        for role in direct + fetched:
            if role.id not in seen:
                seen[role.id] = role

        roles = list(seen.values())
        if scope is not UNSCOPED:
            roles = [role for role in roles if role.scope == scope]
        if predicate is not None:
            roles = [role for role in roles if predicate(role)]
        return roles

    def _fetch(self, ids: List[str], names: List[str], scope: Any) -> List[models.Role]:
        matchers = []
        if ids:
            matchers.append({"id": {"inq": unique(ids)}})
        if names:
            matchers.append({"name": {"inq": unique(names)}})
        where: Dict[str, Any] = {"or": matchers}
        if scope is not UNSCOPED:
            where["scope"] = scope
        return self.role_repo.find({"where": where})
