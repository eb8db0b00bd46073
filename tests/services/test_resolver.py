# tests/services/test_resolver.py
import logging
import pytest
from unittest.mock import MagicMock

from scoperbac.database import models
from scoperbac.repositories.interfaces import IRoleRepository
from scoperbac.services.refs import ById, ByName
from scoperbac.services.resolver import RoleResolver

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_role_repo() -> MagicMock:
    """IRoleRepository에 대한 모의 객체를 생성합니다."""
    repo = MagicMock(spec=IRoleRepository)
    repo.find.return_value = []
    return repo

@pytest.fixture
def resolver(mock_role_repo: MagicMock) -> RoleResolver:
    return RoleResolver(mock_role_repo)

def make_role(id, name, scope="S", parent_ids=None) -> models.Role:
    return models.Role(id=id, name=name, scope=scope, parent_ids=parent_ids or [])

# ===================================================================
#  resolve 테스트
# ===================================================================
class TestResolve:
    def test_strings_are_fetched_in_one_batched_query(self, resolver: RoleResolver, mock_role_repo: MagicMock):
        """문자열 참조들이 한 번의 조회(id 또는 이름)로 해석되는지 테스트합니다."""
        # === Arrange ===
        admin = make_role("r1", "admin")
        mock_role_repo.find.return_value = [admin]

        # === Act ===
        result = resolver.resolve(["r1", "admin"], scope="S")

        # === Assert ===
        assert result == [admin]
        mock_role_repo.find.assert_called_once_with({"where": {
            "or": [{"id": {"inq": ["r1", "admin"]}}, {"name": {"inq": ["r1", "admin"]}}],
            "scope": "S",
        }})

    def test_same_role_by_object_id_and_name_is_deduplicated(self, resolver: RoleResolver, mock_role_repo: MagicMock):
        # === Arrange ===
        admin = make_role("r1", "admin")
        # 시나리오: 저장소는 같은 역할의 다른 인스턴스를 반환
        mock_role_repo.find.return_value = [make_role("r1", "admin")]

        # === Act ===
        result = resolver.resolve([admin, admin.id, admin.name])

        # === Assert ===
        assert len(result) == 1
        # 검증: 입력으로 들어온 객체가 먼저 채택됨
        assert result[0] is admin

    def test_only_entities_makes_no_query(self, resolver: RoleResolver, mock_role_repo: MagicMock):
        roles = [make_role("r1", "a"), make_role("r2", "b")]

        assert resolver.resolve(roles) == roles
        mock_role_repo.find.assert_not_called()

    def test_unscoped_query_has_no_scope_constraint(self, resolver: RoleResolver, mock_role_repo: MagicMock):
        resolver.resolve("member")

        where = mock_role_repo.find.call_args[0][0]["where"]
        assert "scope" not in where

    def test_explicit_refs_match_only_their_field(self, resolver: RoleResolver, mock_role_repo: MagicMock):
        resolver.resolve([ById("r1"), ByName("admin")], scope=None)

        mock_role_repo.find.assert_called_once_with({"where": {
            "or": [{"id": {"inq": ["r1"]}}, {"name": {"inq": ["admin"]}}],
            "scope": None,
        }})

    def test_invalid_items_are_logged_and_dropped(self, resolver: RoleResolver, mock_role_repo: MagicMock, caplog):
        """문자열도 Role도 아닌 항목은 경고 후 무시되어야 합니다."""
        # === Arrange ===
        member = make_role("r1", "member")

        # === Act ===
        with caplog.at_level(logging.WARNING, logger="scoperbac.services.refs"):
            result = resolver.resolve([member, 42, {"id": "r9"}, None])

        # === Assert ===
        assert result == [member]
        assert "Invalid role reference" in caplog.text
        mock_role_repo.find.assert_not_called()

    def test_scope_filters_direct_entities(self, resolver: RoleResolver):
        inside, outside = make_role("r1", "a", scope="S1"), make_role("r2", "a", scope="S2")

        assert resolver.resolve([inside, outside], scope="S1") == [inside]
        assert resolver.resolve([inside, outside], scope=None) == []

    def test_predicate_is_applied_after_dedup(self, resolver: RoleResolver, mock_role_repo: MagicMock):
        # === Arrange ===
        a, b = make_role("a", "A"), make_role("b", "B")
        mock_role_repo.find.return_value = [b]

        # === Act ===
        result = resolver.resolve([a, "B"], predicate=lambda role: role.id != "a")

        # === Assert ===
        assert result == [b]

    def test_unknown_references_are_omitted(self, resolver: RoleResolver, mock_role_repo: MagicMock):
        # 시나리오: 저장소에서 아무것도 찾지 못함
        assert resolver.resolve(["ghost"], scope="S") == []
