# tests/conftest.py
import pytest

from scoperbac.database.database import Base, create_engine_from_url, create_session_factory
from scoperbac.database import models  # noqa: F401  (테이블 등록)
from scoperbac.repositories.sqlalchemy import SqlalchemyRoleRepository, SqlalchemyRoleMappingRepository
from scoperbac.services.role_service import RoleService


@pytest.fixture
def db_session():
    """테스트마다 새로운 인메모리 SQLite 세션을 생성합니다."""
    engine = create_engine_from_url("sqlite://", echo=False)
    Base.metadata.create_all(bind=engine)
    session = create_session_factory(engine=engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def role_repo(db_session) -> SqlalchemyRoleRepository:
    return SqlalchemyRoleRepository(db_session)


@pytest.fixture
def mapping_repo(db_session) -> SqlalchemyRoleMappingRepository:
    return SqlalchemyRoleMappingRepository(db_session)


@pytest.fixture
def roles(role_repo, mapping_repo) -> RoleService:
    """scope가 바인딩되지 않은 RoleService (실제 SQLite 리포지토리 사용)"""
    return RoleService(role_repo, mapping_repo)


def create_inherited_roles(scoped: RoleService):
    """
    A, B, C, D, ABC(A,B,C), BCD(B,C,D), ABCD(ABC,BCD) 역할을 생성합니다.
    """
    assert scoped.is_scoped, "require scoped roles"
    A, B, C, D, ABC, BCD, ABCD = [scoped.add(name) for name in ("A", "B", "C", "D", "ABC", "BCD", "ABCD")]
    scoped.inherit(ABC, [A, B, C])
    scoped.inherit(BCD, [B, C, D])
    scoped.inherit(ABCD, [ABC, BCD])
    return A, B, C, D, ABC, BCD, ABCD


@pytest.fixture
def inherited_roles():
    return create_inherited_roles
