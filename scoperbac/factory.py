# scoperbac/factory.py
from typing import Any, Iterable, Optional

from scoperbac import config
from scoperbac.database.database import create_engine_from_url, create_session_factory
from scoperbac.database.db_init import initialize_db
from scoperbac.repositories.sqlalchemy import SqlalchemyRoleRepository, SqlalchemyRoleMappingRepository
from scoperbac.services.role_service import RoleService
from scoperbac.services.scope import UNSCOPED


def create_roles(database_url: Optional[str] = None, scope: Any = UNSCOPED,
                 default_roles: Optional[Iterable[str]] = None) -> RoleService:
    """
    DB 연결부터 리포지토리, 서비스까지 조립하여 RoleService를 반환합니다.

    1. 엔진 생성 및 테이블 초기화
    2. 의존성 생성 (Session -> Repositories -> Service)

    반환된 서비스가 세션을 소유하므로, 사용이 끝나면 close()를 호출하거나 with 문으로 사용합니다.
    """
    engine = create_engine_from_url(database_url or config.DATABASE_URL)
    initialize_db(engine, default_roles)

    db_session = create_session_factory(engine=engine)()
    role_repo = SqlalchemyRoleRepository(db_session)
    mapping_repo = SqlalchemyRoleMappingRepository(db_session)
    return RoleService(role_repo, mapping_repo, scope)
