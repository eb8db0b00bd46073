from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from scoperbac import config


def create_engine_from_url(url: str, echo: bool = config.SQL_ECHO):
    """
    연결 문자열로 SQLAlchemy 엔진을 생성합니다.
    SQLite인 경우에만 check_same_thread 옵션을 끕니다.
    """
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, echo=echo)


def create_session_factory(url: str = None, engine=None):
    """
    주어진 엔진, 또는 URL(없으면 설정값)로 만든 엔진에 바인딩된 세션 팩토리를 반환합니다.
    autocommit=False, autoflush=False로 설정하여, 명시적으로 commit을 호출해야 DB에 반영됩니다.
    """
    bind = engine if engine is not None else create_engine_from_url(url or config.DATABASE_URL)
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


# 기본 엔진과 세션 팩토리 (설정된 DATABASE_URL 사용)
engine = create_engine_from_url(config.DATABASE_URL)
SessionLocal = create_session_factory(engine=engine)

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()
