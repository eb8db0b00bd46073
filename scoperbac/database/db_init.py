import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from .database import engine as default_engine, Base
from .models import Role

logger = logging.getLogger(__name__)


def initialize_db(engine=None, default_roles: Optional[Iterable[str]] = None):
    """
    DB와 테이블을 생성하고, 필요하면 전역(scope=None) 기본 역할을 삽입합니다.
    SQLAlchemy 모델을 사용하여 모든 작업을 수행합니다.
    """
    engine = engine or default_engine
    logger.info("Initializing database on %s", engine.url)

    # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    Base.metadata.create_all(bind=engine)

    if not default_roles:
        return

    names = list(dict.fromkeys(default_roles))
    with Session(engine) as db:
        # 기본 데이터가 이미 있는지 확인
        if db.query(Role).first():
            logger.info("Roles already present, skipping seed.")
            return
        try:
            for name in names:
                db.add(Role(name=name, scope=None, parent_ids=[]))
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("Seeded default roles: %s", ", ".join(names))


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    initialize_db(default_roles=["admin", "member"])
