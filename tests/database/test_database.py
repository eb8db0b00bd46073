# tests/database/test_database.py
from scoperbac.database import database
from scoperbac.database.database import create_engine_from_url, create_session_factory


def test_default_session_factory_is_bound_to_default_engine():
    assert database.SessionLocal.kw["bind"] is database.engine


def test_create_session_factory_with_engine():
    engine = create_engine_from_url("sqlite://", echo=False)
    factory = create_session_factory(engine=engine)

    assert factory.kw["bind"] is engine
    assert factory.kw["autoflush"] is False


def test_create_session_factory_with_url():
    factory = create_session_factory("sqlite://")

    assert str(factory.kw["bind"].url) == "sqlite://"
