# tests/services/test_scope.py
import pytest

from scoperbac.database import models
from scoperbac.services.exceptions import UnsupportedReferenceError
from scoperbac.services.scope import UNSCOPED, compose, identify


class Opaque:
    pass


class Tenant:
    """id를 가지지만 SQLAlchemy 모델은 아닌 객체"""
    def __init__(self, id):
        self.id = id


class TestCompose:
    def test_no_arguments_is_global_scope(self):
        assert compose() is None

    def test_none_arguments_are_skipped(self):
        assert compose(None) is None
        assert compose("org", None, 1) == "org:1"

    @pytest.mark.parametrize("args, expected", [
        (("123",), "123"),
        ((123,), "123"),
        ((1, 2, 3), "1:2:3"),
        (("1", "2", "3"), "1:2:3"),
        (({"id": 123},), "123"),
    ])
    def test_supported_scope_types(self, args, expected):
        assert compose(*args) == expected

    def test_model_instance_uses_type_name(self):
        role = models.Role(id="r1", name="member", scope=None)
        assert compose(role) == "Role:r1"
        assert compose("org", role) == "org:Role:r1"

    def test_identifiable_object_without_type_name(self):
        assert identify(Tenant(42)) == "42"

    def test_non_identifiable_object_is_rejected(self):
        with pytest.raises(UnsupportedReferenceError):
            compose(Opaque())
        with pytest.raises(UnsupportedReferenceError):
            compose({"name": "no-id"})


def test_unscoped_sentinel_is_distinct_from_none():
    assert UNSCOPED is not None
    assert not UNSCOPED
    assert repr(UNSCOPED) == "UNSCOPED"
