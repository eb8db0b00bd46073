"""
호출 인자 형태 검증. 모두 I/O 이전에 ValidationError를 발생시킵니다.
"""
from typing import Any

from scoperbac.database import models
from scoperbac.services.exceptions import ValidationError
from scoperbac.services.refs import ById, ByName, ByIdOrName, Resolved

_REF_TYPES = (str, models.Role, ById, ByName, ByIdOrName, Resolved)


def check_filter(filter: Any) -> None:
    if filter is None:
        return
    if not isinstance(filter, dict):
        raise ValidationError(f"filter must be a dict, got {type(filter).__name__}.")
    check_where(filter.get("where"), "filter.where")
    for key in ("limit", "skip"):
        value = filter.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValidationError(f"filter.{key} must be an int.")
    order = filter.get("order")
    if order is not None and not isinstance(order, (str, list, tuple)):
        raise ValidationError("filter.order must be a string or a list of strings.")


def check_where(where: Any, label: str = "where") -> None:
    if where is not None and not isinstance(where, dict):
        raise ValidationError(f"{label} must be a dict, got {type(where).__name__}.")


def check_str_or_dict(value: Any, label: str, allow_none: bool = False) -> None:
    if value is None and allow_none:
        return
    if not isinstance(value, (str, dict)):
        raise ValidationError(f"{label} must be a string or a dict.")


def check_role_data(data: Any) -> None:
    """scope 없는 파사드에서의 add 인자: {'scope': str|None, 'name': str, ...}"""
    if not isinstance(data, dict):
        raise ValidationError("role data must be a dict.")
    if not isinstance(data.get("name"), str) or not data["name"]:
        raise ValidationError("role data requires a non-empty 'name'.")
    if "scope" not in data:
        raise ValidationError("role data requires a 'scope' (use None for global).")
    if data["scope"] is not None and not isinstance(data["scope"], str):
        raise ValidationError("role data 'scope' must be a string or None.")


def check_role_arg(role: Any, label: str = "role") -> None:
    if not isinstance(role, _REF_TYPES):
        raise ValidationError(f"{label} must be a role id, name, or Role.")


def check_roles_arg(roles: Any, label: str = "roles") -> None:
    if isinstance(roles, (list, tuple, set, frozenset)):
        for item in roles:
            # 객체 항목은 형태만 허용하고, 해석 단계에서 경고 후 제외됩니다.
            if not isinstance(item, _REF_TYPES + (dict,)):
                raise ValidationError(f"{label} items must be role ids, names, or Roles.")
        return
    if not isinstance(roles, _REF_TYPES + (dict,)):
        raise ValidationError(f"{label} must be a role id, name, Role, or a list of them.")
