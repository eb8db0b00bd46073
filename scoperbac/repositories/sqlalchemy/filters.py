"""
loopback 스타일의 필터 딕셔너리를 SQLAlchemy 조건식으로 변환합니다.

    {'where': {'scope': 'org:1', 'or': [{'id': {'inq': ids}}, {'name': {'inq': ids}}]},
     'fields': ['id'], 'order': 'name ASC', 'skip': 0, 'limit': 10}
"""
from typing import Any, Dict, Optional

from sqlalchemy import and_, or_, true, false
from sqlalchemy.orm import Query, load_only

from scoperbac.services.exceptions import ValidationError

_OPERATORS = {
    "inq": lambda column, value: column.in_(list(value)),
    "nin": lambda column, value: column.not_in(list(value)),
    "neq": lambda column, value: column.is_not(None) if value is None else column != value,
    "like": lambda column, value: column.like(value),
}

_COMBINATORS = {"and": and_, "or": or_}


def _column(model, name: str):
    if name not in model.__table__.columns:
        raise ValidationError(f"Unknown field '{name}' for {model.__name__}.")
    return getattr(model, name)


def build_where(model, where: Optional[Dict[str, Any]]):
    """where 딕셔너리를 하나의 조건식으로 변환합니다. 비어 있으면 항상 참입니다."""
    if not where:
        return true()
    if not isinstance(where, dict):
        raise ValidationError(f"Where must be a dict, got {type(where).__name__}.")

    clauses = []
    for key, value in where.items():
        if key in _COMBINATORS:
            if not isinstance(value, (list, tuple)):
                raise ValidationError(f"'{key}' expects a list of where objects.")
            subs = [build_where(model, sub) for sub in value]
            if not subs:
                # 빈 and는 참, 빈 or는 거짓
                clauses.append(true() if key == "and" else false())
            else:
                clauses.append(_COMBINATORS[key](*subs))
            continue

        column = _column(model, key)
        if isinstance(value, dict):
            for op, operand in value.items():
                if op not in _OPERATORS:
                    raise ValidationError(f"Unsupported operator '{op}' on field '{key}'.")
                clauses.append(_OPERATORS[op](column, operand))
        elif value is None:
            clauses.append(column.is_(None))
        else:
            clauses.append(column == value)

    if len(clauses) == 1:
        return clauses[0]
    return and_(*clauses)


def _order_by(model, order):
    specs = [order] if isinstance(order, str) else list(order)
    result = []
    for spec in specs:
        parts = spec.split() if isinstance(spec, str) else []
        if not parts:
            raise ValidationError(f"Invalid order spec {spec!r}.")
        column = _column(model, parts[0])
        direction = parts[1].upper() if len(parts) > 1 else "ASC"
        if direction not in ("ASC", "DESC"):
            raise ValidationError(f"Invalid order direction '{parts[1]}'.")
        result.append(column.desc() if direction == "DESC" else column.asc())
    return result


def apply_filter(query: Query, model, filter: Optional[Dict[str, Any]]) -> Query:
    """조회 쿼리에 where, fields, order, skip, limit 을 적용합니다."""
    if not filter:
        return query
    if not isinstance(filter, dict):
        raise ValidationError(f"Filter must be a dict, got {type(filter).__name__}.")

    query = query.filter(build_where(model, filter.get("where")))

    fields = filter.get("fields")
    if fields:
        if isinstance(fields, str):
            fields = [fields]
        elif isinstance(fields, dict):
            fields = [name for name, enabled in fields.items() if enabled]
        query = query.options(load_only(*[_column(model, name) for name in fields]))

    if filter.get("order"):
        query = query.order_by(*_order_by(model, filter["order"]))
    if filter.get("skip"):
        query = query.offset(filter["skip"])
    if filter.get("limit"):
        query = query.limit(filter["limit"])
    return query
