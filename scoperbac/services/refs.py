"""
역할 참조(RoleRef) 타입.

역할을 가리키는 값은 id, 이름, 또는 이미 조회된 Role 객체 중 하나입니다.
원시 문자열은 id 또는 이름 어느 쪽과도 일치할 수 있습니다.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Union

from scoperbac.database import models

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ById:
    value: str


@dataclass(frozen=True)
class ByName:
    value: str


@dataclass(frozen=True)
class ByIdOrName:
    value: str


@dataclass(frozen=True)
class Resolved:
    role: models.Role


RoleRef = Union[ById, ByName, ByIdOrName, Resolved]


def to_ref(value: Any) -> Optional[RoleRef]:
    """
    값 하나를 RoleRef로 변환합니다. 변환할 수 없는 값은 경고를 남기고 None을 반환합니다.
    """
    if isinstance(value, (ById, ByName, ByIdOrName, Resolved)):
        return value
    if isinstance(value, models.Role):
        return Resolved(value)
    if isinstance(value, str):
        return ByIdOrName(value) if value else None
    if value is None:
        return None
    logger.warning("Invalid role reference skipped: %r", value)
    return None


def as_list(values: Any) -> List[Any]:
    """단일 값 또는 컬렉션을 리스트로 변환합니다. (None -> [])"""
    if values is None:
        return []
    if isinstance(values, (list, tuple, set, frozenset)):
        return list(values)
    return [values]


def to_refs(values: Any) -> List[RoleRef]:
    refs = (to_ref(value) for value in as_list(values))
    return [ref for ref in refs if ref is not None]


def unique(items: Iterable[Any]) -> List[Any]:
    """순서를 유지하며 중복을 제거합니다."""
    return list(dict.fromkeys(items))
