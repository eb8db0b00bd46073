from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple, Union
from scoperbac.database import models

class IRoleRepository(ABC):
    @abstractmethod
    def find(self, filter: Optional[Dict[str, Any]] = None) -> List[models.Role]:
        """
        필터(where, fields, limit, skip, order)에 맞는 역할 목록을 조회합니다.

        Args:
            filter: {'where': {...}, 'limit': 10, 'order': 'name ASC'} 형태의 딕셔너리.
                where는 필드 일치, {'inq': [...]}, 'and'/'or' 조합을 지원합니다.
        """
        pass

    @abstractmethod
    def find_by_id(self, role_id: str) -> Optional[models.Role]:
        """고유 ID로 특정 역할을 조회합니다."""
        pass

    @abstractmethod
    def count(self, where: Optional[Dict[str, Any]] = None) -> int:
        """where 조건에 맞는 역할의 개수를 조회합니다."""
        pass

    @abstractmethod
    def create(self, data: Union[Dict[str, Any], List[Dict[str, Any]]]) -> Union[models.Role, List[models.Role]]:
        """하나 또는 여러 개의 역할을 생성합니다. 입력이 리스트면 리스트를 반환합니다."""
        pass

    @abstractmethod
    def find_or_create(self, where: Dict[str, Any], data: Dict[str, Any]) -> Tuple[models.Role, bool]:
        """where에 맞는 역할을 찾고, 없으면 data로 생성합니다. (역할, 생성여부)를 반환합니다."""
        pass

    @abstractmethod
    def destroy_all(self, where: Optional[Dict[str, Any]] = None) -> int:
        """where 조건에 맞는 역할을 모두 삭제하고 삭제된 개수를 반환합니다."""
        pass

    @abstractmethod
    def save(self, role: models.Role) -> models.Role:
        """메모리에서 변경된 역할을 저장소에 반영합니다."""
        pass

    def close(self) -> None:
        """저장소가 사용하는 연결(세션)을 해제합니다. 기본 구현은 아무 것도 하지 않습니다."""
        pass
