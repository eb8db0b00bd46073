from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple, Union
from scoperbac.database import models

class IRoleMappingRepository(ABC):
    @abstractmethod
    def find(self, filter: Optional[Dict[str, Any]] = None) -> List[models.RoleMapping]:
        """필터에 맞는 역할 매핑 목록을 조회합니다."""
        pass

    @abstractmethod
    def find_by_id(self, mapping_id: str) -> Optional[models.RoleMapping]:
        """고유 ID로 특정 매핑을 조회합니다."""
        pass

    @abstractmethod
    def count(self, where: Optional[Dict[str, Any]] = None) -> int:
        """where 조건에 맞는 매핑의 개수를 조회합니다."""
        pass

    @abstractmethod
    def create(self, data: Union[Dict[str, Any], List[Dict[str, Any]]]) -> Union[models.RoleMapping, List[models.RoleMapping]]:
        """
        하나 또는 여러 개의 매핑을 생성합니다.
        (role_id, user_id) 중복 시 저장소의 예외가 그대로 전파됩니다.
        """
        pass

    @abstractmethod
    def find_or_create(self, where: Dict[str, Any], data: Dict[str, Any]) -> Tuple[models.RoleMapping, bool]:
        """where에 맞는 매핑을 찾고, 없으면 data로 생성합니다."""
        pass

    @abstractmethod
    def destroy_all(self, where: Optional[Dict[str, Any]] = None) -> int:
        """where 조건에 맞는 매핑을 모두 삭제하고 삭제된 개수를 반환합니다."""
        pass

    @abstractmethod
    def save(self, mapping: models.RoleMapping) -> models.RoleMapping:
        """메모리에서 변경된 매핑을 저장소에 반영합니다."""
        pass

    def close(self) -> None:
        """저장소가 사용하는 연결(세션)을 해제합니다. 기본 구현은 아무 것도 하지 않습니다."""
        pass
