from sqlalchemy import Column, String, JSON

from scoperbac.utils.ids import generate_id
from ..database import Base

class Role(Base):
    """
    스코프(테넌트) 안에서 이름을 가지는 권한 묶음을 정의합니다.
    (예: 'admin', 'member').
    이름은 scope와 함께일 때만 의미 있게 구분되며, scope가 None이면 전역 파티션입니다.
    parent_ids는 같은 scope 안의 부모 역할 id 목록(중복 없음)으로, 상속 간선(자식 -> 부모)을 나타냅니다.
    """
    __tablename__ = "roles"
    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False, index=True)
    scope = Column(String, nullable=True, index=True)
    parent_ids = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<Role id={self.id!r} name={self.name!r} scope={self.scope!r}>"
