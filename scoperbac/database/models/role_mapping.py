from sqlalchemy import Column, String, ForeignKey, UniqueConstraint

from scoperbac.utils.ids import generate_id
from ..database import Base

class RoleMapping(Base):
    """
    외부 주체(사용자)와 역할(Role) 사이의 다대다(many-to-many) 관계를 연결하는 모델입니다.
    scope는 참조하는 역할의 scope와 항상 같으며, 조회 효율을 위해 중복 저장합니다.
    """
    __tablename__ = "role_mappings"
    __table_args__ = (
        UniqueConstraint("role_id", "user_id", name="uq_role_mappings_role_user"),
    )
    id = Column(String, primary_key=True, default=generate_id)
    user_id = Column(String, nullable=False, index=True)
    role_id = Column(String, ForeignKey("roles.id"), nullable=False, index=True)
    scope = Column(String, nullable=True, index=True)

    def __repr__(self):
        return f"<RoleMapping user_id={self.user_id!r} role_id={self.role_id!r} scope={self.scope!r}>"
