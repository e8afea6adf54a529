import enum

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from cloudvault.database import Base


class Role(str, enum.Enum):
    viewer = "viewer"
    editor = "editor"


class Permission(Base):
    __tablename__ = "permissions"
    __table_args__ = (UniqueConstraint("file_id", "user_id", name="uq_permissions_file_user"),)

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # grantee
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    file_id = Column(Integer, ForeignKey("files.id", ondelete="CASCADE"), nullable=False)
    role = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    file = relationship("UserFile", back_populates="permissions")
