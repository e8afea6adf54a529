from cloudvault.database import Base
from sqlalchemy import Column, Integer, String, DateTime, func, BIGINT, Boolean, ForeignKey
from sqlalchemy.orm import relationship


class UserFile(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    file_name = Column(String, nullable=False, index=True)
    # object-store key
    file_path = Column(String, unique=True, nullable=False)
    public_url = Column(String, nullable=True)
    file_type = Column(String, nullable=True)
    file_size = Column(BIGINT)
    folder_id = Column(Integer, ForeignKey("folders.id", ondelete="SET NULL"), nullable=True, index=True)
    is_deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="files")
    folder = relationship("Folder", back_populates="files")
    share_links = relationship("ShareLink", back_populates="file", cascade="all, delete-orphan")
    permissions = relationship("Permission", back_populates="file", cascade="all, delete-orphan")
