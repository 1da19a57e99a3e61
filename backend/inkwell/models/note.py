"""笔记相关模型"""
from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
import uuid

from ..database import Base, utcnow


class Folder(Base):
    """文件夹表"""
    __tablename__ = "folders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    color = Column(String(20), nullable=False, default="#627d98")
    created_at = Column(DateTime, default=utcnow)

    # 关系（删除文件夹时由外键把笔记的 folder_id 置空，不删除笔记）
    user = relationship("User", back_populates="folders")
    notes = relationship("Note", back_populates="folder", passive_deletes=True)


class Tag(Base):
    """标签表"""
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    color = Column(String(20), nullable=False, default="#6366f1")
    created_at = Column(DateTime, default=utcnow)

    # 关系
    user = relationship("User", back_populates="tags")
    notes = relationship("NoteTag", back_populates="tag", cascade="all, delete-orphan", passive_deletes=True)


class NoteTag(Base):
    """笔记-标签关联表"""
    __tablename__ = "note_tags"

    note_id = Column(String(36), ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)

    # 关系
    note = relationship("Note", back_populates="tags")
    tag = relationship("Tag", back_populates="notes")


class Note(Base):
    """笔记表"""
    __tablename__ = "notes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    folder_id = Column(String(36), ForeignKey("folders.id", ondelete="SET NULL"), nullable=True, index=True)
    title = Column(String(255), nullable=False, default="Untitled")
    content = Column(Text, nullable=False, default="")
    is_pinned = Column(Boolean, nullable=False, default=False)
    is_archived = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # 关系
    user = relationship("User", back_populates="notes")
    folder = relationship("Folder", back_populates="notes")
    tags = relationship("NoteTag", back_populates="note", cascade="all, delete-orphan", passive_deletes=True)
