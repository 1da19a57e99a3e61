"""数据模型"""
from .user import User
from .note import Note, Folder, Tag, NoteTag

__all__ = [
    "User",
    "Note", "Folder", "Tag", "NoteTag",
]
