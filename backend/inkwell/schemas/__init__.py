"""Pydantic Schemas"""
from .user import (
    UserCreate, UserLogin, UserResponse, UserUpdate, PasswordChange,
    Token, TokenPayload, RefreshTokenRequest,
)
from .note import (
    NoteCreate, NoteUpdate, NoteResponse,
    FolderCreate, FolderBrief, FolderResponse,
    TagCreate, TagResponse,
)
from .ai import EnhanceRequest, EnhanceResponse

__all__ = [
    "UserCreate", "UserLogin", "UserResponse", "UserUpdate", "PasswordChange",
    "Token", "TokenPayload", "RefreshTokenRequest",
    "NoteCreate", "NoteUpdate", "NoteResponse",
    "FolderCreate", "FolderBrief", "FolderResponse",
    "TagCreate", "TagResponse",
    "EnhanceRequest", "EnhanceResponse",
]
