"""笔记相关 Schema"""
from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import Optional, List


class FolderCreate(BaseModel):
    """创建文件夹"""
    name: str = Field(..., min_length=1, max_length=100)
    color: Optional[str] = Field(None, max_length=20)


class FolderBrief(BaseModel):
    """笔记中内嵌的文件夹信息"""
    id: str
    name: str
    color: str

    class Config:
        from_attributes = True


class FolderResponse(BaseModel):
    """文件夹响应"""
    id: str
    name: str
    color: str
    note_count: int = 0
    created_at: datetime

    class Config:
        from_attributes = True


class TagCreate(BaseModel):
    """创建标签"""
    name: str = Field(..., min_length=1, max_length=50)
    color: str = "#6366f1"


class TagResponse(BaseModel):
    """标签响应"""
    id: str
    name: str
    color: str
    created_at: datetime

    class Config:
        from_attributes = True


class NoteCreate(BaseModel):
    """创建笔记"""
    title: str = Field("", max_length=255)
    content: str = ""
    folder_id: Optional[str] = None
    tag_ids: List[str] = []
    is_pinned: bool = False
    is_archived: bool = False

    @model_validator(mode="after")
    def check_not_blank(self) -> "NoteCreate":
        if not self.title.strip() and not self.content.strip():
            raise ValueError("Please add a title or content")
        return self


class NoteUpdate(BaseModel):
    """更新笔记（未传的字段保持不变，folder_id 显式传 null 表示移出文件夹）"""
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    folder_id: Optional[str] = None
    tag_ids: Optional[List[str]] = None
    is_pinned: Optional[bool] = None
    is_archived: Optional[bool] = None


class NoteResponse(BaseModel):
    """笔记响应"""
    id: str
    user_id: str
    title: str
    content: str
    folder_id: Optional[str] = None
    folder: Optional[FolderBrief] = None
    is_pinned: bool
    is_archived: bool
    created_at: datetime
    updated_at: datetime
    tags: List[TagResponse] = []
