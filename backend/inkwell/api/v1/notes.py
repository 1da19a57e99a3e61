"""笔记路由"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from ...database import get_db
from ...models import Note
from ...modules import notebook
from ...modules.notebook import SessionContext
from ...schemas import (
    NoteCreate, NoteUpdate, NoteResponse,
    FolderBrief, TagResponse,
)
from ..deps import get_session_context, raise_for_result

router = APIRouter()


def to_note_response(note: Note) -> NoteResponse:
    """ORM 对象转响应（标签从关联表展开）"""
    return NoteResponse(
        id=note.id,
        user_id=note.user_id,
        title=note.title,
        content=note.content,
        folder_id=note.folder_id,
        folder=FolderBrief.model_validate(note.folder) if note.folder else None,
        is_pinned=note.is_pinned,
        is_archived=note.is_archived,
        created_at=note.created_at,
        updated_at=note.updated_at,
        tags=[TagResponse.model_validate(nt.tag) for nt in note.tags],
    )


# ==================== 列表 ====================

@router.get("", response_model=List[NoteResponse])
async def get_notes(
    search: Optional[str] = None,
    folder_id: Optional[str] = None,
    tag_id: Optional[str] = None,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """获取笔记列表（不含归档），支持搜索和文件夹/标签筛选"""
    notes = await notebook.list_notes(db, ctx, search=search, folder_id=folder_id, tag_id=tag_id)
    return [to_note_response(note) for note in notes]


@router.get("/pinned", response_model=List[NoteResponse])
async def get_pinned_notes(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """获取置顶笔记"""
    notes = await notebook.list_pinned_notes(db, ctx)
    return [to_note_response(note) for note in notes]


@router.get("/archived", response_model=List[NoteResponse])
async def get_archived_notes(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """获取归档笔记"""
    notes = await notebook.list_archived_notes(db, ctx)
    return [to_note_response(note) for note in notes]


# ==================== 单个笔记 ====================

@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: str,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """获取单个笔记"""
    note = await notebook.get_note(db, ctx, note_id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return to_note_response(note)


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    note_in: NoteCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """创建笔记"""
    result = await notebook.create_note(db, ctx, note_in)
    raise_for_result(result)
    return to_note_response(result.data)


@router.patch("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    note_in: NoteUpdate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """更新笔记（标题、正文、置顶、归档、文件夹、标签）"""
    result = await notebook.update_note(db, ctx, note_id, note_in.model_dump(exclude_unset=True))
    raise_for_result(result)
    return to_note_response(result.data)


@router.delete("/{note_id}")
async def delete_note(
    note_id: str,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """删除笔记"""
    result = await notebook.delete_note(db, ctx, note_id)
    raise_for_result(result)
    return {"success": True}
