"""笔记数据访问

查询全部带 user_id 条件；更新/删除按 {id, user_id} 组合条件执行，
影响 0 行时返回通用失败，不区分"不存在"和"不属于你"。
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import String, select, update, delete, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ...database import utcnow
from ...models import Note, NoteTag, Folder, Tag
from ...schemas import NoteCreate
from .context import SessionContext, ActionResult

logger = logging.getLogger(__name__)

CREATE_FAILED = "Failed to create note"
UPDATE_FAILED = "Failed to update note"
DELETE_FAILED = "Failed to delete note"

UPDATABLE_FIELDS = ("title", "content", "is_pinned", "is_archived")


def _owned_notes(ctx: SessionContext):
    """当前用户的笔记查询（预加载文件夹和标签，总是以数据库中的状态为准）"""
    return (
        select(Note)
        .where(Note.user_id == ctx.user_id)
        .options(
            selectinload(Note.folder),
            selectinload(Note.tags).selectinload(NoteTag.tag),
        )
        .execution_options(populate_existing=True)
    )


def _search_filter(search: str):
    """标题或原始内容包含关键字（Unicode 不区分大小写，通配符按字面匹配）"""
    needle = search.casefold()
    return or_(
        func.casefold(Note.title, type_=String).contains(needle, autoescape=True),
        func.casefold(Note.content, type_=String).contains(needle, autoescape=True),
    )


async def _folder_is_owned(db: AsyncSession, ctx: SessionContext, folder_id: str) -> bool:
    result = await db.execute(
        select(Folder.id).where(Folder.id == folder_id, Folder.user_id == ctx.user_id)
    )
    return result.scalar_one_or_none() is not None


async def _tags_are_owned(db: AsyncSession, ctx: SessionContext, tag_ids: List[str]) -> bool:
    wanted = set(tag_ids)
    if not wanted:
        return True
    result = await db.execute(
        select(Tag.id).where(Tag.id.in_(wanted), Tag.user_id == ctx.user_id)
    )
    return set(result.scalars().all()) == wanted


# ==================== 查询 ====================

async def list_notes(
    db: AsyncSession,
    ctx: SessionContext,
    search: Optional[str] = None,
    folder_id: Optional[str] = None,
    tag_id: Optional[str] = None,
) -> List[Note]:
    """默认列表：未归档笔记，置顶优先，再按更新时间倒序"""
    if not ctx.is_authenticated:
        return []

    query = _owned_notes(ctx).where(Note.is_archived == False)  # noqa: E712

    if search:
        query = query.where(_search_filter(search))

    if folder_id:
        query = query.where(Note.folder_id == folder_id)

    if tag_id:
        query = query.join(NoteTag, NoteTag.note_id == Note.id).where(NoteTag.tag_id == tag_id)

    query = query.order_by(Note.is_pinned.desc(), Note.updated_at.desc())
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_pinned_notes(db: AsyncSession, ctx: SessionContext) -> List[Note]:
    """置顶列表：置顶且未归档，按更新时间倒序"""
    if not ctx.is_authenticated:
        return []

    query = (
        _owned_notes(ctx)
        .where(Note.is_pinned == True, Note.is_archived == False)  # noqa: E712
        .order_by(Note.updated_at.desc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_archived_notes(db: AsyncSession, ctx: SessionContext) -> List[Note]:
    """归档列表：只按更新时间倒序"""
    if not ctx.is_authenticated:
        return []

    query = (
        _owned_notes(ctx)
        .where(Note.is_archived == True)  # noqa: E712
        .order_by(Note.updated_at.desc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_note(db: AsyncSession, ctx: SessionContext, note_id: str) -> Optional[Note]:
    """获取单个笔记，不存在或不属于当前用户都返回 None"""
    if not ctx.is_authenticated:
        return None

    result = await db.execute(
        _owned_notes(ctx).where(Note.id == note_id)
    )
    return result.scalar_one_or_none()


# ==================== 写操作 ====================

async def create_note(db: AsyncSession, ctx: SessionContext, note_in: NoteCreate) -> ActionResult:
    """创建笔记"""
    if not ctx.is_authenticated:
        return ActionResult.unauthenticated()

    try:
        if note_in.folder_id and not await _folder_is_owned(db, ctx, note_in.folder_id):
            return ActionResult.fail(CREATE_FAILED)
        if not await _tags_are_owned(db, ctx, note_in.tag_ids):
            return ActionResult.fail(CREATE_FAILED)

        note = Note(
            user_id=ctx.user_id,
            title=note_in.title.strip() or "Untitled",
            content=note_in.content,
            folder_id=note_in.folder_id,
            is_pinned=note_in.is_pinned,
            is_archived=note_in.is_archived,
        )
        db.add(note)
        await db.flush()

        for tag_id in dict.fromkeys(note_in.tag_ids):
            db.add(NoteTag(note_id=note.id, tag_id=tag_id))
        await db.flush()
    except SQLAlchemyError:
        logger.exception("Create note error")
        await db.rollback()
        return ActionResult.fail(CREATE_FAILED)

    logger.info("user=%s created note=%s", ctx.user_id, note.id)
    return ActionResult.ok(await get_note(db, ctx, note.id))


async def update_note(
    db: AsyncSession,
    ctx: SessionContext,
    note_id: str,
    changes: Dict[str, Any],
) -> ActionResult:
    """更新笔记

    changes 只包含调用方显式传入的字段；folder_id 显式为 None 表示移出文件夹。
    user_id 不可修改。
    """
    if not ctx.is_authenticated:
        return ActionResult.unauthenticated()

    values: Dict[str, Any] = {}
    for field in UPDATABLE_FIELDS:
        if changes.get(field) is not None:
            values[field] = changes[field]
    if "title" in values:
        values["title"] = values["title"].strip() or "Untitled"

    try:
        if "folder_id" in changes:
            folder_id = changes["folder_id"]
            if folder_id and not await _folder_is_owned(db, ctx, folder_id):
                return ActionResult.fail(UPDATE_FAILED)
            values["folder_id"] = folder_id

        tag_ids = changes.get("tag_ids")
        if tag_ids is not None and not await _tags_are_owned(db, ctx, tag_ids):
            return ActionResult.fail(UPDATE_FAILED)

        values["updated_at"] = utcnow()
        result = await db.execute(
            update(Note)
            .where(Note.id == note_id, Note.user_id == ctx.user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return ActionResult.fail(UPDATE_FAILED)

        if tag_ids is not None:
            await db.execute(delete(NoteTag).where(NoteTag.note_id == note_id))
            for tag_id in dict.fromkeys(tag_ids):
                db.add(NoteTag(note_id=note_id, tag_id=tag_id))
        await db.flush()
    except SQLAlchemyError:
        logger.exception("Update note error")
        await db.rollback()
        return ActionResult.fail(UPDATE_FAILED)

    return ActionResult.ok(await get_note(db, ctx, note_id))


async def delete_note(db: AsyncSession, ctx: SessionContext, note_id: str) -> ActionResult:
    """删除笔记（硬删除）"""
    if not ctx.is_authenticated:
        return ActionResult.unauthenticated()

    try:
        result = await db.execute(
            delete(Note)
            .where(Note.id == note_id, Note.user_id == ctx.user_id)
            .execution_options(synchronize_session=False)
        )
    except SQLAlchemyError:
        logger.exception("Delete note error")
        await db.rollback()
        return ActionResult.fail(DELETE_FAILED)

    if result.rowcount == 0:
        return ActionResult.fail(DELETE_FAILED)

    logger.info("user=%s deleted note=%s", ctx.user_id, note_id)
    return ActionResult.ok()
