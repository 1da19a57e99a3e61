"""文件夹数据访问"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Folder, Note
from .context import SessionContext, ActionResult

logger = logging.getLogger(__name__)

DEFAULT_FOLDER_COLOR = "#627d98"


async def list_folders(db: AsyncSession, ctx: SessionContext) -> List[Tuple[Folder, int]]:
    """文件夹列表（按名称排序），附带笔记数量"""
    if not ctx.is_authenticated:
        return []

    result = await db.execute(
        select(Folder, func.count(Note.id))
        .outerjoin(Note, Note.folder_id == Folder.id)
        .where(Folder.user_id == ctx.user_id)
        .group_by(Folder.id)
        .order_by(Folder.name)
    )
    return [(folder, count) for folder, count in result.all()]


async def create_folder(
    db: AsyncSession,
    ctx: SessionContext,
    name: str,
    color: Optional[str] = None,
) -> ActionResult:
    """创建文件夹"""
    if not ctx.is_authenticated:
        return ActionResult.unauthenticated()

    folder = Folder(user_id=ctx.user_id, name=name.strip(), color=color or DEFAULT_FOLDER_COLOR)
    try:
        db.add(folder)
        await db.flush()
        await db.refresh(folder)
    except SQLAlchemyError:
        logger.exception("Create folder error")
        await db.rollback()
        return ActionResult.fail("Failed to create folder")

    return ActionResult.ok(folder)


async def delete_folder(db: AsyncSession, ctx: SessionContext, folder_id: str) -> ActionResult:
    """删除文件夹，其中的笔记由外键 SET NULL 移出文件夹，不会被删除"""
    if not ctx.is_authenticated:
        return ActionResult.unauthenticated()

    try:
        result = await db.execute(
            delete(Folder)
            .where(Folder.id == folder_id, Folder.user_id == ctx.user_id)
            .execution_options(synchronize_session=False)
        )
    except SQLAlchemyError:
        logger.exception("Delete folder error")
        await db.rollback()
        return ActionResult.fail("Failed to delete folder")

    if result.rowcount == 0:
        return ActionResult.fail("Failed to delete folder")

    logger.info("user=%s deleted folder=%s", ctx.user_id, folder_id)
    return ActionResult.ok()
