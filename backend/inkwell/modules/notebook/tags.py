"""标签数据访问"""
import logging
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Tag
from .context import SessionContext, ActionResult

logger = logging.getLogger(__name__)


async def list_tags(db: AsyncSession, ctx: SessionContext) -> List[Tag]:
    """标签列表"""
    if not ctx.is_authenticated:
        return []

    result = await db.execute(
        select(Tag).where(Tag.user_id == ctx.user_id).order_by(Tag.name)
    )
    return list(result.scalars().all())


async def create_tag(db: AsyncSession, ctx: SessionContext, name: str, color: str) -> ActionResult:
    """创建标签"""
    if not ctx.is_authenticated:
        return ActionResult.unauthenticated()

    tag = Tag(user_id=ctx.user_id, name=name.strip(), color=color)
    try:
        db.add(tag)
        await db.flush()
        await db.refresh(tag)
    except SQLAlchemyError:
        logger.exception("Create tag error")
        await db.rollback()
        return ActionResult.fail("Failed to create tag")

    return ActionResult.ok(tag)


async def delete_tag(db: AsyncSession, ctx: SessionContext, tag_id: str) -> ActionResult:
    """删除标签（只解除与笔记的关联，不删除笔记）"""
    if not ctx.is_authenticated:
        return ActionResult.unauthenticated()

    try:
        result = await db.execute(
            delete(Tag)
            .where(Tag.id == tag_id, Tag.user_id == ctx.user_id)
            .execution_options(synchronize_session=False)
        )
    except SQLAlchemyError:
        logger.exception("Delete tag error")
        await db.rollback()
        return ActionResult.fail("Failed to delete tag")

    if result.rowcount == 0:
        return ActionResult.fail("Failed to delete tag")

    return ActionResult.ok()
