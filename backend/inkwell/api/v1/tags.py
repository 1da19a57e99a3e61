"""标签路由"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from ...database import get_db
from ...modules import notebook
from ...modules.notebook import SessionContext
from ...schemas import TagCreate, TagResponse
from ..deps import get_session_context, raise_for_result

router = APIRouter()


@router.get("", response_model=List[TagResponse])
async def get_tags(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """获取标签列表"""
    return await notebook.list_tags(db, ctx)


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag_in: TagCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """创建标签"""
    result = await notebook.create_tag(db, ctx, tag_in.name, tag_in.color)
    raise_for_result(result)
    return result.data


@router.delete("/{tag_id}")
async def delete_tag(
    tag_id: str,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """删除标签"""
    result = await notebook.delete_tag(db, ctx, tag_id)
    raise_for_result(result)
    return {"success": True}
