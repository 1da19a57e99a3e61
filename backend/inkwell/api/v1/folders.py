"""文件夹路由"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from ...database import get_db
from ...modules import notebook
from ...modules.notebook import SessionContext
from ...schemas import FolderCreate, FolderResponse
from ..deps import get_session_context, raise_for_result

router = APIRouter()


@router.get("", response_model=List[FolderResponse])
async def get_folders(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """获取文件夹列表"""
    folders = await notebook.list_folders(db, ctx)
    return [
        FolderResponse(
            id=folder.id,
            name=folder.name,
            color=folder.color,
            note_count=count,
            created_at=folder.created_at,
        )
        for folder, count in folders
    ]


@router.post("", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
async def create_folder(
    folder_in: FolderCreate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """创建文件夹"""
    result = await notebook.create_folder(db, ctx, folder_in.name, folder_in.color)
    raise_for_result(result)
    return result.data


@router.delete("/{folder_id}")
async def delete_folder(
    folder_id: str,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """删除文件夹（其中的笔记不会被删除）"""
    result = await notebook.delete_folder(db, ctx, folder_id)
    raise_for_result(result)
    return {"success": True}
