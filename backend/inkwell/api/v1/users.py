"""用户路由"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...database import get_db
from ...models import User
from ...modules import notebook
from ...modules.notebook import SessionContext
from ...schemas import UserResponse, UserUpdate, PasswordChange
from ..deps import get_current_user, get_session_context, raise_for_result

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """获取当前用户信息"""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_me(
    user_in: UserUpdate,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """更新当前用户信息"""
    result = await notebook.update_profile(db, ctx, user_in.name)
    raise_for_result(result)
    return result.data


@router.patch("/me/password")
async def change_password(
    password_in: PasswordChange,
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db)
):
    """修改密码"""
    result = await notebook.change_password(db, ctx, password_in.old_password, password_in.new_password)
    raise_for_result(result)
    return {"message": "Password updated"}
