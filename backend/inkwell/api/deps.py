"""路由依赖"""
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models import User
from ..modules.notebook import SessionContext, ActionResult, NOT_AUTHENTICATED
from ..utils.security import decode_token

# auto_error=False：没有令牌不是错误，读接口返回空结果
bearer_scheme = HTTPBearer(auto_error=False)


async def get_session_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> SessionContext:
    """从 Bearer 令牌解析当前身份，令牌缺失、无效或用户已不存在时为匿名"""
    if credentials is None:
        return SessionContext.anonymous()

    payload = decode_token(credentials.credentials, expected_type="access")
    if payload is None or not payload.get("sub"):
        return SessionContext.anonymous()

    user = await db.get(User, payload["sub"])
    if user is None:
        return SessionContext.anonymous()

    return SessionContext.for_user(user.id)


async def get_current_user(
    ctx: SessionContext = Depends(get_session_context),
    db: AsyncSession = Depends(get_db),
) -> User:
    """需要登录的接口使用"""
    if not ctx.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHENTICATED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return await db.get(User, ctx.user_id)


def raise_for_result(result: ActionResult, status_code: int = status.HTTP_400_BAD_REQUEST) -> None:
    """把写操作的失败结果转成 HTTPException"""
    if result.success:
        return
    if result.error == NOT_AUTHENTICATED:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHENTICATED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    raise HTTPException(status_code=status_code, detail=result.error)
