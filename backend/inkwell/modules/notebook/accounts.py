"""账户：注册、登录校验、资料修改"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import User
from ...schemas import UserCreate
from ...utils.security import hash_password, verify_password
from .context import SessionContext, ActionResult

logger = logging.getLogger(__name__)

EMAIL_IN_USE = "Email already in use"
INVALID_CREDENTIALS = "Invalid credentials"


async def register_user(db: AsyncSession, user_in: UserCreate) -> ActionResult:
    """注册新用户"""
    result = await db.execute(select(User.id).where(User.email == user_in.email))
    if result.scalar_one_or_none():
        return ActionResult.fail(EMAIL_IN_USE)

    user = User(
        name=user_in.name,
        email=user_in.email,
        password_hash=hash_password(user_in.password),
    )
    try:
        db.add(user)
        await db.flush()
        await db.refresh(user)
    except IntegrityError:
        # 并发注册同一邮箱，由唯一索引兜底
        await db.rollback()
        return ActionResult.fail(EMAIL_IN_USE)
    except SQLAlchemyError:
        logger.exception("Registration error")
        await db.rollback()
        return ActionResult.fail("Something went wrong")

    logger.info("registered user=%s", user.id)
    return ActionResult.ok(user)


async def authenticate(db: AsyncSession, email: str, password: str) -> ActionResult:
    """校验邮箱和密码，邮箱不存在和密码错误返回同一错误"""
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(password, user.password_hash):
        return ActionResult.fail(INVALID_CREDENTIALS)

    return ActionResult.ok(user)


async def get_user(db: AsyncSession, ctx: SessionContext) -> Optional[User]:
    """当前用户"""
    if not ctx.is_authenticated:
        return None
    return await db.get(User, ctx.user_id)


async def update_profile(db: AsyncSession, ctx: SessionContext, name: Optional[str]) -> ActionResult:
    """修改用户名称"""
    user = await get_user(db, ctx)
    if user is None:
        return ActionResult.unauthenticated()

    if name is not None:
        user.name = name.strip()
    await db.flush()
    await db.refresh(user)
    return ActionResult.ok(user)


async def change_password(
    db: AsyncSession,
    ctx: SessionContext,
    old_password: str,
    new_password: str,
) -> ActionResult:
    """修改密码"""
    user = await get_user(db, ctx)
    if user is None:
        return ActionResult.unauthenticated()

    if not verify_password(old_password, user.password_hash):
        return ActionResult.fail("Current password is incorrect")

    user.password_hash = hash_password(new_password)
    await db.flush()
    return ActionResult.ok()
