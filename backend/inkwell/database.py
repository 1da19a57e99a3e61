"""数据库配置"""
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import event
from sqlalchemy.engine import Engine
from .config import settings
import os

# 确保默认数据目录存在
if settings.DATABASE_URL.startswith("sqlite") and ":memory:" not in settings.DATABASE_URL:
    _db_path = settings.DATABASE_URL.split("///", 1)[-1]
    os.makedirs(os.path.dirname(_db_path) or ".", exist_ok=True)

# 创建异步引擎
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
)

# 异步会话工厂
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """模型基类"""
    pass


def utcnow() -> datetime:
    """当前 UTC 时间（naive，与 SQLite 存储保持一致）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _casefold(value):
    """SQLite 自带的 lower() 只处理 ASCII，搜索用 Python 的 casefold"""
    if value is None:
        return None
    return str(value).casefold()


# SQLite 连接事件：对所有 SQLite 引擎生效（包括测试中单独创建的引擎）
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """SQLite 优化 + 开启外键约束（删除文件夹时笔记置空依赖它）+ 注册 casefold()"""
    module = type(dbapi_connection).__module__
    if "sqlite" not in module:
        return
    dbapi_connection.create_function("casefold", 1, _casefold)
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.close()


async def init_db():
    """初始化数据库表"""
    from . import models  # noqa: F401  注册所有模型
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    """获取数据库会话"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
