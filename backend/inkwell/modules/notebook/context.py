"""会话上下文与操作结果

所有数据访问函数都显式接收 SessionContext，而不是在内部查找全局会话，
这样"按所有者过滤"就成为每个查询的必填条件，也能脱离 HTTP 层单独测试。
"""
from typing import Any, Optional
from pydantic import BaseModel, Field

NOT_AUTHENTICATED = "Not authenticated"


class SessionContext(BaseModel):
    """当前请求解析出的身份，user_id 为空表示未登录"""
    user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls()

    @classmethod
    def for_user(cls, user_id: str) -> "SessionContext":
        return cls(user_id=user_id)


class ActionResult(BaseModel):
    """写操作结果"""
    success: bool = Field(..., description="是否成功")
    data: Any = Field(default=None, description="返回数据")
    error: Optional[str] = Field(default=None, description="错误信息")

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult":
        """创建成功结果"""
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ActionResult":
        """创建失败结果"""
        return cls(success=False, error=error)

    @classmethod
    def unauthenticated(cls) -> "ActionResult":
        return cls.fail(NOT_AUTHENTICATED)
