"""用户相关 Schema"""
from pydantic import BaseModel, Field, field_validator
from email_validator import validate_email, EmailNotValidError
from datetime import datetime
from typing import Optional


def _normalize_email(value: str) -> str:
    """校验并规范化邮箱地址"""
    try:
        return validate_email(value.strip(), check_deliverability=False).normalized.lower()
    except EmailNotValidError:
        raise ValueError("Invalid email address")


class UserCreate(BaseModel):
    """用户注册"""
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class UserLogin(BaseModel):
    """用户登录"""
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class UserUpdate(BaseModel):
    """用户更新"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)


class PasswordChange(BaseModel):
    """修改密码"""
    old_password: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def check_new_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v


class UserResponse(BaseModel):
    """用户响应"""
    id: str
    name: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True


class Token(BaseModel):
    """Token 响应"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshTokenRequest(BaseModel):
    """刷新 Token 请求"""
    refresh_token: str


class TokenPayload(BaseModel):
    """Token 载荷"""
    sub: str  # user_id
    exp: datetime
    type: str  # access 或 refresh
