"""AI 润色相关 Schema"""
from pydantic import BaseModel
from typing import Optional


class EnhanceRequest(BaseModel):
    """润色请求（字段缺失由路由统一返回 400）"""
    content: Optional[str] = None
    type: Optional[str] = None


class EnhanceResponse(BaseModel):
    """润色响应"""
    enhanced: str
