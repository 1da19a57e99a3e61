"""
AI 润色模块

四种固定模式（improve / summarize / expand / professional），
去标签后把纯文本转发给 OpenAI 兼容接口，原样返回模型的 HTML 输出。
"""

from .prompts import EnhanceType, PROMPTS
from .enhancer import (
    ContentEnhancer,
    EnhanceInputError,
    EnhanceResult,
    EnhanceStatus,
)

__all__ = [
    "EnhanceType",
    "PROMPTS",
    "ContentEnhancer",
    "EnhanceInputError",
    "EnhanceResult",
    "EnhanceStatus",
]
