"""AI 润色路由"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...config import settings
from ...modules.enhance import ContentEnhancer, EnhanceInputError, EnhanceStatus
from ...modules.notebook import SessionContext
from ...schemas import EnhanceRequest, EnhanceResponse
from ..deps import get_session_context

logger = logging.getLogger(__name__)

router = APIRouter()

# 上游结果 -> (HTTP 状态码, 面向用户的错误信息)
ERROR_RESPONSES = {
    EnhanceStatus.RATE_LIMITED: (429, "Rate limit exceeded. Please try again later."),
    EnhanceStatus.UNAUTHORIZED: (401, "Invalid API key. Please check your configuration."),
    EnhanceStatus.UNAVAILABLE: (503, "AI service not configured. Please add your OpenAI API key."),
    EnhanceStatus.FAILED: (500, "Failed to enhance content. Please try again."),
}

_enhancer: Optional[ContentEnhancer] = None


def get_enhancer() -> ContentEnhancer:
    """共享的润色客户端（复用 HTTP 连接池）"""
    global _enhancer
    if _enhancer is None:
        _enhancer = ContentEnhancer.from_settings(settings)
    return _enhancer


async def close_enhancer():
    """应用关闭时释放连接池"""
    global _enhancer
    if _enhancer is not None:
        await _enhancer.close()
        _enhancer = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/enhance", response_model=EnhanceResponse)
async def enhance(
    request: EnhanceRequest,
    ctx: SessionContext = Depends(get_session_context),
    enhancer: ContentEnhancer = Depends(get_enhancer),
):
    """用 AI 改写笔记内容（improve / summarize / expand / professional）"""
    if not ctx.is_authenticated:
        return _error(401, "Unauthorized")

    if not enhancer.is_configured:
        return _error(*ERROR_RESPONSES[EnhanceStatus.UNAVAILABLE])

    try:
        plain_text, mode = enhancer.prepare(request.content, request.type)
    except EnhanceInputError as e:
        return _error(400, str(e))

    result = await enhancer.enhance(plain_text, mode)
    if not result.success:
        logger.info("user=%s enhance %s -> %s (%s)", ctx.user_id, mode.value, result.status.value, result.error)
        return _error(*ERROR_RESPONSES[result.status])

    return EnhanceResponse(enhanced=result.content)
