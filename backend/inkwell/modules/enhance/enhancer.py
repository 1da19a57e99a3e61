"""
AI 润色客户端

单次请求/响应，不重试、不缓存、不流式。上游的各种失败被归一为
EnhanceResult 的几个固定状态，由路由层映射到 HTTP 状态码。
"""
import logging
from enum import Enum
from typing import Optional, Tuple

import httpx
from pydantic import BaseModel, Field

from ...config import Settings
from ...utils.markup import strip_markup
from .prompts import EnhanceType, PROMPTS

logger = logging.getLogger(__name__)


class EnhanceInputError(ValueError):
    """请求内容不合法（缺字段、模式未知、正文太短）"""
    pass


class EnhanceStatus(str, Enum):
    """上游调用结果类型"""
    OK = "ok"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class EnhanceResult(BaseModel):
    """润色结果"""
    status: EnhanceStatus = Field(..., description="结果类型")
    content: Optional[str] = Field(default=None, description="模型输出（HTML）")
    error: Optional[str] = Field(default=None, description="失败原因，仅用于日志")

    @property
    def success(self) -> bool:
        return self.status == EnhanceStatus.OK

    @classmethod
    def ok(cls, content: str) -> "EnhanceResult":
        return cls(status=EnhanceStatus.OK, content=content)

    @classmethod
    def rate_limited(cls) -> "EnhanceResult":
        return cls(status=EnhanceStatus.RATE_LIMITED)

    @classmethod
    def unauthorized(cls) -> "EnhanceResult":
        return cls(status=EnhanceStatus.UNAUTHORIZED)

    @classmethod
    def unavailable(cls) -> "EnhanceResult":
        return cls(status=EnhanceStatus.UNAVAILABLE)

    @classmethod
    def failed(cls, error: str) -> "EnhanceResult":
        return cls(status=EnhanceStatus.FAILED, error=error)


class ContentEnhancer:
    """
    调用 OpenAI 兼容的 /chat/completions 接口改写笔记内容

    使用示例:
        enhancer = ContentEnhancer.from_settings(settings)
        text, mode = enhancer.prepare("<p>some rough notes here</p>", "improve")
        result = await enhancer.enhance(text, mode)
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        timeout: float = 60.0,
        min_length: int = 10,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.min_length = min_length
        self._client = client
        self._owns_client = False

    @classmethod
    def from_settings(cls, settings: Settings, client: Optional[httpx.AsyncClient] = None) -> "ContentEnhancer":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            model=settings.OPENAI_MODEL,
            temperature=settings.AI_TEMPERATURE,
            max_tokens=settings.AI_MAX_TOKENS,
            timeout=settings.AI_TIMEOUT,
            min_length=settings.AI_MIN_CONTENT_LENGTH,
            client=client,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def client(self) -> httpx.AsyncClient:
        """获取 HTTP 客户端（首次使用时创建）"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def close(self):
        """关闭客户端（只关闭自己创建的）"""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    def prepare(self, content: Optional[str], mode: Optional[str]) -> Tuple[str, EnhanceType]:
        """
        校验输入并去掉标签

        Returns:
            (纯文本, 润色模式)

        Raises:
            EnhanceInputError: 输入不合法，在调用上游之前拒绝
        """
        if not content or not mode:
            raise EnhanceInputError("Content and type are required")

        plain_text = strip_markup(content)
        if len(plain_text.strip()) < self.min_length:
            raise EnhanceInputError("Please add more content before enhancing")

        try:
            enhance_type = EnhanceType(mode)
        except ValueError:
            raise EnhanceInputError("Invalid enhancement type")

        return plain_text, enhance_type

    async def enhance(self, plain_text: str, mode: EnhanceType) -> EnhanceResult:
        """把纯文本发给模型，返回模型输出的 HTML"""
        if not self.is_configured:
            return EnhanceResult.unavailable()

        try:
            response = await self.client.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                },
                json={
                    "model": self.model,
                    "messages": [
                        {"role": "system", "content": PROMPTS[mode]},
                        {"role": "user", "content": plain_text},
                    ],
                    "temperature": self.temperature,
                    "max_tokens": self.max_tokens,
                },
            )
        except httpx.TimeoutException:
            logger.warning("AI enhance timed out (model=%s)", self.model)
            return EnhanceResult.failed("Provider request timed out")
        except httpx.HTTPError as e:
            logger.warning("AI enhance request failed: %s", e)
            return EnhanceResult.failed(f"Provider request failed: {e}")

        if response.status_code == 429:
            logger.warning("AI provider rate limited (model=%s)", self.model)
            return EnhanceResult.rate_limited()
        if response.status_code == 401:
            logger.error("AI provider rejected the API key")
            return EnhanceResult.unauthorized()
        if response.status_code != 200:
            error_detail = response.text
            try:
                error_detail = response.json().get("error", {}).get("message", error_detail)
            except (ValueError, AttributeError):
                pass
            logger.error("AI provider error %s: %s", response.status_code, error_detail)
            return EnhanceResult.failed(str(error_detail))

        try:
            enhanced = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            logger.error("AI provider returned a malformed response")
            return EnhanceResult.failed("Malformed provider response")

        if not enhanced:
            return EnhanceResult.failed("Failed to generate enhanced content")

        return EnhanceResult.ok(enhanced)
