"""
Inkwell API 客户端

基于 httpx 的异步客户端，编辑器侧的自动保存用它作为保存目标：

    async with InkwellClient("http://localhost:8000") as client:
        await client.login("me@example.com", "secret1")
        saver = AutoSaver(client.note_saver(note_id), note["title"], note["content"])
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

from .modules.autosave import SaveCallback
from .modules.notebook.context import ActionResult

logger = logging.getLogger(__name__)


class InkwellClient:
    """Inkwell REST API 客户端"""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "InkwellClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self):
        await self._client.aclose()

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    async def _request(self, method: str, url: str, **kwargs) -> ActionResult:
        """发送请求，把 HTTP 错误和网络错误统一成 ActionResult"""
        try:
            response = await self._client.request(method, url, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return ActionResult.fail(f"Network error: {e}")

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success:
            return ActionResult.ok(body)

        error = None
        if isinstance(body, dict):
            error = body.get("detail") or body.get("error")
        return ActionResult.fail(str(error or f"HTTP {response.status_code}"))

    # ==================== 账户 ====================

    async def register(self, name: str, email: str, password: str) -> ActionResult:
        return await self._request(
            "POST", "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )

    async def login(self, email: str, password: str) -> ActionResult:
        """登录成功后保存访问令牌"""
        result = await self._request(
            "POST", "/api/auth/login",
            json={"email": email, "password": password},
        )
        if result.success:
            self.token = result.data["access_token"]
        return result

    # ==================== 笔记 ====================

    async def list_notes(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"search": search} if search else None
        result = await self._request("GET", "/api/notes", params=params)
        return result.data if result.success else []

    async def get_note(self, note_id: str) -> Optional[Dict[str, Any]]:
        result = await self._request("GET", f"/api/notes/{note_id}")
        return result.data if result.success else None

    async def create_note(self, title: str, content: str, **fields: Any) -> ActionResult:
        return await self._request(
            "POST", "/api/notes",
            json={"title": title, "content": content, **fields},
        )

    async def update_note(self, note_id: str, **fields: Any) -> ActionResult:
        return await self._request("PATCH", f"/api/notes/{note_id}", json=fields)

    async def delete_note(self, note_id: str) -> ActionResult:
        return await self._request("DELETE", f"/api/notes/{note_id}")

    def note_saver(self, note_id: str) -> SaveCallback:
        """给 AutoSaver 用的保存回调：只提交标题和正文"""
        async def save(title: str, content: str) -> ActionResult:
            return await self.update_note(note_id, title=title, content=content)
        return save

    # ==================== AI ====================

    async def enhance(self, content: str, enhance_type: str) -> ActionResult:
        """成功时 data 为改写后的 HTML"""
        result = await self._request(
            "POST", "/api/ai/enhance",
            json={"content": content, "type": enhance_type},
        )
        if result.success:
            return ActionResult.ok(result.data["enhanced"])
        return result
