"""
自动保存（防抖）

两个状态：CLEAN / DIRTY
- 编辑标题或正文 -> DIRTY，并重新计算保存截止时间
- 截止时间到达后保存：成功回到 CLEAN；失败保持 DIRTY，报告错误，不自动重试
- 手动保存随时可用，跳过防抖

时钟通过构造参数注入，测试里可以用假时钟逐步推进。
"""
import asyncio
import logging
import time
from enum import Enum
from typing import Awaitable, Callable, Optional

from ..notebook.context import ActionResult

logger = logging.getLogger(__name__)

DEFAULT_SAVE_ERROR = "Failed to save"

SaveCallback = Callable[[str, str], Awaitable[ActionResult]]


class SaveState(str, Enum):
    """编辑器保存状态"""
    CLEAN = "clean"
    DIRTY = "dirty"


class AutoSaver:
    """
    笔记编辑器的防抖自动保存

    使用示例:
        saver = AutoSaver(client.note_saver(note_id), title, content, delay=2.0)
        saver.edit(content="<p>new text</p>")
        await saver.tick()      # 截止时间未到时什么都不做
    """

    def __init__(
        self,
        save: SaveCallback,
        title: str = "",
        content: str = "",
        delay: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
        on_error: Optional[Callable[[str], None]] = None,
    ):
        self._save = save
        self.title = title
        self.content = content
        self.delay = delay
        self._clock = clock
        self._on_error = on_error

        self.state = SaveState.CLEAN
        self.deadline: Optional[float] = None
        self.last_error: Optional[str] = None
        self.is_saving = False

    @property
    def is_dirty(self) -> bool:
        return self.state == SaveState.DIRTY

    @property
    def is_due(self) -> bool:
        """防抖截止时间是否已到"""
        return self.deadline is not None and self._clock() >= self.deadline

    def edit(self, title: Optional[str] = None, content: Optional[str] = None) -> None:
        """记录一次编辑并重启防抖计时"""
        changed = False
        if title is not None and title != self.title:
            self.title = title
            changed = True
        if content is not None and content != self.content:
            self.content = content
            changed = True
        if not changed:
            return

        self.state = SaveState.DIRTY
        self.deadline = self._clock() + self.delay

    async def tick(self) -> bool:
        """截止时间到了就保存，返回是否触发了保存（已有保存进行中时跳过）"""
        if self.is_saving or not self.is_dirty or not self.is_due:
            return False
        await self._run_save()
        return True

    async def save_now(self) -> ActionResult:
        """手动保存，立即执行"""
        return await self._run_save()

    async def run(self, stop: asyncio.Event, poll_interval: float = 0.1) -> None:
        """后台轮询，直到 stop 被设置"""
        while not stop.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(stop.wait(), timeout=poll_interval)
            except asyncio.TimeoutError:
                pass

    async def _run_save(self) -> ActionResult:
        title, content = self.title, self.content
        self.deadline = None
        self.is_saving = True
        try:
            result = await self._save(title, content)
        except Exception:
            logger.exception("auto-save target raised")
            result = ActionResult.fail(DEFAULT_SAVE_ERROR)
        finally:
            self.is_saving = False

        if result.success:
            self.last_error = None
            # 保存期间又有新的编辑时保持 DIRTY，等待下一次截止时间
            if self.title == title and self.content == content:
                self.state = SaveState.CLEAN
            return result

        self.last_error = result.error or DEFAULT_SAVE_ERROR
        logger.warning("auto-save failed: %s", self.last_error)
        if self._on_error:
            self._on_error(self.last_error)
        return result


__all__ = [
    "AutoSaver",
    "SaveState",
    "SaveCallback",
    "DEFAULT_SAVE_ERROR",
]
