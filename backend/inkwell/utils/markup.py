"""富文本标记处理"""
import re

TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_markup(content: str) -> str:
    """去掉所有标签，只保留纯文本（不处理实体，与编辑器输出保持一致）"""
    return TAG_PATTERN.sub("", content or "")
