"""
笔记本数据访问模块

所有函数都显式接收 SessionContext：
- 读操作：未登录返回空结果
- 写操作：未登录返回 "Not authenticated"
- 更新/删除：按 {id, user_id} 定位，影响 0 行返回通用失败
"""

from .context import (
    NOT_AUTHENTICATED,
    SessionContext,
    ActionResult,
)
from .accounts import (
    EMAIL_IN_USE,
    INVALID_CREDENTIALS,
    register_user,
    authenticate,
    get_user,
    update_profile,
    change_password,
)
from .notes import (
    list_notes,
    list_pinned_notes,
    list_archived_notes,
    get_note,
    create_note,
    update_note,
    delete_note,
)
from .folders import (
    DEFAULT_FOLDER_COLOR,
    list_folders,
    create_folder,
    delete_folder,
)
from .tags import (
    list_tags,
    create_tag,
    delete_tag,
)

__all__ = [
    # 上下文
    "NOT_AUTHENTICATED",
    "SessionContext",
    "ActionResult",
    # 账户
    "EMAIL_IN_USE",
    "INVALID_CREDENTIALS",
    "register_user",
    "authenticate",
    "get_user",
    "update_profile",
    "change_password",
    # 笔记
    "list_notes",
    "list_pinned_notes",
    "list_archived_notes",
    "get_note",
    "create_note",
    "update_note",
    "delete_note",
    # 文件夹
    "DEFAULT_FOLDER_COLOR",
    "list_folders",
    "create_folder",
    "delete_folder",
    # 标签
    "list_tags",
    "create_tag",
    "delete_tag",
]
