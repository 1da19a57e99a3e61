"""工具函数"""
from .security import hash_password, verify_password, create_access_token, create_refresh_token, decode_token
from .markup import strip_markup

__all__ = [
    "hash_password", "verify_password", "create_access_token", "create_refresh_token", "decode_token",
    "strip_markup",
]
