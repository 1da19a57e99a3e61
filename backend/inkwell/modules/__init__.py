"""业务模块"""
from . import notebook
from . import enhance
from . import autosave

__all__ = [
    "notebook",
    "enhance",
    "autosave",
]
