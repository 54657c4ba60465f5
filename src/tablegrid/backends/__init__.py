from .base import BaseBackend, TableBackend
from .html import HtmlBackend
from .memory import MemoryBackend
from .xlsx import XlsxBackend

__all__ = [
    "BaseBackend",
    "HtmlBackend",
    "MemoryBackend",
    "TableBackend",
    "XlsxBackend",
]
