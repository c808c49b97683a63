"""scriptflow: screenplay line classification and live pagination.

scriptflow turns loosely structured screenplay text into typed lines (scene
heading, speaker, dialog, action, directions) and keeps a paginated editing
surface consistent with that classification as lines are typed, committed
and imported.
"""

from .config import ScriptFlowSettings, get_logger, get_settings
from .editing import EditingSession, PaginationEngine
from .models import Document, FormatTag, Page, ScriptLine
from .parser import (
    ParseStrategy,
    ScreenplayParser,
    parse_markup,
    parse_text,
    serialize,
)

__version__ = "0.1.0"

__all__ = [
    "Document",
    "EditingSession",
    "FormatTag",
    "Page",
    "PaginationEngine",
    "ParseStrategy",
    "ScreenplayParser",
    "ScriptFlowSettings",
    "ScriptLine",
    "__version__",
    "get_logger",
    "get_settings",
    "parse_markup",
    "parse_text",
    "serialize",
]
