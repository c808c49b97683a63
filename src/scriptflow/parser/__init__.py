"""Screenplay text classification and tagged markup for scriptflow."""

from __future__ import annotations

from .markup import MarkupFormatter, MarkupTolerance, parse_markup, serialize
from .profiles import ParseStrategy, StrategyProfile, get_profile
from .scanner import LineScanner
from .screenplay_parser import ParseResult, ScreenplayParser, parse_text

__all__ = [
    "LineScanner",
    "MarkupFormatter",
    "MarkupTolerance",
    "ParseResult",
    "ParseStrategy",
    "ScreenplayParser",
    "StrategyProfile",
    "get_profile",
    "parse_markup",
    "parse_text",
    "serialize",
]
