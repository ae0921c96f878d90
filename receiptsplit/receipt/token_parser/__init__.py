"""Token-stream receipt parser components."""

from .items_parser import (
    InProgressItem,
    ItemsParseResult,
    ParsePhase,
    ParseState,
    PendingItem,
    Transition,
    filter_items,
    parse_items,
)
from .summary_parser import extract_summary

__all__ = [
    "InProgressItem",
    "ItemsParseResult",
    "ParsePhase",
    "ParseState",
    "PendingItem",
    "Transition",
    "extract_summary",
    "filter_items",
    "parse_items",
]
