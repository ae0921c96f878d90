"""Core domain models for receiptsplit.

This module provides the data models used throughout the project:
- ReceiptItem, ReceiptSummary, ParsedReceipt: Parsed receipt models
- SplitPlan, ItemAllocation, SplitResult: Per-person cost split

Usage:
    from receiptsplit.domain import ParsedReceipt, SplitPlan, calculate_split
"""

from receiptsplit.domain.receipt import ParsedReceipt, ReceiptItem, ReceiptSummary
from receiptsplit.domain.split import ItemAllocation, SplitPlan, SplitResult, calculate_split

__all__ = [
    "ParsedReceipt",
    "ReceiptItem",
    "ReceiptSummary",
    "ItemAllocation",
    "SplitPlan",
    "SplitResult",
    "calculate_split",
]
