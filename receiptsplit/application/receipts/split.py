"""Receipt split workflow orchestration."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from receiptsplit.domain.receipt import ReceiptItem
from receiptsplit.domain.split import SplitPlan, SplitResult, calculate_split
from receiptsplit.runtime import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SplitRequest:
    """Who shares what, as given on the command line or over HTTP."""

    people: tuple[str, ...]
    # item index -> people sharing it
    assignments: Mapping[int, tuple[str, ...]] = field(default_factory=dict)
    # item indexes split evenly among everyone
    even: frozenset[int] = frozenset()
    all_even: bool = False


def build_split_plan(
    items: Sequence[ReceiptItem],
    discount: Decimal,
    request: SplitRequest,
) -> SplitPlan:
    """
    Turn a split request into a plan.

    Raises:
        ValueError: unknown item index or person, or an item both assigned
            and split evenly.
    """
    plan = SplitPlan.for_items(items, request.people, discount)
    if len(plan.people) != len(request.people):
        logger.warning("Ignoring blank or duplicate names in %s", list(request.people))

    conflicts = set(request.assignments) & set(request.even)
    if conflicts:
        raise ValueError(f"Items both assigned and split evenly: {sorted(conflicts)}")

    even_indexes = range(len(plan.items)) if request.all_even else sorted(request.even)
    for index in even_indexes:
        if index in request.assignments:
            continue
        plan.toggle_for_all(index)

    for index, people in request.assignments.items():
        plan.assign(index, [person.strip() for person in people])
    return plan


def run_receipt_split(
    items: Sequence[ReceiptItem],
    discount: Decimal,
    request: SplitRequest,
) -> SplitResult | None:
    """Build the plan and compute per-person totals (None without items or people)."""
    plan = build_split_plan(items, discount, request)
    result = calculate_split(plan)
    if result is None:
        logger.info("Nothing to split: %d item(s), %d person(s)", len(plan.items), len(plan.people))
    return result


def parse_amount(value: Any) -> Decimal:
    """Parse a JSON amount given as number or string, accepting "1,99" and "1.99"."""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        amount = Decimal(str(value).strip().replace(",", "."))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def request_from_payload(payload: Mapping[str, Any]) -> tuple[list[ReceiptItem], Decimal, SplitRequest]:
    """
    Read a split request from a JSON payload.

    Expected shape::

        {
          "items": [{"description": "Bread", "price": "2.50"}, ...],
          "people": ["Ana", "Rui"],
          "allocations": {"0": {"for_all": true}, "1": {"people": ["Ana"]}},
          "discount": "2.00"
        }

    Raises:
        ValueError: if the payload is malformed.
    """
    raw_items = payload.get("items")
    if not isinstance(raw_items, list):
        raise ValueError("'items' must be a list")

    items: list[ReceiptItem] = []
    for raw in raw_items:
        if not isinstance(raw, Mapping):
            raise ValueError("each item must be an object")
        description = str(raw.get("description", "")).strip()
        if not description:
            raise ValueError("item description must not be empty")
        items.append(ReceiptItem(description=description, price=parse_amount(raw.get("price"))))

    raw_people = payload.get("people", [])
    if not isinstance(raw_people, list):
        raise ValueError("'people' must be a list")
    people = tuple(str(person) for person in raw_people)

    raw_allocations = payload.get("allocations", {})
    if not isinstance(raw_allocations, Mapping):
        raise ValueError("'allocations' must be an object keyed by item index")

    assignments: dict[int, tuple[str, ...]] = {}
    even: set[int] = set()
    for key, allocation in raw_allocations.items():
        try:
            index = int(key)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid item index: {key!r}") from e
        if not isinstance(allocation, Mapping):
            raise ValueError(f"allocation for item {index} must be an object")
        if allocation.get("for_all"):
            even.add(index)
        else:
            assignments[index] = tuple(str(person) for person in allocation.get("people", []))

    discount = parse_amount(payload.get("discount", "0"))
    return items, discount, SplitRequest(people=people, assignments=assignments, even=frozenset(even))
