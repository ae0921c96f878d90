"""Per-person cost split of a parsed receipt."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from receiptsplit.domain.receipt import ReceiptItem, format_amount, to_cents


@dataclass
class ItemAllocation:
    """Who shares one receipt item."""

    for_all: bool = False
    people: dict[str, bool] = field(default_factory=dict)

    def selected(self) -> list[str]:
        return [person for person, chosen in self.people.items() if chosen]


@dataclass
class SplitPlan:
    """Items, people and per-item allocations for one receipt."""

    items: list[ReceiptItem]
    people: list[str] = field(default_factory=list)
    allocations: dict[int, ItemAllocation] = field(default_factory=dict)
    discount: Decimal = Decimal("0")

    @classmethod
    def for_items(
        cls,
        items: Sequence[ReceiptItem],
        people: Iterable[str] = (),
        discount: Decimal = Decimal("0"),
    ) -> SplitPlan:
        """Start a plan where every item is allocated to nobody."""
        plan = cls(items=list(items), discount=discount)
        plan.allocations = {index: ItemAllocation() for index in range(len(plan.items))}
        for person in people:
            plan.add_person(person)
        return plan

    def _allocation(self, index: int) -> ItemAllocation:
        if index not in self.allocations:
            raise ValueError(f"No item at index {index}")
        return self.allocations[index]

    def _require_person(self, person: str) -> None:
        if person not in self.people:
            raise ValueError(f"Unknown person: {person}")

    def add_person(self, name: str) -> bool:
        """Add a person (trimmed); blank or duplicate names are ignored."""
        name = name.strip()
        if not name or name in self.people:
            return False
        self.people.append(name)
        for allocation in self.allocations.values():
            allocation.people[name] = False
        return True

    def remove_person(self, name: str) -> bool:
        if name not in self.people:
            return False
        self.people.remove(name)
        for allocation in self.allocations.values():
            allocation.people.pop(name, None)
        return True

    def toggle_allocation(self, index: int, person: str) -> None:
        """Flip one person on an item; this turns off even splitting."""
        self._require_person(person)
        allocation = self._allocation(index)
        allocation.people[person] = not allocation.people.get(person, False)
        allocation.for_all = False

    def toggle_for_all(self, index: int) -> None:
        """Flip even splitting on an item; individual selections are cleared."""
        allocation = self._allocation(index)
        allocation.for_all = not allocation.for_all
        allocation.people = {person: False for person in self.people}

    def assign(self, index: int, people: Iterable[str]) -> None:
        """Select exactly ``people`` for an item."""
        chosen = set(people)
        for person in chosen:
            self._require_person(person)
        allocation = self._allocation(index)
        allocation.for_all = False
        allocation.people = {person: person in chosen for person in self.people}


@dataclass(frozen=True)
class SplitResult:
    """Outcome of a split: amounts per person after the card discount."""

    subtotal: Decimal
    discount: Decimal
    final_total: Decimal
    totals: dict[str, Decimal]

    def to_dict(self) -> dict[str, Any]:
        return {
            "subtotal": format_amount(self.subtotal),
            "discount": format_amount(self.discount),
            "final_total": format_amount(self.final_total),
            "totals": {person: format_amount(amount) for person, amount in self.totals.items()},
        }


def calculate_split(plan: SplitPlan) -> SplitResult | None:
    """
    Divide item prices among people and apply the card discount proportionally.

    Every allocated item counts toward the subtotal, even when nobody is
    selected for it; such items are simply not charged to anyone.

    Returns:
        None when there are no items or no people.
    """
    if not plan.items or not plan.people:
        return None

    running: dict[str, Decimal] = {person: Decimal("0") for person in plan.people}
    subtotal = Decimal("0")

    for index, item in enumerate(plan.items):
        allocation = plan.allocations.get(index)
        if allocation is None:
            continue

        subtotal += item.price
        if allocation.for_all:
            sharers = list(plan.people)
        else:
            sharers = [person for person in plan.people if allocation.people.get(person)]
        if not sharers:
            continue

        share = item.price / len(sharers)
        for person in sharers:
            running[person] += share

    multiplier = (subtotal - plan.discount) / subtotal if subtotal else Decimal("1")
    totals = {
        person: to_cents(amount * multiplier) for person, amount in running.items()
    }

    return SplitResult(
        subtotal=subtotal,
        discount=plan.discount,
        final_total=sum(totals.values(), Decimal("0")),
        totals=totals,
    )
