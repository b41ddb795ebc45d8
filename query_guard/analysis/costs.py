"""Per-field base costs used by the complexity scorer."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_FIELD_COST = 1

DEFAULT_FIELD_COSTS: Mapping[str, float] = MappingProxyType(
    {
        # List fields backed by joins
        "members": 10,
        "artifacts": 10,
        "notifications": 10,
        "pendingRequests": 10,
        # Single record lookups
        "owner": 5,
        "createdBy": 5,
        "fromUser": 5,
        "subject": 5,
        "user": 5,
    }
)


@dataclass(frozen=True)
class FieldCostTable:
    """Immutable field-name -> cost mapping with a fallback for unlisted names.

    Names are matched exactly, so ``Members`` does not pick up the cost of
    ``members``.
    """

    costs: Mapping[str, float] = field(default_factory=lambda: DEFAULT_FIELD_COSTS)
    default_cost: float = DEFAULT_FIELD_COST

    def __post_init__(self) -> None:
        if self.default_cost < 0:
            raise ValueError(f"Default field cost must be non-negative, got {self.default_cost}.")
        negative = sorted(name for name, cost in self.costs.items() if cost < 0)
        if negative:
            raise ValueError(f"Field costs must be non-negative: {', '.join(negative)}.")
        object.__setattr__(self, "costs", MappingProxyType(dict(self.costs)))

    def cost_of(self, field_name: str) -> float:
        return self.costs.get(field_name, self.default_cost)
