from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from jugx.utils.util import is_integer

__all__ = ["MAX_QUANTITY", "JugConfig", "parse_config", "parse_capacities"]

# Jar amounts are stored as int32.
MAX_QUANTITY = 2**31 - 1


@dataclass(frozen=True)
class JugConfig:
    """Immutable puzzle setup: jar capacities (in order) and the target quantity.

    A target larger than every capacity is accepted; such a puzzle is simply
    unsolvable and the search reports it as such.
    """

    capacities: tuple[int, ...]
    target: int

    def __post_init__(self):
        capacities = tuple(self.capacities)
        if not capacities:
            raise ValueError("At least one jar capacity is required")
        for index, capacity in enumerate(capacities):
            if not is_integer(capacity):
                raise ValueError(
                    f"Capacity of jar {index + 1} must be an integer, got {capacity!r}"
                )
            if capacity <= 0:
                raise ValueError(
                    f"Capacity of jar {index + 1} must be positive, got {capacity}"
                )
        if not is_integer(self.target):
            raise ValueError(f"Target must be an integer, got {self.target!r}")
        if self.target <= 0:
            raise ValueError(f"Target must be positive, got {self.target}")
        if self.target > MAX_QUANTITY:
            raise ValueError(
                f"Target {self.target} exceeds the supported maximum {MAX_QUANTITY}"
            )
        total = sum(int(c) for c in capacities)
        if total > MAX_QUANTITY:
            raise ValueError(f"Total capacity {total} exceeds the supported maximum {MAX_QUANTITY}")
        object.__setattr__(self, "capacities", tuple(int(c) for c in capacities))
        object.__setattr__(self, "target", int(self.target))

    @classmethod
    def create(cls, capacities: Iterable[int], target: int) -> "JugConfig":
        return cls(capacities=tuple(capacities), target=target)

    @property
    def n_jars(self) -> int:
        return len(self.capacities)

    @property
    def largest_jar(self) -> int:
        """Index of the first jar with the maximum capacity."""
        max_capacity = max(self.capacities)
        return self.capacities.index(max_capacity)

    def initial_amounts(self) -> tuple[int, ...]:
        """Largest jar full, every other jar empty."""
        largest = self.largest_jar
        return tuple(
            capacity if index == largest else 0
            for index, capacity in enumerate(self.capacities)
        )


def parse_capacities(text: str) -> tuple[int, ...]:
    """Parse comma separated capacities such as ``"3, 5, 8"``; blank items are skipped."""
    items = [item.strip() for item in text.split(",")]
    try:
        return tuple(int(item) for item in items if item)
    except ValueError as exc:
        raise ValueError(f"Capacities must be comma separated integers, got {text!r}") from exc


def parse_config(capacities_text: str, target_text: str) -> JugConfig:
    """Build a :class:`JugConfig` from raw text input.

    Raises:
        ValueError: If either field is not an integer list / integer, or the
            resulting configuration is invalid.
    """
    capacities = parse_capacities(capacities_text)
    try:
        target = int(target_text.strip())
    except ValueError as exc:
        raise ValueError(f"Target must be an integer, got {target_text!r}") from exc
    return JugConfig.create(capacities, target)
