from collections.abc import Sequence
from numbers import Integral

import numpy as np
from termcolor import colored


def is_integer(value) -> bool:
    """True for Python and numpy integers; ``bool`` is not accepted."""
    return isinstance(value, Integral) and not isinstance(value, bool)


def to_amounts(array) -> tuple[int, ...]:
    """Convert a (device) array of jar amounts into a hashable tuple of ints."""
    return tuple(int(x) for x in np.asarray(array).reshape(-1))


def format_amounts(amounts: Sequence[int]) -> str:
    return "[" + ", ".join(str(int(a)) for a in amounts) + "]"


def gauge_str(
    amount: int, capacity: int, max_capacity: int, width: int = 20, highlight: bool = False
) -> str:
    """
    Render a single jar as a horizontal gauge, e.g. ``[████░░░░]``.

    The gauge length is proportional to the jar capacity (the largest jar gets
    ``width`` cells), and the filled part is proportional to the amount held.
    """
    cells = max(1, round(capacity * width / max(max_capacity, 1)))
    filled = min(cells, round(amount * cells / capacity)) if capacity > 0 else 0
    body = "█" * filled + "░" * (cells - filled)
    return colored(f"[{body}]", "light_green" if highlight else "light_blue")
