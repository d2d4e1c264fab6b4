from __future__ import annotations

from typing import Any, Type, TypeVar

from xtructure import FieldDescriptor, Xtructurable, xtructure_dataclass

T = TypeVar("T")

FieldDescriptor = FieldDescriptor


class PuzzleState(Xtructurable):
    """
    Marker base-class for JugX states.

    Notes:
    - State/solve-config classes are created via `@state_dataclass` inside
      `Puzzle.define_state_class`, so their field shapes can depend on the
      puzzle instance (e.g. the number of jars).
    - Jar amounts are small integers; states are kept unpacked.
    """
    pass


def state_dataclass(cls: Type[T] | None = None, **kwargs: Any):
    """
    Decorator used to define a JAX-compatible xtructure dataclass for JugX state objects.

    Bitpacking is off unless ``bitpack=`` is passed explicitly.
    """

    def wrap(target_cls: Type[T]) -> Type[T]:
        call_kwargs = dict(kwargs)
        call_kwargs.setdefault("bitpack", "off")

        try:
            dc_cls = xtructure_dataclass(target_cls, **call_kwargs)
        except TypeError:
            # Older xtructure releases do not accept `bitpack=`.
            call_kwargs.pop("bitpack", None)
            dc_cls = xtructure_dataclass(target_cls, **call_kwargs)

        return dc_cls

    if cls is None:
        return wrap
    return wrap(cls)
