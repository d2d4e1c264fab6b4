"""
Puzzle implementations for JugX.

All puzzle classes inherit from the base Puzzle class, so the search and the
transfer engine can drive them through the same jitted transition methods.
"""

from jugx.puzzles.liquid_transfer import LiquidTransfer, enumerate_pour_pairs, pour_description

__all__ = [
    "LiquidTransfer",
    "enumerate_pour_pairs",
    "pour_description",
]
