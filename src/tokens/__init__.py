"""
Design token tables consumed by the contrast kit and the cascade graph.
"""

from src.tokens.colors import (
    BLACK,
    CORE_PALETTE,
    SEMANTIC_DARK,
    SEMANTIC_LIGHT,
    WHITE,
    Appearance,
    ColorScale,
    CorePalette,
    SemanticColors,
    semantic_for,
)

__all__ = [
    "Appearance",
    "ColorScale",
    "CorePalette",
    "SemanticColors",
    "CORE_PALETTE",
    "SEMANTIC_LIGHT",
    "SEMANTIC_DARK",
    "WHITE",
    "BLACK",
    "semantic_for",
]
