"""
C1-DesignSystemKit: Color model and WCAG contrast component.

Provides color parsing (hex, rgb, rgba with alpha compositing), relative
luminance, contrast ratios, compliance tiers and annotated text/surface
pairings for swatch views.
"""

from src.components.C1_DesignSystemKit.fc import (
    RGB,
    ColorParseError,
    ValidationResult,
    WcagRating,
    check_wcag_aa_compliance,
    classify,
    contrast_ratio_rgb,
    parse_color,
    relative_luminance,
    validate_color_token,
)
from src.components.C1_DesignSystemKit.shell import (
    Pairing,
    PairingAnnotation,
    annotate_pairing,
    annotate_pairings,
    check_wcag_compliance,
    contrast_ratio,
    standard_pairings,
)

__all__ = [
    "RGB",
    "ColorParseError",
    "ValidationResult",
    "WcagRating",
    "parse_color",
    "validate_color_token",
    "relative_luminance",
    "contrast_ratio_rgb",
    "contrast_ratio",
    "classify",
    "check_wcag_aa_compliance",
    "check_wcag_compliance",
    "Pairing",
    "PairingAnnotation",
    "annotate_pairing",
    "annotate_pairings",
    "standard_pairings",
]
