"""
C1-DesignSystemKit Functional Core: Pure color and contrast functions.

No I/O operations - all functions are pure and deterministic.
Parses hex and rgb()/rgba() color tokens and computes WCAG 2.1 contrast.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


@dataclass
class ValidationResult:
    """Result of a design system validation check."""

    is_valid: bool
    violations: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class ColorParseError(ValueError):
    """Raised when a color string is malformed or in an unsupported format."""

    def __init__(self, color: str, reason: str) -> None:
        self.color = color
        self.reason = reason
        super().__init__(f"Cannot parse color {color!r}: {reason}")


class RGB(NamedTuple):
    r: int
    g: int
    b: int


# ═══════════════════════════════════════════════════════════════════════════
# COLOR MODEL
# #RGB / #RRGGBB hex, rgb(r,g,b) / rgba(r,g,b,a)
# ═══════════════════════════════════════════════════════════════════════════

HEX_DIGITS_PATTERN = re.compile(r"([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})")
RGBA_PATTERN = re.compile(r"rgba?\((\d+),\s*(\d+),\s*(\d+)(?:,\s*([\d.]+))?\)")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert a hex color to an RGB triple.

    Three-digit shorthand is expanded by doubling each character.

    Raises:
        ColorParseError: if the digits are not exactly 3 or 6 hex characters
    """
    digits = hex_color[1:] if hex_color.startswith("#") else hex_color

    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)

    match = HEX_DIGITS_PATTERN.fullmatch(digits)
    if not match:
        raise ColorParseError(hex_color, "expected #RGB or #RRGGBB")

    return RGB(*(int(channel, 16) for channel in match.groups()))


def rgba_to_rgb(rgba: str, background_is_light: bool = True) -> RGB:
    """
    Convert an rgb()/rgba() color to an opaque RGB triple.

    Translucent colors are composited against white when the backdrop is
    light, or black when it is dark. Missing alpha means opaque.

    Raises:
        ColorParseError: if the three integer channels cannot be matched,
            a channel exceeds 255 or alpha exceeds 1
    """
    match = RGBA_PATTERN.match(rgba)
    if not match:
        raise ColorParseError(rgba, "expected rgb(r, g, b) or rgba(r, g, b, a)")

    r, g, b = (int(match.group(i)) for i in (1, 2, 3))
    try:
        alpha = float(match.group(4)) if match.group(4) else 1.0
    except ValueError:
        raise ColorParseError(rgba, f"invalid alpha {match.group(4)!r}") from None

    if any(channel > 255 for channel in (r, g, b)):
        raise ColorParseError(rgba, "channels must be 0-255")
    if alpha > 1.0:
        raise ColorParseError(rgba, "alpha must be 0-1")

    backdrop = 255 if background_is_light else 0

    def composite(channel: int) -> int:
        return _round_half_up(channel * alpha + backdrop * (1 - alpha))

    return RGB(composite(r), composite(g), composite(b))


def parse_color(color: str, background_is_light: bool = True) -> RGB:
    """
    Parse any supported color string into an RGB triple.

    Args:
        color: Hex (#RGB, #RRGGBB) or rgb()/rgba() color
        background_is_light: Backdrop used to flatten rgba alpha

    Returns:
        Opaque RGB triple

    Raises:
        ColorParseError: for malformed values and unsupported formats
            (named colors, "transparent", hsl(), ...)
    """
    if color.startswith("#"):
        return hex_to_rgb(color)
    if color.startswith("rgb"):
        return rgba_to_rgb(color, background_is_light)
    raise ColorParseError(color, "unsupported color format")


def validate_color_token(color: str) -> ValidationResult:
    """
    Validate a color token value.

    Args:
        color: Color in hex or rgb()/rgba() notation

    Returns:
        ValidationResult with violations if the value cannot be parsed
    """
    try:
        parse_color(color)
    except ColorParseError as e:
        return ValidationResult(
            is_valid=False,
            violations=[f"Invalid color format: {color}. {e.reason}"],
        )

    return ValidationResult(is_valid=True)


# ═══════════════════════════════════════════════════════════════════════════
# CONTRAST ENGINE
# WCAG 2.1: AAA 7:1, AA 4.5:1, AA Large 3:1
# ═══════════════════════════════════════════════════════════════════════════

AAA_THRESHOLD = 7.0
AA_THRESHOLD = 4.5
AA_LARGE_THRESHOLD = 3.0
WORST_CONTRAST = 1.0


class WcagRating(str, Enum):
    AAA = "AAA"
    AA = "AA"
    AA_LARGE = "AA Large"
    FAIL = "Fail"


def relative_luminance(r: int, g: int, b: int) -> float:
    """
    Calculate relative luminance per WCAG 2.1.

    Formula: L = 0.2126 * R + 0.7152 * G + 0.0722 * B
    Where R, G, B are sRGB values normalized and linearized.
    """

    def linearize(c: int) -> float:
        c_srgb = c / 255
        if c_srgb <= 0.03928:
            return c_srgb / 12.92
        return float(((c_srgb + 0.055) / 1.055) ** 2.4)

    return 0.2126 * linearize(r) + 0.7152 * linearize(g) + 0.0722 * linearize(b)


def contrast_ratio_rgb(first: RGB, second: RGB) -> float:
    """
    Calculate WCAG contrast ratio between two RGB triples.

    Returns:
        Contrast ratio (1.0 to 21.0), symmetric in its arguments
    """
    l1 = relative_luminance(*first)
    l2 = relative_luminance(*second)

    lighter = max(l1, l2)
    darker = min(l1, l2)

    return (lighter + 0.05) / (darker + 0.05)


def classify(ratio: float) -> WcagRating:
    """Map a contrast ratio onto its WCAG tier. Lower bounds are inclusive."""
    if ratio >= AAA_THRESHOLD:
        return WcagRating.AAA
    if ratio >= AA_THRESHOLD:
        return WcagRating.AA
    if ratio >= AA_LARGE_THRESHOLD:
        return WcagRating.AA_LARGE
    return WcagRating.FAIL


def check_wcag_aa_compliance(ratio: float, is_large_text: bool = False) -> ValidationResult:
    """
    Check WCAG 2.1 AA compliance for a contrast ratio.

    Args:
        ratio: Contrast ratio between text and background
        is_large_text: True if text is >= 18pt or >= 14pt bold

    Returns:
        ValidationResult with compliance status
    """
    threshold = AA_LARGE_THRESHOLD if is_large_text else AA_THRESHOLD

    if ratio >= threshold:
        return ValidationResult(is_valid=True)

    return ValidationResult(
        is_valid=False,
        violations=[
            f"Contrast ratio {ratio:.2f}:1 does not meet WCAG AA "
            f"({threshold}:1 required for {'large' if is_large_text else 'normal'} text)"
        ],
        warnings=[f"Current contrast: {ratio:.2f}:1, needed: {threshold}:1"],
    )
