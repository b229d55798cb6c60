"""
C1-DesignSystemKit Imperative Shell: fail-safe contrast and pairing report.

Wraps the functional core for view code. Parse failures are logged and
downgraded to the worst ratio (1.0, "Fail") so a swatch always renders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from src.components.C1_DesignSystemKit.fc import (
    WORST_CONTRAST,
    ColorParseError,
    ValidationResult,
    WcagRating,
    check_wcag_aa_compliance,
    classify,
    contrast_ratio_rgb,
    parse_color,
)
from src.tokens import BLACK, WHITE, SemanticColors

logger = logging.getLogger(__name__)


def contrast_ratio(fg: str, bg: str, background_is_light: bool = True) -> float:
    """
    Calculate WCAG contrast ratio between two color strings.

    Both colors are flattened against the same backdrop. If either color
    cannot be parsed, a warning is logged and 1.0 is returned.

    Args:
        fg: Foreground color (hex or rgb()/rgba())
        bg: Background color (hex or rgb()/rgba())
        background_is_light: Backdrop for alpha compositing

    Returns:
        Contrast ratio (1.0 to 21.0)
    """
    try:
        fg_rgb = parse_color(fg, background_is_light)
        bg_rgb = parse_color(bg, background_is_light)
    except ColorParseError as e:
        logger.warning("Could not parse colors fg=%r bg=%r: %s", fg, bg, e)
        return WORST_CONTRAST

    return contrast_ratio_rgb(fg_rgb, bg_rgb)


def check_wcag_compliance(
    fg: str,
    bg: str,
    is_large_text: bool = False,
    background_is_light: bool = True,
) -> ValidationResult:
    """Check WCAG AA compliance for a foreground/background pair."""
    return check_wcag_aa_compliance(
        contrast_ratio(fg, bg, background_is_light),
        is_large_text=is_large_text,
    )


# --- Pairing report ---


@dataclass(frozen=True)
class Pairing:
    """A text token drawn on a surface token."""

    text_token: str
    text_color: str
    surface_token: str
    surface_color: str


@dataclass(frozen=True)
class PairingAnnotation:
    pairing: Pairing
    ratio: float
    rating: WcagRating


def annotate_pairing(pairing: Pairing, background_is_light: bool = True) -> PairingAnnotation:
    ratio = contrast_ratio(pairing.text_color, pairing.surface_color, background_is_light)
    return PairingAnnotation(pairing=pairing, ratio=ratio, rating=classify(ratio))


def standard_pairings(semantic: SemanticColors) -> list[Pairing]:
    """
    Build the standard pairing set for a semantic color set.

    Every text role on every surface role, then the "on" color for
    each filled role (white text, except dark text on warning).
    """
    surfaces = [
        ("surface", semantic.surface),
        ("surfaceSecondary", semantic.surface_secondary),
        ("surfaceTertiary", semantic.surface_tertiary),
    ]
    texts = [
        ("onSurface", semantic.on_surface),
        ("onSurfaceSecondary", semantic.on_surface_secondary),
        ("onSurfaceTertiary", semantic.on_surface_tertiary),
    ]
    pairings = [
        Pairing(text_token, text_color, surface_token, surface_color)
        for surface_token, surface_color in surfaces
        for text_token, text_color in texts
    ]

    fills = [
        ("primary", semantic.primary, "onPrimary", WHITE),
        ("secondary", semantic.secondary, "onSecondary", WHITE),
        ("success", semantic.success, "onSuccess", WHITE),
        ("info", semantic.info, "onInfo", WHITE),
        ("warning", semantic.warning, "onWarning", BLACK),
        ("error", semantic.error, "onError", WHITE),
    ]
    pairings.extend(
        Pairing(text_token, text_color, fill_token, fill_color)
        for fill_token, fill_color, text_token, text_color in fills
    )
    return pairings


def annotate_pairings(
    pairings: list[Pairing],
    background_is_light: bool = True,
) -> list[PairingAnnotation]:
    """Annotate each pairing with its contrast ratio and rating."""
    return [annotate_pairing(p, background_is_light) for p in pairings]
