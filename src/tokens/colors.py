"""
Design token color tables.

Core palettes are 12-step scales (025..950). Semantic aliases map roles
(primary, surface, on_surface, ...) onto core steps for each appearance.

Records are frozen so a missing step or role fails at construction time
instead of leaking None into the cascade or the pairing report.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Appearance = Literal["light", "dark"]


@dataclass(frozen=True)
class ColorScale:
    """A 12-step color scale."""

    s025: str
    s050: str
    s100: str
    s200: str
    s300: str
    s400: str
    s500: str
    s600: str
    s700: str
    s800: str
    s900: str
    s950: str

    def step(self, name: str) -> str:
        """Look up a step by its token name, e.g. "300" or "050"."""
        try:
            return str(getattr(self, f"s{name}"))
        except AttributeError:
            raise KeyError(f"Unknown scale step: {name}") from None


@dataclass(frozen=True)
class CorePalette:
    brand: ColorScale
    bottle_green: ColorScale
    greige: ColorScale
    lemon: ColorScale
    cinnabar: ColorScale
    moonlight: ColorScale


@dataclass(frozen=True)
class SemanticColors:
    """Semantic color roles for one appearance."""

    primary: str
    primary_hover: str
    secondary: str
    surface: str
    surface_secondary: str
    surface_tertiary: str
    on_surface: str
    on_surface_secondary: str
    on_surface_tertiary: str
    border: str
    border_strong: str
    success: str
    warning: str
    error: str
    info: str


WHITE = "#FFFFFF"
BLACK = "#000000"

CORE_PALETTE = CorePalette(
    brand=ColorScale(
        "#FFFAF6", "#FEF2E9", "#FEDAC3", "#FBA268", "#F96302", "#E95C02",
        "#CA5002", "#B34701", "#953B01", "#783001", "#401A01", "#180900",
    ),
    bottle_green=ColorScale(
        "#FAFCFB", "#F0F5F3", "#D8E4DE", "#A0BEAE", "#739E88", "#63937B",
        "#4A8165", "#397456", "#226242", "#0D502E", "#002C12", "#001006",
    ),
    greige=ColorScale(
        "#FBFAF9", "#F8F5F2", "#E5E1DE", "#BAB7B4", "#979492", "#8B8887",
        "#787675", "#6A6867", "#585756", "#474545", "#252524", "#0D0D0D",
    ),
    lemon=ColorScale(
        "#FEFBED", "#FDF6D2", "#F9E270", "#CFB73A", "#A59547", "#978948",
        "#817747", "#716945", "#5C573F", "#4A4637", "#262521", "#0D0D0D",
    ),
    cinnabar=ColorScale(
        "#FEF9F9", "#FDF1F0", "#FBDAD7", "#F5A29B", "#F06B61", "#ED5549",
        "#DF3427", "#C62E23", "#A5271D", "#861F17", "#49110D", "#1C0605",
    ),
    moonlight=ColorScale(
        "#FBFBFD", "#F3F4F8", "#DFE1EB", "#B0B6D0", "#8B93B9", "#7E87B1",
        "#6974A5", "#5A669B", "#495489", "#3A446D", "#1E243A", "#0B0C14",
    ),
)

_p = CORE_PALETTE

SEMANTIC_LIGHT = SemanticColors(
    primary=_p.brand.s300,
    primary_hover=_p.brand.s400,
    secondary=_p.bottle_green.s500,
    surface=WHITE,
    surface_secondary=_p.greige.s050,
    surface_tertiary=_p.greige.s100,
    on_surface=_p.greige.s900,
    on_surface_secondary=_p.greige.s700,
    on_surface_tertiary=_p.greige.s500,
    border=_p.greige.s200,
    border_strong=_p.greige.s400,
    success=_p.bottle_green.s500,
    warning=_p.lemon.s200,
    error=_p.cinnabar.s500,
    info=_p.moonlight.s500,
)

SEMANTIC_DARK = SemanticColors(
    primary=_p.brand.s300,
    primary_hover=_p.brand.s200,
    secondary=_p.bottle_green.s400,
    surface=_p.greige.s950,
    surface_secondary=_p.greige.s900,
    surface_tertiary=_p.greige.s800,
    on_surface=_p.greige.s050,
    on_surface_secondary=_p.greige.s200,
    on_surface_tertiary=_p.greige.s400,
    border=_p.greige.s700,
    border_strong=_p.greige.s500,
    success=_p.bottle_green.s400,
    warning=_p.lemon.s100,
    error=_p.cinnabar.s400,
    info=_p.moonlight.s400,
)


def semantic_for(appearance: Appearance) -> SemanticColors:
    """Return the semantic color set for an appearance."""
    if appearance == "light":
        return SEMANTIC_LIGHT
    if appearance == "dark":
        return SEMANTIC_DARK
    raise ValueError(f"Unknown appearance: {appearance}")
