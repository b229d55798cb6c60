from typing import Literal

from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str

class ContrastRules(BaseModel):
    # Backdrop used to flatten rgba() alpha before luminance
    default_background_is_light: bool = True

class CascadeRules(BaseModel):
    tier_delay_ms: float = Field(default=400, ge=0)
    counter_tail_ms: float = Field(default=600, ge=0)
    leverage_target: int = Field(default=564, ge=0)
    frame_interval_ms: float = Field(default=16, gt=0)

class DisplayRules(BaseModel):
    appearance: Literal["light", "dark"] = "light"

class Rules(BaseModel):
    project: ProjectRules
    contrast: ContrastRules = Field(default_factory=ContrastRules)
    cascade: CascadeRules = Field(default_factory=CascadeRules)
    display: DisplayRules = Field(default_factory=DisplayRules)
