"""Theme domain schemas.

The sub-document models double as validation for the JSON columns on
``Theme``.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

ColorValue = Annotated[str, Field(min_length=1, max_length=64)]


class ThemeColors(BaseModel):
    primary: ColorValue
    primary_foreground: ColorValue
    secondary: ColorValue
    secondary_foreground: ColorValue
    accent: ColorValue
    accent_foreground: ColorValue
    background: ColorValue
    foreground: ColorValue
    card: ColorValue
    card_foreground: ColorValue
    muted: ColorValue
    muted_foreground: ColorValue
    border: ColorValue
    input: ColorValue
    ring: ColorValue


class Gradient(BaseModel):
    enabled: bool = False
    start: str = Field(max_length=64)
    end: str = Field(max_length=64)
    angle: float = Field(ge=0, le=360)


class ThemeGradients(BaseModel):
    background: Gradient
    card: Gradient
    button: Gradient


class ThemeFonts(BaseModel):
    heading: str = Field(min_length=1, max_length=100)
    body: str = Field(min_length=1, max_length=100)
    display: str = Field(min_length=1, max_length=100)
    heading_color: str = Field(max_length=64)
    body_color: str = Field(max_length=64)
    display_color: str = Field(max_length=64)


class CardStyle(str, Enum):
    elevated = "elevated"
    flat = "flat"
    outlined = "outlined"


class Spacing(str, Enum):
    compact = "compact"
    normal = "normal"
    spacious = "spacious"


class ThemeLayout(BaseModel):
    border_radius: float = Field(ge=0, le=64)
    card_style: CardStyle = CardStyle.elevated
    spacing: Spacing = Spacing.normal
    shadow_intensity: float = Field(ge=0, le=100)


class ThemeSettings(BaseModel):
    """The four visual sub-documents every theme carries."""

    colors: ThemeColors
    gradients: ThemeGradients
    fonts: ThemeFonts
    layout: ThemeLayout


class ThemeCreate(ThemeSettings):
    profile_id: uuid.UUID
    name: str = Field(min_length=1, max_length=100)


class ThemeUpdate(BaseModel):
    """Partial theme update.

    ``is_active`` and ``profile_id`` are not accepted here; activation has
    its own endpoint and themes never move between profiles.
    """

    name: str | None = Field(default=None, min_length=1, max_length=100)
    colors: ThemeColors | None = None
    gradients: ThemeGradients | None = None
    fonts: ThemeFonts | None = None
    layout: ThemeLayout | None = None


class ThemeRead(ThemeSettings):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    profile_id: uuid.UUID | None = None
    name: str
    is_active: bool
    is_preset: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ThemePreset(ThemeSettings):
    id: str
    name: str
    is_preset: bool = True
