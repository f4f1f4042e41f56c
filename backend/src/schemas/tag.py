"""Pydantic schemas for tag endpoints."""
import re

from pydantic import BaseModel, Field, field_validator

from models.tag import DEFAULT_TAG_COLOR

# '#RGB', '#RGBA', '#RRGGBB' or '#RRGGBBAA'
COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def validate_color(color: str) -> str:
    """Validate that a color looks like a CSS hex color token."""
    if not COLOR_PATTERN.match(color):
        raise ValueError(
            f"Invalid color: '{color}'. Use a hex color such as '{DEFAULT_TAG_COLOR}'.",
        )
    return color


class TagCreate(BaseModel):
    """Schema for creating a new tag."""

    name: str = Field(min_length=1)
    color: str = DEFAULT_TAG_COLOR

    @field_validator("color", mode="before")
    @classmethod
    def default_missing_color(cls, v: str | None) -> str:
        """Treat an explicit null or empty color as 'use the default'."""
        if v is None or v == "":
            return DEFAULT_TAG_COLOR
        return v

    @field_validator("color")
    @classmethod
    def check_color(cls, v: str) -> str:
        """Validate color format."""
        return validate_color(v)


class TagResponse(BaseModel):
    """Schema for a tag as returned to callers."""

    id: int
    name: str
    color: str
