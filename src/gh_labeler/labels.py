"""Label models.

Two representations meet in this module:

- `DesiredLabel`: what the configuration declares. Colors carry a leading `#`.
- `ExistingLabel`: what GitHub reports. Colors are bare 6-digit hex.

The `#` is stripped only when a desired label crosses into the remote representation
(`DesiredLabel.remote_color`); no other transformation is applied to the color.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

_HEX_COLOR = re.compile(r"^[0-9a-fA-F]{6}$")


def is_valid_hex_color(color: str) -> bool:
    """Return True for a bare 6-digit hex color (no `#`)."""

    return bool(_HEX_COLOR.match(color))


def strip_color_prefix(color: str) -> str:
    return color[1:] if color.startswith("#") else color


def colors_equal(desired: str, existing: str) -> bool:
    return strip_color_prefix(desired).lower() == strip_color_prefix(existing).lower()


def descriptions_equal(desired: str | None, existing: str | None) -> bool:
    # GitHub reports a missing description as either null or "".
    return (desired or "") == (existing or "")


class DesiredLabel(BaseModel):
    """A label as declared in the label configuration."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    color: str = Field(description="6-digit hex color with a leading '#'")
    description: str | None = Field(default=None)
    aliases: tuple[str, ...] = Field(default=())
    delete: bool = Field(default=False, description="Delete this label if it exists")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Label name cannot be empty")
        return value

    @field_validator("color")
    @classmethod
    def _color_has_prefix(cls, value: str) -> str:
        if not value.startswith("#"):
            raise ValueError(f"Color must start with #: {value}")
        if not is_valid_hex_color(value[1:]):
            raise ValueError(f"Invalid label color: {value} (expected '#' and 6 hex digits)")
        return value

    @field_validator("aliases")
    @classmethod
    def _aliases_not_blank(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for alias in value:
            if not alias.strip():
                raise ValueError("Label aliases cannot be empty")
        return value

    @property
    def remote_color(self) -> str:
        """The color as GitHub stores it (without the `#`)."""

        return strip_color_prefix(self.color)

    def to_config(self) -> dict[str, object]:
        out: dict[str, object] = {"name": self.name, "color": self.color}
        if self.description is not None:
            out["description"] = self.description
        if self.aliases:
            out["aliases"] = list(self.aliases)
        if self.delete:
            out["delete"] = True
        return out


@dataclass(frozen=True, slots=True)
class ExistingLabel:
    """A label as currently present on the remote repository."""

    name: str
    color: str
    description: str | None = None

    @property
    def display_color(self) -> str:
        return f"#{self.color}"

    def to_json(self) -> dict[str, object]:
        return {"name": self.name, "color": self.color, "description": self.description}


DEFAULT_LABELS: tuple[DesiredLabel, ...] = (
    DesiredLabel(
        name="bug",
        color="#d73a4a",
        description="Something isn't working",
        aliases=("defect",),
    ),
    DesiredLabel(
        name="enhancement",
        color="#a2eeef",
        description="New feature or request",
        aliases=("feature",),
    ),
    DesiredLabel(
        name="documentation",
        color="#0075ca",
        description="Improvements or additions to documentation",
        aliases=("docs",),
    ),
    DesiredLabel(
        name="duplicate",
        color="#cfd3d7",
        description="This issue or pull request already exists",
    ),
    DesiredLabel(
        name="good first issue",
        color="#7057ff",
        description="Good for newcomers",
        aliases=("beginner-friendly",),
    ),
    DesiredLabel(
        name="help wanted",
        color="#008672",
        description="Extra attention is needed",
    ),
)


def default_labels() -> list[DesiredLabel]:
    """GitHub's standard label set, with common aliases."""

    return list(DEFAULT_LABELS)

