"""Request payloads for the check API."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skillcheck.config import MAX_ATTRIBUTE_DICE
from skillcheck.models.check import CheckDifficulty


def _parse_difficulty(value):
    """Accept difficulty names (``"tough"``) as well as threshold values."""
    if isinstance(value, str) and value.upper() in CheckDifficulty.__members__:
        return CheckDifficulty[value.upper()]
    return value


class CheckRequest(BaseModel):
    """Payload for performing a check."""

    attribute_dice: int = Field(
        le=MAX_ATTRIBUTE_DICE, description="Attribute rating; negative counts as zero"
    )
    attribute_name: str = Field(default="", description="Attribute label key")
    difficulty: CheckDifficulty = Field(default=CheckDifficulty.CHALLENGING, description="Check difficulty")
    skill_name: str = Field(default="", description="Skill label key")
    skill_break: bool = Field(default=False, description="Skill break enabled")
    skill_push: bool = Field(default=False, description="Skill push enabled")
    user_id: Optional[str] = Field(default=None, description="User making the check")
    speaker: Optional[str] = Field(default=None, description="Speaker alias")

    normalize_difficulty = field_validator("difficulty", mode="before")(_parse_difficulty)


class CheckOverride(BaseModel):
    """Partial replay configuration; only fields that are sent are applied."""

    model_config = ConfigDict(extra="forbid")

    attribute: Optional[str] = None
    skill: Optional[str] = None
    difficulty: Optional[CheckDifficulty] = None
    skill_break: Optional[bool] = None
    skill_push: Optional[bool] = None

    normalize_difficulty = field_validator("difficulty", mode="before")(_parse_difficulty)


class DifficultyNudge(BaseModel):
    """Lower/raise click on a chat card. ``left``/``right`` are the card's button classes."""

    direction: Literal["lower", "raise", "left", "right"]

    @property
    def is_lower(self) -> bool:
        return self.direction in ("lower", "left")
