"""Skill check models: difficulty, results, dice and replay configuration."""

from enum import Enum, IntEnum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skillcheck.config import ATTRIBUTE_DIE_FACES, FATE_DIE_FACES


def _camel_label(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


class CheckDifficulty(IntEnum):
    """Check difficulty. The value is the face an attribute die must meet."""

    TRIVIAL = 3
    CHALLENGING = 5
    TOUGH = 7

    @property
    def label(self) -> str:
        """Label key suffix, e.g. ``Challenging``."""
        return _camel_label(self.name)


class CheckResult(IntEnum):
    """Check outcome tier. The value is the net score the tier represents."""

    DRAMATIC_FAILURE = -2
    SOLID_FAILURE = -1
    ALMOST_HAD_IT = 0
    JUST_BARELY = 1
    SOLID_SUCCESS = 2
    DRAMATIC_SUCCESS = 3

    @property
    def label(self) -> str:
        """Label key suffix, e.g. ``AlmostHadIt``."""
        return _camel_label(self.name)


class DieType(str, Enum):
    """Which sub-pool a die was drawn from."""

    ATTRIBUTE = "attribute"
    FATE = "fate"


class DieResult(str, Enum):
    """Classification of a single die."""

    NONE = "none"
    HIT = "hit"
    BOTCH = "botch"


class ParsedDie(BaseModel):
    """A rolled die with its classification and applied modifiers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: int = Field(ge=1, description="Face value")
    type: DieType = Field(description="Attribute or fate die")
    result: DieResult = Field(default=DieResult.NONE, description="Classification")
    break_: bool = Field(default=False, alias="break", description="Botch converted by skill break")
    push: bool = Field(default=False, description="Maximum face pushed by skill push")


class CheckConfig(BaseModel):
    """Replay configuration stored on a check record."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    attribute: str = Field(default="", description="Attribute name, may be empty")
    skill: str = Field(default="", description="Skill name, may be empty")
    difficulty: CheckDifficulty = Field(
        default=CheckDifficulty.CHALLENGING, description="Check difficulty"
    )
    skill_break: bool = Field(default=False, description="Skill break enabled")
    skill_push: bool = Field(default=False, description="Skill push enabled")

    def merge(self, override: Mapping[str, Any]) -> "CheckConfig":
        """
        Return a new config where every field in ``override`` wins.

        Raises:
            ValidationError: If ``override`` names a field the config does not have
        """
        return CheckConfig.model_validate({**self.model_dump(), **dict(override)})


class RealizedPool(BaseModel):
    """Face values of one rolled pool. Never re-rolled once realized."""

    model_config = ConfigDict(frozen=True)

    formula: str = Field(default="", description="Pool formula the faces were drawn from")
    attribute_faces: tuple[int, ...] = Field(default=(), description="d10 faces in roll order")
    fate_faces: tuple[int, ...] = Field(default=(), description="d6 faces in roll order")

    @field_validator("attribute_faces")
    @classmethod
    def _check_attribute_faces(cls, faces: tuple[int, ...]) -> tuple[int, ...]:
        for face in faces:
            if not 1 <= face <= ATTRIBUTE_DIE_FACES:
                raise ValueError(f"Attribute die face out of range: {face}")
        return faces

    @field_validator("fate_faces")
    @classmethod
    def _check_fate_faces(cls, faces: tuple[int, ...]) -> tuple[int, ...]:
        for face in faces:
            if not 1 <= face <= FATE_DIE_FACES:
                raise ValueError(f"Fate die face out of range: {face}")
        return faces

    @property
    def attribute_die_count(self) -> int:
        return len(self.attribute_faces)

    @property
    def fate_die_count(self) -> int:
        return len(self.fate_faces)


class CheckOutcome(BaseModel):
    """Classified dice and the tier they resolve to."""

    model_config = ConfigDict(frozen=True)

    dice: list[ParsedDie] = Field(default_factory=list, description="Classified dice, attribute first")
    hits: int = Field(default=0, ge=0, description="Hit total, pushed dice count twice")
    botches: int = Field(default=0, ge=0, description="Botch total after break")
    result: CheckResult = Field(description="Outcome tier")

    @property
    def score(self) -> int:
        return self.hits - self.botches

    @property
    def broken_die(self) -> Optional[ParsedDie]:
        """The die converted by skill break, if any."""
        return next((die for die in self.dice if die.break_), None)
