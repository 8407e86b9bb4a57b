"""Exception types raised by the skill-check engine."""


class SkillCheckError(Exception):
    """Base class for skill-check errors."""


class DiceFormulaError(SkillCheckError):
    """Raised when a dice pool formula cannot be parsed."""


class RecordNotFoundError(SkillCheckError):
    """Raised when a record store is asked to update an unknown record."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Check record not found: {record_id}")
        self.record_id = record_id
