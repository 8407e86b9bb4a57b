"""Skill check orchestration: roll, resolve, render, persist and revise."""

import logging
import uuid
from typing import Any, Mapping, Optional

from skillcheck.config import FLAG_KEY, FLAG_SCOPE
from skillcheck.engine.dice import DiceService, fate_die_count, pool_formula
from skillcheck.engine.labels import LabelLookup, LabelSource
from skillcheck.engine.renderer import ContentRenderer, TemplateRenderer
from skillcheck.engine.resolver import CheckResolver
from skillcheck.exceptions import SkillCheckError
from skillcheck.helpers.debug import log_call
from skillcheck.models.check import CheckConfig, CheckDifficulty, CheckOutcome, CheckResult, RealizedPool
from skillcheck.models.record import CheckRecord
from skillcheck.persistence.record_store import RecordStore
from skillcheck.settings import CheckSettingsManager

logger = logging.getLogger(__name__.split(".")[-1])

LOWER_DIFFICULTY = {
    CheckDifficulty.TOUGH: CheckDifficulty.CHALLENGING,
    CheckDifficulty.CHALLENGING: CheckDifficulty.TRIVIAL,
}
RAISE_DIFFICULTY = {
    CheckDifficulty.TRIVIAL: CheckDifficulty.CHALLENGING,
    CheckDifficulty.CHALLENGING: CheckDifficulty.TOUGH,
}


class SkillCheckManager:
    """
    Makes skill checks, creates chat records for them, and revises
    existing records against the dice they already rolled.
    """

    def __init__(
        self,
        dice: DiceService,
        store: RecordStore,
        labels: Optional[LabelSource] = None,
        renderer: Optional[ContentRenderer] = None,
        settings_manager: Optional[CheckSettingsManager] = None,
    ) -> None:
        """
        Initialize skill check manager.

        Args:
            dice: Dice service realizing pool formulas
            store: Record store for created and revised checks
            labels: Label lookup, English string table by default
            renderer: Template renderer, package templates by default
            settings_manager: Settings (roll mode, flag namespace, template)
        """
        self._dice = dice
        self._store = store
        self._labels = labels or LabelLookup()
        self._renderer = renderer or TemplateRenderer()
        self._settings = settings_manager or CheckSettingsManager()

    @property
    def store(self) -> RecordStore:
        """Get record store."""
        return self._store

    @property
    def settings(self) -> CheckSettingsManager:
        """Get settings manager."""
        return self._settings

    @log_call
    def perform_check(
        self,
        attribute_dice: int,
        attribute_name: str = "",
        difficulty: CheckDifficulty = CheckDifficulty.CHALLENGING,
        skill_name: str = "",
        skill_break: bool = False,
        skill_push: bool = False,
        user_id: Optional[str] = None,
        speaker: Optional[str] = None,
    ) -> CheckRecord:
        """
        Roll a check and create its record.

        Args:
            attribute_dice: Attribute rating; negative values count as zero
            attribute_name: Attribute label key, may be empty
            difficulty: Check difficulty
            skill_name: Skill label key, may be empty
            skill_break: Skill break enabled
            skill_push: Skill push enabled
            user_id: User making the check
            speaker: Speaker alias for the card

        Returns:
            The created CheckRecord
        """
        settings = self._settings.config
        attribute_dice = max(attribute_dice, 0)
        fate_dice = fate_die_count(attribute_dice)

        roll = self._dice.realize(pool_formula(attribute_dice, fate_dice))
        if roll.attribute_die_count != attribute_dice or roll.fate_die_count != fate_dice:
            raise SkillCheckError(
                f"Dice service returned {roll.attribute_die_count}+{roll.fate_die_count} dice, "
                f"expected {attribute_dice}+{fate_dice}"
            )

        config = CheckConfig(
            attribute=attribute_name,
            skill=skill_name,
            difficulty=CheckDifficulty(difficulty),
            skill_break=skill_break,
            skill_push=skill_push,
        )
        record_id = str(uuid.uuid4())
        data = self.build_message_data(roll, config, record_id)

        record = CheckRecord(
            record_id=record_id,
            content=data["content"],
            flags=data["flags"],
            roll=roll,
            user_id=user_id,
            speaker=speaker,
            roll_mode=settings.roll_mode,
            whisper=settings.whisper_recipients(),
        )
        self._store.create(record)
        logger.info(
            f"Created check {record_id}: {roll.formula} {config.difficulty.label} "
            f"-> {data['result'].label}"
        )
        return record

    def get_check_result(self, roll: RealizedPool, config: CheckConfig) -> CheckOutcome:
        """Resolve stored dice with a configuration."""
        return CheckResolver.resolve_pool(roll, config)

    def stored_config(self, record: CheckRecord) -> Optional[CheckConfig]:
        """Return the replay configuration stored on ``record``, if any."""
        raw = record.get_flag(FLAG_SCOPE, FLAG_KEY)
        if not raw:
            return None
        return CheckConfig.model_validate(raw)

    @log_call
    def revise_check(
        self, record: CheckRecord, override: Mapping[str, Any]
    ) -> Optional[CheckRecord]:
        """
        Re-resolve a record with part of its configuration replaced.

        The stored dice are reused; nothing is re-rolled.

        Args:
            record: Record to revise
            override: Config fields to replace, e.g. ``{"difficulty": 7}``

        Returns:
            The updated record, or None if the record has no config or no dice
        """
        config = self.stored_config(record)
        if config is None or record.roll is None:
            logger.debug(f"Record {record.record_id} has no check to revise")
            return None

        combined = config.merge(override)
        data = self.build_message_data(record.roll, combined, record.record_id)
        updated = self._store.update(record.record_id, data["content"], data["flags"])
        logger.info(
            f"Revised check {record.record_id}: {combined.difficulty.label} "
            f"-> {data['result'].label}"
        )
        return updated

    def lower_difficulty(self, record: CheckRecord) -> Optional[CheckRecord]:
        """Lower difficulty one step and re-render. Trivial stays as it is."""
        return self._nudge_difficulty(record, LOWER_DIFFICULTY)

    def raise_difficulty(self, record: CheckRecord) -> Optional[CheckRecord]:
        """Raise difficulty one step and re-render. Tough stays as it is."""
        return self._nudge_difficulty(record, RAISE_DIFFICULTY)

    def lower_difficulty_by_id(self, record_id: str) -> Optional[CheckRecord]:
        """Lower difficulty of a stored record; unknown ids are ignored."""
        record = self._store.get(record_id)
        if record is None:
            logger.debug(f"No record {record_id} to lower")
            return None
        return self.lower_difficulty(record)

    def raise_difficulty_by_id(self, record_id: str) -> Optional[CheckRecord]:
        """Raise difficulty of a stored record; unknown ids are ignored."""
        record = self._store.get(record_id)
        if record is None:
            logger.debug(f"No record {record_id} to raise")
            return None
        return self.raise_difficulty(record)

    def _nudge_difficulty(
        self, record: CheckRecord, steps: dict[CheckDifficulty, CheckDifficulty]
    ) -> Optional[CheckRecord]:
        config = self.stored_config(record)
        if config is None:
            return None
        target = steps.get(config.difficulty)
        if target is None:
            logger.debug(f"Record {record.record_id} already at {config.difficulty.label}")
            return None
        return self.revise_check(record, {"difficulty": target})

    def build_labels(self, config: CheckConfig, result: CheckResult) -> dict[str, str]:
        """Display labels for a chat card."""
        translate = self._labels.translate
        return {
            "attribute_name": translate(f"Attr.{config.attribute}") if config.attribute else "",
            "skill_name": translate(f"Skill.{config.skill}") if config.skill else "",
            "difficulty": translate(f"CheckDifficulty.{config.difficulty.label}"),
            "check_result": translate(f"CheckResult.{result.label}"),
            "result_description": translate(f"CheckResultDescription.{result.label}"),
        }

    def build_message_data(
        self, roll: RealizedPool, config: CheckConfig, record_id: str
    ) -> dict[str, Any]:
        """
        Resolve, render and build the stored flag for a check.

        Returns:
            Dict with ``content``, ``flags`` and the resolved ``result``
        """
        settings = self._settings.config
        outcome = self.get_check_result(roll, config)
        labels = self.build_labels(config, outcome.result)

        content = self._renderer.render(
            settings.template_id,
            {
                "rolls": [die.model_dump(mode="json", by_alias=True) for die in outcome.dice],
                **labels,
                "difficulty_value": int(config.difficulty),
                "can_lower": config.difficulty in LOWER_DIFFICULTY,
                "can_raise": config.difficulty in RAISE_DIFFICULTY,
                "record_id": record_id,
            },
        )

        return {
            "content": content,
            "flags": {FLAG_SCOPE: {FLAG_KEY: config.model_dump(mode="json")}},
            "result": outcome.result,
        }
