"""Skill check resolution: per-die classification and tier mapping."""

from typing import Sequence

from skillcheck.config import ATTRIBUTE_DIE_FACES, FATE_DIE_FACES
from skillcheck.models.check import (
    CheckConfig,
    CheckDifficulty,
    CheckOutcome,
    CheckResult,
    DieResult,
    DieType,
    ParsedDie,
    RealizedPool,
)

# Tiers matched by exact score; anything outside collapses to the extremes
_EXACT_TIERS = {
    CheckResult.SOLID_FAILURE.value: CheckResult.SOLID_FAILURE,
    CheckResult.ALMOST_HAD_IT.value: CheckResult.ALMOST_HAD_IT,
    CheckResult.JUST_BARELY.value: CheckResult.JUST_BARELY,
    CheckResult.SOLID_SUCCESS.value: CheckResult.SOLID_SUCCESS,
}


class CheckResolver:
    """Turns realized dice into classified dice and an outcome tier. No I/O."""

    @staticmethod
    def resolve(
        attribute_faces: Sequence[int],
        fate_faces: Sequence[int],
        difficulty: CheckDifficulty,
        skill_break: bool = False,
        skill_push: bool = False,
    ) -> CheckOutcome:
        """
        Resolve a check against already-rolled dice.

        Args:
            attribute_faces: d10 faces in roll order
            fate_faces: d6 faces in roll order
            difficulty: Face an attribute die must meet to hit
            skill_break: Convert the first botch into a hit
            skill_push: Count attribute 10s as two hits

        Returns:
            CheckOutcome with classified dice, totals and tier
        """
        parsed = CheckResolver.parse_dice(attribute_faces, DieType.ATTRIBUTE, difficulty)
        parsed += CheckResolver.parse_dice(fate_faces, DieType.FATE, difficulty)
        dice = CheckResolver.apply_modifiers(parsed, skill_break, skill_push)

        hits = 0
        botches = 0
        for die in dice:
            if die.push:
                hits += 2
            elif die.result == DieResult.BOTCH:
                botches += 1
            elif die.result == DieResult.HIT:
                hits += 1

        return CheckOutcome(
            dice=dice,
            hits=hits,
            botches=botches,
            result=CheckResolver.result_for_score(hits - botches),
        )

    @staticmethod
    def resolve_pool(pool: RealizedPool, config: CheckConfig) -> CheckOutcome:
        """Resolve a realized pool with a stored configuration."""
        return CheckResolver.resolve(
            pool.attribute_faces,
            pool.fate_faces,
            config.difficulty,
            config.skill_break,
            config.skill_push,
        )

    @staticmethod
    def parse_dice(
        faces: Sequence[int], die_type: DieType, difficulty: CheckDifficulty
    ) -> list[ParsedDie]:
        """Classify one sub-pool, keeping roll order."""
        return [
            ParsedDie(
                value=value,
                type=die_type,
                result=CheckResolver.die_result(value, die_type, difficulty),
            )
            for value in faces
        ]

    @staticmethod
    def die_result(value: int, die_type: DieType, difficulty: CheckDifficulty) -> DieResult:
        """Classify a single face."""
        if value == 1:
            return DieResult.BOTCH
        if value == ATTRIBUTE_DIE_FACES or (die_type == DieType.FATE and value == FATE_DIE_FACES):
            return DieResult.HIT
        if die_type == DieType.ATTRIBUTE and value >= difficulty:
            return DieResult.HIT
        return DieResult.NONE

    @staticmethod
    def apply_modifiers(
        dice: Sequence[ParsedDie], skill_break: bool, skill_push: bool
    ) -> list[ParsedDie]:
        """
        Apply skill break and skill push in one left-to-right pass.

        Break goes to the first botch only and is checked before push,
        so no die carries both.
        """
        result: list[ParsedDie] = []
        break_used = False
        for die in dice:
            if die.result == DieResult.BOTCH and skill_break and not break_used:
                die = die.model_copy(update={"result": DieResult.HIT, "break_": True})
                break_used = True
            elif die.type == DieType.ATTRIBUTE and die.value == ATTRIBUTE_DIE_FACES and skill_push:
                die = die.model_copy(update={"push": True})
            result.append(die)
        return result

    @staticmethod
    def result_for_score(score: int) -> CheckResult:
        """Map a net score (hits minus botches) onto an outcome tier."""
        if score in _EXACT_TIERS:
            return _EXACT_TIERS[score]
        if score <= CheckResult.DRAMATIC_FAILURE:
            return CheckResult.DRAMATIC_FAILURE
        return CheckResult.DRAMATIC_SUCCESS
