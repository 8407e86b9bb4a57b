"""Pytest configuration and fixtures."""

from typing import Sequence

import pytest

from skillcheck.engine.check_manager import SkillCheckManager
from skillcheck.models.check import RealizedPool
from skillcheck.persistence.record_store import InMemoryRecordStore
from skillcheck.settings import CheckSettings, CheckSettingsManager


class ScriptedDice:
    """Dice service returning preset faces and remembering requested formulas."""

    def __init__(self, attribute_faces: Sequence[int] = (), fate_faces: Sequence[int] = ()) -> None:
        self.attribute_faces = tuple(attribute_faces)
        self.fate_faces = tuple(fate_faces)
        self.formulas: list[str] = []

    def realize(self, formula: str) -> RealizedPool:
        self.formulas.append(formula)
        return RealizedPool(
            formula=formula,
            attribute_faces=self.attribute_faces,
            fate_faces=self.fate_faces,
        )


class BrokenDice:
    """Dice service that always fails."""

    def realize(self, formula: str) -> RealizedPool:
        raise RuntimeError("dice service unavailable")


@pytest.fixture
def scripted_dice():
    """Three attribute dice [10, 1, 7] and two fate dice [6, 3]."""
    return ScriptedDice([10, 1, 7], [6, 3])


@pytest.fixture
def store():
    """Empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def settings_manager():
    """Public roll settings with a single GM recipient."""
    return CheckSettingsManager(CheckSettings(roll_mode="publicroll", gm_recipients=["gm"]))


@pytest.fixture
def manager(scripted_dice, store, settings_manager):
    """Manager wired to scripted dice and an in-memory store."""
    return SkillCheckManager(dice=scripted_dice, store=store, settings_manager=settings_manager)
