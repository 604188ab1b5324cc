"""Combat engine package."""

from skirmish.engine.class_table import ClassTable
from skirmish.engine.combat import CombatSystem
from skirmish.engine.command_validator import CommandValidator
from skirmish.engine.encounter_engine import EncounterEngine
from skirmish.engine.roster import Roster

__all__ = [
    "ClassTable",
    "CombatSystem",
    "CommandValidator",
    "EncounterEngine",
    "Roster",
]
