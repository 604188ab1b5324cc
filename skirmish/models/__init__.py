"""Data models module for Skirmish."""

# Values
from skirmish.models.meter import Meter
from skirmish.models.status import Status, StatusKind, escalate, stun_lock

# Classes
from skirmish.models.classes import (
    Abilities,
    CharacterClass,
    ClassDescriptor,
    ClassGroup,
    MonsterClass,
    MultiClass,
    SingleClass,
)

# Combatants
from skirmish.models.combatant import Combatant, CombatantTemplate
from skirmish.models.builder import REQUIRED_FIELDS, BuilderField, CombatantBuilder

# Roster
from skirmish.models.roster import Row, RosterSnapshot, RowView

# Commands
from skirmish.models.commands import Command, CommandResult, CommandType

__all__ = [
    # Values
    "Meter",
    "Status",
    "StatusKind",
    "escalate",
    "stun_lock",
    # Classes
    "Abilities",
    "CharacterClass",
    "ClassDescriptor",
    "ClassGroup",
    "MonsterClass",
    "MultiClass",
    "SingleClass",
    # Combatants
    "Combatant",
    "CombatantTemplate",
    "BuilderField",
    "CombatantBuilder",
    "REQUIRED_FIELDS",
    # Roster
    "Row",
    "RosterSnapshot",
    "RowView",
    # Commands
    "Command",
    "CommandResult",
    "CommandType",
]
