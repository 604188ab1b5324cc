"""Operator command models."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class CommandType(str, Enum):
    """Commands the operator can issue."""

    ADD = "add"
    FILL_FIELD = "fill_field"
    ASSIGN_TEAM = "assign_team"
    ASSIGN_INITIATIVE = "assign_initiative"
    SET_ABILITIES = "set_abilities"
    SET_XP_BONUS = "set_xp_bonus"
    SET_LEVEL = "set_level"
    ATTACK = "attack"
    DAMAGE = "damage"
    HEAL = "heal"
    ADVANCE_ROUND = "advance_round"
    CURSOR_UP = "cursor_up"
    CURSOR_DOWN = "cursor_down"
    SELECT = "select"
    DESELECT = "deselect"
    DUPLICATE = "duplicate"
    COMPUTE_XP = "compute_xp"
    RESET_STATS = "reset_stats"


class Command(BaseModel):
    """One operator command, with raw operator text as parameters."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    command_type: CommandType = Field(description="Type of command")
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Command parameters (name, field, value, amount, ...)"
    )


class CommandResult(BaseModel):
    """Outcome of applying a command."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    success: bool = Field(description="Whether the command was applied")
    error: str = Field(default="", description="Why the command was rejected")
    xp: Optional[int] = Field(default=None, description="XP for the selected row, from compute_xp")
