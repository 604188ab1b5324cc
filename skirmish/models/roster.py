"""Roster snapshot and presentation models."""

from typing import Annotated, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from skirmish.models.builder import BuilderField, CombatantBuilder
from skirmish.models.combatant import Combatant
from skirmish.models.status import StatusKind

Row = Annotated[
    Union[CombatantBuilder, Combatant],
    Field(discriminator="row_type"),
]


class RosterSnapshot(BaseModel):
    """Everything needed to restore a roster: the round and the ordered rows."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    round: int = Field(ge=1, default=1, description="Current round")
    rows: list[Row] = Field(default_factory=list, description="Rows in initiative order")


class RowView(BaseModel):
    """Plain values a display needs to draw one row."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    name: str
    is_building: bool = Field(description="Row is still being filled in")
    missing_field: Optional[BuilderField] = Field(default=None, description="Next field to prompt for")
    team: Optional[int] = None
    initiative: Optional[int] = Field(default=None, description="Effective initiative, None when unranked")
    hp_current: Optional[int] = None
    hp_maximum: Optional[int] = None
    attacks_current: Optional[int] = None
    attacks_maximum: Optional[int] = None
    thac0: Optional[int] = None
    ac: Optional[int] = None
    status: Optional[StatusKind] = None
    stun_severity: int = 0
    is_cursor: bool = False
    is_selected: bool = False
