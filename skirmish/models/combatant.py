"""Combatant model."""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from skirmish.models.classes import Abilities, ClassDescriptor
from skirmish.models.meter import Meter
from skirmish.models.status import Status


class Combatant(BaseModel):
    """A fully defined participant in the encounter."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    row_type: Literal["done"] = "done"
    name: str = Field(min_length=1, description="Combatant name")

    # Class and derived attack rating
    classes: ClassDescriptor = Field(description="Single, multi-class or monster descriptor")
    thac0: int = Field(description="Attack rating, fixed when the combatant was built")
    abilities: Optional[Abilities] = Field(default=None, description="Ability scores, if known")

    # Resources
    hp: Meter = Field(description="Health")
    attacks: Meter = Field(description="Attacks available this round")
    ac: int = Field(default=10, description="Armor class")
    status: Status = Field(default_factory=Status.healthy, description="Incapacitation status")

    # Combat placement
    team: Optional[int] = Field(default=None, ge=0, description="Team id, None until assigned")
    initiative: Optional[int] = Field(default=None, ge=0, description="Base initiative roll, None until assigned")

    # Statistics
    dealt: int = Field(default=0, description="Damage dealt so far")
    received: int = Field(default=0, description="Damage received so far")
    round: int = Field(default=1, ge=1, description="Rounds this combatant has fought")
    xp_bonus: bool = Field(default=False, description="Whether earned xp gets the 10% bonus")

    @property
    def level_hd(self) -> int:
        """Level for classed combatants, hit dice for monsters."""
        return self.classes.level_hd

    @property
    def is_leveled(self) -> bool:
        return self.classes.is_leveled

    @property
    def in_combat(self) -> bool:
        return self.team is not None and self.initiative is not None

    @property
    def can_attack(self) -> bool:
        return self.attacks.current >= 1

    def renamed(self, name: str) -> "Combatant":
        return self.model_copy(update={"name": name})


class CombatantTemplate(BaseModel):
    """Party file entry: a combatant without combat placement."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)  # Immutable model

    name: str = Field(min_length=1, description="Combatant name")
    level_hd: Optional[int] = Field(
        default=None, ge=0, alias="level/hd", description="Level or hit dice, overrides digits in the class text"
    )
    classes: str = Field(alias="class", description="Compact class notation, e.g. 'F/MU' or '!'")
    abilities: Optional[Abilities] = Field(default=None, description="Ability scores")
    hp: Meter = Field(description="Health as 'current/maximum'")
    attacks: Meter = Field(default_factory=lambda: Meter(current=1, maximum=1), description="Attacks per round")
    ac: int = Field(default=10, description="Armor class")
    xp_bonus: bool = Field(default=False, description="Whether earned xp gets the 10% bonus")

    def to_combatant(self) -> Combatant:
        """Build a combatant with team and initiative left unset."""
        from skirmish.engine.class_table import ClassTable

        descriptor = ClassTable.parse_descriptor(self.classes)
        if self.level_hd is not None:
            descriptor = descriptor.at_level(self.level_hd)
        return Combatant(
            name=self.name,
            classes=descriptor,
            thac0=ClassTable.rating(descriptor),
            abilities=self.abilities,
            hp=self.hp,
            attacks=self.attacks,
            ac=self.ac,
            xp_bonus=self.xp_bonus,
        )
