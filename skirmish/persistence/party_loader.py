"""Loads party files: JSON lists of combatant templates."""

import logging
from pathlib import Path
from typing import Union

from pydantic import TypeAdapter

from skirmish.models.combatant import Combatant, CombatantTemplate

logger = logging.getLogger(__name__.split(".")[-1])

_TEMPLATES = TypeAdapter(list[CombatantTemplate])


class PartyLoader:
    """Reads combatant templates and turns them into combatants."""

    @staticmethod
    def parse(data: Union[str, bytes]) -> list[Combatant]:
        """
        Parse a JSON party document.

        Returned combatants have no team or initiative until assigned.

        Raises:
            pydantic.ValidationError: If an entry is malformed
            ClassParseError: If an entry names an unknown class
        """
        templates = _TEMPLATES.validate_json(data)
        return [template.to_combatant() for template in templates]

    @staticmethod
    def load(path: Union[str, Path]) -> list[Combatant]:
        """Load a party file from disk."""
        file_path = Path(path)
        with open(file_path, "r", encoding="utf-8") as f:
            combatants = PartyLoader.parse(f.read())
        logger.info(f"Loaded {len(combatants)} combatants from {file_path}")
        return combatants

    @staticmethod
    def dump(combatants: list[Combatant], path: Union[str, Path]) -> None:
        """Write combatants back out as templates, dropping combat state."""
        from skirmish.engine.class_table import MAGICAL_MONSTER_TOKEN, MONSTER_TOKEN
        from skirmish.models.classes import MonsterClass, MultiClass

        templates = []
        for combatant in combatants:
            if isinstance(combatant.classes, MonsterClass):
                class_text = MAGICAL_MONSTER_TOKEN if combatant.classes.magical else MONSTER_TOKEN
            elif isinstance(combatant.classes, MultiClass):
                class_text = "/".join(member.value for member in combatant.classes.classes)
            else:
                class_text = combatant.classes.character_class.value
            templates.append(
                CombatantTemplate(
                    name=combatant.name,
                    level_hd=combatant.level_hd,
                    classes=class_text,
                    abilities=combatant.abilities,
                    hp=combatant.hp,
                    attacks=combatant.attacks,
                    ac=combatant.ac,
                    xp_bonus=combatant.xp_bonus,
                )
            )
        Path(path).write_bytes(_TEMPLATES.dump_json(templates, indent=2, by_alias=True))
