"""Attack rating (THAC0) lookup by class group and level."""

import re
from typing import Union

from skirmish.errors import ClassParseError
from skirmish.models.classes import (
    CharacterClass,
    ClassGroup,
    MonsterClass,
    MultiClass,
    SingleClass,
)

TABLE_LEVELS = 13

# Attack rating at levels 1..13, lower is better
THAC0_TABLES: dict[ClassGroup, tuple[int, ...]] = {
    ClassGroup.DIVINE: (20, 20, 20, 18, 18, 18, 16, 16, 16, 14, 14, 14, 12),
    ClassGroup.MARTIAL: (20, 19, 18, 17, 16, 15, 14, 13, 12, 11, 10, 9, 8),
    ClassGroup.ARCANE: (20, 20, 20, 19, 19, 19, 18, 18, 18, 17, 17, 17, 16),
    ClassGroup.ROGUISH: (20, 20, 19, 19, 18, 18, 17, 17, 16, 16, 15, 15, 14),
}

CLASS_GROUPS: dict[CharacterClass, ClassGroup] = {
    CharacterClass.CLERIC: ClassGroup.DIVINE,
    CharacterClass.DRUID: ClassGroup.DIVINE,
    CharacterClass.MONK: ClassGroup.DIVINE,
    CharacterClass.FIGHTER: ClassGroup.MARTIAL,
    CharacterClass.PALADIN: ClassGroup.MARTIAL,
    CharacterClass.RANGER: ClassGroup.MARTIAL,
    CharacterClass.MAGE: ClassGroup.ARCANE,
    CharacterClass.ILLUSIONIST: ClassGroup.ARCANE,
    CharacterClass.THIEF: ClassGroup.ROGUISH,
    CharacterClass.ASSASSIN: ClassGroup.ROGUISH,
    CharacterClass.BARD: ClassGroup.ROGUISH,
}

CLASS_ABBREVIATIONS: dict[str, CharacterClass] = {
    "c": CharacterClass.CLERIC,
    "cl": CharacterClass.CLERIC,
    "d": CharacterClass.DRUID,
    "dr": CharacterClass.DRUID,
    "f": CharacterClass.FIGHTER,
    "fi": CharacterClass.FIGHTER,
    "p": CharacterClass.PALADIN,
    "pa": CharacterClass.PALADIN,
    "r": CharacterClass.RANGER,
    "ra": CharacterClass.RANGER,
    "m": CharacterClass.MAGE,
    "mu": CharacterClass.MAGE,
    "i": CharacterClass.ILLUSIONIST,
    "il": CharacterClass.ILLUSIONIST,
    "t": CharacterClass.THIEF,
    "th": CharacterClass.THIEF,
    "a": CharacterClass.ASSASSIN,
    "as": CharacterClass.ASSASSIN,
    "mo": CharacterClass.MONK,
    "mk": CharacterClass.MONK,
    "b": CharacterClass.BARD,
    "ba": CharacterClass.BARD,
}

MAGICAL_MONSTER_TOKEN = "!"
MONSTER_TOKEN = "."

_DESCRIPTOR_PATTERN = re.compile(r"^(.*?)(\d*)$")

Descriptor = Union[SingleClass, MultiClass, MonsterClass]


class ClassTable:
    """Static attack rating tables and the compact class notation."""

    @staticmethod
    def clamp_index(n: int) -> int:
        """Clamp a level or hit dice count into the table range 1..13."""
        return max(1, min(n, TABLE_LEVELS))

    @staticmethod
    def group_of(character_class: CharacterClass) -> ClassGroup:
        return CLASS_GROUPS[character_class]

    @staticmethod
    def lookup(group: ClassGroup, level: int) -> int:
        """Attack rating for a class group at a level (clamped)."""
        return THAC0_TABLES[group][ClassTable.clamp_index(level) - 1]

    @staticmethod
    def rating(descriptor: Descriptor) -> int:
        """
        Attack rating for a class descriptor.

        Single classes read their own table. Multi-classes take the best
        (lowest) rating among their members at the shared level. Monsters
        read the martial table by hit dice.
        """
        if isinstance(descriptor, SingleClass):
            return ClassTable.lookup(ClassTable.group_of(descriptor.character_class), descriptor.level)
        if isinstance(descriptor, MultiClass):
            return min(
                ClassTable.lookup(ClassTable.group_of(member), descriptor.level)
                for member in descriptor.classes
            )
        return ClassTable.lookup(ClassGroup.MARTIAL, descriptor.hit_dice)

    @staticmethod
    def parse_class_token(token: str, text: str = "") -> CharacterClass:
        """
        Resolve a class token: a full name or a one/two letter abbreviation.

        Raises:
            ClassParseError: If the token names no class
        """
        key = token.strip().lower()
        if key in CLASS_ABBREVIATIONS:
            return CLASS_ABBREVIATIONS[key]
        try:
            return CharacterClass(key)
        except ValueError:
            raise ClassParseError(text or token, token.strip()) from None

    @staticmethod
    def parse_descriptor(text: str) -> Descriptor:
        """
        Parse compact class notation.

        A trailing run of digits is the level or hit dice (1 if absent).
        ``!`` is a magical monster, ``.`` an ordinary monster, anything else
        is a ``/``-separated list of classes, e.g. ``"f7"``, ``"F/MU5"``, ``"!3"``.

        Raises:
            ClassParseError: On an empty or unrecognized class token
        """
        stripped = text.strip()
        match = _DESCRIPTOR_PATTERN.match(stripped)
        body, digits = match.group(1).strip(), match.group(2)
        level = int(digits) if digits else 1

        if body == MAGICAL_MONSTER_TOKEN:
            return MonsterClass(magical=True, hit_dice=level)
        if body == MONSTER_TOKEN:
            return MonsterClass(magical=False, hit_dice=level)

        classes = [ClassTable.parse_class_token(token, stripped) for token in body.split("/")]
        if len(classes) == 1:
            return SingleClass(character_class=classes[0], level=max(1, level))
        return MultiClass(classes=classes, level=max(1, level))
