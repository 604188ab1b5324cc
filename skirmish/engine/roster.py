"""Ordered roster of combatants, cursor and selection."""

import logging
from typing import Optional, Union

from skirmish.config import DEFAULT_MAX_COMBATANTS
from skirmish.engine.combat import CombatSystem
from skirmish.errors import NotBuilt, NothingSelected, NotInCombat, RosterFull
from skirmish.models.builder import BuilderField, CombatantBuilder
from skirmish.models.classes import Abilities
from skirmish.models.combatant import Combatant
from skirmish.models.roster import RosterSnapshot, RowView

logger = logging.getLogger(__name__.split(".")[-1])

RowType = Union[CombatantBuilder, Combatant]


class Roster:
    """
    Rows in initiative order, plus the round counter, cursor and selection.

    Rows are either builders still being filled in or finished combatants.
    Every mutating method either completes or raises before touching state.
    """

    def __init__(
        self,
        snapshot: Optional[RosterSnapshot] = None,
        max_rows: int = DEFAULT_MAX_COMBATANTS,
    ) -> None:
        """
        Initialize roster.

        Args:
            snapshot: Optional snapshot to restore, kept in its saved order
            max_rows: Maximum number of rows
        """
        self._rows: list[RowType] = list(snapshot.rows) if snapshot else []
        self._round = snapshot.round if snapshot else 1
        self._max_rows = max_rows
        self._cursor = 0
        self._selected: Optional[int] = None

    @property
    def rows(self) -> tuple[RowType, ...]:
        return tuple(self._rows)

    @property
    def round(self) -> int:
        return self._round

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def selected(self) -> Optional[int]:
        return self._selected

    def __len__(self) -> int:
        return len(self._rows)

    def snapshot(self) -> RosterSnapshot:
        """Serializable copy of the round and rows."""
        return RosterSnapshot(round=self._round, rows=list(self._rows))

    def _combatant_at(self, index: int) -> Combatant:
        row = self._rows[index]
        if isinstance(row, CombatantBuilder):
            missing = row.missing_field()
            raise NotBuilt(row.name, missing.value if missing else "nothing")
        return row

    def _builder_at(self, index: int) -> Optional[CombatantBuilder]:
        row = self._rows[index]
        return row if isinstance(row, CombatantBuilder) else None

    # Ordering

    def _sort_key(self, row: RowType) -> Optional[int]:
        if isinstance(row, Combatant) and row.initiative is not None:
            return CombatSystem.effective_initiative(row)
        return None

    def sort(self) -> None:
        """
        Reorder rows by effective initiative, highest first, and drop the dead.

        Builders and combatants without an initiative are kept, after every
        ranked row, in their existing order. Equal initiatives keep their
        existing order too. The cursor returns to the top and the selection
        is cleared.
        """
        keyed = [(self._sort_key(row), row) for row in self._rows]
        ranked = []
        unranked = []
        for key, row in keyed:
            if key is None:
                unranked.append(row)
            elif key > 0:
                ranked.append((key, row))
            else:
                logger.info(f"Removing {row.name} from the roster")
        ranked.sort(key=lambda pair: pair[0], reverse=True)
        self._rows = [row for _, row in ranked] + unranked
        self._cursor = 0
        self._selected = None

    def add_row(self, row: RowType) -> None:
        """
        Append a row and re-sort.

        Raises:
            RosterFull: If the roster is at capacity
        """
        if len(self._rows) >= self._max_rows:
            raise RosterFull(self._max_rows)
        self._rows.append(row)
        logger.debug(f"Added {row.row_type} row {row.name}")
        self.sort()

    def add_builder(self, name: str) -> None:
        """Start a new row with just a name."""
        self.add_row(CombatantBuilder(name=name))

    def advance_round(self) -> None:
        """Move to the next round: re-sort, then refresh every combatant."""
        self._round += 1
        self.sort()
        self._rows = [
            CombatSystem.advance_round(row) if isinstance(row, Combatant) else row
            for row in self._rows
        ]
        logger.info(f"Round {self._round} begins with {len(self._rows)} rows")

    # Filling rows

    def _replace_builder(self, index: int, builder: CombatantBuilder) -> None:
        combatant = builder.build()
        if combatant is None:
            self._rows[index] = builder
            return
        self._rows[index] = combatant
        logger.debug(f"{combatant.name} is ready with thac0 {combatant.thac0}")
        self.sort()

    def fill_field(self, index: int, field: BuilderField, text: str) -> None:
        """
        Set a builder field from operator text.

        A builder with every required field set becomes a combatant in place
        and the roster is re-sorted. On a finished combatant the field is
        updated directly.

        Raises:
            ParseError: If the text does not parse for the field
        """
        builder = self._builder_at(index)
        if builder is None:
            self._update_combatant(index, field, CombatantBuilder.parse_field(field, text))
            return
        self._replace_builder(index, builder.with_field(field, text))

    def missing_field(self, index: int) -> Optional[BuilderField]:
        builder = self._builder_at(index)
        return builder.missing_field() if builder else None

    def _update_combatant(self, index: int, field: BuilderField, value) -> None:
        combatant = self._rows[index]
        if field == BuilderField.CLASS:
            updated = CombatSystem.recompute_rating(
                combatant.model_copy(update={"classes": value.at_level(combatant.level_hd)})
            )
        elif field == BuilderField.LEVEL_HD:
            updated = CombatSystem.set_level(combatant, value)
        else:
            updated = combatant.model_copy(update={field.value: value})
        self._rows[index] = updated

    def _set_value(self, index: int, field: BuilderField, value) -> None:
        builder = self._builder_at(index)
        if builder is None:
            self._update_combatant(index, field, value)
        else:
            self._replace_builder(index, builder.with_value(field, value))

    def assign_team(self, index: int, team: int) -> None:
        self._set_value(index, BuilderField.TEAM, team)

    def assign_initiative(self, index: int, initiative: int) -> None:
        """Set base initiative. Takes effect in the order at the next sort."""
        self._set_value(index, BuilderField.INITIATIVE, initiative)

    def set_abilities(self, index: int, abilities: Abilities) -> None:
        self._set_value(index, BuilderField.ABILITIES, abilities)

    def set_xp_bonus(self, index: int, xp_bonus: bool) -> None:
        self._set_value(index, BuilderField.XP_BONUS, xp_bonus)

    def set_level(self, index: int, level_hd: int) -> None:
        """Change level or hit dice without recomputing the attack rating."""
        self._set_value(index, BuilderField.LEVEL_HD, level_hd)

    # Combat

    def attack(self, damage: int) -> None:
        """
        The selected row hits the cursor row.

        Raises:
            NothingSelected: If no attacker is selected
            NotBuilt: If either row is still being built
            NotInCombat: If either row lacks a team or initiative
            NotEnoughAttacks: If the attacker has no attacks left
        """
        if self._selected is None:
            raise NothingSelected()
        attacker_index, target_index = self._selected, self._cursor
        attacker = self._combatant_at(attacker_index)
        target = self._combatant_at(target_index)
        for combatant in (attacker, target):
            if combatant.team is None:
                raise NotInCombat(combatant.name, "team")
            if combatant.initiative is None:
                raise NotInCombat(combatant.name, "initiative")

        # Both rows are computed before either is written back
        attacker = CombatSystem.deal_hit(attacker, damage)
        if target_index == attacker_index:
            target = attacker
        target = CombatSystem.receive_damage(target, damage)
        self._rows[attacker_index] = attacker
        self._rows[target_index] = target
        logger.debug(f"{attacker.name} hits {target.name} for {damage}")

    def damage(self, index: int, damage: int) -> None:
        """Apply damage with no attacker."""
        self._rows[index] = CombatSystem.receive_damage(self._combatant_at(index), damage)

    def heal(self, index: int, amount: int) -> None:
        self._rows[index] = CombatSystem.heal(self._combatant_at(index), amount)

    # Cursor and selection

    def move_up(self) -> None:
        if self._cursor > 0:
            self._cursor -= 1

    def move_down(self) -> None:
        if self._cursor + 1 < len(self._rows):
            self._cursor += 1

    def select(self) -> None:
        """Mark the cursor row as the attacker."""
        if not self._rows:
            raise IndexError("Roster is empty")
        self._selected = self._cursor

    def deselect(self) -> None:
        self._selected = None

    # Bookkeeping

    def duplicate(self, index: int, name: Optional[str] = None) -> None:
        """Append a copy of a row, optionally under a new name, and re-sort."""
        row = self._rows[index]
        copy = row.model_copy(update={"name": name}) if name else row.model_copy()
        self.add_row(copy)

    def compute_xp(self, index: int) -> int:
        """
        XP for one combatant, with a share of its team's damage.

        Each teammate (itself included) contributes its team pool value
        divided by the number of rows in the whole roster.

        Raises:
            NotBuilt: If the row is still being built
            NotInCombat: If the combatant has no team
        """
        combatant = self._combatant_at(index)
        if combatant.team is None:
            raise NotInCombat(combatant.name, "team")
        row_count = len(self._rows)
        team_bonus = sum(
            CombatSystem.team_xp_contribution(row) // row_count
            for row in self._rows
            if isinstance(row, Combatant) and row.team == combatant.team
        )
        return CombatSystem.xp(combatant, team_bonus)

    def selected_xp(self) -> Optional[int]:
        """XP for the selected row, or None with nothing selected or a builder selected."""
        if self._selected is None or self._builder_at(self._selected) is not None:
            return None
        return self.compute_xp(self._selected)

    def reset_stats(self) -> None:
        """Clear damage statistics on every combatant."""
        self._rows = [
            CombatSystem.reset_stats(row) if isinstance(row, Combatant) else row
            for row in self._rows
        ]

    def view(self) -> list[RowView]:
        """Display records for every row."""
        views = []
        for index, row in enumerate(self._rows):
            flags = {"is_cursor": index == self._cursor, "is_selected": index == self._selected}
            if isinstance(row, CombatantBuilder):
                views.append(
                    RowView(
                        name=row.name,
                        is_building=True,
                        missing_field=row.missing_field(),
                        team=row.team,
                        **flags,
                    )
                )
                continue
            views.append(
                RowView(
                    name=row.name,
                    is_building=False,
                    team=row.team,
                    initiative=self._sort_key(row),
                    hp_current=row.hp.current,
                    hp_maximum=row.hp.maximum,
                    attacks_current=row.attacks.current,
                    attacks_maximum=row.attacks.maximum,
                    thac0=row.thac0,
                    ac=row.ac,
                    status=row.status.kind,
                    stun_severity=row.status.severity,
                    **flags,
                )
            )
        return views
