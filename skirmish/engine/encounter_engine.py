"""Encounter engine: applies operator commands to the roster."""

import logging
from typing import Callable, Optional

from skirmish import helpers
from skirmish.engine.command_validator import CommandValidator
from skirmish.engine.roster import Roster
from skirmish.errors import ParseError, SkirmishError
from skirmish.models.builder import BuilderField, CombatantBuilder
from skirmish.models.classes import Abilities
from skirmish.models.commands import Command, CommandResult, CommandType
from skirmish.models.roster import RosterSnapshot
from skirmish.parsing.input_sanitizer import InputSanitizer, parse_amount, parse_flag

logger = logging.getLogger(__name__.split(".")[-1])

SnapshotListener = Callable[[RosterSnapshot], None]


class EncounterEngine:
    """Runs one command at a time against a roster."""

    def __init__(
        self,
        roster: Optional[Roster] = None,
        sanitizer: Optional[InputSanitizer] = None,
    ) -> None:
        """
        Initialize encounter engine.

        Args:
            roster: Optional roster to drive, a new empty one otherwise
            sanitizer: Optional sanitizer for operator text
        """
        self._roster = roster or Roster()
        self._sanitizer = sanitizer or InputSanitizer()
        self._listeners: list[SnapshotListener] = []

    @property
    def roster(self) -> Roster:
        """Get the roster."""
        return self._roster

    def add_listener(self, listener: SnapshotListener) -> None:
        """Register a callback that receives the snapshot after every applied command."""
        self._listeners.append(listener)

    @helpers.log_call
    def apply_command(self, command: Command) -> CommandResult:
        """
        Apply a command to the roster.

        Rejected commands leave the roster unchanged.

        Args:
            command: Command to apply

        Returns:
            CommandResult with success flag, error message and xp if computed
        """
        is_valid, error_msg = CommandValidator.validate_command(command, self._roster)
        if not is_valid:
            logger.warning(f"Rejected {command.command_type.value}: {error_msg}")
            return CommandResult(success=False, error=error_msg)

        try:
            xp = self._dispatch(command)
        except (SkirmishError, IndexError) as e:
            logger.warning(f"Rejected {command.command_type.value}: {e}")
            return CommandResult(success=False, error=str(e))

        self._notify()
        return CommandResult(success=True, xp=xp)

    def _notify(self) -> None:
        snapshot = self._roster.snapshot()
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Snapshot listener failed at round {snapshot.round}: {e}", exc_info=True)

    def _row_index(self, command: Command) -> int:
        index = command.parameters.get("index")
        return self._roster.cursor if index is None else index

    def _name(self, raw) -> str:
        name = self._sanitizer.sanitize_name(str(raw))
        if not name:
            raise ParseError(str(raw), "name is empty")
        return name

    def _text(self, command: Command, key: str) -> str:
        """Sanitized value text. Values are never truncated, over-long text is rejected."""
        raw = str(command.parameters[key])
        is_safe, error_msg = self._sanitizer.is_safe(raw)
        if not is_safe:
            raise ParseError(raw, error_msg)
        return self._sanitizer.sanitize(raw)

    def _dispatch(self, command: Command) -> Optional[int]:
        roster = self._roster
        command_type = command.command_type

        if command_type == CommandType.ADD:
            roster.add_row(CombatantBuilder(name=self._name(command.parameters["name"])))
        elif command_type == CommandType.FILL_FIELD:
            field = BuilderField(command.parameters["field"])
            roster.fill_field(self._row_index(command), field, self._text(command, "value"))
        elif command_type == CommandType.ASSIGN_TEAM:
            roster.assign_team(self._row_index(command), parse_amount(self._text(command, "value"), "team"))
        elif command_type == CommandType.ASSIGN_INITIATIVE:
            roster.assign_initiative(
                self._row_index(command), parse_amount(self._text(command, "value"), "initiative")
            )
        elif command_type == CommandType.SET_ABILITIES:
            roster.set_abilities(self._row_index(command), Abilities.parse(self._text(command, "value")))
        elif command_type == CommandType.SET_XP_BONUS:
            roster.set_xp_bonus(self._row_index(command), parse_flag(self._text(command, "value")))
        elif command_type == CommandType.SET_LEVEL:
            roster.set_level(self._row_index(command), parse_amount(self._text(command, "value"), "level/hd"))
        elif command_type == CommandType.ATTACK:
            roster.attack(parse_amount(self._text(command, "amount"), "damage"))
        elif command_type == CommandType.DAMAGE:
            roster.damage(self._row_index(command), parse_amount(self._text(command, "amount"), "damage"))
        elif command_type == CommandType.HEAL:
            roster.heal(self._row_index(command), parse_amount(self._text(command, "amount"), "healing"))
        elif command_type == CommandType.ADVANCE_ROUND:
            roster.advance_round()
        elif command_type == CommandType.CURSOR_UP:
            roster.move_up()
        elif command_type == CommandType.CURSOR_DOWN:
            roster.move_down()
        elif command_type == CommandType.SELECT:
            roster.select()
        elif command_type == CommandType.DESELECT:
            roster.deselect()
        elif command_type == CommandType.DUPLICATE:
            name = command.parameters.get("name")
            roster.duplicate(self._row_index(command), self._name(name) if name else None)
        elif command_type == CommandType.COMPUTE_XP:
            return roster.selected_xp()
        elif command_type == CommandType.RESET_STATS:
            roster.reset_stats()

        return None
