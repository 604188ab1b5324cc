"""Command validation against the current roster."""

from skirmish.models.builder import BuilderField
from skirmish.models.commands import Command, CommandType

# Commands that act on one row (the cursor row unless an index is given)
ROW_COMMANDS = {
    CommandType.FILL_FIELD,
    CommandType.ASSIGN_TEAM,
    CommandType.ASSIGN_INITIATIVE,
    CommandType.SET_ABILITIES,
    CommandType.SET_XP_BONUS,
    CommandType.SET_LEVEL,
    CommandType.DAMAGE,
    CommandType.HEAL,
    CommandType.DUPLICATE,
}

VALUE_COMMANDS = {
    CommandType.FILL_FIELD,
    CommandType.ASSIGN_TEAM,
    CommandType.ASSIGN_INITIATIVE,
    CommandType.SET_ABILITIES,
    CommandType.SET_XP_BONUS,
    CommandType.SET_LEVEL,
}

AMOUNT_COMMANDS = {
    CommandType.ATTACK,
    CommandType.DAMAGE,
    CommandType.HEAL,
}


class CommandValidator:
    """Checks that a command carries what it needs before it is applied."""

    @staticmethod
    def validate_command(command: Command, roster) -> tuple[bool, str]:
        """
        Validate a command against the roster.

        Args:
            command: Command to validate
            roster: Roster the command will be applied to

        Returns:
            Tuple of (is_valid, error_message)
        """
        params = command.parameters

        if command.command_type == CommandType.ADD:
            if not str(params.get("name", "")).strip():
                return False, "Add requires a 'name' parameter"
            return True, ""

        if command.command_type in ROW_COMMANDS:
            is_valid, error_msg = CommandValidator._validate_row(command, roster)
            if not is_valid:
                return False, error_msg

        if command.command_type in VALUE_COMMANDS and "value" not in params:
            return False, f"{command.command_type.value} requires a 'value' parameter"

        if command.command_type in AMOUNT_COMMANDS and "amount" not in params:
            return False, f"{command.command_type.value} requires an 'amount' parameter"

        if command.command_type == CommandType.FILL_FIELD:
            return CommandValidator._validate_fill_field(command)

        if command.command_type == CommandType.ATTACK and roster.selected is None:
            return False, "Attack requires a selected attacker"

        if command.command_type == CommandType.SELECT and len(roster) == 0:
            return False, "Nothing to select in an empty roster"

        return True, ""

    @staticmethod
    def _validate_row(command: Command, roster) -> tuple[bool, str]:
        """Validate that the command's row exists."""
        if len(roster) == 0:
            return False, f"{command.command_type.value} needs a row, but the roster is empty"

        index = command.parameters.get("index")
        if index is None:
            return True, ""
        if isinstance(index, bool) or not isinstance(index, int):
            return False, "index must be an integer"
        if not 0 <= index < len(roster):
            return False, f"Row {index} not found"
        return True, ""

    @staticmethod
    def _validate_fill_field(command: Command) -> tuple[bool, str]:
        """Validate the field name of a fill command."""
        field = command.parameters.get("field")
        if field is None:
            return False, "fill_field requires a 'field' parameter"
        try:
            BuilderField(field)
        except ValueError:
            return False, f"Unknown field: {field}"
        return True, ""
