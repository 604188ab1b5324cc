"""Error taxonomy for Skirmish.

Parse errors come from operator text that cannot be turned into a value.
Combat-rule errors are recoverable: the roster is left untouched and the
caller re-prompts.
"""


class SkirmishError(Exception):
    """Base for all Skirmish errors."""


class ParseError(SkirmishError, ValueError):
    """Operator text could not be parsed."""

    def __init__(self, text: str, detail: str):
        super().__init__(f"Could not parse '{text}': {detail}")
        self.text = text
        self.detail = detail


class MeterParseError(ParseError):
    pass


class ClassParseError(ParseError):
    def __init__(self, text: str, token: str):
        super().__init__(text, f"invalid class name '{token}'")
        self.token = token


class AbilitiesParseError(ParseError):
    pass


class AmountParseError(ParseError):
    pass


class CombatRuleError(SkirmishError):
    """A command violated the rules of combat."""


class NotEnoughAttacks(CombatRuleError):
    def __init__(self, name: str):
        super().__init__(f"{name} has no attacks left this round")
        self.name = name


class NotInCombat(CombatRuleError):
    def __init__(self, name: str, missing: str):
        super().__init__(f"{name} is not in combat: {missing} is unset")
        self.name = name
        self.missing = missing


class NotBuilt(CombatRuleError):
    def __init__(self, name: str, missing: str):
        super().__init__(f"{name} is still being built: {missing} is unset")
        self.name = name
        self.missing = missing


class NothingSelected(CombatRuleError):
    def __init__(self):
        super().__init__("No row is selected")


class RosterFull(CombatRuleError):
    def __init__(self, max_rows: int):
        super().__init__(f"Roster already holds {max_rows} rows")
        self.max_rows = max_rows


class MeterUnderflowError(SkirmishError, ArithmeticError):
    """A checked meter decrease would go below zero."""

    def __init__(self, current: int, amount: int):
        super().__init__(f"Cannot take {amount} from a meter at {current}")
        self.current = current
        self.amount = amount
