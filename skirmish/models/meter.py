"""Bounded current/maximum counter."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from skirmish.errors import MeterParseError, MeterUnderflowError

_TERM_PATTERN = re.compile(r"^[+-]?\d+$")


class Meter(BaseModel):
    """Tracks a current value out of a maximum, written as ``current/maximum``."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    current: int = Field(description="Current value")
    maximum: int = Field(description="Maximum value; only increase() clamps to it")

    @model_validator(mode="before")
    @classmethod
    def _from_text(cls, data: Any) -> Any:
        """Accept the compact ``c/m`` form wherever a Meter is validated."""
        if isinstance(data, str):
            current, maximum = cls._split(data)
            return {"current": current, "maximum": maximum}
        return data

    @model_serializer
    def _to_text(self) -> str:
        return str(self)

    @staticmethod
    def _split(text: str) -> tuple[int, int]:
        terms = text.strip().split("/")
        if len(terms) != 2:
            raise MeterParseError(text, "expected <current>/<maximum>")
        values = []
        for term in terms:
            term = term.strip()
            if not _TERM_PATTERN.match(term):
                raise MeterParseError(text, f"'{term}' is not a whole number")
            values.append(int(term))
        return values[0], values[1]

    @classmethod
    def parse(cls, text: str) -> "Meter":
        """
        Parse a fraction such as ``"7/12"``.

        Raises:
            MeterParseError: If the text is not two integers separated by ``/``
        """
        current, maximum = cls._split(text)
        return cls(current=current, maximum=maximum)

    def increase(self, amount: int) -> "Meter":
        """Add to the current value, never going past the maximum."""
        return self.model_copy(update={"current": min(self.maximum, self.current + amount)})

    def decrease(self, amount: int) -> "Meter":
        """Subtract from the current value with no floor. Health may go negative."""
        return self.model_copy(update={"current": self.current - amount})

    def consume(self, amount: int) -> "Meter":
        """
        Subtract from the current value, refusing to go below zero.

        Raises:
            MeterUnderflowError: If amount is negative or larger than the current value
        """
        if amount < 0 or amount > self.current:
            raise MeterUnderflowError(self.current, amount)
        return self.model_copy(update={"current": self.current - amount})

    def refill(self) -> "Meter":
        """Top the meter back up to its maximum."""
        return self.increase(self.maximum)

    def __str__(self) -> str:
        return f"{self.current}/{self.maximum}"
