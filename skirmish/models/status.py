"""Incapacitation state machine."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_STUN_SEVERITY = 8


class StatusKind(str, Enum):
    """Incapacitation states, in increasing order of severity."""

    HEALTHY = "healthy"
    STUNNED = "stunned"
    DEAD = "dead"


_KIND_RANK = {
    StatusKind.HEALTHY: 0,
    StatusKind.STUNNED: 1,
    StatusKind.DEAD: 2,
}


class Status(BaseModel):
    """
    Healthy, Stunned(severity) or Dead.

    Statuses are totally ordered: Healthy < Stunned(1) < ... < Stunned(8) < Dead.
    Dead is terminal.
    """

    model_config = ConfigDict(frozen=True)  # Immutable model

    kind: StatusKind = Field(default=StatusKind.HEALTHY, description="Status tag")
    severity: int = Field(default=0, ge=0, le=MAX_STUN_SEVERITY, description="Stun severity, 0 unless stunned")

    @model_validator(mode="after")
    def check_severity(self) -> "Status":
        """Only a stun carries a severity, and a stun always carries one."""
        if self.kind == StatusKind.STUNNED and self.severity < 1:
            raise ValueError("Stunned status needs a severity between 1 and 8")
        if self.kind != StatusKind.STUNNED and self.severity != 0:
            raise ValueError(f"{self.kind.value} status cannot carry a severity")
        return self

    @classmethod
    def healthy(cls) -> "Status":
        return cls(kind=StatusKind.HEALTHY)

    @classmethod
    def stunned(cls, severity: int) -> "Status":
        return cls(kind=StatusKind.STUNNED, severity=severity)

    @classmethod
    def dead(cls) -> "Status":
        return cls(kind=StatusKind.DEAD)

    @property
    def is_healthy(self) -> bool:
        return self.kind == StatusKind.HEALTHY

    @property
    def is_stunned(self) -> bool:
        return self.kind == StatusKind.STUNNED

    @property
    def is_dead(self) -> bool:
        return self.kind == StatusKind.DEAD

    def _rank(self) -> tuple[int, int]:
        return _KIND_RANK[self.kind], self.severity

    def __lt__(self, other: "Status") -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self._rank() < other._rank()

    def __le__(self, other: "Status") -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self._rank() <= other._rank()

    def __gt__(self, other: "Status") -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self._rank() > other._rank()

    def __ge__(self, other: "Status") -> bool:
        if not isinstance(other, Status):
            return NotImplemented
        return self._rank() >= other._rank()


def stun_lock(damage: int, hp: int) -> Status:
    """
    Stun caused by a single hit, judged against health before the hit.

    A hit worth a quarter of remaining health stuns at severity 1, a third at
    2 and a half at 3. Severities 4 to 8 need a hit that overshoots remaining
    health, from seven sixths (4) up to three halves (8).

    These thresholds are deliberately inverted from the literal
    ``damage * k >= hp * (k - 1)`` walk, which would give a hit equal to
    remaining health severity 7. Here such a hit gives severity 3, and the
    upper severities are reserved for hits past remaining health.
    """
    if damage <= 0:
        return Status.healthy()
    for k in range(3, 8):
        if damage * (k - 1) >= hp * k:
            return Status.stunned(11 - k)
    if damage * 2 >= hp:
        return Status.stunned(3)
    if damage * 3 >= hp:
        return Status.stunned(2)
    if damage * 4 >= hp:
        return Status.stunned(1)
    return Status.healthy()


def escalate(current: Status, candidate: Status) -> Status:
    """Adopt candidate only if it is worse than current. Dead never changes."""
    if current.is_dead:
        return current
    return candidate if candidate > current else current
