"""Helper utilities."""

from skirmish.helpers.debug import log_call

__all__ = ["log_call"]
