"""Skirmish: combat tracker for turn-based tabletop encounters."""
