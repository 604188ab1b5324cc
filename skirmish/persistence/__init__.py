"""Persistence of snapshots and party files."""

from skirmish.persistence.party_loader import PartyLoader
from skirmish.persistence.snapshot_store import SnapshotStore

__all__ = ["PartyLoader", "SnapshotStore"]
