"""Snapshot store for saving roster snapshots to disk."""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from skirmish.config import DEFAULT_SNAPSHOT_DIRECTORY
from skirmish.models.roster import RosterSnapshot

logger = logging.getLogger(__name__.split(".")[-1])

_SNAPSHOT_PATTERN = re.compile(r"^r(\d+)\.json$")


class SnapshotStore:
    """Dumps roster snapshots to disk and loads them back."""

    def __init__(self, snapshot_directory: str = DEFAULT_SNAPSHOT_DIRECTORY):
        """
        Initialize snapshot store.

        Args:
            snapshot_directory: Directory where encounters will be saved
        """
        self.snapshot_directory = Path(snapshot_directory)
        self._ensure_directory_exists(self.snapshot_directory)

    def _ensure_directory_exists(self, directory: Path) -> None:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Error creating directory {directory}: {e}")
            raise

    def _get_encounter_directory(self, encounter_id: str) -> Path:
        return self.snapshot_directory / encounter_id

    def dump_snapshot(self, snapshot: RosterSnapshot, encounter_id: str) -> str:
        """
        Dump a snapshot to disk as {encounter_id}/r{round}.json.

        A later dump in the same round replaces the earlier one.

        Args:
            snapshot: Snapshot to dump
            encounter_id: Encounter the snapshot belongs to

        Returns:
            Path to the dumped file
        """
        encounter_dir = self._get_encounter_directory(encounter_id)
        self._ensure_directory_exists(encounter_dir)
        file_path = encounter_dir / f"r{snapshot.round}.json"

        try:
            snapshot_json = snapshot.model_dump_json(indent=2, by_alias=True)

            # Write to a temp file, then rename over the target
            temp_path = file_path.with_suffix(".tmp")
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(snapshot_json)
            temp_path.replace(file_path)

            logger.debug(f"Dumped encounter {encounter_id} round {snapshot.round} to {file_path}")
            return str(file_path)
        except OSError as e:
            logger.error(f"Error dumping encounter {encounter_id} round {snapshot.round}: {e}", exc_info=True)
            raise

    def listener(self, encounter_id: str):
        """Callback for EncounterEngine.add_listener that autosaves an encounter."""

        def _dump(snapshot: RosterSnapshot) -> None:
            self.dump_snapshot(snapshot, encounter_id)

        return _dump

    def load_snapshot(self, encounter_id: str, round_number: Optional[int] = None) -> Optional[RosterSnapshot]:
        """
        Load a snapshot from disk.

        Args:
            encounter_id: Encounter to load
            round_number: Optional round number. If None, loads the latest round.

        Returns:
            RosterSnapshot if found, None otherwise
        """
        encounter_dir = self._get_encounter_directory(encounter_id)
        if not encounter_dir.exists():
            logger.warning(f"Encounter directory not found: {encounter_dir}")
            return None

        if round_number is not None:
            file_path = encounter_dir / f"r{round_number}.json"
            if not file_path.exists():
                logger.warning(f"Snapshot file not found: {file_path}")
                return None
            return self._load_snapshot_from_file(file_path)

        latest_file = self._find_latest_round_file(encounter_dir)
        if latest_file is None:
            logger.warning(f"No snapshot files found in {encounter_dir}")
            return None
        return self._load_snapshot_from_file(latest_file)

    def _find_latest_round_file(self, encounter_dir: Path) -> Optional[Path]:
        latest_round = -1
        latest_file = None
        for file_path in encounter_dir.iterdir():
            match = _SNAPSHOT_PATTERN.match(file_path.name)
            if match and file_path.is_file():
                round_number = int(match.group(1))
                if round_number > latest_round:
                    latest_round = round_number
                    latest_file = file_path
        return latest_file

    def _load_snapshot_from_file(self, file_path: Path) -> RosterSnapshot:
        """
        Load a snapshot from a specific file.

        Raises:
            ValueError: If the file does not hold a valid snapshot
        """
        with open(file_path, "r", encoding="utf-8") as f:
            snapshot_data = json.load(f)
        snapshot = RosterSnapshot.model_validate(snapshot_data)
        logger.debug(f"Loaded snapshot from {file_path}")
        return snapshot

    def list_encounters(self) -> list[str]:
        """
        List all encounter ids that have saved snapshots.

        Returns:
            List of encounter ids
        """
        if not self.snapshot_directory.exists():
            return []
        return sorted(
            item.name
            for item in self.snapshot_directory.iterdir()
            if item.is_dir() and any(item.glob("r*.json"))
        )
