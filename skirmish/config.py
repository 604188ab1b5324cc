"""Central configuration defaults and constants for Skirmish."""

import os

# Initiative
# Spread of possible base initiative rolls; healthy combatants get twice this on top of their base
DEFAULT_INIT_MODIFIER = int(os.getenv("SKIRMISH_INIT_MODIFIER", "12"))

# Death floors (hp at or below which a combatant dies)
DEFAULT_LEVELED_DEATH_FLOOR = int(os.getenv("SKIRMISH_LEVELED_DEATH_FLOOR", "-10"))
DEFAULT_MONSTER_DEATH_FLOOR = int(os.getenv("SKIRMISH_MONSTER_DEATH_FLOOR", "-4"))

# Experience
DEFAULT_XP_BONUS_MULTIPLIER = float(os.getenv("SKIRMISH_XP_BONUS_MULTIPLIER", "1.1"))
DEFAULT_XP_PER_DAMAGE_DEALT = int(os.getenv("SKIRMISH_XP_PER_DAMAGE_DEALT", "10"))
DEFAULT_XP_PER_DAMAGE_RECEIVED = int(os.getenv("SKIRMISH_XP_PER_DAMAGE_RECEIVED", "20"))
DEFAULT_TEAM_XP_PER_DAMAGE_DEALT = int(os.getenv("SKIRMISH_TEAM_XP_PER_DAMAGE_DEALT", "20"))

# Roster limits
DEFAULT_MAX_COMBATANTS = int(os.getenv("SKIRMISH_MAX_COMBATANTS", "32"))
DEFAULT_MAX_NAME_LENGTH = int(os.getenv("SKIRMISH_MAX_NAME_LENGTH", "32"))
DEFAULT_MAX_INPUT_LENGTH = int(os.getenv("SKIRMISH_MAX_INPUT_LENGTH", "64"))

# Persistence
DEFAULT_SNAPSHOT_DIRECTORY = os.getenv("SKIRMISH_SNAPSHOT_DIRECTORY", os.path.expanduser("~/.skirmish"))
