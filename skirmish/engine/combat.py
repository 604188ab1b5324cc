"""Combat rules applied to a single combatant."""

import logging

from skirmish.config import (
    DEFAULT_INIT_MODIFIER,
    DEFAULT_LEVELED_DEATH_FLOOR,
    DEFAULT_MONSTER_DEATH_FLOOR,
    DEFAULT_TEAM_XP_PER_DAMAGE_DEALT,
    DEFAULT_XP_BONUS_MULTIPLIER,
    DEFAULT_XP_PER_DAMAGE_DEALT,
    DEFAULT_XP_PER_DAMAGE_RECEIVED,
)
from skirmish.engine.class_table import ClassTable
from skirmish.errors import NotEnoughAttacks, NotInCombat
from skirmish.models.combatant import Combatant
from skirmish.models.status import Status, StatusKind, escalate, stun_lock

logger = logging.getLogger(__name__.split(".")[-1])


class CombatSystem:
    """Damage, healing, round refresh, initiative and xp for one combatant."""

    INIT_MODIFIER = DEFAULT_INIT_MODIFIER
    LEVELED_DEATH_FLOOR = DEFAULT_LEVELED_DEATH_FLOOR
    MONSTER_DEATH_FLOOR = DEFAULT_MONSTER_DEATH_FLOOR

    @staticmethod
    def death_floor(combatant: Combatant) -> int:
        """Health at or below which the combatant dies."""
        if combatant.is_leveled:
            return CombatSystem.LEVELED_DEATH_FLOOR
        return CombatSystem.MONSTER_DEATH_FLOOR

    @staticmethod
    def receive_damage(combatant: Combatant, damage: int) -> Combatant:
        """
        Apply a hit to a combatant.

        A hit that takes health to the death floor kills. Otherwise the hit may
        stun: a stun worse than the current status replaces it and immediately
        costs that many attacks (as many as are left). A lesser stun leaves the
        current status alone. Health always drops by the full damage.

        Args:
            combatant: Combatant taking the hit
            damage: Damage dealt

        Returns:
            Updated combatant
        """
        status = combatant.status
        attacks = combatant.attacks

        if not status.is_dead:
            if combatant.hp.current - damage <= CombatSystem.death_floor(combatant):
                status = Status.dead()
                logger.info(f"{combatant.name} dies at {combatant.hp.current - damage} hp")
            else:
                candidate = stun_lock(damage, combatant.hp.current)
                escalated = escalate(status, candidate)
                if escalated != status:
                    attacks = attacks.consume(min(escalated.severity, attacks.current))
                    logger.debug(f"{combatant.name} stunned at severity {escalated.severity}")
                status = escalated

        return combatant.model_copy(
            update={
                "received": combatant.received + damage,
                "status": status,
                "attacks": attacks,
                "hp": combatant.hp.decrease(damage),
            }
        )

    @staticmethod
    def deal_hit(combatant: Combatant, damage: int) -> Combatant:
        """
        Credit a combatant for landing a hit and spend one attack.

        Raises:
            NotEnoughAttacks: If no attacks are left this round
        """
        if not combatant.can_attack:
            raise NotEnoughAttacks(combatant.name)
        return combatant.model_copy(
            update={
                "dealt": combatant.dealt + damage,
                "attacks": combatant.attacks.consume(1),
            }
        )

    @staticmethod
    def heal(combatant: Combatant, amount: int) -> Combatant:
        """Restore health up to the maximum."""
        return combatant.model_copy(update={"hp": combatant.hp.increase(amount)})

    @staticmethod
    def advance_round(combatant: Combatant) -> Combatant:
        """Start a new round: stuns wear off and attacks refill."""
        status = Status.healthy() if combatant.status.is_stunned else combatant.status
        return combatant.model_copy(
            update={
                "round": combatant.round + 1,
                "status": status,
                "attacks": combatant.attacks.refill(),
            }
        )

    @staticmethod
    def effective_initiative(combatant: Combatant) -> int:
        """
        Initiative adjusted for status.

        Healthy adds twice the modifier, a stun adds the modifier less its
        severity, and the dead rank at zero.

        Raises:
            NotInCombat: If no base initiative has been assigned
        """
        if combatant.initiative is None:
            raise NotInCombat(combatant.name, "initiative")
        if combatant.status.kind == StatusKind.HEALTHY:
            return combatant.initiative + 2 * CombatSystem.INIT_MODIFIER
        if combatant.status.kind == StatusKind.STUNNED:
            return combatant.initiative + CombatSystem.INIT_MODIFIER - combatant.status.severity
        return 0

    @staticmethod
    def xp(combatant: Combatant, team_bonus: int) -> int:
        """Experience earned so far, including a team bonus."""
        earned = (
            combatant.dealt * DEFAULT_XP_PER_DAMAGE_DEALT
            + combatant.received * DEFAULT_XP_PER_DAMAGE_RECEIVED
            + team_bonus
        )
        if combatant.xp_bonus:
            earned = earned * DEFAULT_XP_BONUS_MULTIPLIER
        return int(earned)

    @staticmethod
    def team_xp_contribution(combatant: Combatant) -> int:
        """What this combatant adds to its teammates' bonus pool."""
        return combatant.dealt * DEFAULT_TEAM_XP_PER_DAMAGE_DEALT

    @staticmethod
    def reset_stats(combatant: Combatant) -> Combatant:
        """Clear accumulated damage statistics."""
        return combatant.model_copy(update={"dealt": 0, "received": 0})

    @staticmethod
    def set_level(combatant: Combatant, level_hd: int) -> Combatant:
        """Change level or hit dice. The attack rating is left as it was."""
        return combatant.model_copy(update={"classes": combatant.classes.at_level(level_hd)})

    @staticmethod
    def recompute_rating(combatant: Combatant) -> Combatant:
        """Recompute the attack rating from the current class descriptor."""
        return combatant.model_copy(update={"thac0": ClassTable.rating(combatant.classes)})
