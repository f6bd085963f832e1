"""Attack resolution for duelcore.

Only Attack actions score. An Attack is compared against whatever its target
submitted in the same round:

    Target action     Condition        Result
    --------------    -------------    ----------------------------------
    Defence           attack > def     attacker +(attack - defence)
    Defence           attack == def    defender +just_guard_point
    Defence           attack < def     nothing
    Attack            (any)            attacker +attack level

A Defence on its own never scores.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from duelcore.models.actions import Action


class OutcomeKind(str, Enum):
    """How an Attack was resolved."""

    HIT = "hit"  # Attack beat the Defence
    JUST_GUARD = "just_guard"  # Exact tie, defender rewarded
    BLOCKED = "blocked"  # Defence was stronger
    UNOPPOSED = "unopposed"  # Target did not defend


class AttackOutcome(BaseModel):
    """Result of resolving one Attack against its target's action.

    Attributes:
        attacker_id: Player who attacked
        defender_id: Player who was targeted
        kind: Outcome classification
        attacker_points: Points credited to the attacker
        defender_points: Points credited to the defender
    """

    model_config = ConfigDict(frozen=True)

    attacker_id: int
    defender_id: int
    kind: OutcomeKind
    attacker_points: int = 0
    defender_points: int = 0


def resolve_attack(
    attacker_id: int,
    attack: Action,
    defender_id: int,
    target_action: Action,
    just_guard_point: int,
) -> AttackOutcome:
    """Resolve an Attack against the target's simultaneous action.

    Args:
        attacker_id: Player who attacked
        attack: The Attack action
        defender_id: Targeted player
        target_action: What the targeted player submitted this round
        just_guard_point: Bonus for a defender who matches the Attack exactly

    Returns:
        AttackOutcome with the points to credit to each side

    Raises:
        ValueError: If `attack` is not an Attack
    """
    if not attack.is_attack:
        raise ValueError(f"Cannot resolve a {attack.action_type.value} action as an attack")

    if not target_action.is_defence:
        return AttackOutcome(
            attacker_id=attacker_id,
            defender_id=defender_id,
            kind=OutcomeKind.UNOPPOSED,
            attacker_points=attack.level,
        )

    diff = attack.level - target_action.level
    if diff > 0:
        return AttackOutcome(
            attacker_id=attacker_id,
            defender_id=defender_id,
            kind=OutcomeKind.HIT,
            attacker_points=diff,
        )
    if diff == 0:
        return AttackOutcome(
            attacker_id=attacker_id,
            defender_id=defender_id,
            kind=OutcomeKind.JUST_GUARD,
            defender_points=just_guard_point,
        )
    return AttackOutcome(
        attacker_id=attacker_id,
        defender_id=defender_id,
        kind=OutcomeKind.BLOCKED,
    )
