"""
Placement Engine - Moves players between the pools of a division

A player is placed in exactly one pool of a division: the active list of one
team, the shadow pool, or the withdrawn pool. move_player is the only
transition between pools. It works on a deep copy and returns a complete
division snapshot, so a player is never observable as removed from its source
but not yet added to its destination.
"""

from collections import Counter

from config import settings
from exceptions import ValidationException
from logging_config import logger
from models.rosters import (
    MoveCommand,
    MoveResult,
    Placement,
    Player,
    PoolType,
    Roster,
    WithdrawnPlayer,
)
from utils import resolve_index


def _source_pool(roster: Roster, placement: Placement) -> list | None:
    if placement.type == PoolType.TEAM:
        team = roster.find_team(placement.teamName) if placement.teamName else None
        return team.players if team else None
    if placement.type == PoolType.SHADOW:
        return roster.shadowPlayers
    return roster.withdrawn


def _targets_source_pool(command: MoveCommand) -> bool:
    if command.source.type != command.destination:
        return False
    if command.destination == PoolType.TEAM:
        return command.source.teamName == command.destinationTeamName
    return True


def _noop(roster: Roster, command: MoveCommand, why: str) -> MoveResult:
    logger.bind(
        ageGroup=roster.ageGroup,
        season=roster.season,
        source=command.source.type.value,
        destination=command.destination.value,
    ).debug(f"Move ignored: {why}")
    return MoveResult(moved=False, roster=roster)


def move_player(roster: Roster, command: MoveCommand) -> MoveResult:
    """
    Move one player from its current placement to another pool

    Args:
        roster: Current division snapshot (left untouched)
        command: Source placement, destination pool and, for withdrawals, a reason

    Returns:
        MoveResult with the new snapshot, or the input snapshot and moved=False
        when there is nothing to move

    Raises:
        ValidationException: If the source belongs to another division
    """
    if command.source.ageGroup != roster.ageGroup:
        raise ValidationException(
            field="source.ageGroup",
            message="Players can only be moved within one division",
            details={"source": command.source.ageGroup, "division": roster.ageGroup},
        )

    if _targets_source_pool(command):
        return _noop(roster, command, "destination is the source pool")

    if command.destination == PoolType.TEAM:
        if not command.destinationTeamName or roster.find_team(command.destinationTeamName) is None:
            return _noop(roster, command, f"unknown destination team '{command.destinationTeamName}'")

    working = roster.model_copy(deep=True)
    pool = _source_pool(working, command.source)
    if pool is None:
        return _noop(roster, command, f"unknown source team '{command.source.teamName}'")

    ref = command.source.playerId if command.source.playerId is not None else command.source.index
    idx = resolve_index(pool, ref)
    if idx is None:
        return _noop(roster, command, f"no player at {ref!r}")

    entry = pool.pop(idx)
    player = entry.to_player() if isinstance(entry, WithdrawnPlayer) else Player(**entry.model_dump())

    if command.destination == PoolType.WITHDRAWN:
        reason = (command.reason or "").strip() or settings.DEFAULT_WITHDRAWAL_REASON
        working.withdrawn.append(WithdrawnPlayer(**player.model_dump(), reason=reason))
    elif command.destination == PoolType.SHADOW:
        working.shadowPlayers.append(player)
    else:
        working.find_team(command.destinationTeamName).players.append(player)

    logger.bind(
        ageGroup=roster.ageGroup,
        season=roster.season,
        player_id=player.id,
        source=command.source.type.value,
        source_team=command.source.teamName,
        destination_team=command.destinationTeamName,
    ).info(f"Moved player '{player.name}' to {command.destination.value}")
    return MoveResult(moved=True, roster=working)


def placed_player_ids(roster: Roster) -> list[str]:
    """Ids of every placed player, one entry per placement"""
    ids = [p.id for team in roster.teams for p in team.players]
    ids.extend(p.id for p in roster.shadowPlayers)
    ids.extend(p.id for p in roster.withdrawn)
    return ids


def find_duplicate_placements(roster: Roster) -> list[str]:
    return sorted(pid for pid, count in Counter(placed_player_ids(roster)).items() if count > 1)


def ensure_placement_exclusivity(roster: Roster) -> None:
    duplicates = find_duplicate_placements(roster)
    if duplicates:
        raise ValidationException(
            field="players",
            message="A player can only be placed once per division",
            details={"ageGroup": roster.ageGroup, "duplicate_player_ids": duplicates},
        )
