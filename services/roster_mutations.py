"""
Roster Mutations - Direct edits of teams, players, staff and reserve pools

Every function takes a division snapshot and returns a new one; the input is
never modified. Entries are addressed by index or by entity id (EntityRef).
Updated entries keep the id of the entry they replace.
"""

from typing import Any

from exceptions import ResourceNotFoundException, ValidationException
from models.rosters import Player, Roster, Staff, StaffRole, Team
from services.placement_engine import placed_player_ids
from utils import EntityRef, resolve_index

_UNSET: Any = object()


def _require_team(roster: Roster, team_name: str) -> Team:
    team = roster.find_team(team_name)
    if team is None:
        raise ResourceNotFoundException(
            resource_type="Team",
            resource_id=team_name,
            details={"ageGroup": roster.ageGroup, "season": roster.season},
        )
    return team


def _require_index(roster: Roster, pool: list, ref: EntityRef, resource_type: str) -> int:
    idx = resolve_index(pool, ref)
    if idx is None:
        raise ResourceNotFoundException(
            resource_type=resource_type,
            resource_id=str(ref),
            details={"ageGroup": roster.ageGroup, "season": roster.season},
        )
    return idx


def _require_unplaced(roster: Roster, player: Player) -> None:
    if player.id in placed_player_ids(roster):
        raise ValidationException(
            field="player.id",
            message=f"Player '{player.name}' is already placed in this division",
            details={"ageGroup": roster.ageGroup, "player_id": player.id},
        )


def _parse_role(role: StaffRole | str) -> StaffRole:
    try:
        return StaffRole(role)
    except ValueError:
        raise ValidationException(
            field="role",
            message=f"Unknown staff role '{role}'",
            details={"allowed": [r.value for r in StaffRole]},
        ) from None


# --- teams


def add_team(roster: Roster, team_name: str) -> Roster:
    name = (team_name or "").strip()
    if not name:
        raise ValidationException(field="name", message="Team name must not be empty")
    if roster.find_team(name) is not None:
        raise ValidationException(
            field="name",
            message=f"Team '{name}' already exists in {roster.ageGroup}",
            details={"ageGroup": roster.ageGroup, "season": roster.season},
        )
    updated = roster.model_copy(deep=True)
    updated.teams.append(Team(name=name))
    return updated


def delete_team(roster: Roster, team_name: str) -> Roster:
    """Remove a team together with its players and staff"""
    _require_team(roster, team_name)
    updated = roster.model_copy(deep=True)
    updated.teams = [t for t in updated.teams if t.name != team_name]
    return updated


# --- team players


def add_player(roster: Roster, team_name: str, player: Player) -> Roster:
    _require_team(roster, team_name)
    _require_unplaced(roster, player)
    updated = roster.model_copy(deep=True)
    updated.find_team(team_name).players.append(player.model_copy(deep=True))
    return updated


def update_player(roster: Roster, team_name: str, ref: EntityRef, player: Player) -> Roster:
    team = _require_team(roster, team_name)
    idx = _require_index(roster, team.players, ref, "Player")
    updated = roster.model_copy(deep=True)
    players = updated.find_team(team_name).players
    players[idx] = player.model_copy(update={"id": players[idx].id}, deep=True)
    return updated


def delete_player(roster: Roster, team_name: str, ref: EntityRef) -> Roster:
    team = _require_team(roster, team_name)
    idx = _require_index(roster, team.players, ref, "Player")
    updated = roster.model_copy(deep=True)
    del updated.find_team(team_name).players[idx]
    return updated


# --- staff


def assign_staff(roster: Roster, team_name: str, role: StaffRole | str, staff: Staff) -> Roster:
    """Put a staff member in one of the fixed role slots, replacing any occupant"""
    role = _parse_role(role)
    _require_team(roster, team_name)
    updated = roster.model_copy(deep=True)
    team = updated.find_team(team_name)
    current = getattr(team.staff, role.value)
    occupant = staff.model_copy(deep=True)
    if current is not None:
        occupant.id = current.id
    setattr(team.staff, role.value, occupant)
    return updated


def remove_staff(roster: Roster, team_name: str, role: StaffRole | str) -> Roster:
    role = _parse_role(role)
    team = _require_team(roster, team_name)
    if getattr(team.staff, role.value) is None:
        raise ResourceNotFoundException(
            resource_type="Staff",
            resource_id=role.value,
            details={"ageGroup": roster.ageGroup, "team": team_name},
        )
    updated = roster.model_copy(deep=True)
    setattr(updated.find_team(team_name).staff, role.value, None)
    return updated


# --- shadow pool


def add_shadow_player(roster: Roster, player: Player) -> Roster:
    _require_unplaced(roster, player)
    updated = roster.model_copy(deep=True)
    updated.shadowPlayers.append(player.model_copy(deep=True))
    return updated


def update_shadow_player(roster: Roster, ref: EntityRef, player: Player) -> Roster:
    idx = _require_index(roster, roster.shadowPlayers, ref, "ShadowPlayer")
    updated = roster.model_copy(deep=True)
    updated.shadowPlayers[idx] = player.model_copy(
        update={"id": updated.shadowPlayers[idx].id}, deep=True
    )
    return updated


def delete_shadow_player(roster: Roster, ref: EntityRef) -> Roster:
    idx = _require_index(roster, roster.shadowPlayers, ref, "ShadowPlayer")
    updated = roster.model_copy(deep=True)
    del updated.shadowPlayers[idx]
    return updated


# --- withdrawn pool


def update_withdrawn_reason(roster: Roster, ref: EntityRef, reason: str) -> Roster:
    idx = _require_index(roster, roster.withdrawn, ref, "WithdrawnPlayer")
    reason = (reason or "").strip()
    if not reason:
        raise ValidationException(field="reason", message="Withdrawal reason must not be empty")
    updated = roster.model_copy(deep=True)
    updated.withdrawn[idx].reason = reason
    return updated


def delete_withdrawn_player(roster: Roster, ref: EntityRef) -> Roster:
    """Remove a withdrawn player from the division permanently"""
    idx = _require_index(roster, roster.withdrawn, ref, "WithdrawnPlayer")
    updated = roster.model_copy(deep=True)
    del updated.withdrawn[idx]
    return updated


# --- division info


def update_division_info(
    roster: Roster,
    trial_info: Any = _UNSET,
    training_info: Any = _UNSET,
    tournament_info: Any = _UNSET,
) -> Roster:
    """Replace the free-form info blocks that were passed; others stay as they are"""
    updated = roster.model_copy(deep=True)
    if trial_info is not _UNSET:
        updated.trialInfo = trial_info
    if training_info is not _UNSET:
        updated.trainingInfo = training_info
    if tournament_info is not _UNSET:
        updated.tournamentInfo = tournament_info
    return updated
