# filename: routers/roster_commands.py
from functools import partial

from fastapi import APIRouter, Body, Path, Query, Request

from exceptions import ValidationException
from models.responses import StandardResponse
from models.rosters import (
    DivisionInfoUpdate,
    MoveCommand,
    MoveResult,
    Player,
    Roster,
    Selector,
    Staff,
    StaffRole,
    TeamInput,
    WithdrawalReasonInput,
)
from services import roster_mutations, selector_panel
from services.roster_service import RosterService
from services.roster_store import Mutation
from utils import EntityRef

router = APIRouter()

SEASON_QUERY = Query(None, description="Season of the roster; current season if omitted")


def parse_ref(ref: str) -> EntityRef:
    """Numeric refs address by position, anything else by entity id"""
    return int(ref) if ref.isdigit() else ref


async def run_mutation(
    request: Request, age_group: str, season: str | None, mutation: Mutation, message: str
) -> StandardResponse[Roster]:
    store = RosterService(request.app.state.mongodb).store_for(season)
    await store.refresh(age_group)
    roster = await store.apply(age_group, mutation)
    return StandardResponse(success=True, data=roster, message=message)


# --- moves


@router.post(
    "/moves",
    response_description="Move a player between team, shadow and withdrawn pools",
    response_model=StandardResponse[MoveResult],
)
async def move_player(
    request: Request,
    age_group: str = Path(..., description="The age group of the roster"),
    command: MoveCommand = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[MoveResult]:
    if command.source.ageGroup != age_group:
        raise ValidationException(
            field="source.ageGroup",
            message="Players can only be moved within one division",
            details={"source": command.source.ageGroup, "division": age_group},
        )
    store = RosterService(request.app.state.mongodb).store_for(season)
    await store.refresh(age_group)
    outcome = await store.move(command)
    message = (
        f"Player moved to {command.destination.value}" if outcome.moved else "Nothing to move"
    )
    return StandardResponse(success=True, data=outcome, message=message)


# --- teams


@router.post(
    "/teams",
    response_description="Add a team",
    response_model=StandardResponse[Roster],
)
async def add_team(
    request: Request,
    age_group: str = Path(...),
    team: TeamInput = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.add_team, team_name=team.name),
        f"Team '{team.name}' added to {age_group}",
    )


@router.delete(
    "/teams/{team_name}",
    response_description="Delete a team with its players and staff",
    response_model=StandardResponse[Roster],
)
async def delete_team(
    request: Request,
    age_group: str = Path(...),
    team_name: str = Path(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.delete_team, team_name=team_name),
        f"Team '{team_name}' deleted",
    )


# --- team players


@router.post(
    "/teams/{team_name}/players",
    response_description="Add a player to a team",
    response_model=StandardResponse[Roster],
)
async def add_player(
    request: Request,
    age_group: str = Path(...),
    team_name: str = Path(...),
    player: Player = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.add_player, team_name=team_name, player=player),
        "Player added",
    )


@router.put(
    "/teams/{team_name}/players/{ref}",
    response_description="Update a player of a team",
    response_model=StandardResponse[Roster],
)
async def update_player(
    request: Request,
    age_group: str = Path(...),
    team_name: str = Path(...),
    ref: str = Path(..., description="Player index or id"),
    player: Player = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.update_player, team_name=team_name, ref=parse_ref(ref), player=player),
        "Player updated",
    )


@router.delete(
    "/teams/{team_name}/players/{ref}",
    response_description="Delete a player from a team",
    response_model=StandardResponse[Roster],
)
async def delete_player(
    request: Request,
    age_group: str = Path(...),
    team_name: str = Path(...),
    ref: str = Path(..., description="Player index or id"),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.delete_player, team_name=team_name, ref=parse_ref(ref)),
        "Player deleted",
    )


# --- staff


@router.put(
    "/teams/{team_name}/staff/{role}",
    response_description="Assign a staff member to a role",
    response_model=StandardResponse[Roster],
)
async def assign_staff(
    request: Request,
    age_group: str = Path(...),
    team_name: str = Path(...),
    role: StaffRole = Path(...),
    staff: Staff = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.assign_staff, team_name=team_name, role=role, staff=staff),
        "Staff updated",
    )


@router.delete(
    "/teams/{team_name}/staff/{role}",
    response_description="Remove the staff member of a role",
    response_model=StandardResponse[Roster],
)
async def remove_staff(
    request: Request,
    age_group: str = Path(...),
    team_name: str = Path(...),
    role: StaffRole = Path(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.remove_staff, team_name=team_name, role=role),
        "Staff member removed",
    )


# --- shadow pool


@router.post(
    "/shadow",
    response_description="Add a shadow player",
    response_model=StandardResponse[Roster],
)
async def add_shadow_player(
    request: Request,
    age_group: str = Path(...),
    player: Player = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.add_shadow_player, player=player),
        "Shadow player added",
    )


@router.put(
    "/shadow/{ref}",
    response_description="Update a shadow player",
    response_model=StandardResponse[Roster],
)
async def update_shadow_player(
    request: Request,
    age_group: str = Path(...),
    ref: str = Path(..., description="Player index or id"),
    player: Player = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.update_shadow_player, ref=parse_ref(ref), player=player),
        "Shadow player updated",
    )


@router.delete(
    "/shadow/{ref}",
    response_description="Delete a shadow player",
    response_model=StandardResponse[Roster],
)
async def delete_shadow_player(
    request: Request,
    age_group: str = Path(...),
    ref: str = Path(..., description="Player index or id"),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.delete_shadow_player, ref=parse_ref(ref)),
        "Shadow player deleted",
    )


# --- withdrawn pool


@router.put(
    "/withdrawn/{ref}",
    response_description="Change the withdrawal reason of a player",
    response_model=StandardResponse[Roster],
)
async def update_withdrawn_reason(
    request: Request,
    age_group: str = Path(...),
    ref: str = Path(..., description="Player index or id"),
    payload: WithdrawalReasonInput = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.update_withdrawn_reason, ref=parse_ref(ref), reason=payload.reason),
        "Withdrawal reason updated",
    )


@router.delete(
    "/withdrawn/{ref}",
    response_description="Delete a withdrawn player permanently",
    response_model=StandardResponse[Roster],
)
async def delete_withdrawn_player(
    request: Request,
    age_group: str = Path(...),
    ref: str = Path(..., description="Player index or id"),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(roster_mutations.delete_withdrawn_player, ref=parse_ref(ref)),
        "Withdrawn player deleted",
    )


# --- division info


@router.patch(
    "/info",
    response_description="Update trial, training and tournament info",
    response_model=StandardResponse[Roster],
)
async def update_division_info(
    request: Request,
    age_group: str = Path(...),
    info: DivisionInfoUpdate = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    fields = info.model_dump(exclude_unset=True)
    return await run_mutation(
        request, age_group, season,
        partial(
            roster_mutations.update_division_info,
            **{
                kwarg: fields[field]
                for field, kwarg in (
                    ("trialInfo", "trial_info"),
                    ("trainingInfo", "training_info"),
                    ("tournamentInfo", "tournament_info"),
                )
                if field in fields
            },
        ),
        "Division info updated",
    )


# --- selectors


@router.post(
    "/selectors",
    response_description="Add a selector (max 5 per division)",
    response_model=StandardResponse[Roster],
)
async def add_selector(
    request: Request,
    age_group: str = Path(...),
    selector: Selector = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(selector_panel.add_selector, selector=selector),
        "Selector added",
    )


@router.put(
    "/selectors",
    response_description="Replace the whole selection panel",
    response_model=StandardResponse[Roster],
)
async def replace_selectors(
    request: Request,
    age_group: str = Path(...),
    selectors: list[Selector] = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(selector_panel.replace_selectors, selectors=selectors),
        "Selection panel updated",
    )


@router.put(
    "/selectors/{ref}",
    response_description="Update a selector",
    response_model=StandardResponse[Roster],
)
async def update_selector(
    request: Request,
    age_group: str = Path(...),
    ref: str = Path(..., description="Selector index or id"),
    selector: Selector = Body(...),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(selector_panel.update_selector, ref=parse_ref(ref), selector=selector),
        "Selector updated",
    )


@router.post(
    "/selectors/{ref}/chair",
    response_description="Make a selector the chair of the panel",
    response_model=StandardResponse[Roster],
)
async def set_chair(
    request: Request,
    age_group: str = Path(...),
    ref: str = Path(..., description="Selector index or id"),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(selector_panel.set_chair, ref=parse_ref(ref)),
        "Chair of Selectors updated",
    )


@router.delete(
    "/selectors/{ref}",
    response_description="Remove a selector",
    response_model=StandardResponse[Roster],
)
async def delete_selector(
    request: Request,
    age_group: str = Path(...),
    ref: str = Path(..., description="Selector index or id"),
    season: str | None = SEASON_QUERY,
) -> StandardResponse[Roster]:
    return await run_mutation(
        request, age_group, season,
        partial(selector_panel.delete_selector, ref=parse_ref(ref)),
        "Selector removed",
    )
