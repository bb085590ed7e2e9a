# filename: routers/rosters.py
from fastapi import APIRouter, Body, Path, Query, Request, status

from models.responses import BulkOperationResponse, DeleteResponse
from models.rosters import BulkDeleteInput, Roster
from services.roster_service import RosterService

router = APIRouter()


# list all rosters of a season
@router.get(
    "",
    response_description="List all rosters, optionally of one season",
    response_model=list[Roster],
)
async def list_rosters(
    request: Request,
    year: str | None = Query(None, description="Season to list; all seasons if omitted"),
) -> list[Roster]:
    service = RosterService(request.app.state.mongodb)
    return await service.list_rosters(year)


# create new roster
@router.post(
    "",
    response_description="Create a new roster for an age group and season",
    response_model=Roster,
    status_code=status.HTTP_201_CREATED,
)
async def create_roster(
    request: Request,
    roster: Roster = Body(..., description="The complete roster document"),
) -> Roster:
    service = RosterService(request.app.state.mongodb)
    return await service.create_roster(roster)


# bulk upsert rosters
@router.post(
    "/bulk",
    response_description="Create or overwrite many rosters",
    response_model=BulkOperationResponse,
)
async def bulk_upsert_rosters(
    request: Request,
    rosters: list[Roster] = Body(..., description="Roster documents to upsert"),
) -> BulkOperationResponse:
    service = RosterService(request.app.state.mongodb)
    counts, errors = await service.bulk_upsert(rosters)
    stored = counts["inserted"] + counts["matched"]
    return BulkOperationResponse(
        success=not errors,
        processed_count=len(rosters),
        success_count=stored,
        error_count=len(errors),
        errors=errors or None,
        message=f"Bulk upload: {counts['inserted']} inserted, {counts['modified']} updated",
    )


# bulk delete rosters
@router.delete(
    "/bulk",
    response_description="Delete many rosters of one season",
    response_model=DeleteResponse,
)
async def bulk_delete_rosters(
    request: Request,
    payload: BulkDeleteInput = Body(...),
) -> DeleteResponse:
    service = RosterService(request.app.state.mongodb)
    deleted = await service.bulk_delete(payload.ageGroups, payload.season)
    return DeleteResponse(deleted_count=deleted, message=f"Deleted {deleted} rosters")


# get one roster
@router.get(
    "/{age_group}",
    response_description="Get the roster of one age group",
    response_model=Roster,
)
async def get_roster(
    request: Request,
    age_group: str = Path(..., description="The age group of the roster"),
    season: str | None = Query(None, description="Season; current season if omitted"),
) -> Roster:
    service = RosterService(request.app.state.mongodb)
    return await service.get_roster(age_group, season)


# replace roster
@router.put(
    "/{age_group}",
    response_description="Replace the complete roster document",
    response_model=Roster,
)
async def replace_roster(
    request: Request,
    age_group: str = Path(..., description="The age group of the roster"),
    season: str | None = Query(None, description="Season; taken from the body if omitted"),
    roster: Roster = Body(..., description="The complete roster document"),
) -> Roster:
    service = RosterService(request.app.state.mongodb)
    return await service.replace_roster(age_group, season, roster)


# delete roster
@router.delete(
    "/{age_group}",
    response_description="Delete the roster of one age group and season",
    response_model=DeleteResponse,
)
async def delete_roster(
    request: Request,
    age_group: str = Path(..., description="The age group of the roster"),
    season: str = Query(..., description="Season of the roster to delete"),
) -> DeleteResponse:
    service = RosterService(request.app.state.mongodb)
    deleted = await service.delete_roster(age_group, season)
    return DeleteResponse(
        deleted_count=deleted, message=f"Roster {age_group} ({season}) deleted successfully"
    )
