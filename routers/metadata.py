# filename: routers/metadata.py
from fastapi import APIRouter, Request

from models.rosters import RosterMetadata
from services.roster_service import RosterService

router = APIRouter()


# age groups and seasons for input suggestions
@router.get(
    "",
    response_description="Known age groups and seasons, newest season first",
    response_model=RosterMetadata,
)
async def get_metadata(request: Request) -> RosterMetadata:
    service = RosterService(request.app.state.mongodb)
    return await service.get_metadata()
