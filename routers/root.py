from fastapi import APIRouter

router = APIRouter()
endpoints = [
    {
        "name": "Rosters",
        "url": "/api/admin/rosters"
    },
    {
        "name": "Metadata",
        "url": "/api/admin/metadata"
    }
]

@router.get("/", response_description="List all entry API endpoints")
async def get_root():
    return endpoints
