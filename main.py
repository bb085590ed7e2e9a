#!/usr/bin/env python
import traceback
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import certifi
from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from motor.motor_asyncio import AsyncIOMotorClient

from config import settings

# Import custom exceptions and logging
from exceptions import RosterAdminException
from logging_config import logger
from routers.metadata import router as metadata_router
from routers.root import router as root_router
from routers.roster_commands import router as roster_commands_router
from routers.rosters import router as rosters_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting roster admin API server...")
    logger.info(f"Connecting to MongoDB: {settings.DB_NAME}")
    app.state.client = AsyncIOMotorClient(settings.DB_URL, tlsCAFile=certifi.where())
    app.state.mongodb = app.state.client[settings.DB_NAME]
    logger.info("MongoDB connection established")

    yield

    # Shutdown
    logger.info("Shutting down roster admin API server...")
    app.state.client.close()
    logger.info("MongoDB connection closed")


app = FastAPI(
    lifespan=lifespan,
    title="Roster Admin API",
    version="1.0.0",
    description="""
## Roster Admin API

Administration of representative rosters: one division per age group and season.

### Key Features

* **Divisions** - Create, replace and delete complete roster documents
* **Placements** - Move players between team lists, the shadow pool and the withdrawn pool
* **Teams & Staff** - Manage teams, their players and coach/asstCoach/manager/umpire roles
* **Selection Panel** - Up to 5 selectors per division, at most one chair

### Concurrency

Roster documents carry a `version`. A `PUT` with a version only succeeds against
the stored document with the same version and answers `409` otherwise. A `PUT`
without a version overwrites unconditionally.

### Error Handling

All errors return a standardized format with correlation IDs for debugging:

```json
{
  "error": {
    "message": "Resource not found",
    "status_code": 404,
    "correlation_id": "uuid",
    "timestamp": "ISO-8601",
    "path": "/api/endpoint"
  }
}
```
    """,
    openapi_tags=[
        {"name": "rosters", "description": "Division documents (full-document CRUD)"},
        {
            "name": "roster-commands",
            "description": "Player moves, team, staff, reserve pool and selector operations",
        },
        {"name": "metadata", "description": "Known age groups and seasons"},
    ],
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception Handlers
@app.exception_handler(RosterAdminException)
async def roster_admin_exception_handler(request: Request, exc: RosterAdminException):
    """Handle all custom roster admin exceptions"""
    correlation_id = str(uuid.uuid4())

    error_response = {
        "error": {
            "message": exc.message,
            "status_code": exc.status_code,
            "correlation_id": correlation_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
            "details": exc.details,
        }
    }

    # Log the error with correlation ID
    logger.bind(
        correlation_id=correlation_id,
        status_code=exc.status_code,
        path=request.url.path,
        details=exc.details,
    ).error(f"[{correlation_id}] {exc.__class__.__name__}: {exc.message}")

    return JSONResponse(status_code=exc.status_code, content=error_response)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle FastAPI HTTPExceptions with consistent format"""
    correlation_id = str(uuid.uuid4())

    error_response = {
        "error": {
            "message": exc.detail,
            "status_code": exc.status_code,
            "correlation_id": correlation_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
        }
    }

    logger.bind(
        correlation_id=correlation_id,
        status_code=exc.status_code,
        path=request.url.path,
    ).error(f"[{correlation_id}] HTTPException: {exc.detail}")

    return JSONResponse(status_code=exc.status_code, content=error_response)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all handler for unexpected exceptions"""
    correlation_id = str(uuid.uuid4())

    # Log full traceback for unexpected errors
    logger.bind(
        correlation_id=correlation_id,
        path=request.url.path,
        traceback=traceback.format_exc(),
    ).error(f"[{correlation_id}] Unhandled exception: {str(exc)}")

    error_response = {
        "error": {
            "message": "An unexpected error occurred",
            "status_code": 500,
            "correlation_id": correlation_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
        }
    }

    return JSONResponse(status_code=500, content=error_response)


app.include_router(root_router, prefix="", tags=["root"])
app.include_router(rosters_router, prefix="/api/admin/rosters", tags=["rosters"])
app.include_router(
    roster_commands_router, prefix="/api/admin/rosters/{age_group}", tags=["roster-commands"]
)
app.include_router(metadata_router, prefix="/api/admin/metadata", tags=["metadata"])
