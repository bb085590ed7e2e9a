# Services package
from .persistence_gateway import PersistenceGateway
from .roster_api_client import RosterApiClient
from .roster_repository import MongoRosterRepository, RosterRepository
from .roster_service import RosterService
from .roster_store import RosterStore

__all__ = [
    "MongoRosterRepository",
    "PersistenceGateway",
    "RosterApiClient",
    "RosterRepository",
    "RosterService",
    "RosterStore",
]
