# Exceptions package
from .custom_exceptions import (
    ChairInvariantException,
    ConcurrencyConflictException,
    DatabaseOperationException,
    ExternalServiceException,
    ResourceNotFoundException,
    RosterAdminException,
    ValidationException,
)

__all__ = [
    'RosterAdminException',
    'ResourceNotFoundException',
    'ValidationException',
    'ConcurrencyConflictException',
    'ChairInvariantException',
    'DatabaseOperationException',
    'ExternalServiceException'
]
