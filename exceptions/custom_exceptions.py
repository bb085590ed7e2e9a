"""
Custom Exception Classes for the Roster Admin Backend

Provides a hierarchy of exceptions for better error handling and consistent error responses.
All custom exceptions inherit from RosterAdminException which includes status codes and details.
"""

import uuid
from datetime import datetime, timezone
from typing import Any


class RosterAdminException(Exception):
    """Base exception for all roster admin errors"""

    def __init__(self, message: str, status_code: int = 500, details: dict[Any, Any] | None = None):
        """
        Args:
            message: Human-readable error message
            status_code: HTTP status code for the error
            details: Additional context as a dictionary
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ResourceNotFoundException(RosterAdminException):
    """Raised when a requested resource doesn't exist"""

    def __init__(
        self, resource_type: str, resource_id: str = "", details: dict[Any, Any] | None = None
    ):
        """
        Args:
            resource_type: Type of resource (e.g., 'Division', 'Team', 'Selector')
            resource_id: ID of the missing resource
            details: Additional context

        Example:
            raise ResourceNotFoundException('Team', 'Green', {'ageGroup': 'U15'})
        """
        message = f"{resource_type} with resource ID '{resource_id}' not found"
        extra_details = {"resource_type": resource_type, "resource_id": resource_id}
        if details:
            extra_details.update(details)
        super().__init__(message, status_code=404, details=extra_details)


class ValidationException(RosterAdminException):
    """Raised when input validation fails"""

    def __init__(self, field: str, message: str, details: dict[Any, Any] | None = None):
        """
        Args:
            field: Name of the field that failed validation
            message: Description of the validation error
            details: Additional context

        Example:
            raise ValidationException('selectors', 'Maximum 5 selectors allowed', {'count': 5})
        """
        full_message = f"Validation error on field '{field}': {message}"
        extra_details = {"field": field}
        if details:
            extra_details.update(details)
        super().__init__(full_message, status_code=400, details=extra_details)


class ConcurrencyConflictException(RosterAdminException):
    """Raised when a write is based on a stale or conflicting document"""

    def __init__(self, resource_type: str, resource_id: str, message: str = "",
                 details: dict[Any, Any] | None = None):
        """
        Args:
            resource_type: Type of resource being written
            resource_id: Key of the resource
            message: Description of the conflict
            details: Additional context (e.g., expected and stored versions)

        Example:
            raise ConcurrencyConflictException('Division', 'U15/2025', details={'expected_version': 3})
        """
        full_message = message or f"{resource_type} '{resource_id}' was modified by another request"
        extra_details = {"resource_type": resource_type, "resource_id": resource_id}
        if details:
            extra_details.update(details)
        super().__init__(full_message, status_code=409, details=extra_details)


class ChairInvariantException(RosterAdminException):
    """Raised when a selection panel would end up without exactly one chair"""

    def __init__(self, chair_count: int, details: dict[Any, Any] | None = None):
        """
        Args:
            chair_count: Number of chairs found after the transition
            details: Additional context
        """
        extra_details = {"chair_count": chair_count}
        if details:
            extra_details.update(details)
        super().__init__(
            f"Selection panel must have exactly one chair, found {chair_count}",
            status_code=500,
            details=extra_details,
        )


class DatabaseOperationException(RosterAdminException):
    """Raised when database operations fail"""

    def __init__(
        self,
        operation: str,
        message: str = "",
        collection: str = "",
        details: dict[Any, Any] | None = None,
    ):
        """
        Args:
            operation: Type of operation (e.g., 'insert', 'update', 'delete', 'find')
            message: Description of the database error
            collection: Name of the collection
            details: Additional context (e.g., query, error message)

        Example:
            raise DatabaseOperationException('replace_one', collection='rosters', details={'ageGroup': 'U15'})
        """
        self.operation = operation
        self.collection = collection
        self.correlation_id = str(uuid.uuid4())
        self.timestamp = datetime.now(timezone.utc).isoformat()

        error_message = message or f"Database operation '{operation}' failed"
        if collection and not message:
            error_message += f" on collection '{collection}'"

        super().__init__(error_message, status_code=500, details=details)


class ExternalServiceException(RosterAdminException):
    """Raised when external service calls fail"""

    def __init__(self, service_name: str, message: str, details: dict[Any, Any] | None = None):
        """
        Args:
            service_name: Name of the external service
            message: Description of the error
            details: Additional context (e.g., status code, response)

        Example:
            raise ExternalServiceException('ROSTER_API', 'PUT failed', {'status_code': 500})
        """
        full_message = f"External service '{service_name}' error: {message}"
        extra_details = {"service_name": service_name}
        if details:
            extra_details.update(details)
        super().__init__(full_message, status_code=502, details=extra_details)
