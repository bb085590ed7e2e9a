"""
Standard Response Models

Provides consistent response wrappers for all API endpoints.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class StandardResponse(BaseModel, Generic[T]):
    """Standard response wrapper for single resource"""

    success: bool = Field(default=True, description="Whether the operation was successful")
    data: T | None = Field(description="Response data")
    message: str | None = Field(default=None, description="Optional success message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "data": {"ageGroup": "U15", "season": "2025"},
                "message": "Roster retrieved successfully",
            }
        }
    )


class DeleteResponse(BaseModel):
    """Standard response for delete operations"""

    success: bool = Field(default=True, description="Whether the deletion was successful")
    deleted_count: int = Field(description="Number of items deleted")
    message: str | None = Field(default=None, description="Optional success message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "deleted_count": 1,
                "message": "Roster deleted successfully",
            }
        }
    )


class BulkOperationResponse(BaseModel):
    """Standard response for bulk operations"""

    success: bool = Field(default=True, description="Whether the operation was successful")
    processed_count: int = Field(description="Number of items processed")
    success_count: int = Field(description="Number of items successfully processed")
    error_count: int = Field(description="Number of items that failed")
    errors: list[dict] | None = Field(default=None, description="List of errors if any")
    message: str | None = Field(default=None, description="Optional success message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "processed_count": 3,
                "success_count": 2,
                "error_count": 1,
                "errors": [{"ageGroup": "U17", "error": "Validation failed"}],
                "message": "Bulk upsert completed with some errors",
            }
        }
    )
