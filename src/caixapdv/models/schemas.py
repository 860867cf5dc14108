"""Response envelope shared by every endpoint."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: {"success": true, "data": ...}."""

    success: bool = True
    data: T


class MessageResponse(ApiResponse[T], Generic[T]):
    """Success envelope that also carries a human-readable message."""

    message: str
