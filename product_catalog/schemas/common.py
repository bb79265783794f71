"""
==============================================================================
Common Schemas Module
==============================================================================

Envelope schemas shared by the gateway endpoints.

==============================================================================
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field


class SuccessResponse(BaseModel):
    """Standard success response wrapper."""
    success: bool = Field(default=True)
    data: Optional[Any] = Field(default=None)


class MessageResponse(BaseModel):
    """Simple message response."""
    success: bool = Field(default=True)
    message: str


class ErrorResponse(BaseModel):
    """Failure envelope."""
    success: bool = Field(default=False)
    error: str
    details: Optional[Dict[str, Any]] = None
