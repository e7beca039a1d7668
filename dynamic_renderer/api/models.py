"""
Pydantic request and response envelopes for the HTTP boundary.

Field names on the wire follow the JSON contract callers already use
(`waitForSelector`, `rowCount`), while Python code uses snake_case.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Request Models ---

class ScrapeRequest(BaseModel):
    """
    Body of `POST /scrape`.

    `url` is optional at this level so a missing URL yields the service's own
    400 response rather than a generic 422 validation error.
    """
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    wait_for_selector: Optional[str] = Field(default=None, alias="waitForSelector")


# --- Response Models ---

class ScrapeSuccessResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    html: str
    url: str
    timestamp: datetime
    row_count: int = Field(default=0, serialization_alias="rowCount")


class ScrapeFailureResponse(BaseModel):
    success: bool = False
    error: str
    url: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: datetime
