"""
Core data model for render requests and their outcomes.

A `RenderRequest` is created per inbound call and produces exactly one
`RenderResult`: either `RenderSuccess` (the serialized, script-hydrated
document) or `RenderFailure` (the underlying error message).
"""
from datetime import datetime, timezone
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Returns the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class RenderRequest(BaseModel):
    """
    A validated, immutable request to render one URL.

    `wait_for_selector`, when set, switches readiness from the fixed-delay
    policy to selector/content polling.
    """
    model_config = ConfigDict(frozen=True)

    url: str = Field(min_length=1)
    wait_for_selector: Optional[str] = None


class ReadinessOutcome(BaseModel):
    """
    Evidence of how the readiness engine concluded.

    Attributes:
        ready (bool): False only when a requested selector never appeared or never gained content.
        row_count (int): Rows observed in the inspected results region (0 if none found).
        diagnostics (List[str]): Ordered notes recorded while driving the page.
    """
    ready: bool = False
    row_count: int = 0
    diagnostics: List[str] = Field(default_factory=list)

    def note(self, message: str) -> None:
        self.diagnostics.append(message)


class RenderSuccess(BaseModel):
    success: Literal[True] = True
    html: str
    url: str
    timestamp: datetime = Field(default_factory=utc_now)
    readiness: ReadinessOutcome = Field(default_factory=ReadinessOutcome)


class RenderFailure(BaseModel):
    success: Literal[False] = False
    message: str
    url: str
    timestamp: datetime = Field(default_factory=utc_now)


RenderResult = Union[RenderSuccess, RenderFailure]
