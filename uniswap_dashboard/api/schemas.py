from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class ResponseMetadata(BaseModel):
    section: str
    widget: str
    generated_at: datetime


class WidgetResponse(BaseModel):
    metadata: ResponseMetadata
    data: Any
    status: Literal["success", "error"] = "success"
    error: str | None = None


class SectionSummary(BaseModel):
    id: str
    title: str
    status: Literal["pending", "failed", "succeeded"]
    widgets: list[str] = Field(default_factory=list)


class SectionsResponse(BaseModel):
    sections: list[SectionSummary]
