"""Pydantic models for APOD records."""

from pydantic import BaseModel, ConfigDict


class Apod(BaseModel):
    """One Astronomy Picture of the Day record, as stored and as served."""

    model_config = ConfigDict(extra="ignore")

    date: str
    explanation: str | None = None
    hdurl: str | None = None
    media_type: str | None = None
    service_version: str | None = None
    title: str | None = None
    url: str | None = None


class ApodDateRangeResponse(BaseModel):
    count: int
    apods: list[Apod]
