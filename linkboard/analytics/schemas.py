import uuid

from pydantic import BaseModel


class ProfileCounters(BaseModel):
    views: int
    total_clicks: int


class LinkCounters(BaseModel):
    id: uuid.UUID
    title: str
    platform: str
    clicks: int
    url: str


class AnalyticsResponse(BaseModel):
    profile: ProfileCounters
    links: list[LinkCounters]
