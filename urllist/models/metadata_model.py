from typing import List, Optional

from pydantic import BaseModel, Field


class LinkMetadataResponse(BaseModel):
    url: str
    title: str
    description: Optional[str] = None
    siteName: str
    favicon: str
    domain: str


class URLStateResponse(BaseModel):
    url: str
    loading: bool
    error: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    siteName: Optional[str] = None
    favicon: Optional[str] = None
    domain: Optional[str] = None


class BatchMetadataRequest(BaseModel):
    urls: List[str] = Field(default_factory=list)


class InvalidateResponse(BaseModel):
    url: str
    invalidated: bool
