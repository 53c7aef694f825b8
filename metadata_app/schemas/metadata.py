from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MetadataRequest(BaseModel):
    short_code: str = Field(..., min_length=1)
    long_url: str = Field(..., min_length=1)


class ExtractedMetadata(BaseModel):
    """What a single scrape produced (placeholder values on failure)"""
    title: str
    description: str
    favicon_url: Optional[str] = None


class MetadataResult(BaseModel):
    """Response of POST /api/metadata"""
    short_code: str
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    favicon_url: Optional[str] = None
    status: str = "success"


class PageMetadataResponse(BaseModel):
    """Serializes the stored PageMetadata row"""
    id: int
    short_code: str
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    favicon_url: Optional[str] = None
    fetched_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PageMetadataList(BaseModel):
    metadata: List[PageMetadataResponse]
    count: int
