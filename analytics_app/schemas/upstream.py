"""
Response bodies of the peer services, as far as this service reads them.
"""

from typing import Optional

from pydantic import BaseModel


class ShortenResult(BaseModel):
    """POST /api/shorten on the redirect service"""
    short_code: str
    short_url: str
    long_url: str


class PageMetadataResult(BaseModel):
    """POST /api/metadata on the metadata service"""
    short_code: str
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    favicon_url: Optional[str] = None
    status: str = "success"
