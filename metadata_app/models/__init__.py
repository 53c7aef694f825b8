from .page_metadata import PageMetadata

__all__ = ["PageMetadata"]
