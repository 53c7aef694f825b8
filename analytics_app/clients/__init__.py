"""
HTTP clients for the peer services.
"""

from .peers import MetadataServiceClient, PeerServiceClient, RedirectServiceClient

__all__ = ["MetadataServiceClient", "PeerServiceClient", "RedirectServiceClient"]
