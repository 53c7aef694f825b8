from typing import Optional


class UpstreamServiceError(Exception):
    """A peer service timed out, refused the connection or answered non-2xx."""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        self.service = service
        self.status_code = status_code
        super().__init__(f"{service}: {message}")

    @property
    def is_client_error(self) -> bool:
        """The peer rejected the request itself (4xx)"""
        return self.status_code is not None and 400 <= self.status_code < 500


class RedirectServiceError(UpstreamServiceError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__("redirect-service", message, status_code)


class MetadataServiceError(UpstreamServiceError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__("metadata-service", message, status_code)
