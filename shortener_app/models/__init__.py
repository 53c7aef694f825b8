"""
Database models for the redirect service.

Click analytics live in the Analytics Service's own store, never here.
"""

from .short_link import ShortLink

__all__ = ["ShortLink"]
