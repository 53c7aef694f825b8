from .connection import Base, get_database, get_db

__all__ = ["Base", "get_database", "get_db"]
