"""Aggregate application use cases."""

from .notifications import handle_database_change

__all__ = ["handle_database_change"]
