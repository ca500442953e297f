"""Database models for the application."""

from app.models.trip import TripDB

__all__ = ["TripDB"]
