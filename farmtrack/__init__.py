"""Farmtrack — farm, field, crop and activity tracking API."""

__version__ = "1.0.0"
