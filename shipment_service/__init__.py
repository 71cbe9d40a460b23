"""Shipment CRUD service with database or in-memory persistence."""

__version__ = "1.0.0"
