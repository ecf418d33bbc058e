"""Business logic services.

This package contains service-layer functions that implement business logic.
Services are called by route handlers and orchestrate database operations.
Each module is imported directly (``from lexinote.services import sessions``).
"""
