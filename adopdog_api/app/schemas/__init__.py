"""
Pydantic schema definitions for API payloads.

Schemas are separated from the stored document shape so that the API
representation (``id``) stays decoupled from persistence (``_id``).
"""
