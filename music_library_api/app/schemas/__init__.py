"""
Pydantic schema definitions for API payloads.

Schemas are separated from the ``songs`` table layout to decouple the
API representation from persistence.
"""
