"""
Pydantic schema definitions for API payloads.

Each resource (users, products) defines its own Pydantic models for
request and response bodies; ``page`` holds the generic pagination
wrapper.  Schemas are separated from the persisted records in
``models`` to decouple API representation from persistence.
"""
