"""
Pydantic schema definitions for API payloads.

Each domain (events, joins, users, statistics) defines its own models
for request and response bodies.  Stored documents are plain dicts;
the read models decide which fields leave the service.
"""
