"""
Top-level package for the Social Events API.

All functionality lives in the ``app`` subpackage; import the ASGI
application as ``social_events_api.app.main:app``.
"""

__all__ = []
