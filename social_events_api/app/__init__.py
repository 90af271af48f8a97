"""
Application package.

The API is split into ``core`` (configuration, logging, database,
errors, authorization rules), ``schemas`` (request and response
models), ``services`` (business logic over the MongoDB collections)
and ``api`` (routers).  Each domain (events, joins, users, system)
has its own service and router module.
"""

from .main import app  # noqa: F401
