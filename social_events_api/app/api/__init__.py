"""
HTTP layer.

``router`` aggregates the domain routers from ``endpoints``; ``deps``
provides the dependencies that bind services to the shared store.
"""
