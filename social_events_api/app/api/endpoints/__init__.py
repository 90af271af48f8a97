"""
Endpoint modules.

Each module defines an ``APIRouter`` for one domain (events, joins,
users, system).  The routers are aggregated in ``api/router.py``.
"""
