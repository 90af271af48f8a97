"""
Caller identity and authorization rules.

The API trusts the email address a client puts in the request
(``creatorEmail``, ``requestorEmail``, ``userEmail``).  No token or
session is verified; the frontend authenticates users and forwards
their email.  The rules themselves (creator match for events, admin
role for user management) are kept here so that a verified identity
could replace the asserted email without touching the services.
"""

from typing import Any, Dict, Mapping, Optional

from .errors import Forbidden, ValidationError


ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


def require_identity(email: Optional[str], message: str = "requestorEmail is required.") -> str:
    """Return the asserted email or raise ``ValidationError`` if it is blank."""
    if not email or not str(email).strip():
        raise ValidationError(message)
    return email


def require_creator(event: Mapping[str, Any], requestor_email: str, action: str = "update") -> None:
    """Only the actor whose email matches ``creatorEmail`` may change an event."""
    if event.get("creatorEmail") != requestor_email:
        raise Forbidden(f"You are not allowed to {action} this event.")


def require_admin(user: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Only an existing user holding the admin role passes."""
    if not user or user.get("role") != ROLE_ADMIN:
        raise Forbidden("Only admins can perform this action.")
    return user


def validate_role(role: Optional[str]) -> str:
    """Return ``role`` if it is one of ``ROLES``, else raise ``ValidationError``."""
    if role not in ROLES:
        raise ValidationError(f"Invalid role. Allowed roles: {', '.join(ROLES)}.")
    return role
