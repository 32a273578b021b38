"""Ownership/role policy for mutating owned resources (forums, comments)."""

from piring_sehat.errors import Forbidden

PRIVILEGED_ROLE = "admin"


def is_owner_or_privileged(owner_id: str, requester_id: str, role: str | None) -> bool:
    return owner_id == requester_id or role == PRIVILEGED_ROLE


def ensure_can_mutate(
    *,
    owner_id: str,
    requester_id: str,
    role: str | None,
    message: str = "You do not have permission to modify this resource",
) -> None:
    """Raise ``Forbidden`` unless the requester owns the resource or holds the privileged role.

    Callers fetch the resource first so that a missing resource surfaces as
    ``NotFound`` before this check runs.
    """
    if not is_owner_or_privileged(owner_id, requester_id, role):
        raise Forbidden(message)
