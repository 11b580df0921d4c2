"""
Access rules for reading user profiles and organisation records.

Everything here is a pure function over ids: callers load the memberships
they need and pass them in. No rule is prioritised over another; any
satisfied rule grants access.
"""
from typing import Iterable

from .errors import AuthorizationError


def can_view_user(
    requester_id: str,
    requester_org_ids: Iterable[str],
    target_user_id: str,
    target_org_ids: Iterable[str],
    orgs_created_by_requester: Iterable[str],
) -> bool:
    """
    A requester may read a user profile when any of these hold:

    - it is their own account
    - the target belongs to an organisation the requester created
    - the target shares at least one organisation with the requester
    """
    if requester_id == target_user_id:
        return True

    target_orgs = set(target_org_ids)
    if target_orgs & set(orgs_created_by_requester):
        return True
    return bool(target_orgs & set(requester_org_ids))


def can_view_organisation(requester_id: str, member_ids: Iterable[str]) -> bool:
    # Membership only. Having created the organisation is not enough.
    return requester_id in set(member_ids)


def ensure_can_view_user(
    requester_id: str,
    requester_org_ids: Iterable[str],
    target_user_id: str,
    target_org_ids: Iterable[str],
    orgs_created_by_requester: Iterable[str],
) -> None:
    if not can_view_user(
        requester_id, requester_org_ids, target_user_id, target_org_ids, orgs_created_by_requester
    ):
        raise AuthorizationError("Forbidden")


def ensure_can_view_organisation(requester_id: str, member_ids: Iterable[str]) -> None:
    if not can_view_organisation(requester_id, member_ids):
        raise AuthorizationError("Access denied. You do not belong to this organisation.")
