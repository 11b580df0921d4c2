"""Tests for the user-profile and organisation access rules."""
import pytest

from accounts_platform.accounts_platform.account_service.errors import AuthorizationError
from accounts_platform.accounts_platform.account_service.policy import (
    can_view_organisation,
    can_view_user,
    ensure_can_view_organisation,
    ensure_can_view_user,
)


def test_user_can_always_view_self():
    assert can_view_user("a", [], "a", [], []) is True


def test_creator_can_view_members_of_created_org():
    assert can_view_user("a", [], "b", ["org-b"], ["org-b"]) is True


def test_peers_in_shared_org_can_view_each_other():
    assert can_view_user("a", ["org-1", "org-2"], "b", ["org-2"], []) is True


def test_unrelated_user_is_denied():
    assert can_view_user("a", ["org-1"], "b", ["org-2"], ["org-3"]) is False


def test_creator_of_unrelated_org_is_denied():
    # Creating an org only grants visibility of its members
    assert can_view_user("a", [], "b", ["org-2"], ["org-1"]) is False


def test_target_without_memberships_is_only_visible_to_self():
    assert can_view_user("a", ["org-1"], "b", [], ["org-1"]) is False


@pytest.mark.parametrize(
    "requester_orgs, target_orgs, created, expected",
    [
        (["x"], ["x"], [], True),
        ([], ["x"], ["x"], True),
        (["x"], ["x"], ["x"], True),
        (["x"], ["y"], [], False),
        ([], [], [], False),
    ],
)
def test_rules_are_combined_with_or(requester_orgs, target_orgs, created, expected):
    assert can_view_user("a", requester_orgs, "b", target_orgs, created) is expected


def test_rules_accept_any_iterable():
    assert can_view_user("a", iter(["o"]), "b", ("o",), set()) is True


def test_member_can_view_organisation():
    assert can_view_organisation("a", ["a", "b"]) is True


def test_non_member_cannot_view_organisation():
    assert can_view_organisation("c", ["a", "b"]) is False
    assert can_view_organisation("c", []) is False


def test_ensure_can_view_user_raises_forbidden():
    ensure_can_view_user("a", [], "a", [], [])
    with pytest.raises(AuthorizationError) as exc_info:
        ensure_can_view_user("a", [], "b", ["o"], [])
    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "Forbidden"


def test_ensure_can_view_organisation_raises_forbidden():
    ensure_can_view_organisation("a", ["a"])
    with pytest.raises(AuthorizationError):
        ensure_can_view_organisation("a", ["b"])
