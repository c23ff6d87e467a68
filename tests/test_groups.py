from __future__ import annotations

from ad_auth.services.groups import GroupMembershipResolver
from tests.fakes import group, user


def test_direct_membership(directory):
    r = GroupMembershipResolver(directory)
    assert r.is_member(user("John Smith"), group("Staff")) is True
    assert directory.reads == [user("John Smith")]


def test_nested_membership(directory):
    r = GroupMembershipResolver(directory)
    # Ann -> Helpdesk -> IT
    assert r.is_member(user("Ann Admin"), group("IT")) is True


def test_not_a_member(directory):
    r = GroupMembershipResolver(directory)
    assert r.is_member(user("John Smith"), group("IT")) is False


def test_no_member_of_attribute(directory):
    r = GroupMembershipResolver(directory)
    assert r.is_member(user("No Body"), group("Staff")) is False
    assert directory.reads == [user("No Body")]


def test_unknown_principal(directory):
    r = GroupMembershipResolver(directory)
    assert r.is_member("CN=Ghost,DC=corp,DC=example", group("Staff")) is False


def test_empty_arguments(directory):
    r = GroupMembershipResolver(directory)
    assert r.is_member("", group("Staff")) is False
    assert r.is_member(user("John Smith"), "") is False
    assert directory.reads == []


def test_dn_comparison_ignores_case(directory):
    r = GroupMembershipResolver(directory)
    assert r.is_member(user("John Smith"), group("Staff").upper()) is True


def test_cycle_terminates(directory):
    """A memberOf B, B memberOf A, target unreachable -> False, each DN read once."""
    r = GroupMembershipResolver(directory)
    assert r.is_member(group("LoopA"), group("Unreachable")) is False
    assert sorted(directory.reads) == sorted([group("LoopA"), group("LoopB")])


def test_self_cycle(directory_factory):
    g = group("Self")
    d = directory_factory(entries={g: {"memberOf": [g]}})
    assert GroupMembershipResolver(d).is_member(g, group("Other")) is False
    assert d.reads == [g]


def test_cycle_still_finds_reachable_target(directory_factory):
    a, b, target = group("A"), group("B"), group("Target")
    d = directory_factory(entries={
        user("U"): {"memberOf": [a]},
        a: {"memberOf": [b]},
        b: {"memberOf": [a, target]},
    })
    assert GroupMembershipResolver(d).is_member(user("U"), target) is True


def _chain(length: int) -> dict:
    entries = {user("Deep"): {"memberOf": [group("G0")]}}
    for i in range(length):
        entries[group(f"G{i}")] = {"memberOf": [group(f"G{i + 1}")]}
    return entries


def test_depth_cap(directory_factory):
    d = directory_factory(entries=_chain(10))
    # G5 is reached through G0..G4: five levels below the direct groups.
    assert GroupMembershipResolver(d, max_depth=5).is_member(user("Deep"), group("G5")) is True
    assert GroupMembershipResolver(d, max_depth=4).is_member(user("Deep"), group("G5")) is False


def test_depth_zero_means_direct_only(directory):
    r = GroupMembershipResolver(directory, max_depth=0)
    assert r.is_member(user("John Smith"), group("Staff")) is True
    assert r.is_member(user("Ann Admin"), group("IT")) is False


def test_default_depth_handles_long_chains(directory_factory):
    d = directory_factory(entries=_chain(30))
    r = GroupMembershipResolver(d)
    assert r.is_member(user("Deep"), group("G25")) is True
    assert r.is_member(user("Deep"), group("G26")) is False
