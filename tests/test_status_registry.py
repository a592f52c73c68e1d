from __future__ import annotations

import pytest

from medcoord.config import status_registry


def test_registry_lists_all_statuses_in_order():
    assert status_registry.status_codes() == [
        "pending",
        "approved",
        "rejected",
        "fulfilled",
        "cancelled",
    ]
    assert status_registry.DEFAULT_STATUS == "pending"


@pytest.mark.parametrize(
    "current,target",
    [
        ("pending", "approved"),
        ("pending", "rejected"),
        ("pending", "cancelled"),
        ("approved", "fulfilled"),
        ("approved", "cancelled"),
    ],
)
def test_allowed_transitions(current, target):
    assert status_registry.can_transition(current, target)


@pytest.mark.parametrize(
    "current,target",
    [
        ("pending", "fulfilled"),
        ("approved", "pending"),
        ("rejected", "approved"),
        ("fulfilled", "cancelled"),
        ("cancelled", "pending"),
    ],
)
def test_forbidden_transitions(current, target):
    assert not status_registry.can_transition(current, target)


def test_same_status_is_not_a_transition():
    assert status_registry.can_transition("fulfilled", "fulfilled")


def test_terminal_statuses():
    assert status_registry.TERMINAL_STATUSES == {"rejected", "fulfilled", "cancelled"}
    assert status_registry.is_terminal("cancelled")
    assert not status_registry.is_terminal("pending")


def test_labels_and_unknown_codes():
    assert status_registry.label_by_code("approved") == "Approuvée"
    assert status_registry.label_by_code("shipped") is None
    assert status_registry.label_by_code(None) is None
    assert not status_registry.is_known("shipped")


def test_registry_rejects_unknown_next_codes(tmp_path, monkeypatch):
    bad = tmp_path / "statuses.json"
    bad.write_text('[{"code": "pending", "next": ["lost"]}]', encoding="utf-8")
    monkeypatch.setattr(status_registry, "STATUS_FILE", bad)
    with pytest.raises(ValueError):
        status_registry.load_statuses()
