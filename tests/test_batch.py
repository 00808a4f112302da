"""
Tests for the batch coordinator (detection_engine.batch.score_batch).

Partitioning, order preservation, batch-scoped duplicate-picture detection.
"""

from __future__ import annotations

import pytest

from backend_fakecheck.detection_engine import DetectionConfig, RiskLevel, score_batch


def test_empty_batch(now):
    result = score_batch([], now=now)
    assert result.total == 0
    assert result.flagged == ()
    assert result.clean == ()
    assert result.flagged_percentage == 0.0


def test_none_batch_is_contract_error(now):
    with pytest.raises(TypeError):
        score_batch(None, now=now)  # type: ignore[arg-type]


def test_partition_by_flag_threshold(account_factory, days_ago, now):
    clean = account_factory(username="alice_w")
    low = account_factory(username="user12345")
    high = account_factory(username="user99999", created_at=days_ago(5), posts=500)
    result = score_batch([clean, low, high], now=now)
    assert result.total == 3
    assert [a.username for a in result.clean] == ["alice_w", "user12345"]
    assert [a.username for a in result.flagged] == ["user99999"]
    assert result.flagged[0].risk_level is RiskLevel.HIGH
    assert result.flagged_percentage == pytest.approx(100 / 3)


def test_flagged_carry_account_data_clean_do_not(account_factory, now):
    flagged_record = account_factory(username="bot1", email="x@mailinator.com")
    clean_record = account_factory()
    result = score_batch([flagged_record, clean_record], now=now)
    assert result.flagged[0].account_data == flagged_record
    assert result.flagged[0].to_dict()["accountData"]["email"] == "x@mailinator.com"
    assert result.clean[0].account_data is None
    assert "accountData" not in result.clean[0].to_dict()


def test_order_preserved_within_partitions(account_factory, now):
    records = []
    for i in range(10):
        if i % 2:
            records.append(account_factory(username=f"fake{i}", email="a@yopmail.com"))
        else:
            records.append(account_factory(username=f"person_{i}"))
    result = score_batch(records, now=now)
    assert [a.username for a in result.flagged] == [f"fake{i}" for i in range(1, 10, 2)]
    assert [a.username for a in result.clean] == [f"person_{i}" for i in range(0, 10, 2)]


def test_duplicate_picture_later_record_is_duplicate(account_factory, now):
    alice = account_factory(username="alice", profile_picture="http://x/pic.jpg")
    bob = account_factory(username="bob", profile_picture="http://x/pic.jpg")
    result = score_batch([alice, bob], now=now)

    by_name = {a.username: a for a in result.flagged + result.clean}
    assert by_name["alice"].details["duplicateProfile"].is_suspicious is False
    assert by_name["bob"].details["duplicateProfile"].is_suspicious is True
    assert by_name["bob"].details["duplicateProfile"].original_account == "alice"
    assert [a.username for a in result.flagged] == ["bob"]


def test_duplicate_picture_reversed_input_swaps_original(account_factory, now):
    alice = account_factory(username="alice", profile_picture="http://x/pic.jpg")
    bob = account_factory(username="bob", profile_picture="http://x/pic.jpg")
    result = score_batch([bob, alice], now=now)
    assert [a.username for a in result.flagged] == ["alice"]
    assert result.flagged[0].details["duplicateProfile"].original_account == "bob"


def test_dedup_state_does_not_leak_between_batches(account_factory, now):
    alice = account_factory(username="alice", profile_picture="http://x/pic.jpg")
    bob = account_factory(username="bob", profile_picture="http://x/pic.jpg")
    score_batch([alice], now=now)
    result = score_batch([bob], now=now)
    assert result.flagged == ()
    assert result.clean[0].details["duplicateProfile"].is_suspicious is False


def test_repeating_a_batch_gives_same_result(account_factory, now):
    records = [
        account_factory(username="alice", profile_picture="same"),
        account_factory(username="bob", profile_picture="same"),
        account_factory(username="carol", profile_picture="same"),
    ]
    first = score_batch(records, now=now)
    second = score_batch(records, now=now)
    assert first == second
    assert [a.details["duplicateProfile"].original_account for a in first.flagged] == ["alice", "alice"]


def test_batch_accepts_generator(account_factory, now):
    result = score_batch((account_factory(username=f"p{i}_x") for i in range(3)), now=now)
    assert result.total == 3


def test_custom_flag_threshold(account_factory, now):
    config = DetectionConfig(flag_threshold=2)
    result = score_batch([account_factory(username="user12345")], config=config, now=now)
    assert len(result.flagged) == 1
    assert result.flagged[0].risk_level is RiskLevel.MEDIUM
