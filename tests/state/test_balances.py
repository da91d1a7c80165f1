# [TESTER] v1

from __future__ import annotations

import pytest

from cpamm.state.balances import BalanceTable


def test_sparse_balances() -> None:
    t = BalanceTable()
    t.set("alice", "A", 10)
    t.add("alice", "A", -10)
    assert t.get("alice", "A") == 0
    assert t.get_all_balances() == {}


def test_subtract_rejects_overdraft() -> None:
    t = BalanceTable()
    t.set("alice", "A", 10)
    with pytest.raises(ValueError, match="Insufficient balance"):
        t.subtract("alice", "A", 11)
    assert t.get("alice", "A") == 10


def test_balances_for_asset() -> None:
    t = BalanceTable()
    t.set("alice", "A", 1)
    t.set("bob", "A", 2)
    t.set("bob", "B", 3)
    assert t.get_balances_for_asset("A") == {"alice": 1, "bob": 2}


def test_move_conserves_the_asset_total() -> None:
    t = BalanceTable()
    t.set("alice", "A", 10)
    t.move("A", "alice", "bob", 4)
    assert (t.get("alice", "A"), t.get("bob", "A")) == (6, 4)
    assert t.asset_total("A") == 10
    with pytest.raises(ValueError, match="Insufficient balance"):
        t.move("A", "alice", "bob", 7)
    assert t.get("alice", "A") == 6
