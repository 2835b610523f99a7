import threading
from decimal import Decimal

import pytest

from spinpool.core.catalog import SymbolId
from spinpool.core.exceptions import InsufficientBalance
from spinpool.core.ledger import Ledger, PoolStats, RecentWin, demo_wins, mask_wallet

from tests.helpers import OTHER_WALLET, WALLET


@pytest.fixture
def ledger():
    return Ledger(starting_balance=Decimal("1.5"))


def make_win(n: int) -> RecentWin:
    return RecentWin(str(n), f"0x{n:04d}...beef", Decimal(n), SymbolId.CHERRY, n)


def test_unseen_wallet_starts_with_starting_balance(ledger):
    assert ledger.get_balance(WALLET) == Decimal("1.5")
    assert ledger.get_balance(OTHER_WALLET) == Decimal("1.5")


def test_debit_then_credit_applies_net_change(ledger):
    new_balance = ledger.debit_then_credit(WALLET, Decimal("0.5"), Decimal("2.0"))
    assert new_balance == Decimal("1.5") - Decimal("0.5") + Decimal("2.0")
    assert ledger.get_balance(WALLET) == new_balance


def test_debit_can_spend_the_whole_balance(ledger):
    assert ledger.debit_then_credit(WALLET, Decimal("1.5"), Decimal(0)) == Decimal(0)


def test_insufficient_balance_leaves_wallet_untouched(ledger):
    ledger.debit_then_credit(WALLET, Decimal("1.0"), Decimal(0))

    with pytest.raises(InsufficientBalance) as exc_info:
        ledger.debit_then_credit(WALLET, Decimal("1.0"), Decimal("50"))

    assert exc_info.value.balance == Decimal("0.5")
    assert ledger.get_balance(WALLET) == Decimal("0.5")


def test_wallets_are_independent(ledger):
    ledger.debit_then_credit(WALLET, Decimal("1.0"), Decimal(0))
    assert ledger.get_balance(OTHER_WALLET) == Decimal("1.5")


def test_recent_wins_are_newest_first_and_bounded(ledger):
    for n in range(25):
        ledger.record_win(make_win(n))

    wins = ledger.recent_wins()
    assert [win.id for win in wins] == [str(n) for n in range(24, 14, -1)]
    assert ledger.retained_wins == 20

    history = ledger.snapshot()["recent_wins"]
    assert history[0].id == "24"
    assert history[-1].id == "5"


def test_visible_slice_cannot_exceed_capacity():
    with pytest.raises(ValueError):
        Ledger(capacity=5, visible=10)


def test_accrue_volume_is_monotonic():
    ledger = Ledger(
        pool=PoolStats(
            total_liquidity=Decimal("1250.45"),
            user_share=Decimal("0.05"),
            volume_24h=Decimal("342.18"),
            apy=Decimal("12.5"),
        )
    )
    ledger.accrue_volume(Decimal("0.25"))
    ledger.accrue_volume(Decimal("0.75"))

    stats = ledger.pool_stats()
    assert stats.volume_24h == Decimal("343.18")
    assert stats.total_liquidity == Decimal("1250.45")


def test_pool_stats_returns_a_copy(ledger):
    stats = ledger.pool_stats()
    stats.volume_24h += Decimal(100)
    assert ledger.pool_stats().volume_24h == Decimal(0)


def test_demo_wins_are_seeded_newest_first():
    ledger = Ledger(initial_wins=demo_wins())
    wins = ledger.recent_wins()

    assert [win.symbol for win in wins] == [
        SymbolId.DIAMOND,
        SymbolId.CROWN,
        SymbolId.SEVEN,
        SymbolId.STAR,
        SymbolId.LIGHTNING,
    ]
    timestamps = [win.timestamp for win in wins]
    assert timestamps == sorted(timestamps, reverse=True)


def test_recent_win_create_masks_wallet():
    win = RecentWin.create(WALLET, Decimal("0.2"), SymbolId.CHERRY)
    assert win.address == "0xabcd...ef01"
    assert win.amount == Decimal("0.2")
    assert win.id


@pytest.mark.parametrize(
    "wallet, expected",
    [
        ("0x1234567890abcdef", "0x1234...cdef"),
        ("short", "short"),
        ("0123456789", "0123456789"),
    ],
)
def test_mask_wallet(wallet, expected):
    assert mask_wallet(wallet) == expected


def test_concurrent_debits_on_one_wallet_never_overdraw(ledger):
    successes = []
    failures = []
    barrier = threading.Barrier(8)

    def debit():
        barrier.wait()
        try:
            ledger.debit_then_credit(WALLET, Decimal("1.0"), Decimal(0))
            successes.append(1)
        except InsufficientBalance:
            failures.append(1)

    threads = [threading.Thread(target=debit) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(successes) == 1
    assert len(failures) == 7
    assert ledger.get_balance(WALLET) == Decimal("0.5")


def test_wallet_lock_does_not_block_other_wallets(ledger):
    done = threading.Event()

    def touch_other_wallet():
        ledger.debit_then_credit(OTHER_WALLET, Decimal("0.5"), Decimal(0))
        done.set()

    with ledger.wallet_lock(WALLET):
        worker = threading.Thread(target=touch_other_wallet)
        worker.start()
        assert done.wait(timeout=5), "other wallet blocked behind an unrelated lock"
        worker.join()

    assert ledger.get_balance(OTHER_WALLET) == Decimal("1.0")
