"""
In-memory ledger: wallet balances, the recent-wins feed and pool statistics.

Every balance mutation for a wallet happens under that wallet's own lock, so
two spins on one wallet serialize while spins on different wallets run side
by side. The recent-wins feed and the pool counters share a single lock.

The "24h volume" figure is a plain running total for the life of the
process. It is not a rolling window.
"""

import threading
import time
import uuid
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from spinpool.core.catalog import SymbolId
from spinpool.core.exceptions import InsufficientBalance
from spinpool.core.logger import get_logger

logger = get_logger("ledger")


def as_money(value) -> Decimal:
    """Convert a float/int/str amount to Decimal without binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def mask_wallet(wallet: str) -> str:
    """Shorten a wallet id for public display: 0x1234...abcd"""
    if len(wallet) <= 10:
        return wallet
    return f"{wallet[:6]}...{wallet[-4:]}"


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class RecentWin:
    id: str
    address: str
    amount: Decimal
    symbol: SymbolId
    timestamp: int

    @classmethod
    def create(cls, wallet: str, amount: Decimal, symbol: SymbolId) -> "RecentWin":
        return cls(
            id=str(uuid.uuid4()),
            address=mask_wallet(wallet),
            amount=amount,
            symbol=symbol,
            timestamp=now_ms(),
        )


@dataclass
class PoolStats:
    total_liquidity: Decimal
    user_share: Decimal
    volume_24h: Decimal
    apy: Decimal


def demo_wins() -> List[RecentWin]:
    """Placeholder feed shown before any real spins have paid out."""
    now = now_ms()
    seeds = [
        ("0x1a2b...3c4d", "2.5", SymbolId.DIAMOND),
        ("0x5e6f...7g8h", "0.85", SymbolId.CROWN),
        ("0x9i0j...1k2l", "0.42", SymbolId.SEVEN),
        ("0x3m4n...5o6p", "1.2", SymbolId.STAR),
        ("0x7q8r...9s0t", "0.15", SymbolId.LIGHTNING),
    ]
    return [
        RecentWin(str(i + 1), address, Decimal(amount), symbol, now - (i + 1) * 60000)
        for i, (address, amount, symbol) in enumerate(seeds)
    ]


class Ledger:
    """Sole owner of balances, win history and pool statistics."""

    def __init__(
        self,
        starting_balance=Decimal("1.5"),
        pool: Optional[PoolStats] = None,
        capacity: int = 20,
        visible: int = 10,
        initial_wins: Iterable[RecentWin] = (),
    ):
        if visible > capacity:
            raise ValueError("visible recent wins cannot exceed capacity")

        self.starting_balance = as_money(starting_balance)
        self.visible = visible

        self._balances: Dict[str, Decimal] = {}
        self._wallet_locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

        # Guards the win feed and the pool counters together
        self._feed_lock = threading.Lock()
        self._recent_wins = deque(maxlen=capacity)
        # Seeds arrive newest first; appending keeps that order
        self._recent_wins.extend(list(initial_wins)[:capacity])
        self._pool = pool or PoolStats(
            total_liquidity=Decimal(0),
            user_share=Decimal(0),
            volume_24h=Decimal(0),
            apy=Decimal(0),
        )

    # ==================== Balances ====================

    def _lock_for(self, wallet: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._wallet_locks.get(wallet)
            if lock is None:
                lock = self._wallet_locks[wallet] = threading.RLock()
            return lock

    @contextmanager
    def wallet_lock(self, wallet: str):
        """Hold the wallet's lock for a multi-step balance transaction."""
        with self._lock_for(wallet):
            yield

    def get_balance(self, wallet: str) -> Decimal:
        with self.wallet_lock(wallet):
            balance = self._balances.get(wallet)
            if balance is None:
                balance = self._balances[wallet] = self.starting_balance
                logger.debug(f"Opened wallet {mask_wallet(wallet)} with {balance}")
            return balance

    def ensure_funds(self, wallet: str, bet: Decimal) -> Decimal:
        """Raise InsufficientBalance unless the wallet can cover the bet."""
        balance = self.get_balance(wallet)
        if balance < bet:
            raise InsufficientBalance(wallet, balance, bet)
        return balance

    def debit_then_credit(self, wallet: str, bet: Decimal, payout: Decimal) -> Decimal:
        """
        Take the bet and pay out the winnings as one stored update.
        Nothing is written if the wallet cannot cover the bet.
        """
        with self.wallet_lock(wallet):
            balance = self.ensure_funds(wallet, bet)
            new_balance = balance - bet + payout
            self._balances[wallet] = new_balance
            return new_balance

    # ==================== Feed & Pool ====================

    def record_win(self, win: RecentWin):
        with self._feed_lock:
            self._recent_wins.appendleft(win)

    def recent_wins(self) -> List[RecentWin]:
        """Most recent first, limited to the visible slice."""
        with self._feed_lock:
            return list(self._recent_wins)[: self.visible]

    @property
    def retained_wins(self) -> int:
        with self._feed_lock:
            return len(self._recent_wins)

    def accrue_volume(self, bet: Decimal):
        with self._feed_lock:
            self._pool.volume_24h += bet

    def pool_stats(self) -> PoolStats:
        with self._feed_lock:
            return replace(self._pool)

    def snapshot(self) -> Dict:
        """Everything a spin could touch, for comparing before/after states."""
        with self._feed_lock:
            return {
                "balances": dict(self._balances),
                "recent_wins": list(self._recent_wins),
                "pool": replace(self._pool),
            }
