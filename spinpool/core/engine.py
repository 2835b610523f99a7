"""
Spin resolution: validate the stake, roll the reels, score the grid and
settle the wallet in one step.

A spin moves Idle -> Validating -> Resolving -> Settled, or stops at
Rejected. The balance is written exactly once, at settlement, while the
wallet's lock is held from the funds check onwards.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, List, Tuple

from spinpool.core.exceptions import InternalFailure, InvalidBet, SlotError
from spinpool.core.ledger import (
    Ledger,
    PoolStats,
    RecentWin,
    as_money,
    demo_wins,
    mask_wallet,
)
from spinpool.core.logger import get_logger
from spinpool.core.paylines import evaluate, winning_symbol
from spinpool.core.payout import calculate_payout
from spinpool.core.reels import Grid, ReelGenerator

logger = get_logger("engine")


class SpinState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    RESOLVING = "resolving"
    SETTLED = "settled"
    REJECTED = "rejected"


@dataclass(frozen=True)
class SpinResult:
    reels: Grid
    winning_lines: Tuple[int, ...]
    win_amount: Decimal
    multiplier: Decimal
    is_jackpot: bool

    def symbol_ids(self) -> List[List[str]]:
        return [[symbol.id.value for symbol in column] for column in self.reels]

    def to_dict(self) -> Dict:
        return {
            "reels": self.symbol_ids(),
            "winAmount": float(self.win_amount),
            "winningLines": list(self.winning_lines),
            "isJackpot": self.is_jackpot,
            "multiplier": float(self.multiplier),
        }


@dataclass(frozen=True)
class SpinOutcome:
    result: SpinResult
    balance: Decimal


class SpinEngine:
    """Composes the reel generator, paylines, payout table and ledger into a spin."""

    def __init__(
        self,
        ledger: Ledger,
        reels: ReelGenerator = None,
        min_bet=Decimal("0.01"),
        max_bet=Decimal("1.0"),
    ):
        self.ledger = ledger
        self.reels = reels or ReelGenerator()
        self.min_bet = as_money(min_bet)
        self.max_bet = as_money(max_bet)

    def _transition(self, wallet: str, state: SpinState):
        logger.debug(f"spin {mask_wallet(wallet)} -> {state.value}")

    def validate_bet(self, bet) -> Decimal:
        """Return the bet as Decimal, or raise InvalidBet if it is out of bounds."""
        try:
            amount = as_money(bet)
        except InvalidOperation:
            raise InvalidBet(bet, self.min_bet, self.max_bet) from None
        if not amount.is_finite() or amount < self.min_bet or amount > self.max_bet:
            raise InvalidBet(bet, self.min_bet, self.max_bet)
        return amount

    def _resolve(self, bet: Decimal) -> SpinResult:
        grid = self.reels.generate()
        lines = evaluate(grid)
        amount, multiplier, is_jackpot = calculate_payout(grid, lines, bet)
        return SpinResult(
            reels=grid,
            winning_lines=tuple(lines),
            win_amount=amount,
            multiplier=multiplier,
            is_jackpot=is_jackpot,
        )

    def _record(self, wallet: str, bet: Decimal, result: SpinResult):
        """Bookkeeping after the balance is settled. Failures here never undo the credit."""
        try:
            self.ledger.accrue_volume(bet)
            if result.win_amount > 0:
                symbol = winning_symbol(result.reels, result.winning_lines[0])
                self.ledger.record_win(RecentWin.create(wallet, result.win_amount, symbol.id))
        except Exception:
            logger.error(
                f"Spin for {mask_wallet(wallet)} settled but bookkeeping failed",
                exc_info=True,
            )

    def spin(self, wallet: str, bet) -> SpinOutcome:
        """
        Resolve one spin for a wallet.

        Raises:
            InvalidBet: stake outside [min_bet, max_bet]; nothing changes.
            InsufficientBalance: wallet cannot cover the stake; nothing changes.
            InternalFailure: unexpected fault before settlement; balance untouched.
        """
        self._transition(wallet, SpinState.IDLE)
        self._transition(wallet, SpinState.VALIDATING)
        try:
            amount = self.validate_bet(bet)
        except InvalidBet as e:
            self._transition(wallet, SpinState.REJECTED)
            logger.info(f"Rejected spin for {mask_wallet(wallet)}: {e}")
            raise

        with self.ledger.wallet_lock(wallet):
            self._transition(wallet, SpinState.RESOLVING)
            try:
                self.ledger.ensure_funds(wallet, amount)
                result = self._resolve(amount)
                new_balance = self.ledger.debit_then_credit(wallet, amount, result.win_amount)
            except SlotError as e:
                self._transition(wallet, SpinState.REJECTED)
                logger.info(f"Rejected spin for {mask_wallet(wallet)}: {e}")
                raise
            except Exception as e:
                self._transition(wallet, SpinState.REJECTED)
                logger.error(f"Spin failed for {mask_wallet(wallet)}", exc_info=True)
                raise InternalFailure(wallet, e) from e

            self._transition(wallet, SpinState.SETTLED)
            self._record(wallet, amount, result)

        if result.is_jackpot:
            logger.info(
                f"JACKPOT {mask_wallet(wallet)} won {result.win_amount} "
                f"(x{result.multiplier}) on lines {list(result.winning_lines)}"
            )
        elif result.win_amount > 0:
            logger.info(f"{mask_wallet(wallet)} won {result.win_amount} (x{result.multiplier})")

        return SpinOutcome(result=result, balance=new_balance)

    # ==================== Read side ====================

    def get_balance(self, wallet: str) -> Decimal:
        return self.ledger.get_balance(wallet)

    def get_recent_wins(self) -> List[RecentWin]:
        return self.ledger.recent_wins()

    def get_pool_stats(self):
        return self.ledger.pool_stats()


def build_engine(config, seed_demo_wins: bool = None, reels: ReelGenerator = None) -> SpinEngine:
    """Construct a fresh ledger and engine from an AppConfig."""
    slots = config.slots
    pool = config.pool
    if seed_demo_wins is None:
        seed_demo_wins = slots.seed_demo_wins

    ledger = Ledger(
        starting_balance=slots.starting_balance,
        pool=PoolStats(
            total_liquidity=as_money(pool.total_liquidity),
            user_share=as_money(pool.user_share),
            volume_24h=as_money(pool.volume_24h),
            apy=as_money(pool.apy),
        ),
        capacity=slots.recent_wins_capacity,
        visible=slots.recent_wins_visible,
        initial_wins=demo_wins() if seed_demo_wins else (),
    )
    return SpinEngine(ledger, reels=reels, min_bet=slots.min_bet, max_bet=slots.max_bet)
