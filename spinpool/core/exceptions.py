class SlotError(Exception):
    """Base class for errors raised while resolving a spin."""

    status_code = 500
    public_message = "Failed to process spin"


class InvalidBet(SlotError):
    """Stake falls outside the configured bounds."""

    status_code = 400

    def __init__(self, bet, min_bet, max_bet):
        self.bet = bet
        self.min_bet = min_bet
        self.max_bet = max_bet
        super().__init__(f"Bet must be between {min_bet} and {max_bet}")

    @property
    def public_message(self) -> str:
        return str(self)


class InsufficientBalance(SlotError):
    """Wallet cannot cover the stake."""

    status_code = 400
    public_message = "Insufficient balance"

    def __init__(self, wallet: str, balance, bet):
        self.wallet = wallet
        self.balance = balance
        self.bet = bet
        super().__init__(self.public_message)


class InternalFailure(SlotError):
    """Unexpected fault while resolving a spin. Callers only see the opaque message."""

    def __init__(self, wallet: str, cause: Exception = None):
        self.wallet = wallet
        self.cause = cause
        super().__init__(f"Spin failed for {wallet}: {cause!r}")
