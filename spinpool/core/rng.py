import random
import secrets


class TrueRNG:
    """
    A wrapper around Python's `secrets` module to provide cryptographically strong
    random numbers for reel outcomes.
    """

    @staticmethod
    def random_float() -> float:
        """Returns a random float in the range [0.0, 1.0)."""
        # secrets.randbelow(n) returns [0, n). We use a large integer range to approximate a float.
        precision = 10**12
        return secrets.randbelow(precision) / precision


class SeededRNG:
    """Reproducible stream with the same interface, for simulations and tests."""

    def __init__(self, seed=None):
        self._random = random.Random(seed)

    def random_float(self) -> float:
        return self._random.random()


rng = TrueRNG()
