import argparse
import os
import sys

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from spinpool.core.logger import init_logging
from spinpool.core.simulation import simulate


def main():
    parser = argparse.ArgumentParser(description="Monte Carlo RTP check for the slot paytable")
    parser.add_argument("--spins", type=int, default=100_000)
    parser.add_argument("--bet", type=float, default=0.1)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    # Per-win INFO lines would drown the report
    init_logging(level="WARNING")

    report = simulate(spins=args.spins, bet=args.bet, seed=args.seed)

    print(f"Spins:            {report['spins']:,}")
    print(f"Bet:              {report['bet']}")
    print(f"Hit rate:         {report['hit_rate']:.4%}")
    print(f"Jackpot rate:     {report['jackpot_rate']:.4%}")
    print(f"Observed RTP:     {report['rtp']:.4%}")
    print(f"Theoretical RTP:  {report['theoretical_rtp']:.4%}")


if __name__ == "__main__":
    main()
