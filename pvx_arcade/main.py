"""
PixelVault Arcade: CLI Entry Point

Usage:
    # Let the auto-miner find a block
    python -m pvx_arcade --auto --difficulty 3 --nonces-per-frame 256

    # Play Hashlord by typing nonces
    python -m pvx_arcade --play --difficulty 2

    # Benchmark mode (measure SHA3 attempt hashing speed)
    python -m pvx_arcade --benchmark --batch-size 16384
"""

import argparse
import json
import logging
import sys
from typing import Optional, TextIO

import numpy as np

from . import config
from .crypto.pow_hash import DifficultyTarget, hash_batch
from .errors import InvalidArgument
from .games.engine import GameType, create_game
from .games.session import GameResult
from .mining.autominer import AutoMiner, MiningStats, format_nonce_rate


def setup_logging(verbose: bool = False):
    """Log game and miner events to stderr; jax stays at WARNING unless verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s | %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    if not verbose:
        logging.getLogger("jax").setLevel(logging.WARNING)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="PixelVault Arcade: learn proof-of-work by mining Hashlord blocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Auto-mine:   python -m pvx_arcade --auto --difficulty 3
  Play:        python -m pvx_arcade --play --difficulty 2
  Benchmark:   python -m pvx_arcade --benchmark --batch-size 16384
        """,
    )

    # Mode selection
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "--auto", action="store_true",
        help="Auto-mine a session with sequential nonces",
    )
    mode.add_argument(
        "--play", action="store_true",
        help="Play interactively, one nonce per line on stdin",
    )
    mode.add_argument(
        "--benchmark", action="store_true",
        help="Measure attempt hashing throughput",
    )

    # Game config
    parser.add_argument(
        "--game", type=str, default=GameType.HASHLORD.value,
        choices=[t.value for t in GameType],
        help="Game type (default: hashlord)",
    )
    parser.add_argument(
        "--difficulty", "-d", type=int, default=config.DEFAULT_DIFFICULTY,
        help=f"Leading zero hex chars required (default: {config.DEFAULT_DIFFICULTY})",
    )
    parser.add_argument(
        "--no-cap", action="store_true",
        help=f"Allow difficulty above {config.MAX_UI_DIFFICULTY}",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for the particle animation",
    )

    # Auto-miner config
    parser.add_argument(
        "--nonce-start", type=int, default=0,
        help="First nonce to try (default: 0)",
    )
    parser.add_argument(
        "--nonces-per-frame", "-n", type=int, default=config.NONCES_PER_FRAME,
        help=f"Nonces submitted per frame (default: {config.NONCES_PER_FRAME})",
    )
    parser.add_argument(
        "--max-attempts", type=int, default=None,
        help="Give up after this many attempts (default: unlimited)",
    )
    parser.add_argument(
        "--stats-interval", type=float, default=config.STATS_INTERVAL,
        help=f"Seconds between nonce rate reports (default: {config.STATS_INTERVAL:g})",
    )

    # Benchmark config
    parser.add_argument(
        "--batch-size", "-b", type=int, default=4096,
        help="Nonces per benchmark batch (default: 4096)",
    )
    parser.add_argument(
        "--duration", type=float, default=10.0,
        help="Benchmark duration in seconds (default: 10)",
    )

    parser.add_argument(
        "--json", action="store_true",
        help="Print the game result as JSON",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Verbose debug output",
    )

    return parser.parse_args(argv)


def effective_difficulty(difficulty: int, no_cap: bool = False) -> int:
    """Cap difficulty at the UI maximum unless ``no_cap`` is set."""
    if no_cap:
        return difficulty
    return min(difficulty, config.MAX_UI_DIFFICULTY)


def print_result(result: GameResult, as_json: bool = False, out: Optional[TextIO] = None):
    out = out or sys.stdout
    if as_json:
        out.write(json.dumps(result.to_dict(), indent=2) + "\n")
        return

    stats = result.stats
    out.write(f"{'Block mined!' if result.success else 'No block found.'}\n")
    out.write(f"  {result.message}\n")
    out.write(f"  Reward:     {result.reward} μPVX\n")
    out.write(f"  Score:      {stats.score}\n")
    out.write(f"  Attempts:   {stats.attempts}\n")
    out.write(f"  Time:       {stats.completion_time:.2f}s\n")
    out.write(f"  Difficulty: {stats.difficulty}\n")
    out.write(f"  Hash rate:  {format_nonce_rate(stats.hash_rate)}\n")


def run_benchmark(batch_size: int, duration: float = 10.0, label: str = config.SESSION_LABEL) -> int:
    """
    Measure how many Hashlord attempts per second this machine hashes.

    Each batch is one attempt number with ``batch_size`` consecutive nonces.

    Returns:
        Sustained rate in nonces/s
    """
    logger = logging.getLogger("benchmark")

    logger.info("=" * 60)
    logger.info("  PixelVault Arcade: Benchmark Mode")
    logger.info(f"  Batch size: {batch_size}")
    logger.info(f"  Duration: {duration}s")
    logger.info("=" * 60)

    target = DifficultyTarget(config.DEFAULT_DIFFICULTY)
    stats = MiningStats()
    blocks = 0
    nonce_offset = 0
    attempt = 1

    while stats.elapsed < duration:
        nonces = np.arange(nonce_offset, nonce_offset + batch_size, dtype=np.uint64)
        nonce_offset += batch_size

        for digest in hash_batch(label, attempt, nonces):
            stats.record(digest)
            if target.is_satisfied_by(digest):
                blocks += 1
        attempt += 1

    rate = stats.nonce_rate
    logger.info(f"Sustained rate: {format_nonce_rate(rate)}")
    logger.info(f"Nonces hashed: {stats.attempts:,} in {stats.elapsed:.1f}s")
    logger.info(f"Blocks at difficulty {target.difficulty}: {blocks:,}")
    logger.info(f"Best digest: {stats.best_zeros} leading zero(s)")
    logger.info("Benchmark complete")
    return rate


def run_auto(args: argparse.Namespace) -> GameResult:
    """Auto-mine one session with the given arguments."""
    game = create_game(
        args.game,
        effective_difficulty(args.difficulty, args.no_cap),
        seed=args.seed,
    )
    miner = AutoMiner(
        game,
        nonce_start=args.nonce_start,
        nonces_per_frame=args.nonces_per_frame,
        max_attempts=args.max_attempts,
        stats_interval=args.stats_interval,
    )
    return miner.run()


def run_interactive(
    args: argparse.Namespace,
    stdin: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
) -> Optional[GameResult]:
    """
    Play a session by reading one nonce per line.

    Returns:
        The final result, or None if input ended before a block was found
    """
    stdin = stdin or sys.stdin
    out = out or sys.stdout
    game = create_game(
        args.game,
        effective_difficulty(args.difficulty, args.no_cap),
        seed=args.seed,
    )
    game.init()
    out.write(f"Find a nonce whose hash starts with {game.session.target_prefix}. "
              f"Empty line or 'q' quits.\n")

    for line in stdin:
        text = line.strip()
        if text in ("", "q", "quit"):
            break
        try:
            nonce = int(text)
        except ValueError:
            out.write("Invalid Nonce: please enter a valid number\n")
            continue

        game.handle_input(nonce)
        session = game.session
        out.write(f"#{session.attempts} nonce={nonce} hash={session.current_hash}\n")

        if game.is_completed():
            return game.get_result()

    return None


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.benchmark:
            run_benchmark(args.batch_size, args.duration)
            return 0

        if args.auto:
            result = run_auto(args)
        else:
            result = run_interactive(args)
            if result is None:
                print("Mining Failed: no valid nonce submitted")
                return 1
    except InvalidArgument as e:
        print(f"Error: {e}")
        return 1

    print_result(result, args.json)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
