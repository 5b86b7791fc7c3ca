#!/usr/bin/env python3
"""
Inspect or reset the high score table.

Usage:
    python backend/cli/high_scores.py list [--limit N]
    python backend/cli/high_scores.py reset [--confirm]
"""

import os
import sys
import argparse

# Add parent directory to path to import database modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from database import get_database_path
from data_access.high_scores import get_top_scores, reset_high_scores


def list_scores(limit: int = 10) -> None:
    scores = get_top_scores(limit=limit)
    if not scores:
        print("No high scores recorded yet.")
        return

    print(f"{'#':>3}  {'Name':<20} {'Score':>6}")
    for rank, entry in enumerate(scores, start=1):
        print(f"{rank:>3}  {entry['name']:<20} {entry['score']:>6}")


def reset(confirm: bool = False) -> bool:
    """
    Delete every high score.

    Args:
        confirm: If True, skip confirmation prompt

    Returns:
        True if reset was successful, False otherwise
    """
    if not confirm:
        print("=" * 70)
        print(f"Database path: {get_database_path()}")
        print("This will DELETE ALL high scores.")
        print("=" * 70)

        response = input("\nType 'RESET' to confirm: ")
        if response != 'RESET':
            print("Reset cancelled")
            return False

    deleted = reset_high_scores()
    print(f"Cleared high_scores: {deleted} rows deleted")
    return True


def main():
    parser = argparse.ArgumentParser(description="Manage the snake high score table")
    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="Show the best scores")
    list_parser.add_argument("--limit", type=int, default=10)

    reset_parser = sub.add_parser("reset", help="Delete all high scores")
    reset_parser.add_argument("--confirm", action="store_true", help="Skip confirmation prompt")

    args = parser.parse_args()
    if args.command == "list":
        list_scores(args.limit)
    else:
        success = reset(confirm=args.confirm)
        sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
