#!/usr/bin/env python3
"""
Ternary search trie demo

Replays a short insert / print / value / contains / remove session against
a TernarySearchTrie and prints what each call returns.
"""

from __future__ import annotations

import argparse
import logging

from tries.ternary_trie import TernarySearchTrie


# Logging setup

logging.basicConfig(
    level=logging.INFO,
    format="[%(levelname)s] %(message)s",
)
log = logging.getLogger("tstbench")

DEMO_PAIRS = [
    ("bag", 10),
    ("bat", 20),
    ("cab", 70),
    ("bagel", 30),
    ("beet", 40),
    ("abc", 60),
]


def format_entries(trie: TernarySearchTrie) -> list[str]:
    """Render entries one per line as `key value`, in key order."""
    return [f"{key} {value}" for key, value in trie.entries()]


def run_demo(trie: TernarySearchTrie | None = None) -> list[str]:
    """Run the demo session and return the printed lines."""
    t = TernarySearchTrie() if trie is None else trie
    lines: list[str] = []

    for key, value in DEMO_PAIRS:
        if not t.insert(key, value):
            log.warning("duplicate key rejected: %s", key)

    lines.extend(format_entries(t))
    lines.append(str(t.size()))

    for key in ("abc", "beet", "a"):
        lines.append(str(t.value(key)))

    for key in ("baet", "beet", "abc"):
        lines.append(str(t.contains(key)))

    lines.append(str(t.remove("beet")))
    lines.append(str(t.contains("beet")))

    lines.extend(format_entries(t))
    return lines


# Entry point

def main() -> None:
    parser = argparse.ArgumentParser(
        description="Ternary search trie demo -- insert, look up and remove a few keys",
    )
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug-level logging")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    for line in run_demo():
        print(line)


if __name__ == "__main__":
    main()
