"""
Timing harness for the ternary search trie.

Each repeat builds a fresh trie from a seeded word workload and times the
public operations over the whole key set. Results come back as a tidy pandas
DataFrame (one row per repeat and operation) so callers can chart or
aggregate them.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from components.workload import WorkLoad
from tries.ternary_trie import TernarySearchTrie

logger = logging.getLogger("tstbench.bench")

OPS = ("insert", "value", "contains_miss", "entries", "remove")
COLUMNS = ["repeat", "op", "ops", "seconds", "us_per_op"]


## === Config Class === ##

@dataclass
class BenchConfig:
    """
    Configuration for run_benchmark
        num_keys: int, number of words drawn per repeat (duplicates included)
        prefix_freq: float, prefix clustering of the words, in [0, 1)
        repeats: int, number of fresh tries built and timed
        seed: int, seed for the workload; repeat i uses seed + i
        balanced: bool, build with batch_insert(balanced=True) instead of single inserts
        miss_ratio: float, share of num_keys used for absent-key lookups
    """
    num_keys: int = 500
    prefix_freq: float = 0.0
    repeats: int = 3
    seed: Optional[int] = None
    balanced: bool = False
    miss_ratio: float = 1.0

    def __post_init__(self):
        if self.num_keys < 1:
            raise ValueError("num_keys must be positive")
        if not 0 <= self.prefix_freq < 1:
            raise ValueError("prefix_freq must be between 0 and 1")
        if self.repeats < 1:
            raise ValueError("repeats must be positive")
        if not 0 <= self.miss_ratio <= 1:
            raise ValueError("miss_ratio must be between 0 and 1")


def _timed(fn):
    t0 = time.perf_counter()
    ops = fn()
    return ops, time.perf_counter() - t0


def _run_once(config, seed):
    wl = WorkLoad(seed)
    keys = wl.words(config.num_keys, p_freq=config.prefix_freq)
    pairs = wl.pairs(keys)
    # words are alphabetic, so a trailing "~" never hits
    misses = [k + "~" for k in keys[:int(len(keys) * config.miss_ratio)]]
    trie = TernarySearchTrie()

    def insert():
        if config.balanced:
            trie.batch_insert(pairs, dedup=False)
        else:
            for k, v in pairs:
                trie.insert(k, v)
        return len(pairs)

    def value():
        for k in keys:
            trie.value(k)
        return len(keys)

    def contains_miss():
        for k in misses:
            trie.contains(k)
        return len(misses)

    def entries():
        return sum(1 for _ in trie.entries())

    def remove():
        for k in keys:
            trie.remove(k)
        return len(keys)

    steps = {
        "insert": insert,
        "value": value,
        "contains_miss": contains_miss,
        "entries": entries,
        "remove": remove,
    }
    return [(op,) + _timed(steps[op]) for op in OPS]


def run_benchmark(config: BenchConfig) -> pd.DataFrame:
    """Time every trie operation `config.repeats` times.

    Returns
    -------
    pandas.DataFrame
        Columns `repeat, op, ops, seconds, us_per_op`.
    """
    rows = []
    for r in range(config.repeats):
        seed = None if config.seed is None else config.seed + r
        for op, ops, seconds in _run_once(config, seed):
            us = (seconds * 1e6 / ops) if ops else 0.0
            rows.append((r, op, ops, seconds, us))
        logger.debug("repeat %d done", r)

    logger.info("benchmark: %d keys x %d repeats", config.num_keys, config.repeats)
    return pd.DataFrame(rows, columns=COLUMNS)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Per-op mean / median / p95 of `us_per_op`, in OPS order."""
    summary = df.groupby("op")["us_per_op"].agg(
        mean="mean",
        median="median",
        p95=lambda s: float(np.percentile(s, 95)),
    )
    rank = {op: i for i, op in enumerate(OPS)}
    summary = summary.reset_index()
    return summary.sort_values("op", key=lambda s: s.map(rank)).reset_index(drop=True)


def structure_stats(trie: TernarySearchTrie) -> dict:
    return {
        "size": trie.size(),
        "nodes": trie.count_nodes(),
        "height": trie.height(),
        "avg_branch_factor": trie.count_nodes(get_avg_branch_factor=True),
    }
