import unittest

from components.benchmark import (
    BenchConfig,
    COLUMNS,
    OPS,
    run_benchmark,
    structure_stats,
    summarize,
)
from tries.ternary_trie import TernarySearchTrie


class TestBenchConfig(unittest.TestCase):
    def test_defaults_are_valid(self):
        config = BenchConfig()
        self.assertGreater(config.num_keys, 0)

    def test_invalid_values_raise(self):
        for kwargs in ({"num_keys": 0}, {"prefix_freq": 1.0}, {"repeats": 0}, {"miss_ratio": 1.5}):
            with self.assertRaises(ValueError):
                BenchConfig(**kwargs)


class TestRunBenchmark(unittest.TestCase):
    def test_frame_shape(self):
        df = run_benchmark(BenchConfig(num_keys=50, repeats=2, seed=1))
        self.assertEqual(list(df.columns), COLUMNS)
        self.assertEqual(len(df), 2 * len(OPS))
        self.assertEqual(set(df["op"]), set(OPS))
        self.assertTrue((df["seconds"] >= 0).all())

        first = df[df["repeat"] == 0].set_index("op")
        self.assertEqual(first.loc["insert", "ops"], 50)
        self.assertEqual(first.loc["contains_miss", "ops"], 50)
        self.assertGreater(first.loc["entries", "ops"], 0)
        self.assertLessEqual(first.loc["entries", "ops"], 50)

    def test_balanced_and_prefix_freq(self):
        df = run_benchmark(BenchConfig(num_keys=80, repeats=1, seed=3, balanced=True,
                                       prefix_freq=0.5, miss_ratio=0.5))
        self.assertEqual(len(df), len(OPS))
        self.assertEqual(df.set_index("op").loc["contains_miss", "ops"], 40)

    def test_summarize(self):
        df = run_benchmark(BenchConfig(num_keys=30, repeats=3, seed=11))
        summary = summarize(df)
        self.assertEqual(list(summary["op"]), list(OPS))
        self.assertEqual(list(summary.columns), ["op", "mean", "median", "p95"])
        self.assertTrue((summary["p95"] >= summary["median"]).all())


class TestStructureStats(unittest.TestCase):
    def test_stats(self):
        t = TernarySearchTrie()
        t.insert("ab", 1)
        t.insert("ac", 2)
        self.assertEqual(structure_stats(t), {
            "size": 2,
            "nodes": 3,
            "height": 3,
            "avg_branch_factor": 1.0,
        })


if __name__ == "__main__":
    unittest.main(verbosity=2)
