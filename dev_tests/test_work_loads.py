import unittest
from collections import Counter

from components.work_loads.en_word_generator import (
    WORDS_COMMON,
    gen_words_with_prefix_freq,
    generate_random_words,
)
from components.workload import WorkLoad


# ---------- Helpers for prefix clustering metrics ----------
def two_prefix(w: str) -> str:
    return w[:2] if len(w) >= 2 else w

def avg_run_length(words):
    """Average run-length of consecutive identical 2-char prefixes."""
    if not words:
        return 0.0
    prev = two_prefix(words[0])
    run = 1
    runs = []
    for w in words[1:]:
        p = two_prefix(w)
        if p == prev:
            run += 1
        else:
            runs.append(run)
            run = 1
            prev = p
    runs.append(run)
    return sum(runs) / len(runs)

def prefix_hhi(words):
    """Herfindahl-Hirschman index over 2-char prefixes; higher => more concentrated."""
    n = len(words)
    if n == 0:
        return 0.0
    counts = Counter(two_prefix(w) for w in words)
    return sum((c / n) ** 2 for c in counts.values())


# ---------------------------------- Tests ----------------------------------
class TestWordList(unittest.TestCase):
    def test_words_are_valid_trie_keys(self):
        self.assertGreater(len(WORDS_COMMON), 100)
        self.assertTrue(all(w and w.isalpha() and w == w.lower() for w in WORDS_COMMON))
        self.assertEqual(len(set(WORDS_COMMON)), len(WORDS_COMMON))


class TestGenerateRandomWords(unittest.TestCase):
    def test_length_and_types_nonunique(self):
        n = 5_000
        words = generate_random_words(n, seed=123, unique=False)
        self.assertEqual(len(words), n)
        self.assertTrue(all(isinstance(w, str) and len(w) > 0 for w in words))

    def test_reproducibility(self):
        n = 2_000
        a = generate_random_words(n, seed=999, unique=False)
        b = generate_random_words(n, seed=999, unique=False)
        c = generate_random_words(n, seed=1000, unique=False)
        self.assertEqual(a, b)          # same seed => identical
        self.assertNotEqual(a, c)       # different seed => very likely different

    def test_uniqueness(self):
        n = len(WORDS_COMMON) // 2
        words = generate_random_words(n, seed=42, unique=True)
        self.assertEqual(len(words), n)
        self.assertEqual(len(set(words)), n)

    def test_unique_overflow_raises(self):
        with self.assertRaises(ValueError):
            generate_random_words(len(WORDS_COMMON) + 1, seed=1, unique=True)

    def test_zero_words_raises(self):
        with self.assertRaises(ValueError):
            generate_random_words(0)


class TestPrefixFrequencyGenerator(unittest.TestCase):
    def test_basic_length_and_types(self):
        n = 5_000
        words = gen_words_with_prefix_freq(n, prefix_freq=0.0, seed=7, unique=False)
        self.assertEqual(len(words), n)
        self.assertTrue(all(w in WORDS_COMMON for w in words[:200]))

    def test_prefix_clustering_effectiveness(self):
        n = 5_000
        low = gen_words_with_prefix_freq(n, prefix_freq=0.0, seed=123, unique=False)
        high = gen_words_with_prefix_freq(n, prefix_freq=0.8, seed=123, unique=False)

        arl_low = avg_run_length(low)
        arl_high = avg_run_length(high)
        self.assertGreater(arl_high, max(arl_low * 3.0, 3.0))
        self.assertGreaterEqual(prefix_hhi(high), 0.0)

    def test_unique_mode_no_duplicates(self):
        n = len(WORDS_COMMON) // 2
        words = gen_words_with_prefix_freq(n, prefix_freq=0.5, seed=9, unique=True)
        self.assertEqual(len(words), n)
        self.assertEqual(len(set(words)), n)

    def test_same_seed_reproducibility(self):
        a = gen_words_with_prefix_freq(1_000, prefix_freq=0.5, seed=2024)
        b = gen_words_with_prefix_freq(1_000, prefix_freq=0.5, seed=2024)
        self.assertEqual(a, b)

    def test_invalid_arguments_raise(self):
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(0, prefix_freq=0.3, seed=1)
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(10, prefix_freq=1.0, seed=1)
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(10, prefix_freq=-0.1, seed=1)


class TestWorkLoad(unittest.TestCase):
    def test_words_dispatch(self):
        wl = WorkLoad(seed=5)
        self.assertEqual(wl.words(100), generate_random_words(100, 5))
        self.assertEqual(wl.words(100, p_freq=0.4), gen_words_with_prefix_freq(100, 0.4, 5))

    def test_pairs(self):
        wl = WorkLoad(seed=5)
        keys = wl.words(50)
        pairs = wl.pairs(keys)
        self.assertEqual([k for k, _ in pairs], keys)
        self.assertTrue(all(v >= 1 for _, v in pairs))
        self.assertEqual(pairs, WorkLoad(seed=5).pairs(keys))
        with self.assertRaises(ValueError):
            wl.pairs(keys, max_value=0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
