#!/usr/bin/env python3
import random

from components.work_loads.en_word_generator import generate_random_words, gen_words_with_prefix_freq


class WorkLoad:
    def __init__(self, seed=None):
        self.seed = seed

    def words(self, num_words, p_freq=0, unique=False):
        if p_freq > 0:
            return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique)
        else:
            return generate_random_words(num_words, self.seed, unique)

    def pairs(self, keys, max_value=1_000_000):
        """Attach a seeded positive integer value to every key."""
        if max_value < 1:
            raise ValueError("max_value must be positive")
        rng = random.Random(self.seed)
        return [(k, rng.randint(1, max_value)) for k in keys]
