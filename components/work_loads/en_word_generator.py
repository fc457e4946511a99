import random
import math
from collections import defaultdict
from faker.providers.lorem.en_US import Provider as LoremProvider

# Word list shipped with Faker's en_US lorem provider, lowercased and deduplicated
WORDS_COMMON = sorted({w.lower() for w in LoremProvider.word_list if w.isalpha()})


## Bucket words by their first two letters
## This is to generate words with common prefixes
prefix_bucket = defaultdict(list)
for word in WORDS_COMMON:
  prefix_bucket[word[:2]].append(word)
prefixes = list(prefix_bucket.keys())
prefix_weights = [len(prefix_bucket[p]) for p in prefixes]


def generate_random_words(num_words, seed=None, unique=False):
  """
  Return n random words from WORDS_COMMON.
  - unique=False: sample with replacement (fast, allows duplicates)
  - unique=True: sample without replacement (requires n <= len(WORDS_COMMON))
  """
  word_list = WORDS_COMMON
  if num_words < 1 or (unique is True and num_words > len(word_list)):
    raise ValueError(f"num_words must be between 1 and {len(word_list)}")
  rng = random.Random(seed)
  if unique:
    return rng.sample(word_list, num_words)
  return rng.choices(word_list, k=num_words)


def _p_eff_log(x, max_mean=100) -> float:
  # Logarithmic mapping of prefix frequency to effective prefix frequency
  if x < 0 or x >= 1:
    raise ValueError("prefix_freq must be between 0 and 1")
  k = math.log(max_mean)
  p = 1.0 - math.exp(-k * x)
  return min(p, 0.999999)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False):
  """Generates a list of words with a given prefix frequency.
  A higher prefix_freq means more consecutive words share a two-letter prefix,
  which makes the keys share middle-paths in the trie.
  Prefix frequency is applied logarithmically
  prefix_freq: 0 -> 0.999...
  """
  p_eff = _p_eff_log(prefix_freq)

  word_list = WORDS_COMMON
  max_unique = len(word_list)
  if num_words < 1 or (unique is True and num_words > max_unique):
    raise ValueError(f"num_words must be between 1 and {max_unique}")
  rng = random.Random(seed)

  out = []
  seen = set()
  exhausted = set()

  while len(out) < num_words:
    prefix = rng.choices(prefixes, weights=prefix_weights)[0]
    if unique and prefix in exhausted:
      continue
    options = prefix_bucket[prefix]
    if unique:
      options = [w for w in options if w not in seen]
      if not options:
        exhausted.add(prefix)
        continue
    out.append(rng.choice(options))
    if unique: seen.add(out[-1])

    # keep drawing from the same bucket while the trigger fires
    while len(out) < num_words and rng.random() < p_eff:
      options = prefix_bucket[prefix]
      if unique:
        options = [w for w in options if w not in seen]
        if not options:
          exhausted.add(prefix)
          break
      out.append(rng.choice(options))
      if unique: seen.add(out[-1])
  return out
