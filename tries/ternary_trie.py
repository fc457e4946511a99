"""
Ternary Search Trie (character-per-node, three-way branching) with batch operations.

This module provides an ordered associative container mapping non-empty string
keys to values. Each node stores one character and three children:
- **low / high:** binary-search branching on the *same* key position
  (characters that compare less / greater than the node's symbol).
- **middle:** trie branching to the *next* key position.

Key design choices:
- **Memory efficiency:** `TSTNode` uses `__slots__`; nodes are created lazily,
  only when an insertion first needs a character slot.
- **Explicit absence:** a node's `value` slot is `None` when no key ends there.
  `None` is never accepted as a payload, so `0`, `""` or `False` are ordinary
  present values.
- **Iterative traversals:** descent and in-order enumeration use loops and an
  explicit stack (no recursion), so very long keys never hit Python's
  recursion limit.
- **Batch performance:** `batch_insert` sorts and deduplicates a batch once and
  inserts it median-first, so a sorted batch does not degenerate into a chain.


Classes
-------
TSTNode
    Minimal node holding `symbol`, `value` and the `low`/`middle`/`high` children.
TernarySearchTrie
    Public API for insert, lookup, removal, ordered enumeration and structural stats.


Complexity (typical)
--------------------
- insert / value / contains / remove: O(d) where d is the depth traversed
  (bounded by key length plus the low/high detours on the way)
- entries / enumerate_prefix: O(n) over the nodes visited
- batch insert: O(n log n) for sorting plus one insert per key


Conventions & Notes
-------------------
- **Removal semantics:** `remove` only clears the value slot. The node stays in
  place as a structural branch point, so the node count never shrinks; only
  `size()` does.
- **Duplicates:** `insert` never overwrites. A second insert of a present key
  returns False and leaves the stored value as is.
- **Empty key:** rejected with `InvalidKeyError`; a zero-length key has no
  terminal node in a ternary trie.
- **Normalization:** pass `normalize` (e.g. `str.casefold`) to the constructor
  to apply it to every key at the API boundary.
    """

import logging

log = logging.getLogger("tstbench")

_VISIT, _EMIT = 0, 1


class InvalidKeyError(ValueError):
  """Raised for keys that are not non-empty strings."""


class InvalidValueError(ValueError):
  """Raised when `None` is given as a payload; `None` marks an absent value."""


class TSTNode:
  __slots__ = ("symbol", "value", "low", "middle", "high")

  def __init__(self, symbol):
    self.symbol = symbol
    self.value = None
    self.low = None
    self.middle = None
    self.high = None


class TernarySearchTrie:
  __slots__ = ("root", "_count", "normalize")

  def __init__(self, normalize=None):
    self.root = None
    self._count = 0
    self.normalize = normalize

  def __len__(self):
    return self._count

  def __contains__(self, key):
    try:
      return self.contains(key)
    except InvalidKeyError:
      return False

  def __iter__(self):
    for key, _ in self.entries():
      yield key

  def __repr__(self):
    return f"{type(self).__name__}(size={self._count})"

  def _check_key(self, key):
    """Validate and normalize a key at the API boundary.

    Raises
    ------
    InvalidKeyError
        If `key` is not a str, or is empty (before or after normalization).
    """
    if not isinstance(key, str):
      raise InvalidKeyError(f"key must be a str, got {type(key).__name__}")
    if self.normalize is not None:
      key = self.normalize(key)
    if not key:
      raise InvalidKeyError("key must be a non-empty string")
    return key

  def _find(self, key):
    """Return the node where `key` ends, or None if the path is missing.

    The node may hold an absent value (passthrough or removed key).
    """
    node = self.root
    last = len(key) - 1
    i = 0
    while node is not None:
      ch = key[i]
      if ch < node.symbol:
        node = node.low
      elif ch > node.symbol:
        node = node.high
      elif i == last:
        return node
      else:
        i += 1
        node = node.middle
    return None

  def _insert(self, key, value):
    if self.root is None:
      self.root = TSTNode(key[0])
    node = self.root
    last = len(key) - 1
    i = 0

    while True:
      ch = key[i]
      if ch < node.symbol:
        if node.low is None:
          node.low = TSTNode(ch)
        node = node.low
      elif ch > node.symbol:
        if node.high is None:
          node.high = TSTNode(ch)
        node = node.high
      elif i == last:
        if node.value is not None:
          return False
        node.value = value
        self._count += 1
        return True
      else:
        i += 1
        if node.middle is None:
          node.middle = TSTNode(key[i])
        node = node.middle

  def _remove(self, key):
    node = self._find(key)
    if node is None or node.value is None:
      return False
    node.value = None
    self._count -= 1
    return True

  def make_empty(self):
    """Drop every node and reset the key count to zero."""
    self.root = None
    self._count = 0
    log.debug("trie emptied")

  def is_empty(self):
    """Return True if the trie holds no nodes at all.

    A trie whose keys were all removed still has its structural nodes, so it
    is not empty in this sense even though `size()` is 0.
    """
    return self.root is None

  def size(self):
    return self._count

  def insert(self, key, value):
    """Insert a key/value pair; existing keys are never overwritten.

    Parameters
    ----------
    key : str
        Non-empty key.
    value : Any
        Payload to store. Must not be None.

    Returns
    -------
    bool
        True if the key was added, False if it already had a value.

    Raises
    ------
    InvalidKeyError, InvalidValueError
        Raised before the trie is touched.

    Complexity
    ----------
    O(d) time, O(new_nodes) space where d is the depth traversed.
    """
    key = self._check_key(key)
    if value is None:
      raise InvalidValueError("None is reserved for absent values")
    return self._insert(key, value)

  def value(self, key):
    """Return the value stored under `key`, or None if it is absent."""
    node = self._find(self._check_key(key))
    return None if node is None else node.value

  def contains(self, key):
    return self.value(key) is not None

  def remove(self, key):
    """Clear the value stored under `key`.

    Returns
    -------
    bool
        True if a present value was cleared (the size shrinks by one); False
        if the key was missing or already removed.

    Notes
    -----
    The terminal node is kept as a branch point; no nodes are freed.
    """
    return self._remove(self._check_key(key))

  def _walk_entries(self, node, key):
    """Yield (key, value) pairs under `node` in order, prefixing keys with `key`.

    Implementation detail
    ---------------------
    The stack holds visit frames for subtrees and emit frames for values, pushed
    in reverse (high, middle, emit, low) so they pop in order
    (low, emit, middle, high).
    """
    if node is None:
      return
    stack = [(_VISIT, node, key)]

    while stack:
      kind, item, key = stack.pop()
      if kind == _EMIT:
        yield key, item
        continue

      word = key + item.symbol
      if item.high is not None:
        stack.append((_VISIT, item.high, key))
      if item.middle is not None:
        stack.append((_VISIT, item.middle, word))
      if item.value is not None:
        stack.append((_EMIT, item.value, word))
      if item.low is not None:
        stack.append((_VISIT, item.low, key))

  def entries(self):
    """Lazily yield every (key, value) pair in lexicographic key order."""
    return self._walk_entries(self.root, "")

  def enumerate_prefix(self, prefix, k=None):
    """Yield (key, value) pairs whose key starts with `prefix`, in order.

    Parameters
    ----------
    prefix : str
        Prefix to enumerate from. Use "" to export the entire trie.
    k : int | None, default=None
        If None, yield all matches; otherwise, yield up to `k` matches.

    Yields
    ------
    tuple[str, Any]
        Matching entries (keys in normalized form).
    """
    if not isinstance(prefix, str):
      raise InvalidKeyError(f"prefix must be a str, got {type(prefix).__name__}")
    if self.normalize is not None:
      prefix = self.normalize(prefix)
    if k is not None and k <= 0:
      return

    if not prefix:
      it = self.entries()
    else:
      node = self._find(prefix)
      if node is None:
        return
      it = self._walk_entries(node.middle, prefix)
      if node.value is not None:
        yield prefix, node.value
        if k is not None:
          k -= 1
          if k == 0:
            return

    for yielded, pair in enumerate(it, 1):
      yield pair
      if k is not None and yielded >= k:
        return

  def _prepare_batch(self, items, dedup=True, presorted=False):
    """Normalize, validate and optionally sort/deduplicate a batch of pairs.

    Parameters
    ----------
    items : Iterable[tuple[str, Any]]
        Incoming key/value pairs. Values of None are rejected.
    dedup : bool, default=True
        Keep only the first pair for each key.
    presorted : bool, default=False
        If True, `items` is already sorted by key under the trie's normalization.

    Returns
    -------
    list[tuple[str, Any]]
        Validated pairs ready for batch ops.

    Complexity
    ----------
    O(n log n) when sorting; O(n) when `presorted=True`.
    """
    prepared = []
    for key, value in items:
      if value is None:
        raise InvalidValueError(f"None is reserved for absent values (key {key!r})")
      prepared.append((self._check_key(key), value))

    if not presorted:
      # sorted() is stable, so the first pair of a run is the first seen
      prepared.sort(key=lambda kv: kv[0])

    if dedup:
      unique = []
      last = None
      for kv in prepared:
        if kv[0] != last:
          unique.append(kv)
          last = kv[0]
      return unique
    return prepared

  def batch_insert(self,
                   items,
                   *,
                   dedup=True,
                   presorted=False,
                   balanced=True):
    """Bulk-insert many key/value pairs.

    Parameters
    ----------
    items : Iterable[tuple[str, Any]]
        Pairs to insert.
    dedup, presorted
        See `_prepare_batch`.
    balanced : bool, default=True
        Insert the sorted batch median-first. Sorted insertion order is the
        worst case for a ternary trie (every level becomes a high-chain);
        median-first keeps the low/high subtrees close to balanced.

    Returns
    -------
    tuple[int, int]
        (inserted_count, duplicate_count)

    Notes
    -----
    The whole batch is validated before any insertion happens.
    """
    pairs = self._prepare_batch(items, dedup, presorted)
    order = _median_first(len(pairs)) if balanced else range(len(pairs))

    inserted = 0
    duplicates = 0
    for idx in order:
      key, value = pairs[idx]
      if self._insert(key, value):
        inserted += 1
      else:
        duplicates += 1
    log.debug("batch_insert: %d inserted, %d duplicates", inserted, duplicates)
    return inserted, duplicates

  def batch_delete(self,
                   keys,
                   *,
                   dedup=True,
                   presorted=False):
    """Bulk-remove many keys.

    Returns
    -------
    tuple[int, int]
        (deleted_count, missing_count)
    """
    keys = [self._check_key(k) for k in keys]
    if not presorted:
      keys.sort()
    if dedup:
      keys = [k for i, k in enumerate(keys) if i == 0 or k != keys[i - 1]]

    deleted = 0
    missing = 0
    for key in keys:
      if self._remove(key):
        deleted += 1
      else:
        missing += 1
    log.debug("batch_delete: %d deleted, %d missing", deleted, missing)
    return deleted, missing

  def height(self):
    """Return the number of nodes on the longest root-to-leaf path (0 if empty)."""
    if self.root is None:
      return 0
    best = 0
    stack = [(self.root, 1)]
    while stack:
      node, depth = stack.pop()
      if depth > best:
        best = depth
      for child in (node.low, node.middle, node.high):
        if child is not None:
          stack.append((child, depth + 1))
    return best

  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If False, return the total node count (removed keys included).
        If True, return the average number of non-null children over nodes
        that have at least one child.

    Returns
    -------
    int | float

    Complexity
    ----------
    O(#nodes) time, O(depth) extra space.
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [] if self.root is None else [self.root]
    while stack:
      node = stack.pop()
      total_nodes += 1
      deg = 0
      for child in (node.low, node.middle, node.high):
        if child is not None:
          deg += 1
          stack.append(child)
      if deg:
        total_deg += deg
        internal += 1
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes


def _median_first(n):
  """Yield indices 0..n-1 so that every range's median precedes its halves."""
  stack = [(0, n)]
  while stack:
    lo, hi = stack.pop()
    if lo >= hi:
      continue
    mid = (lo + hi) // 2
    yield mid
    stack.append((mid + 1, hi))
    stack.append((lo, mid))
