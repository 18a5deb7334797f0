"""
Level-wise (Apriori) frequent itemset search.

Level k candidates are built by extending every frequent (k-1)-itemset
with a frequent item that sorts after its last item. A candidate is
dropped before counting if any of its (k-1)-subsets is not frequent.
Surviving candidates are counted by posting-list intersection.

Counting inside a level can run on joblib workers; levels are barriers,
level k+1 is only generated once level k is fully merged.
"""
import logging
import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from joblib import Parallel, cpu_count, delayed
from tqdm.auto import tqdm

from arminer.data.transaction_db import TransactionDatabase
from arminer.rule_mining.types import Itemset
from arminer.rule_mining.validation import check_max_len, check_min_support, check_n_jobs

logger = logging.getLogger(__name__)

ItemIds = Tuple[int, ...]

# Below this many candidates a level is counted in-process even when n_jobs != 1
MIN_PARALLEL_CANDIDATES = 256


def generate_candidates(
        previous_level: Sequence[ItemIds],
        frequent_items: Sequence[int]
) -> Tuple[List[ItemIds], int]:
    """
    Build level k candidates from the frequent (k-1)-itemsets.

    Args:
        previous_level: Frequent (k-1)-itemsets as sorted id tuples
        frequent_items: Frequent single item ids, sorted

    Returns:
        Tuple of (candidates, pruned) where candidates are sorted id tuples
        whose every (k-1)-subset is frequent, in canonical order, and pruned
        is the number of extensions discarded by the subset check.
    """
    known = set(previous_level)
    candidates = []
    pruned = 0
    for prefix in sorted(previous_level):
        last = prefix[-1]
        for item in frequent_items:
            if item <= last:
                continue
            candidate = prefix + (item,)
            # dropping the new item gives ``prefix`` itself, skip that subset
            if all(candidate[:i] + candidate[i + 1:] in known for i in range(len(candidate) - 1)):
                candidates.append(candidate)
            else:
                pruned += 1
    return candidates, pruned


def _count_chunk(database: TransactionDatabase, candidates: Sequence[ItemIds]) -> List[int]:
    return [database.count_ids(candidate) for candidate in candidates]


def _chunks(items: Sequence, n_chunks: int) -> List[Sequence]:
    size = max(1, -(-len(items) // n_chunks))
    return [items[i:i + size] for i in range(0, len(items), size)]


def count_candidates(
        database: TransactionDatabase,
        candidates: Sequence[ItemIds],
        n_jobs: int = 1,
        verbose: bool = False,
        desc: str = "Counting candidates"
) -> List[int]:
    """Support counts for ``candidates``, in the same order."""
    if n_jobs == 1 or len(candidates) < MIN_PARALLEL_CANDIDATES:
        candidates_iter = tqdm(candidates, desc=desc, unit="candidate") if verbose else candidates
        return [database.count_ids(candidate) for candidate in candidates_iter]

    n_workers = n_jobs if n_jobs > 0 else max(1, cpu_count() + 1 + n_jobs)
    chunks = _chunks(candidates, n_workers * 4)
    chunks_iter = tqdm(chunks, desc=desc, unit="chunk") if verbose else chunks
    results = Parallel(n_jobs=n_jobs)(
        delayed(_count_chunk)(database, chunk) for chunk in chunks_iter
    )
    return [count for chunk_counts in results for count in chunk_counts]


def _to_itemsets(database: TransactionDatabase, level: Dict[ItemIds, int]) -> List[Itemset]:
    n = database.transaction_count
    return [
        Itemset(tuple(database.label(i) for i in ids), count, count / n)
        for ids, count in sorted(level.items())
    ]


def mine(
        database: TransactionDatabase,
        min_support: float,
        max_len: Optional[int] = None,
        n_jobs: int = 1,
        verbose: bool = False,
        on_level: Optional[Callable[[int, List[Itemset]], None]] = None,
        should_stop: Optional[Callable[[], bool]] = None
) -> List[Itemset]:
    """
    Find every itemset with support >= ``min_support`` and size <= ``max_len``.

    Args:
        database: Transaction database to mine
        min_support: Minimum support fraction in (0, 1]
        max_len: Maximum itemset size, None for unbounded
        n_jobs: joblib workers used to count candidates within a level
        verbose: Show progress bars
        on_level: Called as ``on_level(k, itemsets)`` after each level completes
        should_stop: Polled at each level boundary; returning True ends the
            search with the levels completed so far

    Returns:
        Frequent itemsets with exact supports, ordered by size then items.
        Empty list when no single item is frequent.

    Raises:
        ConfigurationError: min_support outside (0, 1] or max_len < 1
    """
    min_support = check_min_support(min_support)
    max_len = check_max_len(max_len)
    n_jobs = check_n_jobs(n_jobs)

    n = database.transaction_count
    start_time = time.time()

    # Level 1: posting list lengths are the singleton counts
    level: Dict[ItemIds, int] = {}
    for item_id in range(database.item_count):
        count = len(database.posting(item_id))
        if count / n >= min_support:
            level[(item_id,)] = count

    result: List[Itemset] = []
    k = 1
    frequent_items = sorted(ids[0] for ids in level)
    logger.info("Level 1: %d items, %d frequent", database.item_count, len(level))

    while level:
        itemsets = _to_itemsets(database, level)
        result.extend(itemsets)
        if on_level is not None:
            on_level(k, itemsets)

        if max_len is not None and k >= max_len:
            break
        if should_stop is not None and should_stop():
            logger.info("Stop requested after level %d", k)
            break

        k += 1
        candidates, pruned = generate_candidates(list(level), frequent_items)
        if not candidates:
            logger.info("Level %d: no candidates (%d pruned)", k, pruned)
            break

        counts = count_candidates(database, candidates, n_jobs, verbose, desc=f"Level {k}")
        level = {
            candidate: count
            for candidate, count in zip(candidates, counts)
            if count / n >= min_support
        }
        logger.info(
            "Level %d: %d candidates, %d pruned, %d frequent",
            k, len(candidates), pruned, len(level)
        )

    logger.info(
        "Mined %d frequent itemsets (min_support=%s, max_len=%s) in %.3fs",
        len(result), min_support, max_len, time.time() - start_time
    )
    return result
