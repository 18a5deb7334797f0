"""
Association rule generation from frequent itemsets.

For each frequent itemset L the consequents are grown level by level,
starting from single items. conf(A -> L\\A) = count(L) / count(A) can only
drop when A shrinks, so a consequent of size m+1 is only tried when all
of its m-item sub-consequents produced passing rules.
"""
import logging
import time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from joblib import Parallel, delayed
from tqdm.auto import tqdm

from arminer.data.transaction_db import TransactionDatabase
from arminer.rule_mining.types import Itemset, Rule
from arminer.rule_mining.validation import check_max_len, check_min_confidence, check_n_jobs

logger = logging.getLogger(__name__)

Labels = Tuple[str, ...]

MIN_PARALLEL_ITEMSETS = 64


class _CountLookup:
    """Support counts from the mined collection, falling back to the database."""

    def __init__(self, itemsets: Iterable[Itemset], database: TransactionDatabase):
        self.database = database
        self.counts: Dict[Labels, int] = {itemset.items: itemset.count for itemset in itemsets}

    def __call__(self, items: Labels) -> int:
        count = self.counts.get(items)
        if count is None:
            count = self.database.support_count(items)
            self.counts[items] = count
        return count


def _grow_consequents(consequents: Sequence[Labels]) -> List[Labels]:
    """Consequents one item larger whose every sub-consequent is in ``consequents``."""
    known = set(consequents)
    grown = []
    for i, first in enumerate(consequents):
        for second in consequents[i + 1:]:
            if first[:-1] != second[:-1]:
                continue
            candidate = tuple(sorted(first + second[-1:]))
            if all(candidate[:j] + candidate[j + 1:] in known for j in range(len(candidate))):
                grown.append(candidate)
    return sorted(set(grown))


def rules_for_itemset(
        itemset: Itemset,
        lookup: _CountLookup,
        min_confidence: float,
        max_len: Optional[int] = None
) -> List[Rule]:
    """
    All rules A -> L\\A from one frequent itemset that reach ``min_confidence``.

    Consequents are walked top-down by size: singletons first, then every
    level is derived from the consequents that passed on the previous one.
    """
    n = lookup.database.transaction_count
    items = itemset.items
    size = len(items)
    rules: List[Rule] = []
    if size < 2:
        return rules

    consequents = [(item,) for item in items]
    while consequents and len(consequents[0]) < size:
        passed = []
        for consequent in consequents:
            antecedent = tuple(item for item in items if item not in consequent)
            antecedent_count = lookup(antecedent)
            confidence = itemset.count / antecedent_count if antecedent_count else 0.0
            if confidence < min_confidence:
                continue
            passed.append(consequent)
            # a passing consequent still seeds larger ones even if its rule is length-capped
            if max_len is not None and (len(antecedent) > max_len or len(consequent) > max_len):
                continue
            consequent_count = lookup(consequent)
            rules.append(Rule(
                antecedent=Itemset(antecedent, antecedent_count, antecedent_count / n),
                consequent=Itemset(consequent, consequent_count, consequent_count / n),
                support=itemset.support,
                confidence=confidence,
                count=itemset.count,
            ))
        consequents = _grow_consequents(passed)
        if max_len is not None:
            consequents = [c for c in consequents if len(c) <= max_len]
    return rules


def _rules_for_chunk(
        itemsets: Sequence[Itemset],
        lookup: _CountLookup,
        min_confidence: float,
        max_len: Optional[int]
) -> List[Rule]:
    rules = []
    for itemset in itemsets:
        rules.extend(rules_for_itemset(itemset, lookup, min_confidence, max_len))
    return rules


def generate(
        frequent_itemsets: Iterable[Itemset],
        database: TransactionDatabase,
        min_confidence: float,
        max_len: Optional[int] = None,
        n_jobs: int = 1,
        verbose: bool = False
) -> List[Rule]:
    """
    Derive association rules from frequent itemsets.

    Args:
        frequent_itemsets: Output of :func:`arminer.rule_mining.itemsets.mine`
        database: Database the itemsets were mined from
        min_confidence: Minimum confidence in [0, 1]
        max_len: Skip rules whose antecedent or consequent is larger than this
        n_jobs: joblib workers; each itemset is processed by a single worker
        verbose: Show a progress bar

    Returns:
        Rules ordered by source itemset, then consequent size and items.

    Raises:
        ConfigurationError: min_confidence outside [0, 1] or max_len < 1
    """
    min_confidence = check_min_confidence(min_confidence)
    max_len = check_max_len(max_len)
    n_jobs = check_n_jobs(n_jobs)

    start_time = time.time()
    itemsets = sorted(frequent_itemsets, key=Itemset.sort_key)
    lookup = _CountLookup(itemsets, database)
    sources = [itemset for itemset in itemsets if len(itemset) >= 2]

    if n_jobs == 1 or len(sources) < MIN_PARALLEL_ITEMSETS:
        sources_iter = tqdm(sources, desc="Generating rules", unit="itemset") if verbose else sources
        rules = _rules_for_chunk(sources_iter, lookup, min_confidence, max_len)
    else:
        chunk_size = max(1, len(sources) // (8 * abs(n_jobs)))
        chunks = [sources[i:i + chunk_size] for i in range(0, len(sources), chunk_size)]
        chunks_iter = tqdm(chunks, desc="Generating rules", unit="chunk") if verbose else chunks
        results = Parallel(n_jobs=n_jobs)(
            delayed(_rules_for_chunk)(chunk, lookup, min_confidence, max_len) for chunk in chunks_iter
        )
        rules = [rule for chunk_rules in results for rule in chunk_rules]

    logger.info(
        "Generated %d rules from %d itemsets (min_confidence=%s) in %.3fs",
        len(rules), len(sources), min_confidence, time.time() - start_time
    )
    return rules
