"""
Selection of mined itemsets and rules: sorting, top-n, pagination and filters.

None of these functions mutate their input; they return new lists.
"""
import math
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

from arminer.exceptions import ConfigurationError
from arminer.rule_mining.types import Itemset, Rule

Result = Union[Itemset, Rule]
T = TypeVar('T', Itemset, Rule)


def _value(element: Result, measure: str) -> float:
    value = element.get(measure)
    if value is None:
        return math.nan
    return float(value)


def sort_by(collection: Iterable[T], measure: str, descending: bool = True) -> List[T]:
    """
    Stable sort of itemsets or rules by a numeric measure.

    Ties keep canonical order (size, then items). Elements whose measure
    is missing or NaN go last in either direction.

    Args:
        collection: Itemsets or rules
        measure: 'support', 'confidence', 'count', 'size' or any measure name
        descending: Largest values first (default)

    Returns:
        New sorted list
    """
    canonical = sorted(collection, key=lambda element: element.sort_key())
    valued = [e for e in canonical if not math.isnan(_value(e, measure))]
    missing = [e for e in canonical if math.isnan(_value(e, measure))]
    valued.sort(key=lambda element: _value(element, measure), reverse=descending)
    return valued + missing


def top(collection: Iterable[T], n: int) -> List[T]:
    """First ``n`` elements; fewer if the collection is smaller."""
    if n < 0:
        raise ConfigurationError(f"n must be non-negative, got {n}")
    return list(collection)[:n]


def paginate(collection: Iterable[T], page: int, page_size: int) -> List[T]:
    """Elements of 1-based ``page``; empty past the last page."""
    if page < 1 or page_size < 1:
        raise ConfigurationError(f"page and page_size must be >= 1, got page={page}, page_size={page_size}")
    start = (page - 1) * page_size
    return list(collection)[start:start + page_size]


def filter_rules(rules: Iterable[Rule], criterion: str, threshold: float) -> List[Rule]:
    """
    Filters rules based on a criterion >= threshold.

    Args:
        rules: List of rules
        criterion: The rule measure to filter on (e.g., 'support', 'confidence', 'lift')
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        List of rules meeting the criterion. Rules where the measure is
        missing or not computable are dropped.
    """
    return [rule for rule in rules if rule.get(criterion, -math.inf) >= threshold]


def filter_rules_by_pattern(
    rules: Iterable[Rule],
    antecedent_contains: Optional[Sequence[str]] = None,
    consequent_contains: Optional[Sequence[str]] = None,
    antecedent_excludes: Optional[Sequence[str]] = None,
    consequent_excludes: Optional[Sequence[str]] = None,
    match_any: bool = False
) -> List[Rule]:
    """
    Filter rules by antecedent/consequent patterns.

    A pattern matches an item when it is a case-insensitive substring of
    the item label (so 'milk' matches 'milk' and 'product__milk').

    Args:
        rules: List of rules
        antecedent_contains: Patterns that must appear in the antecedent
        consequent_contains: Patterns that must appear in the consequent
        antecedent_excludes: Patterns that must NOT appear in the antecedent
        consequent_excludes: Patterns that must NOT appear in the consequent
        match_any: If True, match if ANY pattern matches. If False, ALL must match.

    Returns:
        List of filtered rules
    """
    def normalize_itemset(itemset: Itemset):
        return {item.lower() for item in itemset}

    def matches_patterns(itemset, patterns, match_any_pattern):
        if not patterns:
            return True
        items = normalize_itemset(itemset)
        patterns_lower = [p.lower() for p in patterns]
        hits = (any(p in item for item in items) for p in patterns_lower)
        return any(hits) if match_any_pattern else all(hits)

    def excludes_patterns(itemset, patterns):
        if not patterns:
            return True
        items = normalize_itemset(itemset)
        return not any(any(p.lower() in item for item in items) for p in patterns)

    return [
        rule for rule in rules
        if matches_patterns(rule.antecedent, antecedent_contains, match_any)
        and matches_patterns(rule.consequent, consequent_contains, match_any)
        and excludes_patterns(rule.antecedent, antecedent_excludes)
        and excludes_patterns(rule.consequent, consequent_excludes)
    ]


def filter_rules_by_consequent(rules: Iterable[Rule], targets: Sequence[str], match_any: bool = True) -> List[Rule]:
    """Keep only rules whose consequent matches the target patterns."""
    return filter_rules_by_pattern(rules, consequent_contains=targets, match_any=match_any)


def filter_rules_by_antecedent(rules: Iterable[Rule], patterns: Sequence[str], match_any: bool = True) -> List[Rule]:
    """Keep only rules whose antecedent matches the patterns."""
    return filter_rules_by_pattern(rules, antecedent_contains=patterns, match_any=match_any)


def filter_itemsets(
    itemsets: Iterable[Itemset],
    criterion: str = 'support',
    threshold: float = 0.0
) -> Tuple[List[Itemset], dict]:
    """
    Filters frequent itemsets based on a criterion >= threshold.

    Args:
        itemsets: List of itemsets
        criterion: 'support', 'count' or 'size'
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        Tuple of (filtered_itemsets, stats) where:
            filtered_itemsets: List of itemsets meeting the criterion
            stats: Dictionary with count and average support of the filtered itemsets
    """
    filtered_itemset_list = [i for i in itemsets if i.get(criterion, -math.inf) >= threshold]

    count = len(filtered_itemset_list)
    if count == 0:
        return filtered_itemset_list, {"num_itemsets": 0, "average_support": 0.0}

    avg_support = sum(i.support for i in filtered_itemset_list) / count
    stats = {
        "num_itemsets": count,
        "average_support": round(avg_support, 3),
    }
    return filtered_itemset_list, stats


