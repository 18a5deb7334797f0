import itertools
import random

import pytest

from arminer import TransactionDatabase

BASKETS = [
    {"bread", "milk"},
    {"bread", "diaper", "beer", "eggs"},
    {"milk", "diaper", "beer", "cola"},
    {"bread", "milk", "diaper", "beer"},
    {"bread", "milk", "diaper", "cola"},
]


@pytest.fixture
def baskets():
    return [set(b) for b in BASKETS]


@pytest.fixture
def db(baskets):
    return TransactionDatabase.build(baskets)


def make_random_transactions(n_transactions=200, n_items=12, seed=7):
    rng = random.Random(seed)
    items = [f"i{j:02d}" for j in range(n_items)]
    weights = [0.6 - 0.04 * j for j in range(n_items)]
    transactions = []
    for _ in range(n_transactions):
        row = {item for item, w in zip(items, weights) if rng.random() < w}
        transactions.append(row or {items[0]})
    return transactions


@pytest.fixture
def random_db():
    return TransactionDatabase.build(make_random_transactions())


def brute_force_frequent(transactions, min_support, max_len=None):
    """Reference: every itemset over the item universe checked against every transaction."""
    n = len(transactions)
    universe = sorted(set().union(*transactions))
    limit = max_len or len(universe)
    result = {}
    for size in range(1, limit + 1):
        found = False
        for combo in itertools.combinations(universe, size):
            count = sum(1 for t in transactions if set(combo) <= t)
            if count / n >= min_support:
                result[combo] = count
                found = True
        if not found:
            break
    return result
