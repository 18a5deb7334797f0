"""
pandas views of mining results, for downstream persistence or plotting.
"""
from typing import Iterable, List, Optional, Sequence, Union

import pandas as pd
from mlxtend.preprocessing import TransactionEncoder

from arminer.data.transaction_db import TransactionDatabase
from arminer.rule_mining.types import Itemset, Rule

RULE_COLUMNS = ['antecedents', 'consequents', 'support', 'confidence', 'lift', 'phi', 'gini']


def format_itemset(itemset: Union[Itemset, Iterable[str]], separator: str = ' AND ') -> str:
    """Convert an itemset to 'a AND b' form; ``feature__value`` items become ``feature=value``."""
    parts = []
    for item in itemset:
        feature, sep, value = item.partition('__')
        parts.append(f"{feature}={value}" if sep else item)
    return separator.join(parts)


def itemsets_to_frame(itemsets: Sequence[Itemset]) -> pd.DataFrame:
    """
    One row per itemset.

    Columns: ``items`` (sorted label tuple), ``itemsets`` (frozenset, as in
    mlxtend's frequent itemset frames), ``support``, ``count``, ``length``.
    """
    return pd.DataFrame({
        'items': [i.items for i in itemsets],
        'itemsets': [i.as_frozenset() for i in itemsets],
        'support': [i.support for i in itemsets],
        'count': [i.count for i in itemsets],
        'length': [len(i) for i in itemsets],
    }, columns=['items', 'itemsets', 'support', 'count', 'length'])


def rules_to_frame(rules: Sequence[Rule], measures: Optional[List[str]] = None) -> pd.DataFrame:
    """
    One row per rule.

    The first columns are always antecedents, consequents, support,
    confidence, lift, phi and gini; other measures follow in first-seen
    order unless ``measures`` selects them explicitly.
    """
    if measures is None:
        measures = []
        for rule in rules:
            for name in rule.measures:
                if name not in RULE_COLUMNS and name not in measures:
                    measures.append(name)

    columns = RULE_COLUMNS + [m for m in measures if m not in RULE_COLUMNS]
    rows = []
    for rule in rules:
        row = {
            'antecedents': rule.antecedent.as_frozenset(),
            'consequents': rule.consequent.as_frozenset(),
        }
        for name in columns[2:]:
            row[name] = rule.get(name)
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)


def to_onehot_frame(database: TransactionDatabase) -> pd.DataFrame:
    """Boolean transaction x item frame, column order = item label order."""
    encoder = TransactionEncoder()
    transactions = [list(t) for t in database.transactions]
    array = encoder.fit(transactions).transform(transactions)
    return pd.DataFrame(array, columns=encoder.columns_)
