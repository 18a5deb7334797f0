"""
Immutable, indexed view of a transaction set.

Every distinct item label gets a dense integer id (assigned in sorted
label order) and an inverted posting list: the sorted indices of the
transactions containing it. Support queries intersect posting lists,
smallest first.
"""
import logging
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from arminer.exceptions import EmptyDatasetError

logger = logging.getLogger(__name__)


class TransactionDatabase:
    """
    Read-only transaction database with per-item posting lists.

    Build it with :meth:`build` (iterable of transactions) or one of the
    DataFrame adapters; never mutate it afterwards.
    """

    def __init__(self, labels: Sequence[str], transactions: Sequence[Tuple[int, ...]]):
        self._labels: Tuple[str, ...] = tuple(labels)
        self._index: Dict[str, int] = {label: i for i, label in enumerate(self._labels)}
        self._transactions: Tuple[Tuple[int, ...], ...] = tuple(transactions)

        postings: List[List[int]] = [[] for _ in self._labels]
        for tid, row in enumerate(self._transactions):
            for item_id in row:
                postings[item_id].append(tid)

        self._postings: Tuple[np.ndarray, ...] = tuple(
            self._freeze(np.asarray(p, dtype=np.int64)) for p in postings
        )

    @staticmethod
    def _freeze(array: np.ndarray) -> np.ndarray:
        array.setflags(write=False)
        return array

    @classmethod
    def build(cls, transactions: Iterable[Iterable[Any]]) -> 'TransactionDatabase':
        """
        Build a database from an ordered sequence of transactions.

        Args:
            transactions: Iterable of item-label collections. Labels are
                coerced to str; a bare string is a single-item transaction.

        Raises:
            EmptyDatasetError: no transactions, or all of them are empty.
        """
        rows = []
        for transaction in transactions:
            if isinstance(transaction, str):
                transaction = [transaction]
            rows.append(frozenset(str(item) for item in transaction))

        if not rows:
            raise EmptyDatasetError("Transaction database is empty: no transactions given")
        if not any(rows):
            raise EmptyDatasetError(f"All {len(rows)} transactions are empty")

        labels = sorted(set().union(*rows))
        index = {label: i for i, label in enumerate(labels)}
        encoded = [tuple(sorted(index[label] for label in row)) for row in rows]

        n_empty = sum(1 for row in rows if not row)
        if n_empty:
            logger.warning("%d of %d transactions are empty", n_empty, len(rows))
        logger.debug("Built database: %d transactions, %d items", len(rows), len(labels))

        return cls(labels, encoded)

    @classmethod
    def from_dataframe(cls, data: pd.DataFrame, separator: str = '__') -> 'TransactionDatabase':
        """
        Encode tabular rows as transactions of ``feature<separator>value`` items.

        NaN cells are skipped.
        """
        transactions = []
        for _, row in data.iterrows():
            transaction = []
            for col in data.columns:
                value = row[col]
                if pd.notna(value):
                    transaction.append(f"{col}{separator}{value}")
            transactions.append(transaction)
        return cls.build(transactions)

    @classmethod
    def from_onehot(cls, data: pd.DataFrame) -> 'TransactionDatabase':
        """Build from a one-hot / boolean frame (e.g. mlxtend ``TransactionEncoder`` output)."""
        columns = [str(c) for c in data.columns]
        values = data.fillna(False).to_numpy(dtype=bool)
        transactions = [[columns[j] for j in np.flatnonzero(row)] for row in values]
        return cls.build(transactions)

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #

    @property
    def transaction_count(self) -> int:
        return len(self._transactions)

    @property
    def item_count(self) -> int:
        return len(self._labels)

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    @property
    def transactions(self) -> Tuple[Tuple[str, ...], ...]:
        return tuple(tuple(self._labels[i] for i in row) for row in self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, label: object) -> bool:
        return label in self._index

    def label(self, item_id: int) -> str:
        return self._labels[item_id]

    def item_id(self, label: str) -> int:
        return self._index[str(label)]

    def encode(self, items: Iterable[str]) -> Tuple[int, ...]:
        """Map labels to their sorted id tuple. Raises KeyError on unknown labels."""
        if isinstance(items, str):
            items = [items]
        return tuple(sorted({self._index[str(label)] for label in items}))

    def posting(self, label: Union[str, int]) -> np.ndarray:
        """Sorted indices of the transactions containing ``label`` (label or item id)."""
        item_id = label if isinstance(label, (int, np.integer)) else self.item_id(label)
        return self._postings[item_id]

    # ------------------------------------------------------------------ #
    # Support queries
    # ------------------------------------------------------------------ #

    def count_ids(self, item_ids: Sequence[int]) -> int:
        """Number of transactions containing every item id in ``item_ids``."""
        if not item_ids:
            return len(self._transactions)
        lists = sorted((self._postings[i] for i in item_ids), key=len)
        tids = lists[0]
        for other in lists[1:]:
            if tids.size == 0:
                break
            tids = np.intersect1d(tids, other, assume_unique=True)
        return int(tids.size)

    def support_count(self, itemset: Iterable[str]) -> int:
        """Exact number of transactions that are supersets of ``itemset``. Unknown items give 0."""
        try:
            ids = self.encode(itemset)
        except KeyError:
            return 0
        return self.count_ids(ids)

    def support(self, itemset: Iterable[str]) -> float:
        return self.support_count(itemset) / len(self._transactions)

    def __repr__(self):
        return f"TransactionDatabase(transactions={self.transaction_count}, items={self.item_count})"
