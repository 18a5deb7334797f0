"""
Apriori miner: frequent itemsets and association rules with interest measures.

Wraps the level-wise search, the rule generator and the measure engine
behind the (results, stats) interface shared by the miners.
"""
import logging
import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from arminer.data.transaction_db import TransactionDatabase
from arminer.rule_mining.base import HybridMiner
from arminer.rule_mining.itemsets import mine
from arminer.rule_mining.measures import annotate_all, check_measures
from arminer.rule_mining.rules import generate
from arminer.rule_mining.types import Itemset, Rule
from arminer.rule_mining.validation import check_n_jobs

logger = logging.getLogger(__name__)


class AprioriMiner(HybridMiner):
    """
    Apriori rule miner.

    Can generate:
    - Frequent itemsets with exact support counts
    - Association rules annotated with lift, phi, gini and the other
      contingency table measures
    """

    def __init__(
        self,
        min_support: float = 0.01,
        min_confidence: float = 0.5,
        max_items: Optional[int] = None,
        n_jobs: int = 1,
        verbose: bool = False,
        measures: Optional[Sequence[str]] = None,
        **kwargs
    ):
        """
        Initialize Apriori miner.

        Args:
            min_support: Minimum support threshold in (0, 1]
            min_confidence: Minimum confidence threshold in [0, 1]
            max_items: Maximum number of items
                      - For itemsets: max total items in itemset
                      - For rules: max items on either side
            n_jobs: Number of parallel joblib workers (-1 uses all cores)
            verbose: Whether to show progress bars
            measures: Interest measures attached to rules (default: all)
        """
        super().__init__(min_support, min_confidence, max_items, **kwargs)
        self.n_jobs = check_n_jobs(n_jobs)
        self.verbose = verbose
        self.measures = check_measures(measures)
        self.database: Optional[TransactionDatabase] = None
        self.itemsets: Optional[List[Itemset]] = None
        self._thresholds: Optional[Tuple[float, Optional[int]]] = None

    def prepare_data(self, data: Any) -> TransactionDatabase:
        """
        Convert input data to a TransactionDatabase.

        Args:
            data: TransactionDatabase, DataFrame with categorical values
                  (one ``feature__value`` item per cell), or an iterable of
                  transactions

        Returns:
            TransactionDatabase
        """
        if isinstance(data, TransactionDatabase):
            return data
        if isinstance(data, pd.DataFrame):
            return TransactionDatabase.from_dataframe(data)
        return TransactionDatabase.build(data)

    def _mine(self, database: TransactionDatabase) -> List[Itemset]:
        # rules reuse the itemsets of the last (database, min_support, max_items) mined
        thresholds = (self.min_support, self.max_items)
        if self.database is not database or self._thresholds != thresholds or self.itemsets is None:
            self.itemsets = mine(
                database,
                min_support=self.min_support,
                max_len=self.max_items,
                n_jobs=self.n_jobs,
                verbose=self.verbose,
            )
            self.database = database
            self._thresholds = thresholds
        return list(self.itemsets)

    def mine_itemsets(self, data: Any) -> Tuple[List[Itemset], Dict[str, Any]]:
        """
        Mine frequent itemsets with Apriori.

        Returns:
            Tuple of (itemsets, stats)
        """
        start_time = time.time()
        database = self.prepare_data(data)
        itemsets = self._mine(database)
        execution_time = time.time() - start_time

        stats = {
            'num_itemsets': len(itemsets),
            'num_transactions': database.transaction_count,
            'num_items': database.item_count,
            'max_length': max((len(i) for i in itemsets), default=0),
            'execution_time': execution_time,
            'average_support': sum(i.support for i in itemsets) / len(itemsets) if itemsets else 0.0,
            'algorithm': 'apriori',
            'mode': 'itemsets'
        }
        return itemsets, stats

    def mine_rules(self, data: Any) -> Tuple[List[Rule], Dict[str, Any]]:
        """
        Mine association rules with Apriori and annotate them.

        Returns:
            Tuple of (rules, stats)
        """
        start_time = time.time()
        database = self.prepare_data(data)
        itemsets = self._mine(database)

        if not itemsets:
            return [], {
                'num_rules': 0,
                'execution_time': time.time() - start_time,
                'algorithm': 'apriori',
                'mode': 'rules'
            }

        rules = generate(
            itemsets,
            database,
            min_confidence=self.min_confidence,
            max_len=self.max_items,
            n_jobs=self.n_jobs,
            verbose=self.verbose,
        )
        rules = annotate_all(rules, database, self.measures)
        execution_time = time.time() - start_time

        stats = {
            'num_rules': len(rules),
            'num_itemsets': len(itemsets),
            'execution_time': execution_time,
            'average_support': sum(r.support for r in rules) / len(rules) if rules else 0.0,
            'average_confidence': sum(r.confidence for r in rules) / len(rules) if rules else 0.0,
            'average_lift': sum(r.get('lift') for r in rules) / len(rules) if rules and 'lift' in self.measures else None,
            'algorithm': 'apriori',
            'mode': 'rules'
        }
        logger.info("Apriori mined %d rules in %.3fs", len(rules), execution_time)
        return rules, stats

    def __repr__(self):
        return (f"AprioriMiner(min_support={self.min_support}, min_confidence={self.min_confidence}, "
                f"max_items={self.max_items}, n_jobs={self.n_jobs})")
