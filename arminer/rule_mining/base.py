"""
Base interfaces for rule mining algorithms.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from arminer.rule_mining.types import Itemset, Rule
from arminer.rule_mining.validation import check_max_len, check_min_confidence, check_min_support


class FrequentItemsetMiner(ABC):
    """
    Base class for frequent itemset mining algorithms.

    These algorithms discover frequent co-occurring item combinations
    without forming rules (no antecedent -> consequent structure).
    """

    def __init__(self, min_support: float = 0.01, **kwargs):
        self.min_support = check_min_support(min_support)
        self.config = kwargs

    @abstractmethod
    def mine_itemsets(self, data: Any) -> Tuple[List[Itemset], Dict[str, Any]]:
        """
        Mine frequent itemsets from data.

        Args:
            data: Transactions (database, DataFrame or iterable of item collections)

        Returns:
            Tuple of (itemsets, stats) where:
                itemsets: List of Itemset
                stats: Dict with mining statistics (execution_time, num_itemsets, etc.)
        """
        pass


class AssociationRuleMiner(ABC):
    """
    Base class for association rule mining algorithms.

    These algorithms discover rules in the form: antecedent -> consequent
    with quality measures (support, confidence, lift, ...).
    """

    def __init__(self, min_support: float = 0.01, min_confidence: float = 0.5, **kwargs):
        self.min_support = check_min_support(min_support)
        self.min_confidence = check_min_confidence(min_confidence)
        self.config = kwargs

    @abstractmethod
    def mine_rules(self, data: Any) -> Tuple[List[Rule], Dict[str, Any]]:
        """
        Mine association rules from data.

        Args:
            data: Transactions (database, DataFrame or iterable of item collections)

        Returns:
            Tuple of (rules, stats) where:
                rules: List of Rule with their measures attached
                stats: Dict with mining statistics
        """
        pass


class HybridMiner(FrequentItemsetMiner, AssociationRuleMiner):
    """
    Base class for algorithms that produce both frequent itemsets and association rules.

    The max_items parameter bounds itemset size when mining itemsets and
    both rule sides when mining rules.
    """

    def __init__(
        self,
        min_support: float = 0.01,
        min_confidence: float = 0.5,
        max_items: Optional[int] = None,
        **kwargs
    ):
        AssociationRuleMiner.__init__(self, min_support, min_confidence, **kwargs)
        self.max_items = check_max_len(max_items)

    @abstractmethod
    def mine_itemsets(self, data: Any) -> Tuple[List[Itemset], Dict[str, Any]]:
        """Mine frequent itemsets."""
        pass

    @abstractmethod
    def mine_rules(self, data: Any) -> Tuple[List[Rule], Dict[str, Any]]:
        """Mine association rules."""
        pass
