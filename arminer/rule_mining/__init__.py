"""
Rule Mining Module

Apriori-style level-wise frequent itemset mining, association rule
generation with confidence pruning, and interest measures.
"""
from .types import Itemset, Rule
from .itemsets import mine
from .rules import generate
from .measures import (
    MEASURES,
    NOT_COMPUTABLE,
    ContingencyTable,
    annotate,
    annotate_all,
    is_computable,
)
from .base import FrequentItemsetMiner, AssociationRuleMiner, HybridMiner
from .apriori_miner import AprioriMiner

__all__ = [
    'Itemset', 'Rule',
    'mine', 'generate',
    'MEASURES', 'NOT_COMPUTABLE', 'ContingencyTable', 'annotate', 'annotate_all', 'is_computable',
    'FrequentItemsetMiner', 'AssociationRuleMiner', 'HybridMiner',
    'AprioriMiner',
]
