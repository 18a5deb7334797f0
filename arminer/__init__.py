"""arminer – Apriori frequent itemsets, association rules and interest measures."""

from .exceptions import ConfigurationError, EmptyDatasetError
from .data import TransactionDatabase
from .rule_mining import (
    Itemset,
    Rule,
    mine,
    generate,
    annotate,
    annotate_all,
    ContingencyTable,
    MEASURES,
    NOT_COMPUTABLE,
    AprioriMiner,
)
from .postprocessing import sort_by, top, paginate

__version__ = "0.1.0"

__all__ = [
    'ConfigurationError', 'EmptyDatasetError',
    'TransactionDatabase',
    'Itemset', 'Rule',
    'mine', 'generate', 'annotate', 'annotate_all',
    'ContingencyTable', 'MEASURES', 'NOT_COMPUTABLE',
    'AprioriMiner',
    'sort_by', 'top', 'paginate',
]
