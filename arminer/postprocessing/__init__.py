from .rule import (
    sort_by,
    top,
    paginate,
    filter_rules,
    filter_rules_by_pattern,
    filter_rules_by_antecedent,
    filter_rules_by_consequent,
    filter_itemsets,
)

__all__ = [
    'sort_by', 'top', 'paginate',
    'filter_rules', 'filter_rules_by_pattern', 'filter_rules_by_antecedent',
    'filter_rules_by_consequent', 'filter_itemsets',
]
