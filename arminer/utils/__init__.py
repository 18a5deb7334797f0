from .frames import (
    format_itemset,
    itemsets_to_frame,
    rules_to_frame,
    to_onehot_frame
)

__all__ = [
    'format_itemset',
    'itemsets_to_frame',
    'rules_to_frame',
    'to_onehot_frame'
]
