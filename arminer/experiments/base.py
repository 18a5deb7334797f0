import logging
from typing import List, Dict, Any, Tuple, Union, Iterable

from arminer.data.transaction_db import TransactionDatabase
from arminer.postprocessing.rule import filter_itemsets, filter_rules, sort_by, top
from arminer.rule_mining.apriori_miner import AprioriMiner
from arminer.rule_mining.types import Itemset, Rule

from .config import MiningConfig, FilterConfig

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a stream handler to the package logger (idempotent)."""
    package_logger = logging.getLogger('arminer')
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        package_logger.addHandler(handler)
    return package_logger


def create_miner(config: MiningConfig) -> AprioriMiner:
    config.validate()
    return AprioriMiner(
        min_support=config.min_support,
        min_confidence=config.min_confidence,
        max_items=config.max_len,
        n_jobs=config.n_jobs,
        verbose=config.verbose,
        measures=config.measures
    )


def apply_filters(
    data: List[Union[Itemset, Rule]],
    filters: List[FilterConfig],
    mode: str = 'rules'
) -> List[Union[Itemset, Rule]]:
    if not filters:
        return data

    result = data
    for f in filters:
        if mode == 'rules':
            result = filter_rules(result, criterion=f.metric, threshold=f.threshold)
        else:
            result, _ = filter_itemsets(result, criterion=f.metric, threshold=f.threshold)

    return result


def run_rule_mining(
    data: Union[TransactionDatabase, Iterable[Iterable[str]]],
    config: MiningConfig
) -> Tuple[List[Itemset], List[Rule], Dict[str, Any]]:
    """
    Mine itemsets and rules, then filter, sort and cut the rules as configured.

    Returns:
        Tuple of (itemsets, rules, stats); either list is empty when the
        mode does not ask for it.
    """
    miner = create_miner(config)
    database = miner.prepare_data(data)
    mode = config.mode

    itemsets: List[Itemset] = []
    rules: List[Rule] = []
    stats: Dict[str, Any] = {}

    if mode in ['itemsets', 'both']:
        itemsets, itemset_stats = miner.mine_itemsets(database)
        itemsets = apply_filters(itemsets, [f for f in config.filters if f.metric in ('support', 'count', 'size')],
                                 mode='itemsets')
        stats['itemsets'] = itemset_stats
        stats['itemsets']['count'] = len(itemsets)

    if mode in ['rules', 'both']:
        rules, rule_stats = miner.mine_rules(database)
        rules = apply_filters(rules, config.filters, mode='rules')
        if config.sort_metric:
            rules = sort_by(rules, config.sort_metric, descending=config.descending)
        if config.top_n is not None:
            rules = top(rules, config.top_n)
        stats['rules'] = rule_stats
        stats['rules']['count'] = len(rules)

    logger.info("Rule mining finished: %s", {k: v.get('count') for k, v in stats.items()})
    return itemsets, rules, stats
