import numpy as np
import pandas as pd
import pytest

from arminer import AprioriMiner, ConfigurationError, EmptyDatasetError, mine

from .conftest import BASKETS


def test_mine_itemsets(db):
    miner = AprioriMiner(min_support=0.6)
    itemsets, stats = miner.mine_itemsets(db)
    assert len(itemsets) == 8
    assert stats["num_itemsets"] == 8
    assert stats["num_transactions"] == 5
    assert stats["max_length"] == 2
    assert stats["algorithm"] == "apriori"
    assert stats["mode"] == "itemsets"
    assert stats["average_support"] == pytest.approx((0.8 * 3 + 0.6 * 5) / 8)


def test_mine_rules_from_iterable():
    miner = AprioriMiner(min_support=0.6, min_confidence=0.8)
    rules, stats = miner.mine_rules(BASKETS)
    assert stats["num_rules"] == 1
    assert stats["mode"] == "rules"
    rule = rules[0]
    assert rule.antecedent.items == ("beer",)
    assert rule.consequent.items == ("diaper",)
    assert rule.get("lift") == pytest.approx(1.25)
    assert rule.get("gini") == pytest.approx(0.12)
    assert stats["average_lift"] == pytest.approx(1.25)


def test_mine_rules_from_dataframe():
    df = pd.DataFrame({
        "weather": ["sun", "sun", "rain", "sun"],
        "play": ["yes", "yes", "no", "yes"],
    })
    miner = AprioriMiner(min_support=0.5, min_confidence=0.9, measures=["lift"])
    rules, _ = miner.mine_rules(df)
    keys = {(r.antecedent.items, r.consequent.items) for r in rules}
    assert (("weather__sun",), ("play__yes",)) in keys
    assert all(set(r.measures) == {"lift"} for r in rules)


def test_no_rules_when_nothing_frequent(db):
    rules, stats = AprioriMiner(min_support=1.0).mine_rules(db)
    assert rules == []
    assert stats["num_rules"] == 0


def test_max_items(db):
    itemsets, _ = AprioriMiner(min_support=0.2, max_items=1).mine_itemsets(db)
    assert all(len(i) == 1 for i in itemsets)


@pytest.mark.parametrize("kwargs", [
    {"min_support": 0},
    {"min_support": 0.5, "min_confidence": 2},
    {"min_support": 0.5, "max_items": 0},
    {"min_support": 0.5, "n_jobs": 0},
    {"min_support": 0.5, "measures": ["nope"]},
])
def test_invalid_parameters_fail_at_construction(kwargs):
    with pytest.raises(ConfigurationError):
        AprioriMiner(**kwargs)


def test_empty_data():
    with pytest.raises(EmptyDatasetError):
        AprioriMiner(min_support=0.5).mine_itemsets([])


def test_itemsets_are_reused_for_rules(db, monkeypatch):
    from arminer.rule_mining import apriori_miner

    calls = []
    original = apriori_miner.mine

    def counting_mine(*args, **kwargs):
        calls.append(1)
        return original(*args, **kwargs)

    monkeypatch.setattr(apriori_miner, "mine", counting_mine)
    miner = AprioriMiner(min_support=0.6, min_confidence=0.8)
    miner.mine_itemsets(db)
    miner.mine_rules(db)
    assert len(calls) == 1


def test_changed_thresholds_are_not_served_from_cache(db):
    miner = AprioriMiner(min_support=0.6, min_confidence=0.8)
    first, _ = miner.mine_itemsets(db)
    assert len(first) == 8

    miner.min_support = 0.2
    itemsets, _ = miner.mine_itemsets(db)
    assert itemsets == mine(db, min_support=0.2)

    miner.max_items = 1
    itemsets, _ = miner.mine_itemsets(db)
    assert itemsets == mine(db, min_support=0.2, max_len=1)


def test_returned_itemsets_do_not_alias_cache(db):
    miner = AprioriMiner(min_support=0.6, min_confidence=0.8)
    itemsets, _ = miner.mine_itemsets(db)
    itemsets.clear()
    rules, stats = miner.mine_rules(db)
    assert stats["num_rules"] == 1
    assert stats["num_itemsets"] == 8


def test_numpy_integer_parameters():
    miner = AprioriMiner(min_support=0.5, max_items=np.int64(2), n_jobs=np.int64(1))
    assert miner.max_items == 2 and type(miner.max_items) is int
    assert miner.n_jobs == 1


def test_repr():
    assert repr(AprioriMiner(min_support=0.5)).startswith("AprioriMiner(min_support=0.5")
