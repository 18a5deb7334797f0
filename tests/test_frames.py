import math

from arminer import annotate_all, generate, mine
from arminer.utils import format_itemset, itemsets_to_frame, rules_to_frame, to_onehot_frame


def test_itemsets_to_frame(db):
    itemsets = mine(db, min_support=0.6)
    frame = itemsets_to_frame(itemsets)
    assert list(frame.columns) == ["items", "itemsets", "support", "count", "length"]
    assert len(frame) == 8
    assert frame.loc[0, "items"] == ("beer",)
    assert frame.loc[0, "itemsets"] == frozenset({"beer"})
    assert frame["count"].sum() == sum(i.count for i in itemsets)


def test_empty_itemsets_frame():
    frame = itemsets_to_frame([])
    assert frame.empty
    assert "support" in frame.columns


def test_rules_to_frame(db):
    rules = annotate_all(generate(mine(db, 0.6), db, 0.8), db)
    frame = rules_to_frame(rules)
    assert list(frame.columns[:7]) == ["antecedents", "consequents", "support", "confidence", "lift", "phi", "gini"]
    assert "leverage" in frame.columns
    row = frame.iloc[0]
    assert row["antecedents"] == frozenset({"beer"})
    assert math.isclose(row["lift"], 1.25)


def test_rules_to_frame_unannotated(db):
    rules = generate(mine(db, 0.6), db, 0.8)
    frame = rules_to_frame(rules)
    assert list(frame.columns) == ["antecedents", "consequents", "support", "confidence", "lift", "phi", "gini"]
    assert math.isnan(frame.iloc[0]["lift"])


def test_format_itemset():
    assert format_itemset(["bread", "milk"]) == "bread AND milk"
    assert format_itemset(["color__red", "size__S"]) == "color=red AND size=S"


def test_to_onehot_frame(db):
    frame = to_onehot_frame(db)
    assert list(frame.columns) == list(db.labels)
    assert frame.shape == (5, 6)
    assert frame["bread"].sum() == 4
