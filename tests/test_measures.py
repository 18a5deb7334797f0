import math

import pytest

from arminer import (
    ConfigurationError,
    ContingencyTable,
    MEASURES,
    annotate,
    annotate_all,
    generate,
    mine,
)
from arminer.rule_mining.measures import gini, is_computable, lift, phi


@pytest.fixture
def beer_diaper(db):
    rules = generate(mine(db, min_support=0.6), db, min_confidence=0.8)
    assert len(rules) == 1
    return annotate(rules[0], db)


def test_contingency_table(db, beer_diaper):
    table = ContingencyTable.from_rule(beer_diaper, db)
    assert (table.n11, table.n10, table.n01, table.n00) == (3, 0, 1, 1)
    assert table.n == 5
    assert (table.n1_, table.n0_, table.n_1, table.n_0) == (3, 2, 4, 1)


def test_basket_measures(beer_diaper):
    m = beer_diaper.measures
    assert m["support"] == pytest.approx(0.6)
    assert m["confidence"] == pytest.approx(1.0)
    assert m["coverage"] == pytest.approx(0.6)
    assert m["lift"] == pytest.approx(1.25)
    assert m["phi"] == pytest.approx(3 / math.sqrt(24))
    assert m["gini"] == pytest.approx(0.12)
    assert m["leverage"] == pytest.approx(0.12)
    assert m["added_value"] == pytest.approx(0.2)
    assert m["certainty"] == pytest.approx(1.0)
    assert m["cosine"] == pytest.approx(3 / math.sqrt(12))
    assert m["jaccard"] == pytest.approx(0.75)
    assert m["kulczynski"] == pytest.approx(0.875)
    assert m["zhangs_metric"] == pytest.approx(0.5)
    assert m["chi_squared"] == pytest.approx(1.875)
    assert m["conviction"] == math.inf
    assert m["odds_ratio"] == math.inf


def test_all_measures_attached(beer_diaper):
    assert set(beer_diaper.measures) == set(MEASURES)
    assert beer_diaper.get("lift") == beer_diaper.measures["lift"]


def test_selected_measures(db):
    raw = generate(mine(db, 0.6), db, 0.8)[0]
    rule = annotate(raw, db, measures=["lift", "phi"])
    assert set(rule.measures) == {"lift", "phi"}
    assert raw.measures == {}


def test_unknown_measure(db):
    raw = generate(mine(db, 0.6), db, 0.8)[0]
    with pytest.raises(ConfigurationError):
        annotate(raw, db, measures=["lift", "charisma"])


def test_annotate_extends_without_overwriting(db):
    raw = generate(mine(db, 0.6), db, 0.8)[0]
    custom = raw.with_measures({"lift": -1.0})
    rule = annotate(custom, db)
    assert rule.measures["lift"] == -1.0
    assert rule.measures["phi"] == pytest.approx(3 / math.sqrt(24))


def test_lift_symmetry(random_db):
    rules = annotate_all(generate(mine(random_db, 0.05), random_db, 0.0), random_db)
    by_key = {(r.antecedent.items, r.consequent.items): r for r in rules}
    for (antecedent, consequent), rule in by_key.items():
        reverse = by_key[(consequent, antecedent)]
        assert rule.get("lift") == pytest.approx(reverse.get("lift"))
        assert rule.get("phi") == pytest.approx(reverse.get("phi"))


def test_measure_ranges(random_db):
    rules = annotate_all(generate(mine(random_db, 0.05), random_db, 0.1), random_db)
    assert rules
    for rule in rules:
        assert 0.0 <= rule.get("gini") < 1.0
        value = rule.get("phi")
        if is_computable(value):
            assert -1.0 - 1e-12 <= value <= 1.0 + 1e-12
        assert rule.get("lift") == pytest.approx(rule.confidence / rule.consequent.support)


def test_phi_not_computable_on_zero_marginal():
    # consequent present in every transaction
    table = ContingencyTable(n11=3, n10=0, n01=2, n00=0)
    assert math.isnan(phi(table))
    assert not is_computable(phi(table))
    assert lift(table) == pytest.approx(1.0)
    assert gini(table) == pytest.approx(0.0)


def test_gini_zero_for_independence():
    # P(C|A) == P(C|not A) == 0.5
    table = ContingencyTable(n11=2, n10=2, n01=3, n00=3)
    assert gini(table) == pytest.approx(0.0)
    assert phi(table) == pytest.approx(0.0)
    assert lift(table) == pytest.approx(1.0)


def test_degenerate_table_never_raises():
    table = ContingencyTable(0, 0, 0, 0)
    for name, measure in MEASURES.items():
        value = measure(table)
        assert value is not None, name
