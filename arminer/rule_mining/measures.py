"""
Interest measures computed from the 2x2 contingency table of a rule.

                 C present   C absent
    A present      n11         n10      | n1_
    A absent       n01         n00      | n0_
                 -------------------------
                   n_1         n_0      | n

Every measure is a function of the table. A measure that is undefined
for a table (zero marginal, division by zero) yields ``NOT_COMPUTABLE``
(NaN) instead of raising, so the other measures of the rule stay usable.
"""
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from arminer.data.transaction_db import TransactionDatabase
from arminer.exceptions import ConfigurationError
from arminer.rule_mining.types import Rule

NOT_COMPUTABLE = math.nan


def is_computable(value: float) -> bool:
    return value is not None and not math.isnan(value)


@dataclass(frozen=True)
class ContingencyTable:
    n11: int
    n10: int
    n01: int
    n00: int

    @classmethod
    def from_counts(cls, n: int, antecedent: int, consequent: int, both: int) -> 'ContingencyTable':
        return cls(
            n11=both,
            n10=antecedent - both,
            n01=consequent - both,
            n00=n - antecedent - consequent + both,
        )

    @classmethod
    def from_rule(cls, rule: Rule, database: TransactionDatabase) -> 'ContingencyTable':
        """Table of transaction counts for ``rule``, using the supports stored on the rule."""
        n = database.transaction_count
        both = rule.count or database.support_count(rule.items)
        return cls.from_counts(n, rule.antecedent.count, rule.consequent.count, both)

    @property
    def n(self) -> int:
        return self.n11 + self.n10 + self.n01 + self.n00

    @property
    def n1_(self) -> int:
        return self.n11 + self.n10

    @property
    def n0_(self) -> int:
        return self.n01 + self.n00

    @property
    def n_1(self) -> int:
        return self.n11 + self.n01

    @property
    def n_0(self) -> int:
        return self.n10 + self.n00


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return NOT_COMPUTABLE
    return numerator / denominator


def support(t: ContingencyTable) -> float:
    return _ratio(t.n11, t.n)


def coverage(t: ContingencyTable) -> float:
    """Support of the antecedent."""
    return _ratio(t.n1_, t.n)


def confidence(t: ContingencyTable) -> float:
    return _ratio(t.n11, t.n1_)


def lift(t: ContingencyTable) -> float:
    """supp(A u C) / (supp(A) * supp(C)); symmetric in A and C."""
    return _ratio(t.n11 * t.n, t.n1_ * t.n_1)


def leverage(t: ContingencyTable) -> float:
    if t.n == 0:
        return NOT_COMPUTABLE
    return t.n11 / t.n - (t.n1_ / t.n) * (t.n_1 / t.n)


def added_value(t: ContingencyTable) -> float:
    if t.n1_ == 0 or t.n == 0:
        return NOT_COMPUTABLE
    return t.n11 / t.n1_ - t.n_1 / t.n


def conviction(t: ContingencyTable) -> float:
    """(1 - supp(C)) / (1 - conf); infinite for exact rules."""
    if t.n1_ == 0 or t.n == 0:
        return NOT_COMPUTABLE
    if t.n10 == 0:
        return math.inf
    return (t.n1_ * t.n_0) / (t.n * t.n10)


def certainty(t: ContingencyTable) -> float:
    """Certainty factor: (conf - supp(C)) / (1 - supp(C))."""
    if t.n1_ == 0 or t.n_0 == 0:
        return NOT_COMPUTABLE
    consequent_support = t.n_1 / t.n
    return (t.n11 / t.n1_ - consequent_support) / (1 - consequent_support)


def cosine(t: ContingencyTable) -> float:
    return _ratio(t.n11, math.sqrt(t.n1_ * t.n_1))


def jaccard(t: ContingencyTable) -> float:
    return _ratio(t.n11, t.n1_ + t.n_1 - t.n11)


def kulczynski(t: ContingencyTable) -> float:
    if t.n1_ == 0 or t.n_1 == 0:
        return NOT_COMPUTABLE
    return 0.5 * (t.n11 / t.n1_ + t.n11 / t.n_1)


def odds_ratio(t: ContingencyTable) -> float:
    numerator = t.n11 * t.n00
    denominator = t.n10 * t.n01
    if denominator == 0:
        return math.inf if numerator > 0 else NOT_COMPUTABLE
    return numerator / denominator


def phi(t: ContingencyTable) -> float:
    """Phi correlation coefficient in [-1, 1]; not computable when a marginal is zero."""
    marginals = t.n1_ * t.n0_ * t.n_1 * t.n_0
    if marginals == 0:
        return NOT_COMPUTABLE
    return (t.n11 * t.n00 - t.n10 * t.n01) / math.sqrt(marginals)


def chi_squared(t: ContingencyTable) -> float:
    value = phi(t)
    if not is_computable(value):
        return NOT_COMPUTABLE
    return t.n * value ** 2


def gini(t: ContingencyTable) -> float:
    """
    Gini index: reduction of the consequent's Gini impurity obtained by
    splitting transactions on the antecedent.

    0 when the antecedent's presence does not change the consequent
    distribution. An empty antecedent group contributes nothing.
    """
    if t.n == 0:
        return NOT_COMPUTABLE
    n = t.n
    purity = 0.0
    for group, present, absent in ((t.n1_, t.n11, t.n10), (t.n0_, t.n01, t.n00)):
        if group:
            purity += (group / n) * ((present / group) ** 2 + (absent / group) ** 2)
    baseline = (t.n_1 / n) ** 2 + (t.n_0 / n) ** 2
    # rounding can leave a tiny negative residue for independent tables
    return max(0.0, purity - baseline)


def zhangs_metric(t: ContingencyTable) -> float:
    if t.n == 0:
        return NOT_COMPUTABLE
    s_ac = t.n11 / t.n
    s_a = t.n1_ / t.n
    s_c = t.n_1 / t.n
    denominator = max(s_ac * (1 - s_a), s_a * (s_c - s_ac))
    return _ratio(s_ac - s_a * s_c, denominator)


MEASURES: Dict[str, Callable[[ContingencyTable], float]] = {
    'support': support,
    'confidence': confidence,
    'coverage': coverage,
    'lift': lift,
    'phi': phi,
    'gini': gini,
    'leverage': leverage,
    'added_value': added_value,
    'conviction': conviction,
    'certainty': certainty,
    'cosine': cosine,
    'jaccard': jaccard,
    'kulczynski': kulczynski,
    'odds_ratio': odds_ratio,
    'zhangs_metric': zhangs_metric,
    'chi_squared': chi_squared,
}

DEFAULT_MEASURES = list(MEASURES)


def check_measures(measures: Optional[Iterable[str]]) -> List[str]:
    if measures is None:
        return list(DEFAULT_MEASURES)
    names = list(measures)
    unknown = [name for name in names if name not in MEASURES]
    if unknown:
        raise ConfigurationError(f"Unknown measures {unknown}; valid measures are {sorted(MEASURES)}")
    return names


def compute(table: ContingencyTable, measures: Optional[Sequence[str]] = None) -> Dict[str, float]:
    return {name: MEASURES[name](table) for name in check_measures(measures)}


def annotate(rule: Rule, database: TransactionDatabase, measures: Optional[Sequence[str]] = None) -> Rule:
    """
    Return ``rule`` with the requested measures (all by default) attached.

    Values already present on the rule are kept, the map is only extended.

    Raises:
        ConfigurationError: unknown measure name
    """
    table = ContingencyTable.from_rule(rule, database)
    return rule.with_measures(compute(table, measures))


def annotate_all(
        rules: Iterable[Rule],
        database: TransactionDatabase,
        measures: Optional[Sequence[str]] = None
) -> List[Rule]:
    names = check_measures(measures)
    return [annotate(rule, database, names) for rule in rules]
