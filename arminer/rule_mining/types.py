"""
Immutable value types produced by the miners.

An ``Itemset`` always keeps its labels in one canonical sorted order so
two equal sets compare and hash identically. A ``Rule`` splits a
frequent itemset into a disjoint antecedent and consequent.
"""
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, FrozenSet, Iterable, Iterator, Mapping, Tuple


@dataclass(frozen=True)
class Itemset:
    items: Tuple[str, ...]
    count: int
    support: float

    def __post_init__(self):
        items = tuple(sorted(set(self.items)))
        if not items:
            raise ValueError("Itemset must contain at least one item")
        object.__setattr__(self, 'items', items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[str]:
        return iter(self.items)

    def __contains__(self, item: object) -> bool:
        return item in self.items

    def issubset(self, other: Iterable[str]) -> bool:
        return set(self.items).issubset(other)

    def as_frozenset(self) -> FrozenSet[str]:
        return frozenset(self.items)

    def sort_key(self) -> Tuple[int, Tuple[str, ...]]:
        return len(self.items), self.items

    def get(self, name: str, default: Any = math.nan) -> Any:
        if name == 'size':
            return len(self.items)
        if name in ('support', 'count'):
            return getattr(self, name)
        return default

    def __str__(self) -> str:
        return '{' + ', '.join(self.items) + '}'


@dataclass(frozen=True)
class Rule:
    """
    Association rule ``antecedent -> consequent``.

    ``support`` is the support of the union, ``confidence`` is
    support(union) / support(antecedent). ``measures`` holds interest
    measures by name; it is excluded from equality and hashing.
    """
    antecedent: Itemset
    consequent: Itemset
    support: float
    confidence: float
    count: int = 0
    measures: Mapping[str, float] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        if set(self.antecedent.items) & set(self.consequent.items):
            raise ValueError(f"Rule sides overlap: {self.antecedent} -> {self.consequent}")
        # read-only view, with_measures is the only way to add values
        object.__setattr__(self, 'measures', MappingProxyType(dict(self.measures)))

    def __reduce__(self):
        return Rule, (self.antecedent, self.consequent, self.support, self.confidence, self.count, dict(self.measures))

    @property
    def items(self) -> Tuple[str, ...]:
        return tuple(sorted(self.antecedent.items + self.consequent.items))

    def with_measures(self, values: Mapping[str, float]) -> 'Rule':
        """Return a copy whose measure map is extended with ``values``; existing entries win."""
        merged = dict(values)
        merged.update(self.measures)
        return Rule(self.antecedent, self.consequent, self.support, self.confidence, self.count, merged)

    def get(self, name: str, default: Any = math.nan) -> Any:
        if name == 'support':
            return self.support
        if name == 'confidence':
            return self.confidence
        if name == 'count':
            return self.count
        if name == 'size':
            return len(self.antecedent) + len(self.consequent)
        return self.measures.get(name, default)

    def sort_key(self) -> Tuple[int, Tuple[str, ...], Tuple[str, ...]]:
        return len(self.antecedent) + len(self.consequent), self.antecedent.items, self.consequent.items

    def __str__(self) -> str:
        return f"{self.antecedent} -> {self.consequent}"
