from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional

from arminer.exceptions import ConfigurationError
from arminer.rule_mining.measures import DEFAULT_MEASURES, check_measures
from arminer.rule_mining.validation import (
    check_max_len,
    check_min_confidence,
    check_min_support,
    check_n_jobs,
)


@dataclass
class FilterConfig:
    metric: str
    threshold: float

    def to_dict(self) -> Dict[str, Any]:
        return {'metric': self.metric, 'threshold': self.threshold}


@dataclass
class MiningConfig:
    min_support: float = 0.1
    min_confidence: float = 0.5
    max_len: Optional[int] = None
    n_jobs: int = 1
    verbose: bool = False
    mode: str = 'both'  # 'rules', 'itemsets', 'both'
    measures: List[str] = field(default_factory=lambda: list(DEFAULT_MEASURES))
    filters: List[FilterConfig] = field(default_factory=list)
    # ResultSelector options applied to the final rule list
    sort_metric: Optional[str] = 'lift'
    descending: bool = True
    top_n: Optional[int] = None

    def validate(self) -> 'MiningConfig':
        check_min_support(self.min_support)
        check_min_confidence(self.min_confidence)
        check_max_len(self.max_len)
        check_n_jobs(self.n_jobs)
        check_measures(self.measures)
        if self.mode not in ('rules', 'itemsets', 'both'):
            raise ConfigurationError(f"mode must be 'rules', 'itemsets' or 'both', got '{self.mode}'")
        if self.top_n is not None and self.top_n < 0:
            raise ConfigurationError(f"top_n must be non-negative, got {self.top_n}")
        return self

    @classmethod
    def default(cls) -> 'MiningConfig':
        return cls()

    @classmethod
    def market_basket(cls) -> 'MiningConfig':
        return cls(min_support=0.01, min_confidence=0.3, max_len=4, sort_metric='lift')

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'MiningConfig':
        values = dict(values)
        values['filters'] = [
            f if isinstance(f, FilterConfig) else FilterConfig(**f)
            for f in values.get('filters', [])
        ]
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**values).validate()

    def to_dict(self) -> Dict[str, Any]:
        values = asdict(self)
        values['filters'] = [f.to_dict() for f in self.filters]
        return values
