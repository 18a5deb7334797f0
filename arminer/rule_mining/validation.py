"""Parameter validation shared by the miners, the rule generator and the config layer."""
import numbers
from typing import Optional

from arminer.exceptions import ConfigurationError


def check_min_support(min_support: float) -> float:
    if isinstance(min_support, bool) or not isinstance(min_support, numbers.Real):
        raise ConfigurationError(f"`min_support` must be a number, got {min_support!r}")
    if not 0.0 < min_support <= 1.0:
        raise ConfigurationError(
            "`min_support` must be a positive number within the interval `(0, 1]`. "
            f"Got {min_support}."
        )
    return float(min_support)


def check_min_confidence(min_confidence: float) -> float:
    if isinstance(min_confidence, bool) or not isinstance(min_confidence, numbers.Real):
        raise ConfigurationError(f"`min_confidence` must be a number, got {min_confidence!r}")
    if not 0.0 <= min_confidence <= 1.0:
        raise ConfigurationError(
            f"`min_confidence` must be within the interval `[0, 1]`. Got {min_confidence}."
        )
    return float(min_confidence)


def check_max_len(max_len: Optional[int]) -> Optional[int]:
    """None means unbounded."""
    if max_len is None:
        return None
    if isinstance(max_len, bool) or not isinstance(max_len, numbers.Integral):
        raise ConfigurationError(f"`max_len` must be a positive integer or None, got {max_len!r}")
    if max_len < 1:
        raise ConfigurationError(f"`max_len` must be at least 1. Got {max_len}.")
    return int(max_len)


def check_n_jobs(n_jobs: Optional[int]) -> int:
    if n_jobs is None:
        return 1
    if isinstance(n_jobs, bool) or not isinstance(n_jobs, numbers.Integral) or n_jobs == 0:
        raise ConfigurationError(f"`n_jobs` must be a non-zero integer (joblib semantics), got {n_jobs!r}")
    return int(n_jobs)
