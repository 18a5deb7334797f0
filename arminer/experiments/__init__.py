from .config import (
    MiningConfig,
    FilterConfig
)
from .base import (
    setup_logging,
    run_rule_mining,
    create_miner,
    apply_filters
)

__all__ = [
    'MiningConfig',
    'FilterConfig',
    'setup_logging',
    'run_rule_mining',
    'create_miner',
    'apply_filters'
]
