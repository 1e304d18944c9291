"""
Contract Validation Module

Модуль для валидации JSON контрактов конфигурации decay.
"""

from .validators import (
    ContractValidator,
    DutchBlockDecayConfigValidator,
    SchemaLoader,
    parse_dutch_block_decay_config,
    validate_dutch_block_decay_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DutchBlockDecayConfigValidator",
    # Functions
    "validate_dutch_block_decay_config",
    "parse_dutch_block_decay_config",
]
