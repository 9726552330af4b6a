# File: helmholtz_eos/mixtures/__init__.py
"""
Mixture combining rules: reducing functions, excess term and parameter registry
"""

from .excess import ExcessTerm
from .reducing import (
    ReducingFunction,
    GERG2008ReducingFunction,
    LorentzBerthelotReducingFunction,
)
from .registry import (
    AVAILABLE_MIXING_RULES,
    BinaryPair,
    get_mixing_rule,
    get_reducing_function,
    register_binary_pair,
)

__all__ = [
    'ExcessTerm',
    'ReducingFunction',
    'GERG2008ReducingFunction',
    'LorentzBerthelotReducingFunction',
    'AVAILABLE_MIXING_RULES',
    'BinaryPair',
    'get_mixing_rule',
    'get_reducing_function',
    'register_binary_pair',
]
