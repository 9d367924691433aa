"""
Check digit calculation and verification for e-mobility contract IDs (EVCO ID)
"""
import logging

from .checksum import (
    ChecksumInvariantError,
    ContractIdError,
    InvalidCharacterError,
    InvalidLengthError,
    append_check_digit,
    compute_check_digit,
    is_valid,
    normalize,
    validate,
    verify,
)
from .contract_id import CheckDigitMismatchError, ContractId

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    'CheckDigitMismatchError',
    'ChecksumInvariantError',
    'ContractId',
    'ContractIdError',
    'InvalidCharacterError',
    'InvalidLengthError',
    'append_check_digit',
    'compute_check_digit',
    'is_valid',
    'normalize',
    'validate',
    'verify',
]
