"""
Check digit calculation/verification for e-mobility contract IDs (EVCO ID).

Rules:
- Input may contain "-" separators and lowercase letters ("de-8aa-ca2b3c4d5-l")
- Normalized form: uppercase, no separators
- 14 characters = payload, 15 characters = payload + check digit
- Every character must be in ALPHABET (0-9, A-Z)

Algorithm: "Check Digit Calculation for Contract-IDs"
http://www.ochp.eu/wp-content/uploads/2014/02/E-Mobility-IDs_EVCOID_Check-Digit-Calculation_Explanation.pdf
"""

from __future__ import annotations

import logging
import string
from typing import List, Tuple

from .tables import ALPHABET, P1, P2, REVERSE, combined_index

logger = logging.getLogger(__name__)

LENGTH_EXCLUDING_CHECK_DIGIT = 14
LENGTH_INCLUDING_CHECK_DIGIT = 15
SEPARATOR = "-"

# Negation mod 3, applied to c4 and to c3 + r1
_R1_REMAP = (0, 2, 1)
_R2_REMAP = (0, 2, 1, 0, 2)

# ASCII only: str.upper() would turn "\u0131" into "I" and "\u00df" into "SS"
_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


class ContractIdError(ValueError):
    """Contract ID could not be processed"""
    pass


class InvalidLengthError(ContractIdError):
    """Normalized contract ID has a length the operation does not accept"""

    def __init__(self, identifier: str, length: int, expected: Tuple[int, ...]):
        self.identifier = identifier
        self.length = length
        self.expected = expected
        accepted = " or ".join(str(n) for n in expected)
        super().__init__(
            f"contract ID '{identifier}' has invalid length: {length} "
            f"(must be {accepted} characters)"
        )


class InvalidCharacterError(ContractIdError):
    """Contract ID contains a character outside the alphabet"""

    def __init__(self, identifier: str, character: str, position: int):
        self.identifier = identifier
        self.character = character
        self.position = position
        super().__init__(
            f"contract ID '{identifier}' contains invalid character "
            f"'{character}' at position {position}"
        )


class ChecksumInvariantError(AssertionError):
    """Internal reduction produced a value outside its domain"""
    pass


def normalize(raw: str) -> str:
    """Remove "-" separators and upper-case ASCII letters. Never fails, idempotent."""
    return raw.replace(SEPARATOR, "").translate(_ASCII_UPPER)


def _require_length(identifier: str, accepted: Tuple[int, ...]) -> None:
    if len(identifier) not in accepted:
        logger.debug("Rejected contract ID %r: length %d", identifier, len(identifier))
        raise InvalidLengthError(identifier, len(identifier), accepted)


def _flatten(identifier: str) -> List[int]:
    """
    Map the first 14 characters to their vectors and flatten them.

    Returns:
        56 values, m[4*i:4*i+4] == ALPHABET[identifier[i]]

    Raises:
        InvalidCharacterError: If a character is not in ALPHABET
    """
    m: List[int] = []
    for position, char in enumerate(identifier[:LENGTH_EXCLUDING_CHECK_DIGIT]):
        vector = ALPHABET.get(char)
        if vector is None:
            logger.debug("Rejected contract ID %r: invalid character %r", identifier, char)
            raise InvalidCharacterError(identifier, char, position)
        m.extend(vector)
    return m


def _remap(table: Tuple[int, ...], value: int) -> int:
    if not 0 <= value < len(table):
        raise ChecksumInvariantError(f"value {value} outside remap domain [0, {len(table)})")
    return table[value]


def _calculate(identifier: str) -> str:
    m = _flatten(identifier)

    c1 = c2 = c3 = c4 = 0
    for i in range(LENGTH_EXCLUDING_CHECK_DIGIT):
        c1 += m[i * 4] * P1[i][0] + m[i * 4 + 1] * P1[i][2]
        c2 += m[i * 4] * P1[i][1] + m[i * 4 + 1] * P1[i][3]
        c3 += m[i * 4 + 2] * P2[i][0] + m[i * 4 + 3] * P2[i][2]
        c4 += m[i * 4 + 2] * P2[i][1] + m[i * 4 + 3] * P2[i][3]

    q1 = c1 % 2
    q2 = c2 % 2
    r1 = _remap(_R1_REMAP, c4 % 3)
    r2 = _remap(_R2_REMAP, c3 % 3 + r1)

    digit = REVERSE[combined_index(q1, q2, r1, r2)]
    logger.debug(
        "Check digit for %s: %s (q1=%d q2=%d r1=%d r2=%d)",
        identifier[:LENGTH_EXCLUDING_CHECK_DIGIT], digit, q1, q2, r1, r2,
    )
    return digit


def compute_check_digit(identifier: str) -> str:
    """
    Compute the check digit of a contract ID.

    Accepts the ID with or without its check digit; when it is present the
    15th character is ignored.

    Args:
        identifier: Contract ID, raw or normalized ("DE-8AA-CA2B3C4D5")

    Returns:
        Check digit (single character, e.g. "L")

    Raises:
        InvalidLengthError: If the normalized ID is not 14 or 15 characters
        InvalidCharacterError: If a payload character is not in the alphabet
    """
    normalized = normalize(identifier)
    _require_length(normalized, (LENGTH_EXCLUDING_CHECK_DIGIT, LENGTH_INCLUDING_CHECK_DIGIT))
    return _calculate(normalized)


def validate(identifier: str) -> Tuple[bool, str, str]:
    """
    Validate the check digit of a full (15 character) contract ID.

    Returns:
        (valid, embedded check digit, computed check digit)

    Raises:
        InvalidLengthError: If the normalized ID is not 15 characters
        InvalidCharacterError: If a payload character is not in the alphabet
    """
    normalized = normalize(identifier)
    _require_length(normalized, (LENGTH_INCLUDING_CHECK_DIGIT,))
    embedded = normalized[LENGTH_EXCLUDING_CHECK_DIGIT]
    computed = _calculate(normalized)
    return embedded == computed, embedded, computed


def verify(identifier: str) -> bool:
    """True if the contract ID carries the correct check digit."""
    valid, embedded, computed = validate(identifier)
    if not valid:
        logger.debug(
            "Check digit mismatch for %r: embedded=%s computed=%s",
            identifier, embedded, computed,
        )
    return valid


def is_valid(identifier: str) -> bool:
    """
    Like verify(), but returns False instead of raising on malformed input.

    Non-str input (None, bytes) is malformed too.
    """
    if not isinstance(identifier, str):
        return False
    try:
        return verify(identifier)
    except ContractIdError:
        return False


def append_check_digit(identifier: str) -> str:
    """
    Return the normalized 15 character contract ID with a correct check digit.

    A 15 character input has its last character replaced.
    """
    normalized = normalize(identifier)
    _require_length(normalized, (LENGTH_EXCLUDING_CHECK_DIGIT, LENGTH_INCLUDING_CHECK_DIGIT))
    payload = normalized[:LENGTH_EXCLUDING_CHECK_DIGIT]
    return f"{payload}{_calculate(payload)}"
