"""
Contract ID (EVCO ID) value object

Structure (normalized, 14 or 15 characters):
- Country code: 2 letters ("DE")
- Provider ID: 3 alphanumerics ("8AA")
- Instance: 9 alphanumerics ("CA2B3C4D5")
- Check digit: 1 alphanumeric, optional ("L")

Display form: "DE-8AA-CA2B3C4D5-L"
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import Optional

from .checksum import (
    LENGTH_EXCLUDING_CHECK_DIGIT,
    LENGTH_INCLUDING_CHECK_DIGIT,
    SEPARATOR,
    ContractIdError,
    InvalidCharacterError,
    InvalidLengthError,
    compute_check_digit,
    normalize,
)
from .tables import ALPHABET

logger = logging.getLogger(__name__)

COUNTRY_CODE_LENGTH = 2
PROVIDER_ID_LENGTH = 3
INSTANCE_LENGTH = 9


class CheckDigitMismatchError(ContractIdError):
    """Embedded check digit does not match the computed one"""

    def __init__(self, identifier: str, embedded: str, computed: str):
        self.identifier = identifier
        self.embedded = embedded
        self.computed = computed
        super().__init__(
            f"contract ID '{identifier}' has check digit '{embedded}', expected '{computed}'"
        )


def _check_characters(identifier: str) -> None:
    for position, char in enumerate(identifier):
        if position < COUNTRY_CODE_LENGTH:
            ok = char in string.ascii_uppercase
        else:
            ok = char in ALPHABET
        if not ok:
            raise InvalidCharacterError(identifier, char, position)


@dataclass(frozen=True)
class ContractId:
    """
    Contract ID split into its parts. Build with parse() or from_parts().

    Every instance is checked on construction: part lengths, characters and,
    if present, the check digit.
    """

    country_code: str
    provider_id: str
    instance: str
    check_digit: Optional[str] = None

    def __post_init__(self):
        parts = (
            (self.country_code, COUNTRY_CODE_LENGTH),
            (self.provider_id, PROVIDER_ID_LENGTH),
            (self.instance, INSTANCE_LENGTH),
        )
        for value, length in parts:
            if len(value) != length:
                raise InvalidLengthError(value, len(value), (length,))
        if self.check_digit is not None and len(self.check_digit) != 1:
            raise InvalidLengthError(self.check_digit, len(self.check_digit), (1,))

        identifier = self.compact
        _check_characters(identifier)

        if self.check_digit is not None:
            computed = compute_check_digit(self.payload)
            if self.check_digit != computed:
                logger.info("Contract ID %s rejected: check digit mismatch", identifier)
                raise CheckDigitMismatchError(identifier, self.check_digit, computed)

    @classmethod
    def parse(cls, raw: str) -> "ContractId":
        """
        Parse a raw contract ID ("de-8aa-ca2b3c4d5-l", "DE8AACA2B3C4D5").

        Raises:
            InvalidLengthError: If the normalized ID is not 14 or 15 characters
            InvalidCharacterError: If the country code is not two letters or
                another character is not in the alphabet
            CheckDigitMismatchError: If the embedded check digit is wrong
        """
        identifier = normalize(raw)
        accepted = (LENGTH_EXCLUDING_CHECK_DIGIT, LENGTH_INCLUDING_CHECK_DIGIT)
        if len(identifier) not in accepted:
            raise InvalidLengthError(identifier, len(identifier), accepted)

        provider_end = COUNTRY_CODE_LENGTH + PROVIDER_ID_LENGTH
        return cls(
            country_code=identifier[:COUNTRY_CODE_LENGTH],
            provider_id=identifier[COUNTRY_CODE_LENGTH:provider_end],
            instance=identifier[provider_end:LENGTH_EXCLUDING_CHECK_DIGIT],
            check_digit=identifier[LENGTH_EXCLUDING_CHECK_DIGIT:] or None,
        )

    @classmethod
    def from_parts(cls, country_code: str, provider_id: str, instance: str) -> "ContractId":
        """Build a contract ID from its parts and compute its check digit."""
        contract_id = cls(normalize(country_code), normalize(provider_id), normalize(instance))
        return contract_id.with_check_digit()

    @property
    def payload(self) -> str:
        return f"{self.country_code}{self.provider_id}{self.instance}"

    @property
    def compact(self) -> str:
        """Normalized form, with check digit if known."""
        return f"{self.payload}{self.check_digit or ''}"

    @property
    def display(self) -> str:
        parts = [self.country_code, self.provider_id, self.instance]
        if self.check_digit:
            parts.append(self.check_digit)
        return SEPARATOR.join(parts)

    def with_check_digit(self) -> "ContractId":
        """Copy with the computed check digit filled in."""
        if self.check_digit:
            return self
        return ContractId(
            self.country_code, self.provider_id, self.instance,
            compute_check_digit(self.payload),
        )

    def __str__(self) -> str:
        return self.display
