#!/usr/bin/env python3
"""
Tests for check digit calculation/verification.

Run:
    python -m pytest tests/test_checksum.py -v
"""
import logging

import pytest

from evcoid import (
    InvalidCharacterError,
    InvalidLengthError,
    append_check_digit,
    compute_check_digit,
    is_valid,
    normalize,
    validate,
    verify,
)
from evcoid.tables import ALPHABET

# Example from "Check Digit Calculation for Contract-IDs" (OCHP)
VALID_CONTRACT_ID_1 = "DE83DUIEN83QGZD"

# Example from eMI3 standard v1.0, Part 2: Business Objects, section 1.2.2.1
VALID_CONTRACT_ID_2 = "DE-8AA-CA2B3C4D5-L"


@pytest.mark.parametrize(
    "contract_id, expected",
    [
        ("DE83DUIEN83QGZ", "D"),
        (VALID_CONTRACT_ID_1, "D"),
        ("DE-8AA-CA2B3C4D5", "L"),
        (VALID_CONTRACT_ID_2, "L"),
        ("NLTNMC00012345", "N"),
        ("FRXYZ123456789", "2"),
        ("ATEVN000000042", "P"),
        ("ZZZZZZZZZZZZZZ", "W"),
        ("00000000000000", "0"),
    ],
)
def test_compute_check_digit(contract_id, expected):
    assert compute_check_digit(contract_id) == expected


def test_compute_check_digit_ignores_15th_character():
    assert compute_check_digit("DE83DUIEN83QGZD") == compute_check_digit("DE83DUIEN83QGZX")


@pytest.mark.parametrize(
    "contract_id",
    ["DE83DUIEN83QG", "DE83DUIEN83QGZXX", "DE-83D-UIEN-83QGZX-X", "", "-" * 15],
)
def test_compute_check_digit_invalid_length(contract_id):
    with pytest.raises(InvalidLengthError) as ctx:
        compute_check_digit(contract_id)
    assert ctx.value.length == len(normalize(contract_id))
    assert "invalid length" in str(ctx.value)


def test_verify_valid(valid_contract_ids):
    for contract_id in valid_contract_ids:
        assert verify(contract_id) is True, contract_id


def test_verify_wrong_check_digit():
    assert verify("DE83DUIEN83QGZE") is False
    assert verify("DE-8AA-CA2B3C4D5-M") is False


@pytest.mark.parametrize(
    "contract_id",
    ["DE83DUIEN83QG", "DE83DUIEN83QGZ", "DE83DUIEN83QGZDX", "DE83DUIEN83QGZXX"],
)
def test_verify_invalid_length(contract_id):
    with pytest.raises(InvalidLengthError) as ctx:
        verify(contract_id)
    assert ctx.value.expected == (15,)


@pytest.mark.parametrize("bad_char", ["_", " ", "!", "Ä", "."])
def test_invalid_character_is_an_error(bad_char):
    contract_id = f"DE83DU{bad_char}EN83QGZD"
    with pytest.raises(InvalidCharacterError) as ctx:
        verify(contract_id)
    assert ctx.value.character == bad_char
    assert ctx.value.position == 6

    with pytest.raises(InvalidCharacterError):
        compute_check_digit(contract_id[:14])


@pytest.mark.parametrize(
    "contract_id",
    ["DE83DUIEN83QG\u00df", "DE83DU\u0131EN83QGZ", "DE83DUIEN83QG\u017f"],
)
def test_non_ascii_letters_are_not_folded_into_alphabet(contract_id):
    # "\u00df".upper() == "SS", "\u0131".upper() == "I", "\u017f".upper() == "S"
    with pytest.raises(InvalidCharacterError):
        compute_check_digit(contract_id)
    with pytest.raises(InvalidCharacterError):
        verify(contract_id + "D")
    assert not is_valid(contract_id + "D")


def test_normalize_only_upper_cases_ascii():
    assert normalize("de-83d-u\u0131en83-qgzd") == "DE83DU\u0131EN83QGZD"
    assert normalize("\u00df") == "\u00df"


def test_invalid_check_digit_character_is_a_mismatch():
    # only the payload is looked up in the alphabet
    assert verify("DE83DUIEN83QGZ_") is False


def test_normalize():
    assert normalize("de-83d-uien83-qgzd") == VALID_CONTRACT_ID_1
    assert normalize("DE-8AA-CA2B3C4D5-L") == "DE8AACA2B3C4D5L"
    assert normalize("") == ""


def test_normalize_idempotent(valid_contract_ids):
    for contract_id in valid_contract_ids:
        once = normalize(contract_id)
        assert normalize(once) == once


def test_verify_case_and_format_insensitive(valid_contract_ids):
    for contract_id in valid_contract_ids + ["DE83DUIEN83QGZE", "de-8aa-ca2b3c4d5-m"]:
        assert verify(contract_id) == verify(normalize(contract_id))


@pytest.mark.parametrize(
    "payload",
    ["DE83DUIEN83QGZ", "DE8AACA2B3C4D5", "0123456789ABCD", "EFGHIJKLMNOPQR", "STUVWXYZ012345"],
)
def test_round_trip(payload):
    assert verify(payload + compute_check_digit(payload))


def test_single_substitution_detected():
    payload = "DE8AACA2B3C4D5"
    check_digit = compute_check_digit(payload)
    for position, original in enumerate(payload):
        for char in ALPHABET:
            if char == original:
                continue
            changed = payload[:position] + char + payload[position + 1:]
            assert not verify(changed + check_digit), changed


def test_deterministic():
    results = {compute_check_digit("DE83DUIEN83QGZ") for _ in range(5)}
    assert results == {"D"}


def test_validate_returns_digits():
    assert validate(VALID_CONTRACT_ID_1) == (True, "D", "D")
    assert validate("de-8aa-ca2b3c4d5-x") == (False, "X", "L")


def test_is_valid_never_raises():
    assert is_valid(VALID_CONTRACT_ID_2)
    assert not is_valid("DE83DUIEN83QGZE")
    assert not is_valid("DE83DUIEN83QG")
    assert not is_valid("DE83DU_EN83QGZD")
    assert not is_valid(None)
    assert not is_valid(b"DE83DUIEN83QGZD")


def test_append_check_digit():
    assert append_check_digit("de-83d-uien83-qgz") == VALID_CONTRACT_ID_1
    assert append_check_digit("DE8AACA2B3C4D5X") == "DE8AACA2B3C4D5L"
    with pytest.raises(InvalidLengthError):
        append_check_digit("DE8AA")


def test_mismatch_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="evcoid"):
        verify("DE83DUIEN83QGZE")
    assert "embedded=E computed=D" in caplog.text
