"""
Pytest configuration and fixtures for evcoid tests
"""
import pytest


@pytest.fixture
def valid_contract_ids():
    """Contract IDs with a correct check digit, in several spellings"""
    return [
        "DE83DUIEN83QGZD",
        "DE-8AA-CA2B3C4D5-L",
        "de-83d-uien83-qgzd",
        "de-8aa-ca2b3c4d5-l",
        "NLTNMC00012345N",
        "AT-EVN-000000042-P",
    ]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Remove evcoid variables that a local .env might have set"""
    monkeypatch.delenv("EVCOID_LOG_LEVEL", raising=False)
    return monkeypatch
