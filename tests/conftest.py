"""Gemeinsame Fixtures für die Launchpad-Tests."""

import os
import sys
from unittest.mock import MagicMock

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.signature import Signature

# Die Module liegen flach im Projektverzeichnis
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from notifications import Notifier  # noqa: E402
from wallet import KeypairWallet  # noqa: E402


@pytest.fixture
def valid_fields():
    return {
        "name": "Test",
        "symbol": "TST",
        "imageUrl": "https://example.com/token.png",
        "initialSupply": "1000",
        "decimals": "6",
    }


@pytest.fixture
def mock_client():
    """RPC-Client ohne Netzwerk: festes Rent-Minimum, Null-Blockhash, Standard-Signatur, erfolgreiche Bestätigung."""
    client = MagicMock()
    client.get_minimum_balance_for_rent_exemption.return_value.value = 3_000_000
    client.get_latest_blockhash.return_value.value.blockhash = Hash.default()
    client.send_transaction.return_value = MagicMock(value=Signature.default())
    client.confirm_transaction.return_value.value = [MagicMock(err=None)]
    client.is_connected.return_value = True
    return client


@pytest.fixture
def payer():
    return Keypair()


@pytest.fixture
def connected_wallet(payer):
    return KeypairWallet(payer)


@pytest.fixture
def notifier():
    return Notifier()
