"""Tests für Keypair-Dateien und das Signieren/Senden über das Wallet."""

import base64
import json
from unittest.mock import MagicMock

import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.message import Message
from solders.signature import Signature
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from wallet import (
    KeypairWallet, TransactionFailedError, WalletNotConnectedError, check_connection, load_keypair_from_path,
)


def write_json(path, data):
    path.write_text(json.dumps(data))
    return str(path)


def make_transfer(payer):
    ix = transfer(TransferParams(from_pubkey=payer, to_pubkey=Keypair().pubkey(), lamports=1000))
    return Transaction.new_unsigned(Message.new_with_blockhash([ix], payer, Hash.default()))


def test_load_keypair_from_byte_list(tmp_path):
    keypair = Keypair()
    path = write_json(tmp_path / "id.json", list(bytes(keypair)))
    assert load_keypair_from_path(path).pubkey() == keypair.pubkey()


def test_load_keypair_from_seed(tmp_path):
    seed = bytes(range(32))
    path = write_json(tmp_path / "seed.json", list(seed))
    assert load_keypair_from_path(path).pubkey() == Keypair.from_seed(seed).pubkey()


def test_load_keypair_from_base64(tmp_path):
    keypair = Keypair()
    path = write_json(tmp_path / "b64.json", base64.b64encode(bytes(keypair)).decode("ascii"))
    assert load_keypair_from_path(path).pubkey() == keypair.pubkey()


def test_load_keypair_rejects_wrong_length(tmp_path):
    with pytest.raises(ValueError):
        load_keypair_from_path(write_json(tmp_path / "short.json", [1, 2, 3]))
    with pytest.raises(ValueError):
        load_keypair_from_path(write_json(tmp_path / "short64.json", base64.b64encode(b"abc").decode("ascii")))


def test_load_keypair_rejects_unknown_format(tmp_path):
    with pytest.raises(TypeError):
        load_keypair_from_path(write_json(tmp_path / "dict.json", {"secret": []}))


def test_load_keypair_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_keypair_from_path(str(tmp_path / "fehlt.json"))


def test_wallet_from_file(tmp_path):
    keypair = Keypair()
    path = write_json(tmp_path / "id.json", list(bytes(keypair)))
    wallet = KeypairWallet.from_file(path)
    assert wallet.connected
    assert wallet.public_key == keypair.pubkey()
    assert wallet.source == path


def test_connect_and_disconnect(payer):
    wallet = KeypairWallet()
    assert not wallet.connected
    assert wallet.public_key is None

    wallet.connect(payer, source="id.json")
    assert wallet.public_key == payer.pubkey()

    wallet.disconnect()
    assert not wallet.connected
    assert wallet.source == ""


def test_send_requires_connection(mock_client, payer):
    with pytest.raises(WalletNotConnectedError):
        KeypairWallet().send_transaction(make_transfer(payer.pubkey()), mock_client)
    mock_client.send_transaction.assert_not_called()


def test_send_signs_sends_and_confirms(mock_client, payer):
    wallet = KeypairWallet(payer, commitment="finalized")
    tx = make_transfer(payer.pubkey())

    signature = wallet.send_transaction(tx, mock_client)

    assert signature == str(Signature.default())
    assert tx.signatures[0] != Signature.default()
    sent_tx = mock_client.send_transaction.call_args.args[0]
    assert sent_tx is tx
    assert mock_client.send_transaction.call_args.kwargs["opts"].preflight_commitment == "finalized"
    mock_client.confirm_transaction.assert_called_once_with(Signature.default(), "finalized")


def test_send_propagates_rpc_errors(mock_client, payer):
    mock_client.send_transaction.side_effect = RuntimeError("Transaction simulation failed")
    with pytest.raises(RuntimeError):
        KeypairWallet(payer).send_transaction(make_transfer(payer.pubkey()), mock_client)
    mock_client.confirm_transaction.assert_not_called()


def test_failed_confirmation_status_raises(mock_client, payer):
    mock_client.confirm_transaction.return_value.value = [MagicMock(err="InstructionError(2, Custom(1))")]
    with pytest.raises(TransactionFailedError, match="Custom"):
        KeypairWallet(payer).send_transaction(make_transfer(payer.pubkey()), mock_client)


def test_check_connection():
    client = MagicMock()
    client.is_connected.return_value = True
    assert check_connection(client) is True

    client.is_connected.side_effect = ConnectionError("offline")
    assert check_connection(client) is False
