# === wallet.py: Wallet- und Verbindungs-Anbindung ===
# Das Wallet signiert und sendet Transaktionen; die RPC-Verbindung liefert
# Netzwerkzustand (Rent-Minimum, aktueller Blockhash).

import base64
import binascii
import json
import os
from typing import Optional

from solana.rpc.api import Client
from solana.rpc.commitment import Commitment
from solana.rpc.types import TxOpts
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from log_utils import get_logger

logger = get_logger("wallet")


class WalletNotConnectedError(Exception):
    """Es ist kein Wallet verbunden."""


class TransactionFailedError(Exception):
    """Die Transaktion wurde bestätigt, ist on-chain aber fehlgeschlagen."""


def load_keypair_from_path(path: str) -> Keypair:
    """Lädt ein Keypair aus einer JSON-Datei (Solana-CLI-Listenformat oder Base64-String)."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Wallet-Datei '{path}' nicht gefunden.")
    with open(path, 'r') as f:
        data = json.load(f)

    if isinstance(data, str):
        try:
            secret_bytes = base64.b64decode(data.encode('ascii'), validate=True)
        except (ValueError, binascii.Error) as e:
            raise ValueError(f"Base64-Schlüssel in {path} konnte nicht dekodiert werden: {e}") from e
        if len(secret_bytes) != 64:
            raise ValueError(f"Dekodierter Base64-Schlüssel aus {path} hat eine falsche Länge: {len(secret_bytes)}")
        return Keypair.from_bytes(secret_bytes)

    if isinstance(data, list):
        secret_bytes = bytes(data)
        if len(secret_bytes) == 32:
            return Keypair.from_seed(secret_bytes)
        if len(secret_bytes) == 64:
            return Keypair.from_bytes(secret_bytes)
        raise ValueError(f"Schlüssel aus Liste in {path} hat eine falsche Länge: {len(secret_bytes)}")

    raise TypeError(f"Unbekanntes oder ungültiges Key-Format in {path}.")


def create_client(rpc_url: str, commitment: str = "confirmed") -> Client:
    return Client(rpc_url, commitment=Commitment(commitment))


def check_connection(client: Client) -> bool:
    """Prüft, ob der RPC-Endpunkt erreichbar ist."""
    try:
        return bool(client.is_connected())
    except Exception as e:
        logger.warning(f"RPC-Verbindung konnte nicht geprüft werden: {e}")
        return False


class Wallet:
    """Schnittstelle eines Wallets: Identität, Status und 'signieren + senden'."""

    @property
    def public_key(self) -> Optional[Pubkey]:
        raise NotImplementedError

    @property
    def connected(self) -> bool:
        return self.public_key is not None

    def send_transaction(self, transaction: Transaction, client: Client) -> str:
        """Signiert die Transaktion, sendet sie und liefert die Signatur nach Bestätigung."""
        raise NotImplementedError

    def disconnect(self) -> None:
        raise NotImplementedError


class KeypairWallet(Wallet):
    """Wallet auf Basis eines lokalen Keypairs (z.B. ~/.config/solana/id.json)."""

    def __init__(self, keypair: Optional[Keypair] = None, commitment: str = "confirmed", source: str = ""):
        self._keypair = keypair
        self.commitment = commitment
        self.source = source

    @classmethod
    def from_file(cls, path: str, commitment: str = "confirmed") -> "KeypairWallet":
        keypair = load_keypair_from_path(path)
        logger.info(f"Wallet geladen: {keypair.pubkey()} ({path})")
        return cls(keypair, commitment=commitment, source=path)

    @property
    def public_key(self) -> Optional[Pubkey]:
        return self._keypair.pubkey() if self._keypair is not None else None

    def connect(self, keypair: Keypair, source: str = "") -> None:
        self._keypair = keypair
        self.source = source

    def disconnect(self) -> None:
        self._keypair = None
        self.source = ""

    def send_transaction(self, transaction: Transaction, client: Client) -> str:
        if self._keypair is None:
            raise WalletNotConnectedError("Wallet nicht verbunden.")

        # Vorhandene Co-Signaturen bleiben erhalten, solange der Blockhash gleich bleibt
        transaction.partial_sign([self._keypair], transaction.message.recent_blockhash)

        commitment = Commitment(self.commitment)
        result = client.send_transaction(transaction, opts=TxOpts(preflight_commitment=commitment))
        logger.info(f"Transaktion gesendet, warte auf Bestätigung... Signatur: {result.value}")
        response = client.confirm_transaction(result.value, commitment)
        status = response.value[0] if response.value else None
        if status is not None and status.err is not None:
            raise TransactionFailedError(f"Transaktion {result.value} fehlgeschlagen: {status.err}")
        return str(result.value)
