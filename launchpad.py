# === launchpad.py: Ablaufsteuerung der Token-Erstellung ===
# Drei Transaktionen in fester Reihenfolge:
#   1. Mint-Konto anlegen + Metadata-Pointer + Mint + On-Chain-Metadaten
#   2. Associated Token Account des Wallets anlegen
#   3. Initialen Vorrat auf das ATA minten
# Jede Transaktion wird erst gebaut, wenn die vorherige bestätigt ist.

import threading
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Callable, Dict, List, Optional

from solana.rpc.api import Client
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.system_program import CreateAccountParams, create_account
from solders.transaction import Transaction
from spl.token.instructions import (
    InitializeMintParams, MintToParams,
    create_associated_token_account, get_associated_token_address,
    initialize_mint, mint_to,
)

from constants import (
    CREATING_TOAST_ID, DEFAULT_LANGUAGE, EXTENSION_METADATA_POINTER,
    METADATA_URI, TOKEN_DESCRIPTION, TOKEN_PROGRAM, t,
)
from display import format_sol_amount, format_token_amount
from log_utils import get_logger
from notifications import Notifier
from token_metadata import (
    TokenMetadata, get_mint_len, initialize_metadata_pointer,
    initialize_token_metadata, metadata_account_len, update_token_metadata_field,
)
from validation import FormData, sanitize_image_url
from wallet import Wallet

logger = get_logger("launchpad")


class Phase(IntEnum):
    PREPARE = 0
    CREATE = 1
    MINT = 2
    COMPLETE = 3


class ErrorKind(Enum):
    INSUFFICIENT_FUNDS = "error.insufficientFunds"
    SIMULATION_FAILED = "error.transactionFailed"
    GENERIC = "error.generic"


INSUFFICIENT_FUNDS_MARKERS = ("insufficient funds", "insufficient lamports")
SIMULATION_FAILED_MARKERS = ("simulation failed",)


def classify_error(error: BaseException) -> ErrorKind:
    """Ordnet einen Fehler anhand seines Meldungstextes einer Nutzer-Meldung zu."""
    message = str(error).lower()
    if any(marker in message for marker in INSUFFICIENT_FUNDS_MARKERS):
        return ErrorKind.INSUFFICIENT_FUNDS
    if any(marker in message for marker in SIMULATION_FAILED_MARKERS):
        return ErrorKind.SIMULATION_FAILED
    return ErrorKind.GENERIC


@dataclass
class TokenLaunchResult:
    mint: Pubkey
    associated_token: Pubkey
    base_units: int
    signatures: List[str] = field(default_factory=list)


class TokenLaunchpad:
    """Erstellt einen Token-2022-Mint mit Metadaten und mintet den initialen Vorrat.

    Die Phase (0-3) wird ausschließlich hier verändert; Beobachter werden über
    `on_phase_change` informiert. Bei einem Fehler bleibt die Phase stehen.
    """

    def __init__(self, client: Client, wallet: Optional[Wallet], notifier: Notifier,
                 config: Optional[Dict[str, Any]] = None,
                 on_phase_change: Optional[Callable[[Phase], None]] = None):
        config = config or {}
        self.client = client
        self.wallet = wallet
        self.notifier = notifier
        self.lang = config.get("language", DEFAULT_LANGUAGE)
        self.metadata_uri = config.get("metadata_uri", METADATA_URI)
        self.token_description = config.get("token_description", TOKEN_DESCRIPTION)
        self.on_phase_change = on_phase_change

        self.phase = Phase.PREPARE
        self.is_loading = False
        self.last_signature: Optional[str] = None
        self.last_result: Optional[TokenLaunchResult] = None
        self._pending_mint: Optional[Pubkey] = None

    # === Öffentliche API ===
    def create_token(self, data: FormData, on_reset: Optional[Callable[[], None]] = None) -> Optional[TokenLaunchResult]:
        """Führt die komplette Token-Erstellung synchron aus."""
        if not self._begin():
            return None
        return self._run(data, on_reset)

    def run_async(self, data: FormData,
                  on_done: Optional[Callable[[Optional[TokenLaunchResult]], None]] = None,
                  on_reset: Optional[Callable[[], None]] = None) -> Optional[threading.Thread]:
        """Startet die Token-Erstellung in einem Hintergrund-Thread."""
        if not self._begin():
            if on_done:
                on_done(None)
            return None

        def worker():
            result = self._run(data, on_reset)
            if on_done:
                on_done(result)

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        return thread

    def wallet_ready(self) -> bool:
        return self.wallet is not None and self.wallet.connected and self.wallet.public_key is not None

    def build_metadata(self, update_authority: Pubkey, mint: Pubkey, data: FormData) -> TokenMetadata:
        return TokenMetadata(
            update_authority=update_authority,
            mint=mint,
            name=data.name,
            symbol=data.symbol,
            uri=self.metadata_uri,
            additional_metadata=[
                ("description", self.token_description),
                ("image", sanitize_image_url(data.image_url)),
            ],
        )

    # === Ablauf ===
    def _begin(self) -> bool:
        """Prüft die Vorbedingungen; ohne Wallet bleibt jeder Zustand unverändert."""
        if not self.wallet_ready():
            self.notifier.error(t("error.walletNotConnected", self.lang), t("error.walletNotConnectedDesc", self.lang))
            return False
        if self.is_loading:
            logger.warning("Token-Erstellung läuft bereits, neue Anfrage wird ignoriert.")
            self.notifier.info(t("error.busy", self.lang))
            return False
        self.is_loading = True
        return True

    def _run(self, data: FormData, on_reset: Optional[Callable[[], None]]) -> Optional[TokenLaunchResult]:
        try:
            result = self._launch(data)
        except Exception as e:
            logger.exception(f"Fehler beim Erstellen des Tokens: {e}")
            if self._pending_mint is not None and self.phase >= Phase.MINT:
                logger.warning(f"Mint {self._pending_mint} wurde angelegt, der Vorrat aber nicht vollständig gemintet.")
            kind = classify_error(e)
            self.notifier.error(t("error.creatingToken", self.lang), t(kind.value, self.lang), toast_id=CREATING_TOAST_ID)
            return None
        else:
            self.last_result = result
            self._set_phase(Phase.COMPLETE)
            self.notifier.success(
                t("success.tokenCreated", self.lang),
                t("success.tokenCreatedDesc", self.lang, name=data.name, symbol=data.symbol),
                toast_id=CREATING_TOAST_ID,
            )
            if on_reset:
                on_reset()
            self._set_phase(Phase.PREPARE)
            return result
        finally:
            self._pending_mint = None
            self.is_loading = False

    def _launch(self, data: FormData) -> TokenLaunchResult:
        owner = self.wallet.public_key
        self._set_phase(Phase.CREATE)
        self.notifier.loading(t("progress.creating", self.lang), toast_id=CREATING_TOAST_ID)

        # 1. Neues Keypair für den Mint, wird nie wiederverwendet
        mint_keypair = Keypair()
        mint = mint_keypair.pubkey()
        self._pending_mint = mint
        logger.info(f"→ Neuer Mint: {mint} ({data.name} / {data.symbol}, {data.decimals_value} Dezimalstellen)")

        # 2. Rent für Mint + Metadaten
        metadata = self.build_metadata(owner, mint, data)
        mint_len = get_mint_len([EXTENSION_METADATA_POINTER])
        metadata_len = metadata_account_len(metadata)
        lamports = self.client.get_minimum_balance_for_rent_exemption(mint_len + metadata_len).value
        logger.info(f"   Kontogröße {mint_len} + {metadata_len} Bytes, Rent: {format_sol_amount(lamports)}")

        # 3. Transaktion 1: Mint mit Metadaten anlegen
        tx1 = self._build_transaction(self._create_mint_instructions(owner, mint, metadata, data, mint_len, lamports), owner)
        tx1.partial_sign([mint_keypair], tx1.message.recent_blockhash)
        signature = self.wallet.send_transaction(tx1, self.client)
        self.last_signature = signature
        self._set_phase(Phase.MINT)
        logger.info(f"Mint erstellt. Signatur: {signature}", extra={"tag": "success"})

        # 4. Transaktion 2: Associated Token Account
        associated_token = get_associated_token_address(owner, mint, token_program_id=TOKEN_PROGRAM)
        tx2 = self._build_transaction([
            create_associated_token_account(payer=owner, owner=owner, mint=mint, token_program_id=TOKEN_PROGRAM)
        ], owner)
        ata_signature = self.wallet.send_transaction(tx2, self.client)
        logger.info(f"Token-Konto {associated_token} erstellt. Signatur: {ata_signature}", extra={"tag": "success"})

        # 5. Transaktion 3: initialen Vorrat minten
        amount = data.base_units
        tx3 = self._build_transaction([
            mint_to(MintToParams(
                program_id=TOKEN_PROGRAM,
                mint=mint,
                dest=associated_token,
                mint_authority=owner,
                amount=amount
            ))
        ], owner)
        mint_signature = self.wallet.send_transaction(tx3, self.client)
        logger.info(f"{format_token_amount(amount, data.decimals_value)} {data.symbol} gemintet ({amount} Basiseinheiten). Signatur: {mint_signature}", extra={"tag": "success"})

        return TokenLaunchResult(
            mint=mint,
            associated_token=associated_token,
            base_units=amount,
            signatures=[signature, ata_signature, mint_signature],
        )

    def _create_mint_instructions(self, owner: Pubkey, mint: Pubkey, metadata: TokenMetadata, data: FormData,
                                  mint_len: int, lamports: int) -> List[Instruction]:
        # Der Mint ist gleichzeitig sein eigenes Metadaten-Konto
        return [
            create_account(
                CreateAccountParams(
                    from_pubkey=owner,
                    to_pubkey=mint,
                    lamports=lamports,
                    space=mint_len,
                    owner=TOKEN_PROGRAM
                )
            ),
            initialize_metadata_pointer(mint, owner, mint, TOKEN_PROGRAM),
            initialize_mint(
                InitializeMintParams(
                    program_id=TOKEN_PROGRAM,
                    mint=mint,
                    decimals=data.decimals_value,
                    mint_authority=owner,
                    freeze_authority=owner
                )
            ),
            initialize_token_metadata(
                metadata=mint,
                update_authority=owner,
                mint=mint,
                mint_authority=owner,
                name=metadata.name,
                symbol=metadata.symbol,
                uri=metadata.uri,
                program_id=TOKEN_PROGRAM,
            ),
            update_token_metadata_field(
                metadata=mint,
                update_authority=owner,
                field_name="image",
                value=metadata.get_field("image"),
                program_id=TOKEN_PROGRAM,
            ),
        ]

    def _build_transaction(self, instructions: List[Instruction], payer: Pubkey) -> Transaction:
        blockhash = self.client.get_latest_blockhash().value.blockhash
        message = Message.new_with_blockhash(instructions, payer, blockhash)
        return Transaction.new_unsigned(message)

    def _set_phase(self, phase: Phase) -> None:
        self.phase = phase
        if self.on_phase_change:
            self.on_phase_change(phase)
