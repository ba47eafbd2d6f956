# === token_metadata.py: Token-2022 Metadaten, Konten-Größen und manuelle Instruktionen ===
# solana-py bringt keine Builder für die Metadata-Pointer-Extension und das
# Token-Metadata-Interface mit; diese Instruktionen werden hier per Borsh gebaut.

import hashlib
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from borsh_construct import CStruct, String, U8, Vec
from construct import Bytes
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from constants import (
    ACCOUNT_SIZE, ACCOUNT_TYPE_SIZE, EXTENSION_SIZES, LENGTH_SIZE,
    METADATA_POINTER_EXTENSION_INSTRUCTION, METADATA_POINTER_INITIALIZE,
    MINT_SIZE, MULTISIG_SIZE, TOKEN_PROGRAM, TYPE_SIZE,
)

ZERO_PUBKEY_BYTES = bytes(32)


def interface_discriminator(name: str) -> bytes:
    """Die ersten 8 Bytes von sha256("<namespace>:<name>")."""
    return hashlib.sha256(name.encode("utf-8")).digest()[:8]


INITIALIZE_DISCRIMINATOR = interface_discriminator("spl_token_metadata_interface:initialize_account")
UPDATE_FIELD_DISCRIMINATOR = interface_discriminator("spl_token_metadata_interface:updating_field")

# Field-Enum des Interfaces; alles andere ist ein freier Schlüssel (Key)
FIELD_TAGS = {"name": 0, "symbol": 1, "uri": 2}
FIELD_KEY_TAG = 3

# --- Borsh-Layouts ---
TOKEN_METADATA_LAYOUT = CStruct(
    "update_authority" / Bytes(32),
    "mint" / Bytes(32),
    "name" / String,
    "symbol" / String,
    "uri" / String,
    "additional_metadata" / Vec(CStruct(
        "key" / String,
        "value" / String
    ))
)

INITIALIZE_LAYOUT = CStruct(
    "discriminator" / Bytes(8),
    "name" / String,
    "symbol" / String,
    "uri" / String
)

UPDATE_FIELD_LAYOUT = CStruct(
    "discriminator" / Bytes(8),
    "field" / U8,
    "value" / String
)

UPDATE_KEY_FIELD_LAYOUT = CStruct(
    "discriminator" / Bytes(8),
    "field" / U8,
    "key" / String,
    "value" / String
)

METADATA_POINTER_INITIALIZE_LAYOUT = CStruct(
    "instruction" / U8,
    "pointer_instruction" / U8,
    "authority" / Bytes(32),
    "metadata_address" / Bytes(32)
)


@dataclass
class TokenMetadata:
    """On-Chain-Metadaten eines Mints (Token-Metadata-Interface)."""
    update_authority: Optional[Pubkey]
    mint: Pubkey
    name: str
    symbol: str
    uri: str
    additional_metadata: List[Tuple[str, str]] = field(default_factory=list)

    def get_field(self, key: str) -> Optional[str]:
        for k, v in self.additional_metadata:
            if k == key:
                return v
        return None


def _optional_pubkey_bytes(pubkey: Optional[Pubkey]) -> bytes:
    return bytes(pubkey) if pubkey is not None else ZERO_PUBKEY_BYTES


def pack_token_metadata(metadata: TokenMetadata) -> bytes:
    return TOKEN_METADATA_LAYOUT.build({
        "update_authority": _optional_pubkey_bytes(metadata.update_authority),
        "mint": bytes(metadata.mint),
        "name": metadata.name,
        "symbol": metadata.symbol,
        "uri": metadata.uri,
        "additional_metadata": [{"key": k, "value": v} for k, v in metadata.additional_metadata],
    })


def get_mint_len(extensions: Iterable[int]) -> int:
    """Größe eines Mint-Kontos mit den angegebenen Extensions (TLV-Einträge hinter dem Konto-Typ)."""
    extensions = list(extensions)
    if not extensions:
        return MINT_SIZE
    length = ACCOUNT_SIZE + ACCOUNT_TYPE_SIZE + sum(TYPE_SIZE + LENGTH_SIZE + EXTENSION_SIZES[ext] for ext in extensions)
    # Ein Mint darf nie die Größe eines Multisig-Kontos haben
    if length == MULTISIG_SIZE:
        return length + TYPE_SIZE
    return length


def metadata_account_len(metadata: TokenMetadata) -> int:
    """Zusätzlicher Platz, den die Metadaten als TLV-Eintrag im Mint belegen."""
    return TYPE_SIZE + LENGTH_SIZE + len(pack_token_metadata(metadata))


def initialize_metadata_pointer(mint: Pubkey, authority: Optional[Pubkey], metadata_address: Optional[Pubkey],
                                program_id: Pubkey = TOKEN_PROGRAM) -> Instruction:
    data = METADATA_POINTER_INITIALIZE_LAYOUT.build({
        "instruction": METADATA_POINTER_EXTENSION_INSTRUCTION,
        "pointer_instruction": METADATA_POINTER_INITIALIZE,
        "authority": _optional_pubkey_bytes(authority),
        "metadata_address": _optional_pubkey_bytes(metadata_address),
    })
    accounts = [AccountMeta(pubkey=mint, is_signer=False, is_writable=True)]
    return Instruction(program_id, data, accounts)


def initialize_token_metadata(metadata: Pubkey, update_authority: Pubkey, mint: Pubkey, mint_authority: Pubkey,
                              name: str, symbol: str, uri: str,
                              program_id: Pubkey = TOKEN_PROGRAM) -> Instruction:
    data = INITIALIZE_LAYOUT.build({
        "discriminator": INITIALIZE_DISCRIMINATOR,
        "name": name,
        "symbol": symbol,
        "uri": uri,
    })
    accounts = [
        AccountMeta(pubkey=metadata, is_signer=False, is_writable=True),
        AccountMeta(pubkey=update_authority, is_signer=False, is_writable=False),
        AccountMeta(pubkey=mint, is_signer=False, is_writable=False),
        AccountMeta(pubkey=mint_authority, is_signer=True, is_writable=False),
    ]
    return Instruction(program_id, data, accounts)


def update_token_metadata_field(metadata: Pubkey, update_authority: Pubkey, field_name: str, value: str,
                                program_id: Pubkey = TOKEN_PROGRAM) -> Instruction:
    """Setzt ein Standardfeld (name, symbol, uri) oder einen freien Schlüssel wie 'image'."""
    if field_name in FIELD_TAGS:
        data = UPDATE_FIELD_LAYOUT.build({
            "discriminator": UPDATE_FIELD_DISCRIMINATOR,
            "field": FIELD_TAGS[field_name],
            "value": value,
        })
    else:
        data = UPDATE_KEY_FIELD_LAYOUT.build({
            "discriminator": UPDATE_FIELD_DISCRIMINATOR,
            "field": FIELD_KEY_TAG,
            "key": field_name,
            "value": value,
        })
    accounts = [
        AccountMeta(pubkey=metadata, is_signer=False, is_writable=True),
        AccountMeta(pubkey=update_authority, is_signer=True, is_writable=False),
    ]
    return Instruction(program_id, data, accounts)
