"""Tests für Konten-Größen und die manuell gebauten Token-2022-Instruktionen."""

import hashlib
import struct

from solders.keypair import Keypair

from constants import EXTENSION_METADATA_POINTER, TOKEN_PROGRAM
from token_metadata import (
    FIELD_KEY_TAG, INITIALIZE_DISCRIMINATOR, UPDATE_FIELD_DISCRIMINATOR,
    TokenMetadata, get_mint_len, initialize_metadata_pointer, initialize_token_metadata,
    metadata_account_len, pack_token_metadata, update_token_metadata_field,
)


def borsh_string(value: str) -> bytes:
    encoded = value.encode("utf-8")
    return struct.pack("<I", len(encoded)) + encoded


def make_metadata(**overrides):
    values = dict(
        update_authority=Keypair().pubkey(),
        mint=Keypair().pubkey(),
        name="Test",
        symbol="TST",
        uri="https://www.dsandev.in/api/token",
        additional_metadata=[("description", "Only Possible On Solana"), ("image", "https://example.com/a.png")],
    )
    values.update(overrides)
    return TokenMetadata(**values)


def test_mint_len_without_extensions():
    assert get_mint_len([]) == 82


def test_mint_len_with_metadata_pointer():
    # 165 Basis + 1 Konto-Typ + 2 Typ + 2 Länge + 64 Pointer
    assert get_mint_len([EXTENSION_METADATA_POINTER]) == 234


def test_discriminators_are_namespaced_hashes():
    assert INITIALIZE_DISCRIMINATOR == hashlib.sha256(b"spl_token_metadata_interface:initialize_account").digest()[:8]
    assert UPDATE_FIELD_DISCRIMINATOR == hashlib.sha256(b"spl_token_metadata_interface:updating_field").digest()[:8]


def test_pack_layout():
    metadata = make_metadata(additional_metadata=[("image", "x")])
    expected = (
        bytes(metadata.update_authority)
        + bytes(metadata.mint)
        + borsh_string("Test")
        + borsh_string("TST")
        + borsh_string(metadata.uri)
        + struct.pack("<I", 1) + borsh_string("image") + borsh_string("x")
    )
    assert pack_token_metadata(metadata) == expected


def test_missing_update_authority_is_zero_key():
    metadata = make_metadata(update_authority=None, additional_metadata=[])
    packed = pack_token_metadata(metadata)
    assert packed[:32] == bytes(32)


def test_metadata_account_len_adds_tlv_header():
    metadata = make_metadata()
    assert metadata_account_len(metadata) == 4 + len(pack_token_metadata(metadata))


def test_get_field():
    metadata = make_metadata()
    assert metadata.get_field("image") == "https://example.com/a.png"
    assert metadata.get_field("unknown") is None


def test_initialize_metadata_pointer():
    mint = Keypair().pubkey()
    authority = Keypair().pubkey()
    ix = initialize_metadata_pointer(mint, authority, mint)
    assert ix.program_id == TOKEN_PROGRAM
    assert bytes(ix.data) == bytes([39, 0]) + bytes(authority) + bytes(mint)
    assert len(ix.accounts) == 1
    assert ix.accounts[0].pubkey == mint
    assert ix.accounts[0].is_writable and not ix.accounts[0].is_signer


def test_initialize_metadata_pointer_without_authority():
    mint = Keypair().pubkey()
    ix = initialize_metadata_pointer(mint, None, mint)
    assert bytes(ix.data)[2:34] == bytes(32)


def test_initialize_token_metadata():
    mint = Keypair().pubkey()
    owner = Keypair().pubkey()
    ix = initialize_token_metadata(mint, owner, mint, owner, "Test", "TST", "https://x.io/t")
    assert bytes(ix.data) == INITIALIZE_DISCRIMINATOR + borsh_string("Test") + borsh_string("TST") + borsh_string("https://x.io/t")
    assert [meta.pubkey for meta in ix.accounts] == [mint, owner, mint, owner]
    assert ix.accounts[0].is_writable
    assert [meta.is_signer for meta in ix.accounts] == [False, False, False, True]


def test_update_standard_field():
    mint = Keypair().pubkey()
    owner = Keypair().pubkey()
    ix = update_token_metadata_field(mint, owner, "symbol", "NEW")
    assert bytes(ix.data) == UPDATE_FIELD_DISCRIMINATOR + bytes([1]) + borsh_string("NEW")


def test_update_custom_key_field():
    mint = Keypair().pubkey()
    owner = Keypair().pubkey()
    ix = update_token_metadata_field(mint, owner, "image", "https://example.com/a.png")
    assert bytes(ix.data) == (
        UPDATE_FIELD_DISCRIMINATOR + bytes([FIELD_KEY_TAG])
        + borsh_string("image") + borsh_string("https://example.com/a.png")
    )
    assert ix.accounts[0].pubkey == mint and ix.accounts[0].is_writable
    assert ix.accounts[1].pubkey == owner and ix.accounts[1].is_signer
