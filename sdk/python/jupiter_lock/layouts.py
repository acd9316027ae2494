"""Borsh layouts for the locker program's instruction arguments and accounts."""

from __future__ import annotations

import hashlib

from anchorpy.borsh_extension import BorshPubkey
from borsh_construct import CStruct, Option, String, U8, U64, U128, Vec

from jupiter_lock.types import Escrow, EscrowMetadata


def sighash(name: str) -> bytes:
    """Anchor instruction discriminator."""
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


def account_discriminator(name: str) -> bytes:
    """Anchor account discriminator."""
    return hashlib.sha256(f"account:{name}".encode()).digest()[:8]


CREATE_VESTING_ESCROW_V2_DISCRIMINATOR = sighash("create_vesting_escrow_v2")
CREATE_VESTING_ESCROW_METADATA_DISCRIMINATOR = sighash("create_vesting_escrow_metadata")
VESTING_ESCROW_DISCRIMINATOR = account_discriminator("VestingEscrow")
VESTING_ESCROW_METADATA_DISCRIMINATOR = account_discriminator("VestingEscrowMetadata")

CreateVestingEscrowParametersLayout = CStruct(
    "vesting_start_time" / U64,
    "cliff_time" / U64,
    "frequency" / U64,
    "cliff_unlock_amount" / U64,
    "amount_per_period" / U64,
    "number_of_period" / U64,
    "update_recipient_mode" / U8,
    "cancel_mode" / U8,
)

# accounts_type is a fieldless enum; borsh writes it as a single u8
RemainingAccountsSliceLayout = CStruct("accounts_type" / U8, "length" / U8)
RemainingAccountsInfoLayout = CStruct("slices" / Vec(RemainingAccountsSliceLayout))

CreateVestingEscrowV2ArgsLayout = CStruct(
    "params" / CreateVestingEscrowParametersLayout,
    "remaining_accounts_info" / Option(RemainingAccountsInfoLayout),
)

CreateVestingEscrowMetadataArgsLayout = CStruct(
    "name" / String,
    "description" / String,
    "creator_email" / String,
    "recipient_email" / String,
)

VestingEscrowLayout = CStruct(
    "recipient" / BorshPubkey,
    "token_mint" / BorshPubkey,
    "creator" / BorshPubkey,
    "base" / BorshPubkey,
    "escrow_bump" / U8,
    "update_recipient_mode" / U8,
    "cancel_mode" / U8,
    "token_program_flag" / U8,
    "padding_0" / U8[4],
    "cliff_time" / U64,
    "frequency" / U64,
    "cliff_unlock_amount" / U64,
    "amount_per_period" / U64,
    "number_of_period" / U64,
    "total_claimed_amount" / U64,
    "vesting_start_time" / U64,
    "cancelled_at" / U64,
    "padding_1" / U64,
    "buffer" / U128[5],
)

VestingEscrowMetadataLayout = CStruct(
    "escrow" / BorshPubkey,
    "name" / String,
    "description" / String,
    "creator_email" / String,
    "recipient_email" / String,
)


def _strip_discriminator(data: bytes, discriminator: bytes, name: str) -> bytes:
    if bytes(data[:8]) != discriminator:
        raise ValueError(f"Account data is not a {name} account")
    return bytes(data[8:])


def decode_escrow(data: bytes) -> Escrow:
    """Decode raw VestingEscrow account data (discriminator included)."""
    body = _strip_discriminator(data, VESTING_ESCROW_DISCRIMINATOR, "VestingEscrow")
    try:
        raw = VestingEscrowLayout.parse(body)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Malformed VestingEscrow account: {exc}") from exc
    return Escrow(
        recipient=raw.recipient,
        token_mint=raw.token_mint,
        creator=raw.creator,
        base=raw.base,
        escrow_bump=raw.escrow_bump,
        update_recipient_mode=raw.update_recipient_mode,
        cancel_mode=raw.cancel_mode,
        token_program_flag=raw.token_program_flag,
        cliff_time=raw.cliff_time,
        frequency=raw.frequency,
        cliff_unlock_amount=raw.cliff_unlock_amount,
        amount_per_period=raw.amount_per_period,
        number_of_period=raw.number_of_period,
        total_claimed_amount=raw.total_claimed_amount,
        vesting_start_time=raw.vesting_start_time,
        cancelled_at=raw.cancelled_at,
    )


def decode_escrow_metadata(data: bytes) -> EscrowMetadata:
    """Decode raw VestingEscrowMetadata account data (discriminator included)."""
    body = _strip_discriminator(
        data, VESTING_ESCROW_METADATA_DISCRIMINATOR, "VestingEscrowMetadata"
    )
    try:
        raw = VestingEscrowMetadataLayout.parse(body)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Malformed VestingEscrowMetadata account: {exc}") from exc
    return EscrowMetadata(
        escrow=raw.escrow,
        name=raw.name,
        description=raw.description,
        creator_email=raw.creator_email,
        recipient_email=raw.recipient_email,
    )
