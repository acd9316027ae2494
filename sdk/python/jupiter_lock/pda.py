"""Program-derived address helpers for the locker program."""

from __future__ import annotations

from solders.pubkey import Pubkey

from jupiter_lock.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    ESCROW_METADATA_SEED,
    ESCROW_SEED,
    EVENT_AUTHORITY_SEED,
    LOCKER_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)


def derive_escrow(base: Pubkey, program_id: Pubkey = LOCKER_PROGRAM_ID) -> tuple[Pubkey, int]:
    """Derive the escrow PDA owned by ``base``."""
    return Pubkey.find_program_address([ESCROW_SEED, bytes(base)], program_id)


def derive_escrow_metadata(
    escrow: Pubkey, program_id: Pubkey = LOCKER_PROGRAM_ID
) -> tuple[Pubkey, int]:
    """Derive the metadata PDA for an escrow."""
    return Pubkey.find_program_address([ESCROW_METADATA_SEED, bytes(escrow)], program_id)


def derive_event_authority(program_id: Pubkey = LOCKER_PROGRAM_ID) -> tuple[Pubkey, int]:
    return Pubkey.find_program_address([EVENT_AUTHORITY_SEED], program_id)


def get_associated_token_address(
    owner: Pubkey, mint: Pubkey, token_program_id: Pubkey = TOKEN_PROGRAM_ID
) -> Pubkey:
    """Derive the associated token account address for an owner and mint.

    The owner may be off-curve (e.g. the escrow PDA).
    """
    return Pubkey.find_program_address(
        [
            bytes(owner),
            bytes(token_program_id),
            bytes(mint),
        ],
        ASSOCIATED_TOKEN_PROGRAM_ID,
    )[0]
