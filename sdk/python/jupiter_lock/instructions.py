"""Instruction builders for the locker program and the token programs it relies on."""

from __future__ import annotations

from typing import Optional

from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from spl.token.instructions import (
    SyncNativeParams,
    create_associated_token_account,
    create_idempotent_associated_token_account,
    sync_native,
)

from jupiter_lock.constants import (
    LOCKER_PROGRAM_ID,
    SYS_PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from jupiter_lock.layouts import (
    CREATE_VESTING_ESCROW_METADATA_DISCRIMINATOR,
    CREATE_VESTING_ESCROW_V2_DISCRIMINATOR,
    CreateVestingEscrowMetadataArgsLayout,
    CreateVestingEscrowV2ArgsLayout,
)
from jupiter_lock.pda import derive_escrow_metadata, derive_event_authority
from jupiter_lock.types import CancelMode, UpdateRecipientMode


def create_vesting_escrow_v2_instruction(
    *,
    base: Pubkey,
    escrow: Pubkey,
    token_mint: Pubkey,
    escrow_token: Pubkey,
    sender: Pubkey,
    sender_token: Pubkey,
    recipient: Pubkey,
    vesting_start_time: int,
    cliff_time: int,
    frequency: int,
    cliff_unlock_amount: int,
    amount_per_period: int,
    number_of_period: int,
    update_recipient_mode: UpdateRecipientMode,
    cancel_mode: CancelMode,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
    remaining_accounts_slices: Optional[list[dict]] = None,
    program_id: Pubkey = LOCKER_PROGRAM_ID,
) -> Instruction:
    """
    Build ``create_vesting_escrow_v2``.

    The program takes the schedule as one parameters struct plus an optional
    remaining-accounts descriptor (used for transfer-hook mints). An empty
    slice list is always sent when none is given.
    """
    event_authority, _ = derive_event_authority(program_id)
    data = CREATE_VESTING_ESCROW_V2_DISCRIMINATOR + CreateVestingEscrowV2ArgsLayout.build(
        {
            "params": {
                "vesting_start_time": vesting_start_time,
                "cliff_time": cliff_time,
                "frequency": frequency,
                "cliff_unlock_amount": cliff_unlock_amount,
                "amount_per_period": amount_per_period,
                "number_of_period": number_of_period,
                "update_recipient_mode": UpdateRecipientMode(update_recipient_mode).raw,
                "cancel_mode": CancelMode(cancel_mode).raw,
            },
            "remaining_accounts_info": {"slices": remaining_accounts_slices or []},
        }
    )
    accounts = [
        AccountMeta(base, is_signer=True, is_writable=True),
        AccountMeta(escrow, is_signer=False, is_writable=True),
        AccountMeta(token_mint, is_signer=False, is_writable=False),
        AccountMeta(escrow_token, is_signer=False, is_writable=True),
        AccountMeta(sender, is_signer=True, is_writable=True),
        AccountMeta(sender_token, is_signer=False, is_writable=True),
        AccountMeta(recipient, is_signer=False, is_writable=False),
        AccountMeta(token_program, is_signer=False, is_writable=False),
        AccountMeta(SYS_PROGRAM_ID, is_signer=False, is_writable=False),
        AccountMeta(event_authority, is_signer=False, is_writable=False),
        AccountMeta(program_id, is_signer=False, is_writable=False),
    ]
    return Instruction(program_id, data, accounts)


def create_vesting_escrow_metadata_instruction(
    *,
    escrow: Pubkey,
    creator: Pubkey,
    payer: Pubkey,
    name: str,
    description: str = "",
    creator_email: str = "",
    recipient_email: str = "",
    program_id: Pubkey = LOCKER_PROGRAM_ID,
) -> Instruction:
    """Build ``create_vesting_escrow_metadata`` for an escrow."""
    escrow_metadata, _ = derive_escrow_metadata(escrow, program_id)
    data = CREATE_VESTING_ESCROW_METADATA_DISCRIMINATOR + CreateVestingEscrowMetadataArgsLayout.build(
        {
            "name": name,
            "description": description,
            "creator_email": creator_email,
            "recipient_email": recipient_email,
        }
    )
    accounts = [
        AccountMeta(escrow, is_signer=False, is_writable=True),
        AccountMeta(creator, is_signer=True, is_writable=False),
        AccountMeta(escrow_metadata, is_signer=False, is_writable=True),
        AccountMeta(payer, is_signer=True, is_writable=True),
        AccountMeta(SYS_PROGRAM_ID, is_signer=False, is_writable=False),
    ]
    return Instruction(program_id, data, accounts)


def sync_native_instruction(account: Pubkey) -> Instruction:
    """SPL token ``SyncNative``: refresh a wrapped-SOL account's token amount."""
    return sync_native(SyncNativeParams(program_id=TOKEN_PROGRAM_ID, account=account))


def wrap_sol_instruction(from_pubkey: Pubkey, to: Pubkey, amount: int) -> list[Instruction]:
    """Move ``amount`` lamports into the wrapped-SOL account ``to`` and sync it."""
    if amount < 0:
        raise ValueError("amount must be non-negative")
    return [
        transfer(TransferParams(from_pubkey=from_pubkey, to_pubkey=to, lamports=amount)),
        sync_native_instruction(to),
    ]


def create_associated_token_account_instruction(
    payer: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    return create_associated_token_account(payer, owner, mint, token_program_id)


def create_associated_token_account_idempotent_instruction(
    payer: Pubkey,
    owner: Pubkey,
    mint: Pubkey,
    token_program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instruction:
    """Like ``create_associated_token_account_instruction`` but a no-op if the account exists."""
    return create_idempotent_associated_token_account(payer, owner, mint, token_program_id)
