"""
Shared fixtures for the locker SDK tests.

RPC access is replaced by AsyncMock-backed clients; account data is produced
with the same borsh layouts the SDK decodes with.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from jupiter_lock.layouts import (
    VESTING_ESCROW_DISCRIMINATOR,
    VESTING_ESCROW_METADATA_DISCRIMINATOR,
    VestingEscrowLayout,
    VestingEscrowMetadataLayout,
)

USDC_MINT = Pubkey.from_string("EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v")


def escrow_account_data(recipient: Pubkey, creator: Pubkey, token_mint: Pubkey = USDC_MINT, **overrides) -> bytes:
    fields = {
        "recipient": recipient,
        "token_mint": token_mint,
        "creator": creator,
        "base": Keypair().pubkey(),
        "escrow_bump": 254,
        "update_recipient_mode": 0,
        "cancel_mode": 1,
        "token_program_flag": 0,
        "padding_0": [0, 0, 0, 0],
        "cliff_time": 1_700_000_000,
        "frequency": 86_400,
        "cliff_unlock_amount": 500,
        "amount_per_period": 100,
        "number_of_period": 12,
        "total_claimed_amount": 0,
        "vesting_start_time": 1_700_000_000,
        "cancelled_at": 0,
        "padding_1": 0,
        "buffer": [0, 0, 0, 0, 0],
    }
    fields.update(overrides)
    return VESTING_ESCROW_DISCRIMINATOR + VestingEscrowLayout.build(fields)


def metadata_account_data(escrow: Pubkey, name: str = "Team allocation") -> bytes:
    return VESTING_ESCROW_METADATA_DISCRIMINATOR + VestingEscrowMetadataLayout.build(
        {
            "escrow": escrow,
            "name": name,
            "description": "",
            "creator_email": "",
            "recipient_email": "",
        }
    )


def rpc_value(value):
    return SimpleNamespace(value=value)


def keyed_account(pubkey: Pubkey, data: bytes):
    return SimpleNamespace(pubkey=pubkey, account=SimpleNamespace(data=data))


@pytest.fixture
def keypair():
    return Keypair()


@pytest.fixture
def recipient():
    return Keypair().pubkey()


@pytest.fixture
def connection():
    """RPC client where every account is missing until a test says otherwise."""
    conn = MagicMock()
    conn.get_account_info = AsyncMock(return_value=rpc_value(None))
    conn.get_program_accounts = AsyncMock(return_value=rpc_value([]))
    conn.get_multiple_accounts = AsyncMock(side_effect=lambda keys, *a, **kw: rpc_value([None] * len(keys)))
    conn.get_slot = AsyncMock(return_value=rpc_value(250_000_000))
    conn.get_block_time = AsyncMock(return_value=rpc_value(1_700_000_123))
    conn.close = AsyncMock()
    return conn
