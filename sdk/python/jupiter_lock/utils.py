"""RPC-facing helpers: token account discovery, provider setup, clock and sleep."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from anchorpy import Provider, Wallet
from solana.rpc.async_api import AsyncClient
from solana.rpc.types import TxOpts
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from jupiter_lock.constants import DEFAULT_MAX_RETRIES, TOKEN_PROGRAM_ID
from jupiter_lock.instructions import create_associated_token_account_instruction
from jupiter_lock.pda import get_associated_token_address

logger = logging.getLogger(__name__)


def create_locker_provider(
    keypair: Keypair,
    connection: AsyncClient,
    max_retries: int = DEFAULT_MAX_RETRIES,
    commitment: Optional[str] = None,
) -> Provider:
    """Anchor provider with the locker's fixed RPC send retry count."""
    opts = TxOpts(max_retries=max_retries, preflight_commitment=commitment or "confirmed")
    return Provider(connection, Wallet(keypair), opts)


async def get_or_create_ata_instruction(
    token_mint: Pubkey,
    owner: Pubkey,
    connection: AsyncClient,
    payer: Optional[Pubkey] = None,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
) -> tuple[Pubkey, Optional[Instruction]]:
    """
    Return the owner's associated token account and, if it does not exist yet,
    the instruction creating it (paid by ``payer``, defaulting to the owner).
    """
    try:
        to_account = get_associated_token_address(owner, token_mint, token_program)
        resp = await connection.get_account_info(to_account)
        if resp.value is None:
            ix = create_associated_token_account_instruction(
                payer or owner,
                owner,
                token_mint,
                token_program,
            )
            return to_account, ix
        return to_account, None
    except Exception:
        logger.exception("get_or_create_ata_instruction failed for owner %s", owner)
        raise


async def get_current_block_time(connection: AsyncClient) -> Optional[int]:
    """Unix timestamp of the current slot, or None if the node has no time for it."""
    current_slot = (await connection.get_slot()).value
    return (await connection.get_block_time(current_slot)).value


async def sleep(ms: int) -> None:
    await asyncio.sleep(ms / 1000)
