"""Jupiter Lock Python SDK: build and submit token-vesting escrows on Solana."""

from jupiter_lock.config import LockerConfig
from jupiter_lock.constants import LOCKER_PROGRAM_ID, NATIVE_MINT, TOKEN_2022_PROGRAM_ID, TOKEN_PROGRAM_ID
from jupiter_lock.format import format_number, format_number_to_reading_unit, is_mobile, shorten_address
from jupiter_lock.locker import Locker
from jupiter_lock.p_flat import p
from jupiter_lock.pda import derive_escrow, derive_escrow_metadata
from jupiter_lock.types import (
    CancelMode,
    CreateVestingPlanParams,
    Escrow,
    EscrowMetadata,
    EscrowWithMetadata,
    TransactionResult,
    UpdateRecipientMode,
    VestingPlanInstructions,
)

__version__ = "0.1.0"
__all__ = [
    "CancelMode",
    "CreateVestingPlanParams",
    "Escrow",
    "EscrowMetadata",
    "EscrowWithMetadata",
    "LOCKER_PROGRAM_ID",
    "Locker",
    "LockerConfig",
    "NATIVE_MINT",
    "TOKEN_2022_PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
    "TransactionResult",
    "UpdateRecipientMode",
    "VestingPlanInstructions",
    "derive_escrow",
    "derive_escrow_metadata",
    "format_number",
    "format_number_to_reading_unit",
    "is_mobile",
    "p",
    "shorten_address",
]
