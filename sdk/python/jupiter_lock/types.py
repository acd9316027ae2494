"""Type definitions for the Jupiter Lock Python SDK."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Union

from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from jupiter_lock.constants import TOKEN_2022_PROGRAM_ID, TOKEN_PROGRAM_ID

PubkeyLike = Union[Pubkey, str]


def to_pubkey(value: PubkeyLike) -> Pubkey:
    """Accept either a Pubkey or its base58 string."""
    if isinstance(value, Pubkey):
        return value
    try:
        return Pubkey.from_string(value)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Invalid public key: {value!r}") from exc


class _RawMode(str, Enum):
    """Shared u8 encoding for the escrow permission modes."""

    @property
    def raw(self) -> int:
        return list(type(self)).index(self)

    @classmethod
    def from_raw(cls, raw: int):
        if raw < 0 or raw > 3:
            return None
        return list(cls)[raw]


class UpdateRecipientMode(_RawMode):
    NONE = "none"
    CREATOR_ONLY = "creator"
    RECIPIENT_ONLY = "recipient"
    CREATOR_RECIPIENT = "creator-recipient"


class CancelMode(_RawMode):
    NONE = "none"
    CREATOR_ONLY = "creator"
    RECIPIENT_ONLY = "recipient"
    CREATOR_RECIPIENT = "creator-recipient"


class TokenProgramFlag(IntEnum):
    TOKEN = 0
    TOKEN_2022 = 1


def get_token_program_from_flag(flag: int) -> Optional[Pubkey]:
    """Map the escrow's token_program_flag to a token program id."""
    return {
        TokenProgramFlag.TOKEN: TOKEN_PROGRAM_ID,
        TokenProgramFlag.TOKEN_2022: TOKEN_2022_PROGRAM_ID,
    }.get(flag)


@dataclass
class Escrow:
    """Decoded VestingEscrow account."""

    recipient: Pubkey
    token_mint: Pubkey
    creator: Pubkey
    base: Pubkey
    escrow_bump: int
    update_recipient_mode: int
    cancel_mode: int
    token_program_flag: int
    cliff_time: int
    frequency: int
    cliff_unlock_amount: int
    amount_per_period: int
    number_of_period: int
    total_claimed_amount: int
    vesting_start_time: int
    cancelled_at: int

    @property
    def total_amount(self) -> int:
        return self.cliff_unlock_amount + self.amount_per_period * self.number_of_period

    @property
    def is_cancelled(self) -> bool:
        return self.cancelled_at > 0

    @property
    def update_recipient_mode_name(self) -> Optional[UpdateRecipientMode]:
        return UpdateRecipientMode.from_raw(self.update_recipient_mode)

    @property
    def cancel_mode_name(self) -> Optional[CancelMode]:
        return CancelMode.from_raw(self.cancel_mode)

    @property
    def token_program(self) -> Optional[Pubkey]:
        return get_token_program_from_flag(self.token_program_flag)


@dataclass
class EscrowMetadata:
    escrow: Pubkey
    name: str
    description: str
    creator_email: str
    recipient_email: str


@dataclass
class EscrowWithMetadata:
    public_key: Pubkey
    account: Escrow
    mint: Pubkey
    escrow_metadata: Optional[EscrowMetadata] = None


@dataclass
class CreateVestingPlanParams:
    """
    Arguments for a new vesting plan.

    Amounts are raw token base units, times are unix seconds. ``base`` is only
    set when an external wallet supplies the escrow base signer; otherwise a
    fresh keypair is generated and returned as a signer.
    """

    title: str
    token_mint: PubkeyLike
    vesting_start_time: int
    frequency: int
    cliff_unlock_amount: int
    amount_per_period: int
    number_of_period: int
    recipient: PubkeyLike
    cliff_time: int
    update_recipient_mode: Union[UpdateRecipientMode, str] = UpdateRecipientMode.NONE
    cancel_mode: Union[CancelMode, str] = CancelMode.NONE
    token_program: PubkeyLike = TOKEN_PROGRAM_ID
    base: Optional[PubkeyLike] = None

    def __post_init__(self):
        self.token_mint = to_pubkey(self.token_mint)
        self.recipient = to_pubkey(self.recipient)
        self.token_program = to_pubkey(self.token_program)
        if self.base is not None:
            self.base = to_pubkey(self.base)
        self.update_recipient_mode = UpdateRecipientMode(self.update_recipient_mode)
        self.cancel_mode = CancelMode(self.cancel_mode)
        for name in (
            "vesting_start_time",
            "frequency",
            "cliff_unlock_amount",
            "amount_per_period",
            "number_of_period",
            "cliff_time",
        ):
            if int(getattr(self, name)) < 0:
                raise ValueError(f"{name} must be non-negative")

    @property
    def total_amount(self) -> int:
        return self.cliff_unlock_amount + self.amount_per_period * self.number_of_period


@dataclass
class VestingPlanInstructions:
    """Instructions for one vesting plan plus the extra keypairs that must sign."""

    instructions: list[Instruction] = field(default_factory=list)
    signers: list[Keypair] = field(default_factory=list)
    escrow: Optional[Pubkey] = None


@dataclass
class TransactionResult:
    """Result of a transaction submission."""

    signature: str
    escrow_address: Optional[str] = None
