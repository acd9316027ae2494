"""Program ids, PDA seeds and account sizes used by the locker SDK."""

from solders.pubkey import Pubkey
from solders.system_program import ID as SYS_PROGRAM_ID

# Jupiter Lock vesting program
LOCKER_PROGRAM_ID = Pubkey.from_string("LocpQgucEQHbqNABEYvBvwoxCPsSbG91A1QaQhQQqjn")

# SPL Token program ID
TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")

TOKEN_2022_PROGRAM_ID = Pubkey.from_string(
    "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"
)

# Associated Token Program ID (for ATA derivation)
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string(
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
)

# Wrapped SOL
NATIVE_MINT = Pubkey.from_string("So11111111111111111111111111111111111111112")

ESCROW_SEED = b"escrow"
ESCROW_METADATA_SEED = b"escrow_metadata"
EVENT_AUTHORITY_SEED = b"__event_authority"

# Discriminator + VestingEscrow body
ESCROW_ACCOUNT_SIZE = 8 + 288
ESCROW_RECIPIENT_OFFSET = 8
ESCROW_CREATOR_OFFSET = 8 + 32 + 32

# getMultipleAccounts limit per request
MAX_MULTIPLE_ACCOUNTS = 100

DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
DEFAULT_MAX_RETRIES = 3

__all__ = [
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_RPC_URL",
    "ESCROW_ACCOUNT_SIZE",
    "ESCROW_CREATOR_OFFSET",
    "ESCROW_METADATA_SEED",
    "ESCROW_RECIPIENT_OFFSET",
    "ESCROW_SEED",
    "EVENT_AUTHORITY_SEED",
    "LOCKER_PROGRAM_ID",
    "MAX_MULTIPLE_ACCOUNTS",
    "NATIVE_MINT",
    "SYS_PROGRAM_ID",
    "TOKEN_2022_PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
]
