"""Jupiter Lock Python SDK client: build vesting plans and read escrows."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from anchorpy import Provider, Wallet
from solana.rpc.async_api import AsyncClient
from solana.rpc.types import MemcmpOpts
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import MessageV0
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from jupiter_lock.config import LockerConfig
from jupiter_lock.constants import (
    ESCROW_ACCOUNT_SIZE,
    ESCROW_CREATOR_OFFSET,
    ESCROW_RECIPIENT_OFFSET,
    MAX_MULTIPLE_ACCOUNTS,
    NATIVE_MINT,
)
from jupiter_lock.instructions import (
    create_vesting_escrow_metadata_instruction,
    create_vesting_escrow_v2_instruction,
    wrap_sol_instruction,
)
from jupiter_lock.layouts import decode_escrow, decode_escrow_metadata
from jupiter_lock.p_flat import p
from jupiter_lock.pda import derive_escrow, derive_escrow_metadata
from jupiter_lock.types import (
    CreateVestingPlanParams,
    Escrow,
    EscrowMetadata,
    EscrowWithMetadata,
    PubkeyLike,
    TransactionResult,
    VestingPlanInstructions,
    to_pubkey,
)
from jupiter_lock.utils import create_locker_provider, get_or_create_ata_instruction

logger = logging.getLogger(__name__)


class Locker:
    """
    High-level client for the Jupiter Lock vesting program.

    Usage:
        async with Locker(keypair=my_keypair, rpc_url="https://api.devnet.solana.com") as locker:
            plan = await locker.create_vesting_plan(
                CreateVestingPlanParams(
                    title="Team allocation",
                    token_mint=mint,
                    vesting_start_time=start,
                    cliff_time=start,
                    frequency=86_400,
                    cliff_unlock_amount=0,
                    amount_per_period=1_000_000,
                    number_of_period=365,
                    recipient=recipient,
                    cancel_mode=CancelMode.CREATOR_ONLY,
                )
            )
            sig = await locker.send_instructions(plan.instructions, plan.signers)

            escrows = await locker.get_escrows_by_recipient(recipient)
    """

    def __init__(
        self,
        keypair: Optional[Keypair] = None,
        rpc_url: Optional[str] = None,
        program_id: Optional[Pubkey] = None,
        config: Optional[LockerConfig] = None,
        connection: Optional[AsyncClient] = None,
    ):
        """
        Initialize the locker client.

        Args:
            keypair: Wallet signing and paying for transactions. Read-only use
                (escrow queries) works without one.
            rpc_url: Solana RPC endpoint, overrides ``config.rpc_url``
            program_id: Locker program id, overrides ``config.program_id``
            config: Connection settings, defaults to ``LockerConfig()``
            connection: Existing RPC client to reuse instead of opening one
        """
        self.config = replace(config) if config is not None else LockerConfig()
        if rpc_url is not None:
            self.config.rpc_url = rpc_url
        if program_id is not None:
            self.config.program_id = program_id
        self.keypair = keypair
        self.program_id = self.config.program_id
        self._owns_connection = connection is None
        self.connection = connection or AsyncClient(
            self.config.rpc_url, commitment=self.config.commitment
        )
        self._provider: Optional[Provider] = None

    @property
    def provider(self) -> Provider:
        """Lazily build the anchor provider used to submit transactions."""
        if self._provider is None:
            if self.keypair is None:
                raise ValueError("A keypair is required to send transactions")
            self._provider = create_locker_provider(
                self.keypair,
                self.connection,
                max_retries=self.config.max_retries,
                commitment=self.config.commitment,
            )
        return self._provider

    @property
    def wallet(self) -> Optional[Wallet]:
        if self.keypair is None:
            return None
        return self.provider.wallet

    # ──────────────────────────────────────────────────────
    # VESTING PLANS
    # ──────────────────────────────────────────────────────

    async def create_vesting_plan(
        self, params: CreateVestingPlanParams
    ) -> VestingPlanInstructions:
        """
        Build every instruction needed to open a vesting escrow.

        Returns the instructions in submission order together with the keypairs
        that must co-sign (the generated escrow base, unless ``params.base``
        was supplied by an external signer).
        """
        wallet = self.wallet
        if wallet is None:
            logger.error("create_vesting_plan: missing wallet public key")
            return VestingPlanInstructions()
        sender = wallet.public_key

        base_kp: Optional[Keypair] = None
        if params.base is not None:
            base = params.base
        else:
            base_kp = Keypair()
            base = base_kp.pubkey()

        escrow, _ = derive_escrow(base, self.program_id)

        user_ata, create_user_ata = await get_or_create_ata_instruction(
            params.token_mint,
            sender,
            self.connection,
            sender,
            params.token_program,
        )
        escrow_ata, create_escrow_ata = await get_or_create_ata_instruction(
            params.token_mint,
            escrow,
            self.connection,
            sender,
            params.token_program,
        )

        metadata_ix = create_vesting_escrow_metadata_instruction(
            escrow=escrow,
            creator=sender,
            payer=sender,
            name=params.title,
            program_id=self.program_id,
        )

        instructions: list[Instruction] = []
        if create_user_ata is not None:
            instructions.append(create_user_ata)
        if create_escrow_ata is not None:
            instructions.append(create_escrow_ata)

        if params.token_mint == NATIVE_MINT:
            instructions.extend(wrap_sol_instruction(sender, user_ata, params.total_amount))

        try:
            escrow_ix = create_vesting_escrow_v2_instruction(
                base=base,
                escrow=escrow,
                token_mint=params.token_mint,
                escrow_token=escrow_ata,
                sender=sender,
                sender_token=user_ata,
                recipient=params.recipient,
                vesting_start_time=params.vesting_start_time,
                cliff_time=params.cliff_time,
                frequency=params.frequency,
                cliff_unlock_amount=params.cliff_unlock_amount,
                amount_per_period=params.amount_per_period,
                number_of_period=params.number_of_period,
                update_recipient_mode=params.update_recipient_mode,
                cancel_mode=params.cancel_mode,
                token_program=params.token_program,
                program_id=self.program_id,
            )
        except Exception:
            logger.exception("create_vesting_escrow_v2: failed to build instruction")
        else:
            instructions.append(escrow_ix)
        instructions.append(metadata_ix)

        return VestingPlanInstructions(
            instructions=instructions,
            signers=[base_kp] if base_kp is not None else [],
            escrow=escrow,
        )

    async def send_instructions(
        self,
        instructions: Sequence[Instruction],
        signers: Sequence[Keypair] = (),
    ) -> str:
        """Compile, sign with the wallet plus ``signers`` and submit one transaction."""
        provider = self.provider
        blockhash_resp = await self.connection.get_latest_blockhash()
        message = MessageV0.try_compile(
            provider.wallet.public_key,
            list(instructions),
            [],
            blockhash_resp.value.blockhash,
        )
        tx = VersionedTransaction(message, [provider.wallet.payer, *signers])
        sig = await provider.send(tx)
        return str(sig)

    async def create_vesting_escrow(
        self,
        params: CreateVestingPlanParams,
        signers: Sequence[Keypair] = (),
    ) -> TransactionResult:
        """
        Build a vesting plan and submit it in a single transaction.

        When ``params.base`` is set, its keypair must be passed in ``signers``.
        Bases held by an external wallet cannot sign here; use
        ``create_vesting_plan`` and have that wallet co-sign instead.
        """
        if self.keypair is None:
            raise ValueError("A keypair is required to create a vesting escrow")
        if params.base is not None and all(s.pubkey() != params.base for s in signers):
            raise ValueError(
                f"Escrow base {params.base} must co-sign: pass its keypair in signers, "
                "or build with create_vesting_plan and sign externally"
            )
        plan = await self.create_vesting_plan(params)
        sig = await self.send_instructions(plan.instructions, [*plan.signers, *signers])
        return TransactionResult(signature=sig, escrow_address=str(plan.escrow))

    # ──────────────────────────────────────────────────────
    # QUERIES
    # ──────────────────────────────────────────────────────

    async def get_escrows_by_recipient(self, recipient: PubkeyLike) -> list[EscrowWithMetadata]:
        """All escrows vesting to ``recipient``, joined with their metadata."""
        return await self._get_escrows(
            MemcmpOpts(offset=ESCROW_RECIPIENT_OFFSET, bytes=str(to_pubkey(recipient)))
        )

    async def get_escrows_by_creator(self, creator: PubkeyLike) -> list[EscrowWithMetadata]:
        """All escrows funded by ``creator``, joined with their metadata."""
        return await self._get_escrows(
            MemcmpOpts(offset=ESCROW_CREATOR_OFFSET, bytes=str(to_pubkey(creator)))
        )

    async def get_escrow(self, escrow_address: PubkeyLike) -> Optional[EscrowWithMetadata]:
        """Fetch a single escrow and its metadata; None if missing or unreadable."""
        escrow_pk = to_pubkey(escrow_address)
        resp, err = await p(self.connection.get_account_info(escrow_pk))
        if err is not None:
            logger.error("get_escrow: failed to fetch %s: %s", escrow_pk, err)
            return None
        if resp.value is None:
            return None
        try:
            escrow = decode_escrow(resp.value.data)
        except ValueError as e:
            logger.error("get_escrow: %s is not an escrow: %s", escrow_pk, e)
            return None
        metadata = await self._get_metadata([escrow_pk])
        return EscrowWithMetadata(
            public_key=escrow_pk,
            account=escrow,
            mint=escrow.token_mint,
            escrow_metadata=metadata.get(escrow_pk),
        )

    # ──────────────────────────────────────────────────────
    # INTERNAL
    # ──────────────────────────────────────────────────────

    async def _get_escrows(self, memcmp: MemcmpOpts) -> list[EscrowWithMetadata]:
        resp, err = await p(
            self.connection.get_program_accounts(
                self.program_id,
                encoding="base64",
                filters=[ESCROW_ACCOUNT_SIZE, memcmp],
            )
        )
        if err is not None:
            logger.error("getProgramAccounts failed for %s: %s", self.program_id, err)
            return []

        escrows: list[tuple[Pubkey, Escrow]] = []
        for keyed in resp.value:
            try:
                escrows.append((keyed.pubkey, decode_escrow(keyed.account.data)))
            except ValueError as e:
                logger.warning("Skipping undecodable escrow %s: %s", keyed.pubkey, e)

        metadata = await self._get_metadata([pk for pk, _ in escrows])
        return [
            EscrowWithMetadata(
                public_key=pk,
                account=escrow,
                mint=escrow.token_mint,
                escrow_metadata=metadata.get(pk),
            )
            for pk, escrow in escrows
        ]

    async def _get_metadata(self, escrows: list[Pubkey]) -> dict[Pubkey, EscrowMetadata]:
        """Batch-fetch metadata accounts keyed by escrow address."""
        addresses = [derive_escrow_metadata(e, self.program_id)[0] for e in escrows]
        result: dict[Pubkey, EscrowMetadata] = {}
        for start in range(0, len(addresses), MAX_MULTIPLE_ACCOUNTS):
            chunk = addresses[start : start + MAX_MULTIPLE_ACCOUNTS]
            resp, err = await p(self.connection.get_multiple_accounts(chunk))
            if err is not None:
                logger.error("getMultipleAccounts failed for escrow metadata: %s", err)
                continue
            for escrow, account in zip(escrows[start : start + MAX_MULTIPLE_ACCOUNTS], resp.value):
                if account is None:
                    continue
                try:
                    result[escrow] = decode_escrow_metadata(account.data)
                except ValueError as e:
                    logger.warning("Skipping undecodable metadata for %s: %s", escrow, e)
        return result

    async def close(self) -> None:
        """Close the RPC connection if this client opened it."""
        if self._owns_connection:
            await self.connection.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()
