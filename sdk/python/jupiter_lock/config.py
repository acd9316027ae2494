"""Connection settings for the locker client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from solders.pubkey import Pubkey

from jupiter_lock.constants import DEFAULT_MAX_RETRIES, DEFAULT_RPC_URL, LOCKER_PROGRAM_ID


def load_pubkey(env_name: str, env: Optional[Mapping[str, str]] = None) -> Optional[Pubkey]:
    """Read a pubkey from the environment; None when the variable is unset."""
    value = (os.environ if env is None else env).get(env_name)
    if not value:
        return None
    try:
        return Pubkey.from_string(value)
    except Exception as exc:  # noqa: BLE001
        raise RuntimeError(f"{env_name} is not a valid pubkey: {exc}") from exc


@dataclass
class LockerConfig:
    rpc_url: str = DEFAULT_RPC_URL
    program_id: Pubkey = field(default_factory=lambda: LOCKER_PROGRAM_ID)
    commitment: str = "confirmed"
    max_retries: int = DEFAULT_MAX_RETRIES

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "LockerConfig":
        """
        Build a config from ``LOCKER_RPC_URL``, ``LOCKER_PROGRAM_ID``,
        ``LOCKER_COMMITMENT`` and ``LOCKER_MAX_RETRIES``. Unset variables keep
        their defaults.
        """
        env = os.environ if env is None else env
        config = cls()
        if env.get("LOCKER_RPC_URL"):
            config.rpc_url = env["LOCKER_RPC_URL"]
        program_id = load_pubkey("LOCKER_PROGRAM_ID", env)
        if program_id is not None:
            config.program_id = program_id
        if env.get("LOCKER_COMMITMENT"):
            config.commitment = env["LOCKER_COMMITMENT"]
        if env.get("LOCKER_MAX_RETRIES"):
            try:
                config.max_retries = int(env["LOCKER_MAX_RETRIES"])
            except ValueError as exc:
                raise RuntimeError(
                    f"LOCKER_MAX_RETRIES must be an integer, got {env['LOCKER_MAX_RETRIES']!r}"
                ) from exc
        return config
