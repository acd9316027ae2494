"""Tests for jupiter_lock.p_flat."""

import pytest

from jupiter_lock.p_flat import p, unwrap


async def _ok():
    return 42


async def _boom():
    raise ConnectionError("rpc down")


@pytest.mark.asyncio
async def test_success_tuple():
    assert await p(_ok()) == (42, None)


@pytest.mark.asyncio
async def test_error_tuple():
    value, err = await p(_boom())
    assert value is None
    assert isinstance(err, ConnectionError)


@pytest.mark.asyncio
async def test_unwrap():
    assert unwrap(await p(_ok())) == 42
    with pytest.raises(ConnectionError):
        unwrap(await p(_boom()))
