"""
ProFast Backend - Database Module Tests
========================================

What we test:
    ✅ Startup indexes, including the unique email index
    ✅ Startup ping retries transient driver errors, then gives up
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import ServerSelectionTimeoutError
from tenacity import stop_after_attempt, wait_none

from profast.database import ensure_indexes, ping_database


@pytest.mark.asyncio
async def test_ensure_indexes(fake_db):
    await ensure_indexes(fake_db)

    keys, options = fake_db["users"].indexes[0]
    assert keys == [("email", 1)]
    assert options["unique"] is True
    assert fake_db["parcels"].indexes[0][0] == [("created_by", 1), ("creation_date", -1)]
    assert fake_db["paymentHistory"].indexes[0][0] == [("email", 1), ("paid_at", -1)]
    assert fake_db["parcelTracking"].indexes[0][0] == [("trackingId", 1), ("updatedAt", 1)]


@pytest.mark.asyncio
async def test_ping_recovers_after_transient_failure():
    client = MagicMock()
    client.admin.command = AsyncMock(
        side_effect=[ServerSelectionTimeoutError("starting"), {"ok": 1}]
    )
    fast_ping = ping_database.retry_with(wait=wait_none(), stop=stop_after_attempt(3))

    with patch("profast.database.get_client", return_value=client):
        await fast_ping()

    assert client.admin.command.await_count == 2


@pytest.mark.asyncio
async def test_ping_gives_up():
    client = MagicMock()
    client.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
    fast_ping = ping_database.retry_with(wait=wait_none(), stop=stop_after_attempt(2))

    with patch("profast.database.get_client", return_value=client):
        with pytest.raises(ServerSelectionTimeoutError):
            await fast_ping()

    assert client.admin.command.await_count == 2
