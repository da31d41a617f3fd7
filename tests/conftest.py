"""pytest fixtures for sigverify backend tests.

Provides:
- test_environment: Autouse fixture forcing APP_ENV=test and UTC timezone
- test_wallet / different_wallet: Deterministic signing accounts
- app: Fresh FastAPI application per test
- test_client: httpx AsyncClient bound to the app through ASGITransport
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from eth_account import Account
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from sigverify.app import create_app
from sigverify.core.config import Settings


@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Run every test with APP_ENV=test in UTC."""
    os.environ["APP_ENV"] = "test"
    os.environ["TZ"] = "UTC"
    yield


def make_wallet(private_key: str) -> dict:
    account = Account.from_key(private_key)
    return {
        "address": account.address,  # Checksummed address
        "private_key": private_key,
        "account": account,
    }


@pytest.fixture
def test_wallet() -> dict:
    """Create a test wallet with known private key for signature generation."""
    return make_wallet("0x1234567890abcdef1234567890abcdef1234567890abcdef1234567890abcdef")


@pytest.fixture
def different_wallet() -> dict:
    """Create a different test wallet for negative tests."""
    return make_wallet("0xfedcba0987654321fedcba0987654321fedcba0987654321fedcba0987654321")


@pytest.fixture
def app() -> FastAPI:
    """Provide a fresh application instance with test settings."""
    return create_app(Settings(APP_ENV="test"))


@pytest_asyncio.fixture
async def test_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide AsyncClient for testing API endpoints.

    raise_app_exceptions=False lets tests observe the 500 response produced by
    the unhandled-exception handler instead of the re-raised exception.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
