"""Pytest fixtures for the storefront tests."""

from datetime import datetime

import pytest

from cart import CartEngine
from catalog import CatalogStore
from checkout import CheckoutSimulator
from ledger import OrderLedger
from schemas import CheckoutForm
from store import Storefront

FIXED_NOW = datetime(2026, 10, 19, 14, 30)


async def _no_sleep(seconds):
    return None


@pytest.fixture
def catalog():
    return CatalogStore()


@pytest.fixture
def cart(catalog):
    return CartEngine(catalog)


@pytest.fixture
def ledger():
    return OrderLedger()


@pytest.fixture
def simulator(ledger):
    return CheckoutSimulator(ledger, delay_seconds=0, clock=lambda: FIXED_NOW, sleep=_no_sleep)


@pytest.fixture
def storefront(catalog, ledger, simulator):
    return Storefront(catalog=catalog, ledger=ledger, checkout=simulator)


@pytest.fixture
def valid_form():
    return CheckoutForm(
        name="Siti Rahma",
        phone="081234567890",
        address="Jl. Melati No. 5, Bandung",
        payment_method="bca_va",
    )


@pytest.fixture
def now():
    return FIXED_NOW
