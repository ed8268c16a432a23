from __future__ import annotations

import random

import pytest


@pytest.fixture
def check_message() -> bytes:
    """
    The catalogue check string: every published check value is the CRC of
    these nine ASCII bytes.
    """
    return b"123456789"


@pytest.fixture
def rng() -> random.Random:
    """
    Seeded per test so generated inputs are reproducible.
    """
    return random.Random(0xC0FFEE)
