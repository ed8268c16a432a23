import zlib

import pytest

from bitcrc.protocol.catalog import (
    available_variants,
    crc16,
    crc16_ccitt_false,
    crc16_ibm_3740,
    crc16_kermit,
    crc16_spi_fujitsu,
    crc16_xmodem,
    crc32,
    crc32_ieee,
    engine,
    lookup,
)
from bitcrc.protocol.crc import compute


def test_available_variants():
    assert available_variants() == [
        "CRC-16/IBM-3740",
        "CRC-16/KERMIT",
        "CRC-16/SPI-FUJITSU",
        "CRC-16/XMODEM",
        "CRC-32/ISO-HDLC",
        "CRC-64/XZ",
        "CRC-8/SMBUS",
    ]


@pytest.mark.parametrize("name", available_variants())
def test_catalog_check_values(name, check_message):
    entry = lookup(name)
    assert compute(check_message, entry.params) == entry.check


def test_verified_entries():
    verified = sorted(n for n in available_variants() if lookup(n).verified)
    assert verified == [
        "CRC-16/IBM-3740",
        "CRC-16/KERMIT",
        "CRC-16/SPI-FUJITSU",
        "CRC-16/XMODEM",
        "CRC-32/ISO-HDLC",
    ]


def test_lookup_aliases_case_insensitive():
    assert lookup("xmodem").name == "CRC-16/XMODEM"
    assert lookup("CRC-16/CCITT-FALSE").name == "CRC-16/IBM-3740"
    assert lookup("crc-ccitt").name == "CRC-16/KERMIT"
    assert lookup("CRC-16/AUG-CCITT").name == "CRC-16/SPI-FUJITSU"
    assert lookup("pkzip").name == "CRC-32/ISO-HDLC"


def test_lookup_unknown():
    with pytest.raises(KeyError, match="unknown CRC variant"):
        lookup("CRC-16/NOPE")
    with pytest.raises(ValueError):
        lookup("")


def test_engine_is_fresh_each_time(check_message):
    a = engine("KERMIT")
    a.process(check_message)
    assert a.get() == 0x2189
    assert engine("KERMIT").get() == 0x0000


def test_named_helpers(check_message):
    assert crc16_xmodem(check_message) == 0x31C3
    assert crc16_kermit(check_message) == 0x2189
    assert crc16_ibm_3740(check_message) == 0x29B1
    assert crc16_ccitt_false(check_message) == 0x29B1
    assert crc16_spi_fujitsu(check_message) == 0xE5CC
    assert crc32_ieee(check_message) == 0xCBF43926


def test_default_aliases_match(check_message):
    assert crc16(check_message) == 0x29B1
    assert crc32(check_message) == 0xCBF43926


def test_crc_empty_vectors():
    # With init=0xFFFF, CCITT-FALSE of empty is 0xFFFF
    assert crc16_ccitt_false(b"") == 0xFFFF
    # With init=0xFFFFFFFF and xorout=0xFFFFFFFF, CRC32 of empty is 0x00000000
    assert crc32_ieee(b"") == 0x00000000


def test_crc32_matches_zlib(rng):
    for n in (0, 1, 3, 64, 1000):
        data = bytes(rng.getrandbits(8) for _ in range(n))
        assert crc32_ieee(data) == zlib.crc32(data) & 0xFFFFFFFF
