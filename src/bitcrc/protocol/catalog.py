# protocol/catalog.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .crc import BytesLike, CrcEngine, CrcParameters, compute
from .reveng import parse_line


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogEntry:
    """
    A named CRC variant.

    verified: the engine's output for this variant has been checked against
    an independent reference (the 16-bit entries and CRC-32/ISO-HDLC, which
    zlib implements). The others are provided for convenience.
    """
    name: str
    params: CrcParameters
    check: int
    residue: Optional[int] = None
    aliases: tuple[str, ...] = ()
    verified: bool = False


# (line, aliases, verified)
_CATALOG_LINES = [
    (
        'width=16 poly=0x1021 init=0x0000 refin=false refout=false xorout=0x0000 check=0x31c3 residue=0x0000 name="CRC-16/XMODEM"',
        ("CRC-16/ACORN", "CRC-16/LTE", "CRC-16/V-41-MSB", "XMODEM", "ZMODEM"),
        True,
    ),
    (
        'width=16 poly=0x1021 init=0x0000 refin=true refout=true xorout=0x0000 check=0x2189 residue=0x0000 name="CRC-16/KERMIT"',
        ("CRC-16/BLUETOOTH", "CRC-16/CCITT", "CRC-16/CCITT-TRUE", "CRC-16/V-41-LSB", "CRC-CCITT", "KERMIT"),
        True,
    ),
    (
        'width=16 poly=0x1021 init=0xffff refin=false refout=false xorout=0x0000 check=0x29b1 residue=0x0000 name="CRC-16/IBM-3740"',
        ("CRC-16/AUTOSAR", "CRC-16/CCITT-FALSE"),
        True,
    ),
    (
        'width=16 poly=0x1021 init=0x1d0f refin=false refout=false xorout=0x0000 check=0xe5cc residue=0x0000 name="CRC-16/SPI-FUJITSU"',
        ("CRC-16/AUG-CCITT",),
        True,
    ),
    (
        'width=8 poly=0x07 init=0x00 refin=false refout=false xorout=0x00 check=0xf4 residue=0x00 name="CRC-8/SMBUS"',
        ("CRC-8",),
        False,
    ),
    (
        'width=32 poly=0x04c11db7 init=0xffffffff refin=true refout=true xorout=0xffffffff check=0xcbf43926 residue=0xdebb20e3 name="CRC-32/ISO-HDLC"',
        ("CRC-32", "CRC-32/ADCCP", "CRC-32/V-42", "CRC-32/XZ", "PKZIP"),
        True,
    ),
    (
        'width=64 poly=0x42f0e1eba9ea3693 init=0xffffffffffffffff refin=true refout=true xorout=0xffffffffffffffff check=0x995dc9bbdf1939fa residue=0x49958c9abd7d353f name="CRC-64/XZ"',
        ("CRC-64/GO-ECMA",),
        False,
    ),
]


def _build() -> tuple[dict[str, CatalogEntry], dict[str, str]]:
    entries: dict[str, CatalogEntry] = {}
    index: dict[str, str] = {}

    for line, aliases, verified in _CATALOG_LINES:
        parsed = parse_line(line)
        if parsed.name is None or parsed.check is None:
            raise ValueError(f"catalog line needs name and check: {line!r}")

        entry = CatalogEntry(
            name=parsed.name,
            params=parsed.params,
            check=parsed.check,
            residue=parsed.residue,
            aliases=tuple(aliases),
            verified=verified,
        )
        for key in (entry.name, *entry.aliases):
            k = key.upper()
            if k in index:
                raise ValueError(f"duplicate catalog name/alias: {key}")
            index[k] = entry.name
        entries[entry.name] = entry
        log.debug("registered %s (verified=%s)", entry.name, verified)

    return entries, index


_ENTRIES, _INDEX = _build()


def available_variants() -> list[str]:
    """Canonical names of all catalog entries, sorted."""
    return sorted(_ENTRIES)


def lookup(name: str) -> CatalogEntry:
    """Find a variant by canonical name or alias (case-insensitive)."""
    if not isinstance(name, str) or not name:
        raise ValueError("name must be a non-empty string")
    try:
        return _ENTRIES[_INDEX[name.upper()]]
    except KeyError:
        raise KeyError(f"unknown CRC variant: {name!r}") from None


def engine(name: str) -> CrcEngine:
    """Fresh engine for a catalog variant."""
    return CrcEngine(lookup(name).params)


XMODEM = lookup("CRC-16/XMODEM").params
KERMIT = lookup("CRC-16/KERMIT").params
IBM_3740 = lookup("CRC-16/IBM-3740").params
SPI_FUJITSU = lookup("CRC-16/SPI-FUJITSU").params
ISO_HDLC = lookup("CRC-32/ISO-HDLC").params


def crc16_xmodem(data: BytesLike) -> int:
    """
    CRC-16/XMODEM
      width=16 poly=0x1021 init=0x0000 refin=false refout=false xorout=0x0000
      Check("123456789") = 0x31C3
    """
    return compute(data, XMODEM)


def crc16_kermit(data: BytesLike) -> int:
    """
    CRC-16/KERMIT
      width=16 poly=0x1021 init=0x0000 refin=true refout=true xorout=0x0000
      Check("123456789") = 0x2189
    """
    return compute(data, KERMIT)


def crc16_ibm_3740(data: BytesLike) -> int:
    """
    CRC-16/IBM-3740 (aka CCITT-FALSE)
      width=16 poly=0x1021 init=0xFFFF refin=false refout=false xorout=0x0000
      Check("123456789") = 0x29B1
    """
    return compute(data, IBM_3740)


def crc16_ccitt_false(data: BytesLike) -> int:
    return crc16_ibm_3740(data)


def crc16_spi_fujitsu(data: BytesLike) -> int:
    """
    CRC-16/SPI-FUJITSU
      width=16 poly=0x1021 init=0x1D0F refin=false refout=false xorout=0x0000
      Check("123456789") = 0xE5CC

    init 0x1D0F is equivalent to an augment of 0xFFFF prepended to the
    message.
    """
    return compute(data, SPI_FUJITSU)


def crc32_ieee(data: BytesLike) -> int:
    """
    CRC-32/ISO-HDLC (aka "IEEE 802.3")
      width=32 poly=0x04C11DB7 init=0xFFFFFFFF refin=true refout=true xorout=0xFFFFFFFF
      Check("123456789") = 0xCBF43926
    """
    return compute(data, ISO_HDLC)


def crc16(data: BytesLike) -> int:
    """Convenience alias (current project default): CRC-16/IBM-3740."""
    return crc16_ibm_3740(data)


def crc32(data: BytesLike) -> int:
    """Convenience alias (current project default): CRC-32/ISO-HDLC (IEEE)."""
    return crc32_ieee(data)
