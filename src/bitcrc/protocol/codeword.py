# protocol/codeword.py
from __future__ import annotations

from typing import Literal

from .catalog import CatalogEntry
from .crc import BytesLike, CrcEngine, CrcParameters


def wire_order(params: CrcParameters) -> Literal["little", "big"]:
    """
    Byte order in which the checksum is appended to a message.

    Reflected variants shift the register out LSB first, so the low byte
    goes on the wire first. Unreflected variants send the high byte first.
    """
    return "little" if params.refout else "big"


def append_crc(data: BytesLike, params: CrcParameters) -> bytes:
    """Message followed by its checksum in wire order."""
    msg = bytes(data)
    eng = CrcEngine(params)
    eng.process(msg)
    return msg + eng.get().to_bytes(params.width // 8, wire_order(params))


def residue(data: BytesLike, params: CrcParameters) -> int:
    """
    Register value after processing `data`, with refout applied but not xorout.

    For an error-free codeword (append_crc() output) this is a constant of
    the variant, independent of the message.
    """
    eng = CrcEngine(params)
    eng.process(data)
    return eng.get() ^ params.xorout


def verify(codeword: BytesLike, params: CrcParameters, expected_residue: int) -> bool:
    b = bytes(codeword)
    if len(b) < params.width // 8:
        raise ValueError("codeword shorter than its checksum")
    return residue(b, params) == expected_residue


def verify_entry(codeword: BytesLike, entry: CatalogEntry) -> bool:
    if entry.residue is None:
        raise ValueError(f"{entry.name}: no residue in catalog")
    return verify(codeword, entry.params, entry.residue)
