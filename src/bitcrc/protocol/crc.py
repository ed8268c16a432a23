# protocol/crc.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

from bitcrc.utils.bitops import SUPPORTED_WIDTHS, reverse8, reverser


BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


class ConfigurationError(ValueError):
    """CRC parameters that do not fit the declared register width."""


def _same(x: int) -> int:
    return x


@dataclass(frozen=True, slots=True)
class CrcParameters:
    """
    Rocksoft-style CRC model.

      width:  register width in bits (8, 16, 32 or 64)
      poly:   generator polynomial without its implicit top coefficient
      init:   register value before any data
      refin:  reverse the bits of every input byte
      refout: reverse the register before xorout is applied
      xorout: mask XORed into the final value

    Out-of-range values are rejected here rather than masked, so a typo in
    a constant cannot silently produce a different checksum.
    """
    width: int = 16
    poly: int = 0x1021
    init: int = 0x0000
    refin: bool = False
    refout: bool = False
    xorout: int = 0x0000

    def __post_init__(self) -> None:
        if isinstance(self.width, bool) or not isinstance(self.width, int):
            raise ConfigurationError("width must be int")
        if self.width not in SUPPORTED_WIDTHS:
            raise ConfigurationError(f"width must be one of {SUPPORTED_WIDTHS}, got {self.width}")

        for name in ("poly", "init", "xorout"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise ConfigurationError(f"{name} must be int")
            if not (0 <= v <= self.mask):
                raise ConfigurationError(f"{name}=0x{v:X} does not fit in {self.width} bits")

        for name in ("refin", "refout"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be bool")

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    @classmethod
    def from_mapping(cls, m: Mapping[str, Any]) -> "CrcParameters":
        """Build from a dict such as a decoded JSON/TOML table. Missing keys take the defaults."""
        unknown = set(m) - {"width", "poly", "init", "refin", "refout", "xorout"}
        if unknown:
            raise ConfigurationError(f"unknown CRC parameter(s): {', '.join(sorted(unknown))}")
        return cls(**m)


class CrcEngine:
    """
    Bit-serial CRC accumulator (no lookup table).

    The register is initialised to params.init. process() folds bytes in,
    get() reports the checksum without touching the register, so the two
    may be interleaved freely and the result does not depend on how the
    input was split into chunks.

    One engine per thread; CrcParameters may be shared.
    """

    __slots__ = ("_params", "_crc", "_reflect_in", "_reflect_out")

    def __init__(self, params: CrcParameters) -> None:
        if not isinstance(params, CrcParameters):
            raise TypeError("params must be CrcParameters")
        self._params = params
        self._crc = params.init
        self._reflect_in = reverse8 if params.refin else _same
        self._reflect_out = reverser(params.width) if params.refout else _same

    @property
    def params(self) -> CrcParameters:
        return self._params

    def process(self, data: BytesLike) -> None:
        if isinstance(data, (str, int)):
            raise TypeError("process: data must be bytes-like or an iterable of ints")
        if not isinstance(data, (bytes, bytearray)):
            data = bytes(data)

        p = self._params
        width_mask = p.mask
        top_bit = 1 << (p.width - 1)
        shift = p.width - 8
        poly = p.poly
        reflect_in = self._reflect_in
        crc = self._crc

        for b in data:
            # Bring the byte in at the top of the register: the message is
            # treated as already augmented with width/8 zero bytes, so the
            # XOR here and the division below share one loop.
            crc ^= reflect_in(b) << shift
            for _ in range(8):
                # The implicit top coefficient of poly cancels the bit being
                # shifted out, so it is simply dropped either way.
                if crc & top_bit:
                    crc = ((crc << 1) & width_mask) ^ poly
                else:
                    crc = (crc << 1) & width_mask

        self._crc = crc

    def get(self) -> int:
        return self._params.xorout ^ self._reflect_out(self._crc)

    def copy(self) -> "CrcEngine":
        """Snapshot of the running CRC; the two engines evolve independently afterwards."""
        other = CrcEngine(self._params)
        other._crc = self._crc
        return other

    def __repr__(self) -> str:
        digits = self._params.width // 4
        return f"CrcEngine({self._params!r}, crc=0x{self._crc:0{digits}X})"


def compute(data: BytesLike, params: CrcParameters) -> int:
    """One-shot CRC of `data`."""
    eng = CrcEngine(params)
    eng.process(data)
    return eng.get()
