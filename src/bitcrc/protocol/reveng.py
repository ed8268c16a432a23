# protocol/reveng.py
from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from typing import Optional

from .crc import CrcParameters


log = logging.getLogger(__name__)


# ============================
# Line format
# ============================
#
# One algorithm per line, space separated key=value tokens, as used by the
# reveng CRC catalogue:
#
#   width=16 poly=0x1021 init=0x0000 refin=false refout=false xorout=0x0000 check=0x31c3 residue=0x0000 name="CRC-16/XMODEM"
#
# width..xorout are required. check, residue and name are optional.

_REQUIRED = ("width", "poly", "init", "refin", "refout", "xorout")
_OPTIONAL = ("check", "residue", "name")


@dataclass(frozen=True)
class ParsedLine:
    params: CrcParameters
    check: Optional[int] = None
    residue: Optional[int] = None
    name: Optional[str] = None


def _int(key: str, s: str) -> int:
    try:
        return int(s, 0)
    except ValueError:
        raise ValueError(f"{key}: not an integer: {s!r}") from None


def _bool(key: str, s: str) -> bool:
    t = s.lower()
    if t == "true":
        return True
    if t == "false":
        return False
    raise ValueError(f"{key}: expected true/false, got {s!r}")


def parse_line(line: str) -> ParsedLine:
    if not isinstance(line, str):
        raise TypeError("parse_line: line must be str")

    fields: dict[str, str] = {}
    for tok in shlex.split(line):
        key, sep, value = tok.partition("=")
        if not sep or not key:
            raise ValueError(f"malformed token: {tok!r}")
        if key in fields:
            raise ValueError(f"duplicate key: {key}")
        fields[key] = value

    missing = [k for k in _REQUIRED if k not in fields]
    if missing:
        raise ValueError(f"missing key(s): {', '.join(missing)}")

    unknown = sorted(set(fields) - set(_REQUIRED) - set(_OPTIONAL))
    if unknown:
        log.warning("ignoring unknown key(s) %s in %r", ", ".join(unknown), line)

    params = CrcParameters(
        width=_int("width", fields["width"]),
        poly=_int("poly", fields["poly"]),
        init=_int("init", fields["init"]),
        refin=_bool("refin", fields["refin"]),
        refout=_bool("refout", fields["refout"]),
        xorout=_int("xorout", fields["xorout"]),
    )

    check = _int("check", fields["check"]) if "check" in fields else None
    residue = _int("residue", fields["residue"]) if "residue" in fields else None
    for key, v in (("check", check), ("residue", residue)):
        if v is not None and not (0 <= v <= params.mask):
            raise ValueError(f"{key}=0x{v:X} does not fit in {params.width} bits")

    return ParsedLine(params=params, check=check, residue=residue, name=fields.get("name"))


def format_line(
    params: CrcParameters,
    *,
    check: Optional[int] = None,
    residue: Optional[int] = None,
    name: Optional[str] = None,
) -> str:
    """Inverse of parse_line(). Hex values are zero-padded to width/4 digits."""
    digits = params.width // 4

    def h(v: int) -> str:
        return f"0x{v:0{digits}x}"

    parts = [
        f"width={params.width}",
        f"poly={h(params.poly)}",
        f"init={h(params.init)}",
        f"refin={str(params.refin).lower()}",
        f"refout={str(params.refout).lower()}",
        f"xorout={h(params.xorout)}",
    ]
    if check is not None:
        parts.append(f"check={h(check)}")
    if residue is not None:
        parts.append(f"residue={h(residue)}")
    if name is not None:
        parts.append(f'name="{name}"')
    return " ".join(parts)
