import logging

import pytest

from bitcrc.protocol.crc import ConfigurationError, CrcParameters
from bitcrc.protocol.reveng import format_line, parse_line


XMODEM_LINE = (
    'width=16 poly=0x1021 init=0x0000 refin=false refout=false xorout=0x0000 '
    'check=0x31c3 residue=0x0000 name="CRC-16/XMODEM"'
)


def test_parse_full_line():
    parsed = parse_line(XMODEM_LINE)

    assert parsed.params == CrcParameters(width=16, poly=0x1021, init=0, refin=False, refout=False, xorout=0)
    assert parsed.check == 0x31C3
    assert parsed.residue == 0x0000
    assert parsed.name == "CRC-16/XMODEM"


def test_parse_minimal_line():
    parsed = parse_line("width=8 poly=0x07 init=0x00 refin=False refout=TRUE xorout=0xff")

    assert parsed.params.refout is True
    assert parsed.params.xorout == 0xFF
    assert parsed.check is None
    assert parsed.residue is None
    assert parsed.name is None


def test_format_then_parse():
    p = CrcParameters(width=32, poly=0x04C11DB7, init=0xFFFFFFFF, refin=True, refout=True, xorout=0xFFFFFFFF)
    line = format_line(p, check=0xCBF43926, residue=0xDEBB20E3, name="CRC-32/ISO-HDLC")

    assert line == (
        'width=32 poly=0x04c11db7 init=0xffffffff refin=true refout=true xorout=0xffffffff '
        'check=0xcbf43926 residue=0xdebb20e3 name="CRC-32/ISO-HDLC"'
    )
    parsed = parse_line(line)
    assert parsed.params == p
    assert parsed.name == "CRC-32/ISO-HDLC"


def test_format_reproduces_catalogue_line():
    parsed = parse_line(XMODEM_LINE)
    assert format_line(parsed.params, check=parsed.check, residue=parsed.residue, name=parsed.name) == XMODEM_LINE


def test_unknown_keys_warn(caplog):
    with caplog.at_level(logging.WARNING, logger="bitcrc.protocol.reveng"):
        parsed = parse_line(XMODEM_LINE + " class=attested")

    assert parsed.check == 0x31C3
    assert "class" in caplog.text


@pytest.mark.parametrize(
    "line,match",
    [
        ("width=16 poly=0x1021 init=0 refin=false refout=false", "missing key"),
        ("width=16 poly=0x1021 init=0 refin=false refout=false xorout=0 junk", "malformed token"),
        ("width=16 poly=0x1021 init=0 refin=no refout=false xorout=0", "expected true/false"),
        ("width=16 poly=xyz init=0 refin=false refout=false xorout=0", "not an integer"),
        ("width=16 width=16 poly=0x1021 init=0 refin=false refout=false xorout=0", "duplicate key"),
        ("width=16 poly=0x1021 init=0 refin=false refout=false xorout=0 check=0x10000", "check"),
    ],
)
def test_parse_rejects_malformed(line, match):
    with pytest.raises(ValueError, match=match):
        parse_line(line)


def test_parse_out_of_range_parameter_is_configuration_error():
    with pytest.raises(ConfigurationError, match="init"):
        parse_line("width=8 poly=0x07 init=0x100 refin=false refout=false xorout=0x00")
