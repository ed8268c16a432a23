from bitcrc.protocol.catalog import available_variants, lookup
from bitcrc.protocol.codeword import append_crc, residue
from bitcrc.protocol.crc import CrcEngine
from bitcrc.protocol.reveng import format_line


if __name__ == "__main__":
    msg = b"123456789"

    for name in available_variants():
        entry = lookup(name)
        eng = CrcEngine(entry.params)
        eng.process(msg)
        got = eng.get()
        res = residue(append_crc(msg, entry.params), entry.params)

        digits = entry.params.width // 4
        status = "ok" if got == entry.check and res == entry.residue else "MISMATCH"
        tag = "" if entry.verified else " (unverified)"
        print(f"{name:<20} check=0x{got:0{digits}X} residue=0x{res:0{digits}X}  {status}{tag}")
        print(f"  {format_line(entry.params, check=entry.check, residue=entry.residue, name=entry.name)}")
