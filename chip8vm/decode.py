"""CHIP-8 instruction decoding and disassembly."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def decode(instruction: int) -> DecodedInstruction:
    """Split a 16-bit instruction word into its operand fields."""
    word = int(instruction) & 0xFFFF
    return DecodedInstruction(
        raw=word,
        opcode=word >> 12,
        x=(word >> 8) & 0xF,
        y=(word >> 4) & 0xF,
        n=word & 0xF,
        nn=word & 0xFF,
        nnn=word & 0xFFF,
    )


_ALU_MNEMONICS = {
    0x0: "LD", 0x1: "OR", 0x2: "AND", 0x3: "XOR", 0x4: "ADD",
    0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL",
}

_MISC_FORMATS = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V{x:X}",
    0x65: "LD V{x:X}, [I]",
}


def disassemble(instruction: int) -> str:
    """Assembly-style text for an instruction word, ``DW`` for unknown words."""
    d = decode(instruction)
    op, x, y, n, nn, nnn = d.opcode, d.x, d.y, d.n, d.nn, d.nnn

    if d.raw == 0x00E0:
        return "CLS"
    if d.raw == 0x00EE:
        return "RET"
    if op == 0x1:
        return f"JP 0x{nnn:03X}"
    if op == 0x2:
        return f"CALL 0x{nnn:03X}"
    if op == 0x3:
        return f"SE V{x:X}, 0x{nn:02X}"
    if op == 0x4:
        return f"SNE V{x:X}, 0x{nn:02X}"
    if op == 0x5 and n == 0:
        return f"SE V{x:X}, V{y:X}"
    if op == 0x6:
        return f"LD V{x:X}, 0x{nn:02X}"
    if op == 0x7:
        return f"ADD V{x:X}, 0x{nn:02X}"
    if op == 0x8 and n in _ALU_MNEMONICS:
        return f"{_ALU_MNEMONICS[n]} V{x:X}, V{y:X}"
    if op == 0x9 and n == 0:
        return f"SNE V{x:X}, V{y:X}"
    if op == 0xA:
        return f"LD I, 0x{nnn:03X}"
    if op == 0xB:
        return f"JP V0, 0x{nnn:03X}"
    if op == 0xC:
        return f"RND V{x:X}, 0x{nn:02X}"
    if op == 0xD:
        return f"DRW V{x:X}, V{y:X}, {n}"
    if op == 0xE and nn == 0x9E:
        return f"SKP V{x:X}"
    if op == 0xE and nn == 0xA1:
        return f"SKNP V{x:X}"
    if op == 0xF and nn in _MISC_FORMATS:
        return _MISC_FORMATS[nn].format(x=x)
    return f"DW 0x{d.raw:04X}"
