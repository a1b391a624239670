"""
Draw the 16 built-in font glyphs and wait for a key.

Builds a small CHIP-8 program in memory, steps it until it suspends on FX0A,
prints the frame, then presses a key to let it finish.
"""

from chip8vm import (
    create_state, load_program, step, Display, Keyboard, display_to_text, save_frame
)


def build_program() -> bytes:
    """Draw glyphs 0-F on two rows, then FX0A into V5 and spin."""
    program = []
    for digit in range(16):
        x = (digit % 8) * 6 + 4
        y = (digit // 8) * 8 + 6
        program += [
            0x60, digit,      # V0 = digit
            0xF0, 0x29,       # I = glyph(V0)
            0x61, x,          # V1 = x
            0x62, y,          # V2 = y
            0xD1, 0x25,       # draw 5 rows at (V1, V2)
        ]
    program += [0xF5, 0x0A]   # V5 = wait for key
    end = 0x200 + len(program)
    program += [0x10 | (end >> 8), end & 0xFF]  # jump to self
    return bytes(program)


if __name__ == "__main__":
    state = load_program(create_state(), build_program())
    display, keyboard = Display(), Keyboard()

    while not state.awaiting_key:
        state, display = step(state, display, keyboard)

    print(display_to_text(display))
    save_frame(display, "font_demo.png", scale=8, color_scheme="amber")
    print("🖼  Saved font_demo.png")

    keyboard = keyboard.set_key(0xB, True)
    state, display = step(state, display, keyboard)
    print(f"⌨️  Resumed with V5 = {int(state.V[5]):X}")
