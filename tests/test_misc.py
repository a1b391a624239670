"""Tests for miscellaneous instructions (Fxxx)."""

import pytest
from chip8vm import MemoryAccessError, RunState, UnknownInstruction, FONT_DATA
from conftest import run_instructions


class TestTimers:
    """Test timer-related instructions."""

    def test_misc_timer_instructions(self, fresh_state):
        """Test timer set and get operations."""
        state, _ = run_instructions(
            fresh_state,
            0x6030,  # V0 = 48
            0xF015,  # Set delay timer to V0
            0x6120,  # V1 = 32
            0xF118,  # Set sound timer to V1
            0xF207,  # V2 = delay timer
        )

        assert state.delay_timer == 48
        assert state.sound_timer == 32
        assert state.V[2] == 48


class TestIndexArithmetic:
    """Test FX1E."""

    def test_add_to_index(self, fresh_state):
        state, _ = run_instructions(fresh_state, 0xA300, 0x6010, 0xF01E)
        assert state.I == 0x310

    def test_add_to_index_leaves_vf(self, fresh_state):
        state = fresh_state.replace(V=fresh_state.V.at[15].set(0x09))
        state, _ = run_instructions(state, 0xAFFF, 0x6002, 0xF01E)
        assert state.I == 0x1001
        assert state.V[15] == 0x09


class TestBCD:
    """Test BCD conversion."""

    def test_misc_bcd_conversion(self, fresh_state):
        """Test BCD conversion with 156."""
        state, _ = run_instructions(
            fresh_state,
            0x609C,  # V0 = 156
            0xA300,  # I = 0x300
            0xF033,  # BCD conversion
        )

        assert state.memory[0x300] == 1  # Hundreds
        assert state.memory[0x301] == 5  # Tens
        assert state.memory[0x302] == 6  # Ones
        assert state.I == 0x300

    @pytest.mark.parametrize("value, digits", [(0, (0, 0, 0)), (255, (2, 5, 5)), (7, (0, 0, 7))])
    def test_bcd_edge_cases(self, fresh_state, value, digits):
        """Test BCD with edge cases."""
        state = fresh_state.replace(V=fresh_state.V.at[0].set(value))
        state, _ = run_instructions(state, 0xA400, 0xF033)

        assert tuple(int(d) for d in state.memory[0x400:0x403]) == digits

    def test_bcd_out_of_range(self, fresh_state):
        """I + 2 beyond 0xFFF is an access error."""
        with pytest.raises(MemoryAccessError):
            run_instructions(fresh_state, 0xAFFE, 0xF033)


class TestFont:
    """Test font character addressing."""

    def test_misc_font_character(self, fresh_state):
        """Test font character addressing."""
        state, _ = run_instructions(
            fresh_state,
            0x600A,  # V0 = 0xA
            0xF029,  # I = font address for A
        )

        assert state.I == 0xA * 5

    def test_font_glyph_is_loaded(self, fresh_state):
        state, _ = run_instructions(fresh_state, 0x6003, 0xF029)
        glyph = [int(b) for b in state.memory[int(state.I):int(state.I) + 5]]
        assert glyph == FONT_DATA[15:20]


class TestRegisterTransfer:
    """Test FX55 / FX65."""

    def test_store_registers(self, fresh_state):
        V = fresh_state.V
        for i in range(4):
            V = V.at[i].set(0x10 + i)
        state = fresh_state.replace(V=V)

        state, _ = run_instructions(state, 0xA500, 0xF355)

        assert [int(b) for b in state.memory[0x500:0x505]] == [0x10, 0x11, 0x12, 0x13, 0x00]
        assert state.I == 0x500  # No auto-increment

    def test_load_registers(self, fresh_state):
        memory = fresh_state.memory
        for i in range(3):
            memory = memory.at[0x600 + i].set(0xA0 + i)
        state = fresh_state.replace(memory=memory, V=fresh_state.V.at[3].set(0x77))

        state, _ = run_instructions(state, 0xA600, 0xF265)

        assert [int(v) for v in state.V[:4]] == [0xA0, 0xA1, 0xA2, 0x77]
        assert state.I == 0x600

    def test_store_all_registers_at_end_of_memory(self, fresh_state):
        state, _ = run_instructions(fresh_state, 0xAFF0, 0x6F42, 0xFF55)
        assert state.memory[0xFFF] == 0x42

    def test_store_out_of_range(self, fresh_state):
        with pytest.raises(MemoryAccessError):
            run_instructions(fresh_state, 0xAFF1, 0xFF55)

    def test_load_out_of_range(self, fresh_state):
        with pytest.raises(MemoryAccessError):
            run_instructions(fresh_state, 0xAFFF, 0xF165)


class TestWaitForKey:
    """Test FX0A at the instruction level."""

    def test_wait_enters_awaiting_state(self, fresh_state):
        state, _ = run_instructions(fresh_state, 0xF50A)
        assert state.run_state is RunState.AWAITING_KEY
        assert state.key_register == 5
        assert state.pc == fresh_state.pc

    def test_execute_is_ignored_while_waiting(self, fresh_state):
        """Instructions after FX0A do nothing until a key resumes the engine."""
        state, _ = run_instructions(fresh_state, 0xF30A, 0x6042)
        assert state.V[0] == 0
        assert state.pc == fresh_state.pc
        assert state.run_state is RunState.AWAITING_KEY
        assert state.key_register == 3


class TestUnknown:
    def test_unknown_misc(self, fresh_state, recorder):
        state, _ = run_instructions(fresh_state, 0xF0FF, diagnostics=recorder)
        assert state.pc == fresh_state.pc
        assert len(recorder.of_kind("unknown_instruction")) == 1

    def test_unknown_misc_strict(self, strict_state):
        with pytest.raises(UnknownInstruction):
            run_instructions(strict_state, 0xF0FF)
