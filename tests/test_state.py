"""Tests for MachineState dataclass."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from regmachine.state import MachineState, create_initial_state


class TestMachineStateCreation:
    """Test MachineState initialization and defaults."""

    def test_default_state(self):
        """Default state has label 0 and no registers."""
        state = MachineState()
        assert state.label == 0
        assert state.step_count == 0
        assert state.halted is False
        assert state.registers == {}

    def test_create_initial_state(self):
        """create_initial_state copies the registers it is given."""
        registers = {0: 3, 1: 4}
        state = create_initial_state(registers, label=2)
        assert state.label == 2
        assert state.registers == {0: 3, 1: 4}
        registers[0] = 99
        assert state.registers[0] == 3

    def test_create_initial_state_without_registers(self):
        state = create_initial_state()
        assert state.registers == {}
        assert state.label == 0

    def test_from_pair_copies_mapping(self):
        registers = {1: 7}
        state = MachineState.from_pair((0, registers))
        state.registers[1] = 0
        assert registers == {1: 7}

    def test_as_pair(self):
        state = MachineState(label=4, registers={0: 2, 1: 0})
        assert state.as_pair() == (4, {0: 2, 1: 0})


class TestMachineStateValidation:
    """Test state validation."""

    def test_valid_state(self):
        assert MachineState(registers={0: 2**300}).validate() is True

    def test_negative_register_value(self):
        assert MachineState(registers={0: -1}).validate() is False

    def test_negative_register_index(self):
        assert MachineState(registers={-1: 1}).validate() is False

    def test_negative_label(self):
        assert MachineState(label=-1).validate() is False

    def test_non_int_register_value(self):
        assert MachineState(registers={0: 1.5}).validate() is False


class TestMachineStateImmutability:
    """Test copy-on-write state operations."""

    def test_absent_register_reads_zero(self):
        assert MachineState().get_register(12345) == 0

    def test_set_register_returns_new_state(self):
        state = MachineState()
        new_state = state.set_register(0, 42)
        assert state.get_register(0) == 0
        assert new_state.get_register(0) == 42

    def test_set_register_rejects_negative(self):
        with pytest.raises(ValueError):
            MachineState().set_register(0, -1)

    def test_set_register_keeps_big_values(self):
        new_state = MachineState().set_register(0, 2**200 + 1)
        assert new_state.get_register(0) == 2**200 + 1

    def test_set_label(self):
        state = MachineState()
        new_state = state.set_label(5)
        assert state.label == 0
        assert new_state.label == 5

    def test_set_halted(self):
        state = MachineState()
        new_state = state.set_halted(True)
        assert state.halted is False
        assert new_state.halted is True

    def test_increment_step(self):
        state = MachineState()
        new_state = state.increment_step()
        assert state.step_count == 0
        assert new_state.step_count == 1


class TestMachineStateSnapshot:
    """Test state snapshot for tracing."""

    def test_snapshot_is_detached(self):
        state = MachineState().set_register(0, 42)
        snapshot = state.snapshot()

        assert snapshot["registers"] == {0: 42}
        assert snapshot["label"] == 0
        assert snapshot["halted"] is False

        snapshot["registers"][0] = 999
        assert state.get_register(0) == 42

    def test_dump_registers_is_copy(self):
        state = MachineState().set_register(0, 1).set_register(7, 2)
        regs = state.dump_registers()
        assert regs == {0: 1, 7: 2}
        regs[0] = 999
        assert state.get_register(0) == 1

    def test_str(self):
        state = MachineState(label=3, registers={1: 2, 0: 5})
        assert str(state) == "[Step 0] L3 R0=5 R1=2"
        assert str(state.set_halted()).endswith("HALTED")


class TestMachineStateCheck:
    """Test check(), the raising form of validate()."""

    def test_valid_state_returns_self(self):
        state = MachineState(label=2, registers={0: 1})
        assert state.check() is state

    def test_non_int_label(self):
        with pytest.raises(TypeError, match="label"):
            MachineState(label=1.0).check()

    def test_bool_register_value(self):
        with pytest.raises(TypeError, match="R3"):
            MachineState(registers={3: True}).check()

    def test_negative_register_value(self):
        with pytest.raises(ValueError, match="R0"):
            MachineState(registers={0: -1}).check()

    def test_negative_register_index(self):
        with pytest.raises(ValueError, match="register index"):
            MachineState(registers={-2: 1}).check()

    def test_non_bool_halted(self):
        with pytest.raises(TypeError, match="halted"):
            MachineState(halted=1).check()
