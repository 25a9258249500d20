"""Tests for StepRegistry primitives."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from regmachine.instruction import Increment, DecrementOrBranch, Halt
from regmachine.registry import StepRegistry, get_registry
from regmachine.state import MachineState


@pytest.fixture
def registry():
    return get_registry()


class TestRegistryStructure:
    """Test registry setup and freezing."""

    def test_singleton(self):
        assert get_registry() is get_registry()

    def test_frozen(self, registry):
        assert registry.is_frozen() is True
        with pytest.raises(RuntimeError, match="frozen"):
            registry.register(Increment, lambda state, instruction: state)

    def test_kinds(self, registry):
        assert registry.get_kinds() == {Increment, DecrementOrBranch, Halt}

    def test_duplicate_registration(self):
        registry = StepRegistry.__new__(StepRegistry)
        registry._primitives = {}
        registry._frozen = False
        registry.register(Halt, lambda state, instruction: state)
        with pytest.raises(ValueError):
            registry.register(Halt, lambda state, instruction: state)

    def test_unknown_kind(self, registry):
        with pytest.raises(KeyError):
            registry.execute(MachineState(), "INC R0")


class TestPrimitives:
    """Test the three step primitives."""

    def test_increment_absent_register(self, registry):
        state = registry.execute(MachineState(), Increment(3, 7))
        assert state.registers == {3: 1}
        assert state.label == 7
        assert state.step_count == 1

    def test_increment_existing_register(self, registry):
        state = registry.execute(MachineState(registers={0: 41}), Increment(0, 1))
        assert state.get_register(0) == 42

    def test_decrement_nonzero(self, registry):
        state = registry.execute(MachineState(registers={1: 1}), DecrementOrBranch(1, 2, 3))
        assert state.registers == {1: 0}
        assert state.label == 2

    def test_decrement_zero_creates_no_entry(self, registry):
        state = registry.execute(MachineState(), DecrementOrBranch(1, 2, 3))
        assert state.registers == {}
        assert state.label == 3
        assert state.step_count == 1

    def test_halt(self, registry):
        state = registry.execute(MachineState(label=4), Halt())
        assert state.halted is True
        assert state.label == 4
        assert state.step_count == 0

    def test_input_state_unchanged(self, registry):
        before = MachineState(registers={0: 5})
        registry.execute(before, Increment(0, 1))
        assert before.registers == {0: 5}
        assert before.label == 0
