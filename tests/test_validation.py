"""
Tests for validation module.
"""

import pytest

from agent_state.models.state import State
from agent_state.validation import (
    ConfigurationError,
    MalformedStateError,
    StateError,
    StateIOError,
    StateNotFoundError,
    StateSerializationError,
    validate_state_file,
)


class TestStateError:
    """Tests for the StateError hierarchy."""

    def test_basic_message(self):
        """Error with just a message."""
        err = StateError("Something went wrong")
        assert str(err) == "Something went wrong"

    def test_message_with_path(self, tmp_path):
        """Path is prefixed to the message."""
        err = StateError("is unreadable", path=tmp_path / "current-operation")
        assert str(err) == f"{tmp_path / 'current-operation'}: is unreadable"

    def test_message_with_details(self):
        """Error with extra details."""
        err = StateError("failed", details={"error": "bad"})
        assert err.details == {"error": "bad"}

    def test_details_default_empty(self):
        assert StateError("failed").details == {}

    @pytest.mark.parametrize("cls", [
        StateIOError,
        StateNotFoundError,
        MalformedStateError,
        StateSerializationError,
    ])
    def test_kinds_share_base(self, cls):
        assert issubclass(cls, StateError)

    def test_not_found_is_io_kind(self):
        assert issubclass(StateNotFoundError, StateIOError)

    def test_malformed_is_not_io_kind(self):
        assert not issubclass(MalformedStateError, StateIOError)

    def test_configuration_error_is_separate(self):
        assert not issubclass(ConfigurationError, StateError)


class TestValidateStateFile:
    """Tests for state file validation."""

    def test_valid_file(self, state_path):
        state_path.write_text("operation_id = '1234'\n")
        assert validate_state_file(state_path) == State(operation_id="1234")

    def test_missing_file(self, state_path):
        with pytest.raises(StateNotFoundError):
            validate_state_file(state_path)

    def test_invalid_file(self, state_path):
        state_path.write_text("not toml at all")
        with pytest.raises(MalformedStateError):
            validate_state_file(state_path)
