import pytest

from cupmanager.exceptions import PartialWriteFailure
from cupmanager.tournament.write_sequence import WriteSequence


def _boom():
    raise ValueError("boom")


def test_steps_run_in_order_and_return_results():
    sequence = WriteSequence("op")
    assert sequence.step("one", lambda: 1) == 1
    assert sequence.step("two", lambda x, y=0: x + y, 1, y=2) == 3
    assert sequence.completed_steps == ["one", "two"]
    assert sequence.last_completed == "two"
    assert sequence.current_step is None


def test_first_step_failure_is_not_wrapped():
    sequence = WriteSequence("op")
    with pytest.raises(ValueError):
        sequence.step("one", _boom)
    assert sequence.completed_steps == []
    assert sequence.last_completed is None


def test_later_failure_names_the_cursor():
    sequence = WriteSequence("op")
    sequence.step("one", lambda: None)
    sequence.step("two", lambda: None)
    with pytest.raises(PartialWriteFailure) as excinfo:
        sequence.step("three", _boom)

    assert excinfo.value.failed_step == "three"
    assert excinfo.value.completed_steps == ["one", "two"]
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert "three" in str(excinfo.value)
