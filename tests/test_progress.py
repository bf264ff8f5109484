"""tests for progress module."""

from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from hangouts_takeout.core.errors import MissingRequiredField
from hangouts_takeout.core.parser import ConversionOutcome, convert_conversation
from hangouts_takeout.progress import ProgressHandler


@pytest.fixture
def mock_progress() -> Any:
    """replaces the rich Progress display with a mock."""
    with patch("hangouts_takeout.progress.Progress") as mock_progress_class:
        progress = MagicMock()
        progress.add_task.return_value = 0
        mock_progress_class.return_value = progress
        yield progress


def _success(make_conversation: Callable[..., dict[str, Any]], name: str) -> ConversionOutcome:
    conversation = convert_conversation(make_conversation(name=name))
    return ConversionOutcome(index=0, conversation_id="conv-1", conversation=conversation)


def _failure(index: int = 1, conversation_id: Any = "conv-2") -> ConversionOutcome:
    return ConversionOutcome(
        index=index,
        conversation_id=conversation_id,
        error=MissingRequiredField("conversation[conv-2].name"),
    )


def test_record_counts_outcomes(make_conversation: Callable[..., dict[str, Any]]) -> None:
    """converted and failed counts follow the recorded outcomes."""
    with patch.object(Console, "print"):
        handler = ProgressHandler(quiet=True)
        handler.record(_success(make_conversation, "Friends"))
        handler.record(_success(make_conversation, "Family"))
        handler.record(_failure())

    assert handler.converted == 2
    assert handler.failed == 1


def test_record_failure_prints_file_and_conversation() -> None:
    """failures name the file and conversation, even in quiet mode."""
    with patch.object(Console, "print") as mock_print:
        handler = ProgressHandler(quiet=True)
        handler.start_file(Path("/exports/Hangouts.json"))
        handler.record(_failure())

    mock_print.assert_called_once()
    message = mock_print.call_args[0][0]
    assert "ERROR" in message
    assert "Hangouts.json - conv-2" in message
    assert "missing required field conversation\\[conv-2].name" in message


def test_record_failure_without_id_uses_index() -> None:
    """an unreadable conversation is reported by position."""
    with patch.object(Console, "print") as mock_print:
        handler = ProgressHandler(quiet=True)
        handler.record(_failure(index=7, conversation_id=None))

    assert "#7" in mock_print.call_args[0][0]


def test_record_advances_bar_with_failed_count(
    mock_progress: Any, make_conversation: Callable[..., dict[str, Any]]
) -> None:
    """the bar carries the running failed count and the current title."""
    with patch.object(Console, "print"):
        handler = ProgressHandler(show_progress=True)
        handler.set_total(2)
        handler.record(_success(make_conversation, "[b]Friends[/b]"))
        handler.record(_failure())

    assert mock_progress.update.call_args_list[0].kwargs == {
        "advance": 1,
        "failed": 0,
        "title": "\\[b]Friends\\[/b]",
    }
    assert mock_progress.update.call_args_list[1].kwargs == {
        "advance": 1,
        "failed": 1,
        "title": "conv-2",
    }


def test_start_discovery_shows_spinner(mock_progress: Any) -> None:
    """counting runs under an indeterminate spinner."""
    handler = ProgressHandler(show_progress=True)
    handler.start_discovery()

    mock_progress.start.assert_called_once()
    mock_progress.add_task.assert_called_once_with(
        "Counting conversations...", total=None, failed=0, title=""
    )


def test_set_total_replaces_spinner_with_bar(mock_progress: Any) -> None:
    """the spinner is stopped and a bar over the total starts."""
    handler = ProgressHandler(show_progress=True)
    handler.start_discovery()
    handler.set_total(10)

    mock_progress.stop.assert_called_once()
    mock_progress.add_task.assert_called_with("Converting", total=10, failed=0, title="")


def test_no_display_when_progress_disabled() -> None:
    """without show_progress no rich display is created."""
    with patch("hangouts_takeout.progress.Progress") as mock_progress_class:
        handler = ProgressHandler(quiet=True)
        handler.start_discovery()
        handler.set_total(10)
        handler.record(_failure())

    mock_progress_class.assert_not_called()


def test_start_file_updates_bar_description(mock_progress: Any) -> None:
    """with a bar, the file name becomes the phase description."""
    with patch.object(Console, "print") as mock_print:
        handler = ProgressHandler(show_progress=True)
        handler.set_total(1)
        handler.start_file(Path("Hangouts.json"))

    mock_progress.update.assert_called_once_with(0, description="Reading Hangouts.json")
    mock_print.assert_not_called()
    assert handler.current_file == "Hangouts.json"


def test_start_file_prints_without_bar() -> None:
    """without a bar, the file name is printed unless quiet."""
    with patch.object(Console, "print") as mock_print:
        ProgressHandler().start_file(Path("Hangouts.json"))
        ProgressHandler(quiet=True).start_file(Path("Hangouts.json"))

    mock_print.assert_called_once_with("Reading Hangouts.json")


def test_record_read_error_counts_failure() -> None:
    """an unreadable file counts as one failure."""
    with patch.object(Console, "print") as mock_print:
        handler = ProgressHandler(quiet=True)
        handler.record_read_error(Path("broken.json"), ValueError("truncated"))

    assert handler.failed == 1
    assert "Failed to read broken.json: truncated" in mock_print.call_args[0][0]


def test_finish_prints_summary_from_recorded_outcomes() -> None:
    """the summary uses the counts the handler collected."""
    with patch.object(Console, "print") as mock_print:
        handler = ProgressHandler()
        handler.record(_failure())
        handler.record_read_error(Path("broken.json"), ValueError("truncated"))
        handler.finish()

    mock_print.assert_called_with("Processed 2 conversation(s): 0 converted, 2 failed")


def test_finish_skips_summary_when_quiet() -> None:
    """quiet runs print no summary."""
    with patch.object(Console, "print") as mock_print:
        ProgressHandler(quiet=True).finish()

    mock_print.assert_not_called()


def test_context_exit_stops_display(mock_progress: Any) -> None:
    """leaving the context stops a running display."""
    with ProgressHandler(show_progress=True) as handler:
        handler.start_discovery()

    mock_progress.stop.assert_called_once()
