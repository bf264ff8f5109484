"""tests for CLI argument parsing."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from hangouts_takeout import main


def test_cli_requires_source_argument() -> None:
    """CLI requires source argument."""
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2  # argparse exits with 2 for missing args


def test_cli_missing_source_is_fatal() -> None:
    """a nonexistent source returns the fatal exit code."""
    assert main(["nonexistent.json"]) == 2


@pytest.mark.parametrize(
    "flags",
    [
        ["--timestamp-unit", "seconds"],
        ["--timestamp-unit", "milliseconds"],
        ["--strict-read-states"],
        ["--keep-going"],
        ["--show-last"],
        ["--progress", "--quiet"],
        ["-q"],
        ["-v"],
        ["--verbose"],
    ],
)
def test_cli_accepts_flags(flags: list[str]) -> None:
    """flags parse; the missing file still fails."""
    assert main(["nonexistent.json", *flags]) == 2


def test_cli_rejects_unknown_timestamp_unit() -> None:
    """only known units are accepted."""
    with pytest.raises(SystemExit) as exc_info:
        main(["nonexistent.json", "--timestamp-unit", "nanoseconds"])
    assert exc_info.value.code == 2


def test_cli_converts_file(tmp_path: Path, raw_document: dict[str, Any]) -> None:
    """a valid export converts successfully."""
    path = tmp_path / "Hangouts.json"
    path.write_text(json.dumps(raw_document), encoding="utf-8")

    assert main([str(path), "-q"]) == 0


def test_cli_keep_going_reports_partial_failure(
    tmp_path: Path, raw_document: dict[str, Any]
) -> None:
    """partial failures exit with 1."""
    raw_document["conversations"][0]["conversation"]["conversation"]["type"] = "BROADCAST"
    path = tmp_path / "Hangouts.json"
    path.write_text(json.dumps(raw_document), encoding="utf-8")

    assert main([str(path), "-q", "--keep-going"]) == 1
    assert main([str(path), "-q"]) == 2


def test_cli_show_last_prints_messages(
    tmp_path: Path,
    make_conversation: Callable[..., dict[str, Any]],
    make_event: Callable[..., dict[str, Any]],
    text_message: Callable[..., dict[str, Any]],
    capsys: pytest.CaptureFixture[str],
) -> None:
    """--show-last prints chat messages of the last conversation by timestamp."""
    raw = make_conversation(
        events=[
            make_event(event_id="e2", timestamp="1500000002000000", payload=text_message("second")),
            make_event(event_id="e1", timestamp="1500000001000000", payload=text_message("first")),
        ]
    )
    path = tmp_path / "Hangouts.json"
    path.write_text(json.dumps({"conversations": [raw]}), encoding="utf-8")

    assert main([str(path), "-q", "--show-last"]) == 0

    assert capsys.readouterr().out.splitlines() == ["first", "second"]
