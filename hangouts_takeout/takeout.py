"""Takeout discovery and streaming conversion of Hangouts.json files."""

import logging
import tempfile
import zipfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Optional

import ijson

from hangouts_takeout.core.config import DEFAULT_CONFIG, ConverterConfig
from hangouts_takeout.core.models import Conversation
from hangouts_takeout.core.parser import convert_each
from hangouts_takeout.core.raw import RawConversation
from hangouts_takeout.progress import ProgressHandler

logger = logging.getLogger(__name__)

CONVERSATIONS_PREFIX = "conversations.item"


def discover_files(source: Path, extract_dir: Optional[Path] = None) -> list[Path]:
    """
    discovers Hangouts JSON files from source path.

    Args:
        source: path to a JSON file, a directory, or a Takeout ZIP archive
        extract_dir: directory ZIP members are extracted to; required for
            ZIP sources, the caller owns its cleanup

    Returns:
        list of paths to JSON files

    Raises:
        FileNotFoundError: if source doesn't exist
        ValueError: if source is a ZIP archive and no extract_dir is given
    """
    if not source.exists():
        raise FileNotFoundError(f"Source not found: {source}")

    if source.is_file():
        if source.suffix == ".zip":
            if extract_dir is None:
                raise ValueError(f"an extract directory is required for {source.name}")
            return _extract_zip(source, extract_dir)
        if source.suffix == ".json":
            return [source]
        return []

    if source.is_dir():
        return sorted(source.rglob("*.json"))

    return []


def _extract_zip(zip_path: Path, target_dir: Path) -> list[Path]:
    """extracts JSON files from ZIP archive into target_dir."""
    extracted: list[Path] = []
    with zipfile.ZipFile(zip_path, "r") as zf:
        for name in zf.namelist():
            if not name.endswith(".json"):
                continue
            # uses only the filename, preventing path traversal
            target_path = target_dir / Path(name).name
            if target_path in extracted:
                target_path = target_dir / f"{len(extracted)}_{Path(name).name}"
            target_path.write_bytes(zf.read(name))
            extracted.append(target_path)

    return sorted(extracted)


def count_conversations(path: Path) -> int:
    """counts conversations in a Hangouts.json file without decoding them."""
    count = 0
    with open(path, "rb") as f:
        for prefix, event, _value in ijson.parse(f):
            if prefix == CONVERSATIONS_PREFIX and event == "start_map":
                count += 1
    return count


def iter_raw_conversations(path: Path) -> Iterator[RawConversation]:
    """
    streams raw conversations from a Hangouts.json file.

    Numbers are decoded as floats/ints, as a regular JSON decoder would.
    """
    with open(path, "rb") as f:
        yield from ijson.items(f, CONVERSATIONS_PREFIX, use_float=True)


def convert_takeout(
    source: Path,
    config: ConverterConfig = DEFAULT_CONFIG,
    keep_going: bool = False,
    quiet: bool = False,
    progress: bool = False,
    on_conversation: Optional[Callable[[Conversation], None]] = None,
) -> tuple[int, list[Conversation]]:
    """
    converts every conversation found under source.

    Args:
        source: path to a JSON file, a directory, or a Takeout ZIP archive
        config: converter settings
        keep_going: if True, failed conversations are reported and skipped;
            otherwise the first failure aborts the run
        quiet: if True, suppress non-error output
        progress: if True, show progress bar
        on_conversation: optional callback invoked for each conversion

    Returns:
        tuple of (exit code, converted conversations); the exit code is 0 on
        success, 1 if some conversations failed with keep_going, 2 on abort
    """
    converted: list[Conversation] = []
    with tempfile.TemporaryDirectory(prefix="hangouts_takeout_") as tmp, ProgressHandler(
        quiet=quiet, show_progress=progress
    ) as handler:
        handler.start_discovery()

        files = discover_files(source, Path(tmp))
        if not files:
            handler.log_info(f"No JSON files found in {source}")
            return 0, []

        total = 0
        for file_path in files:
            try:
                total += count_conversations(file_path)
            except (OSError, ijson.JSONError) as e:
                logger.debug("Could not count conversations in %s: %s", file_path, e)

        handler.log_info(f"Found {total} conversation(s) to convert")
        handler.set_total(total)

        for file_path in files:
            handler.start_file(file_path)
            try:
                for outcome in convert_each(iter_raw_conversations(file_path), config):
                    handler.record(outcome)
                    if outcome.conversation is None:
                        if not keep_going:
                            handler.finish()
                            return 2, converted
                        continue

                    converted.append(outcome.conversation)
                    if on_conversation is not None:
                        on_conversation(outcome.conversation)
            except (OSError, ijson.JSONError) as e:
                handler.record_read_error(file_path, e)
                if not keep_going:
                    handler.finish()
                    return 2, converted

        handler.finish()

    if handler.failed > 0:
        return 1, converted
    return 0, converted
