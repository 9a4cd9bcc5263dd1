"""
Download sinks: one-shot destinations for an exported document.
"""

import itertools
from pathlib import Path
from typing import Iterator, Protocol

from meeting_export.audit import get_logger


logger = get_logger("sinks")


class DownloadSink(Protocol):
    """Somewhere a finished export can be saved."""

    def save(self, filename: str, data: memoryview) -> Path:
        """Persist data under filename; the view is only valid during the call."""
        ...


class DirectorySink:
    """Writes downloads into a directory, never overwriting earlier files."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _candidates(self, filename: str) -> Iterator[Path]:
        # Only the final path component is honoured
        name = Path(filename).name or "export"
        yield self.directory / name
        for counter in itertools.count(1):
            yield self.directory / f"{Path(name).stem} ({counter}){Path(name).suffix}"

    def save(self, filename: str, data: memoryview) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        for target in self._candidates(filename):
            try:
                # "x" fails if the file exists, even when another save created it first
                with open(target, "xb") as f:
                    f.write(data)
            except FileExistsError:
                continue
            logger.info("Export saved", path=str(target), size=data.nbytes)
            return target
