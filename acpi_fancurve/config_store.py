"""Persistence of the last accepted temperature sequence."""
from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from .validation import parse_non_negative, split_temperatures

_LOGGER = logging.getLogger(__name__)


class ConfigStore:
    """Stores one temperature sequence as a single space-joined line.

    There is no locking; only one instance of the tool is expected to run.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> tuple[int, ...] | None:
        """Return the stored sequence, or None if nothing usable is stored."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as err:
            _LOGGER.debug("No stored temperatures at %s: %s", self.path, err)
            return None

        values = tuple(parse_non_negative(token) for token in split_temperatures(text))
        if not values or None in values:
            _LOGGER.warning("Ignoring unreadable stored temperatures in %s", self.path)
            return None
        return values

    def save(self, sequence: Sequence[int]) -> None:
        """Replace the stored sequence.

        The file is written to a temporary sibling and renamed into place so
        a partial sequence is never visible.

        Raises:
            OSError: If the directory or file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        line = " ".join(str(value) for value in sequence) + "\n"

        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(line)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        _LOGGER.info("Saved temperatures to %s", self.path)
