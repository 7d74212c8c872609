"""Model database reader and model resolution.

The model database is a flat file with one ``|``-delimited record per line::

    XPS9300|1335 1400|50 55 60 65 70 75 80 85|

Fields are the alphanumeric device identity, the space-joined fan zone base
addresses and the space-joined default calibration temperatures. Record
order is significant: the first record matching the host identity wins.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from .const import DB_COMMENT, DB_FIELD_SEPARATOR
from .errors import ParseError
from .settings import Settings
from .validation import find_violation, parse_non_negative, split_temperatures

_LOGGER = logging.getLogger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


@dataclass(frozen=True)
class ModelRecord:
    """Identity, fan zone addresses and default temperatures of one model.

    Attributes:
        identity: Alphanumeric device identity.
        base_addresses: Firmware base address of each fan zone.
        default_temps: Default calibration points, never decreasing.
        tested: True if the record came from the database, False for a fallback.
    """

    identity: str
    base_addresses: tuple[int, ...]
    default_temps: tuple[int, ...]
    tested: bool

    @property
    def temp_count(self) -> int:
        """Number of calibration points per fan zone."""
        return len(self.default_temps)


def iter_model_lines(path: str) -> Iterator[str]:
    """Yield the raw lines of the model database one at a time.

    Raises:
        OSError: If the file cannot be opened.
        UnicodeDecodeError: If the file is not UTF-8 text.
    """
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            yield line.rstrip("\r\n")


def split_model_line(line: str) -> list[str]:
    """Split a database line into its identity, address and temperature fields.

    A trailing separator is allowed, so both three and four fields are
    accepted; the fourth must be empty.
    """
    fields = line.split(DB_FIELD_SEPARATOR)
    if len(fields) == 4 and not fields[3].strip():
        fields = fields[:3]
    if len(fields) != 3:
        raise ParseError(f"Malformed model record '{line}': expected 3 fields, got {len(fields)}")
    return [field.strip() for field in fields]


def _parse_integers(text: str, what: str, line: str) -> tuple[int, ...]:
    tokens = split_temperatures(text)
    values = tuple(parse_non_negative(token) for token in tokens)
    if not values or None in values:
        raise ParseError(f"Malformed model record '{line}': invalid {what} '{text}'")
    return values


def parse_model_line(line: str, tested: bool = True) -> ModelRecord:
    """Parse one database line into a ModelRecord.

    Raises:
        ParseError: If the line is not a well-formed record.
    """
    identity, addresses, temps = split_model_line(line)
    if not identity:
        raise ParseError(f"Malformed model record '{line}': empty identity")

    base_addresses = _parse_integers(addresses, "base addresses", line)
    default_temps = _parse_integers(temps, "default temperatures", line)
    reason = find_violation(default_temps, len(default_temps))
    if reason is not None:
        raise ParseError(f"Malformed model record '{line}': {reason}")

    return ModelRecord(identity, base_addresses, default_temps, tested)


def normalize_identity(raw: str) -> str:
    """Strip every non-alphanumeric character, preserving case."""
    return _NON_ALPHANUMERIC.sub("", raw)


def detect_identity(identity_file: str) -> str:
    """Read and normalize the host identity string.

    Raises:
        OSError: If the identity source cannot be read.
    """
    with open(identity_file, encoding="utf-8", errors="replace") as handle:
        raw = handle.read()
    identity = normalize_identity(raw)
    _LOGGER.debug("Host identity %r normalized to %r", raw.strip(), identity)
    return identity


class ModelResolver:
    """Resolves the ModelRecord for the running host."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def find(self, identity: str) -> ModelRecord | None:
        """Return the first database record matching identity, if any.

        A missing or unreadable database counts as having no matches.
        """
        path = self._settings.model_db_path
        try:
            for line in iter_model_lines(path):
                if not line.strip() or line.lstrip().startswith(DB_COMMENT):
                    continue
                record_identity = line.split(DB_FIELD_SEPARATOR, 1)[0].strip()
                _LOGGER.debug("Considering model %r", record_identity)
                if record_identity == identity:
                    return parse_model_line(line, tested=True)
        except (OSError, UnicodeDecodeError) as err:
            _LOGGER.warning("Model database %s unreadable: %s", path, err)
        return None

    def fallback(self, identity: str) -> ModelRecord:
        """Synthesize an untested record from the configured fallback values."""
        return ModelRecord(
            identity=identity,
            base_addresses=self._settings.fallback_addresses,
            default_temps=self._settings.fallback_temps,
            tested=False,
        )

    def resolve(self) -> ModelRecord:
        """Detect the host identity and return its model record.

        Raises:
            OSError: If the host identity cannot be detected.
            ParseError: If the matching database record is malformed.
        """
        identity = detect_identity(self._settings.identity_file)
        record = self.find(identity)
        if record is None:
            _LOGGER.warning("Model %r not in database, using untested defaults", identity)
            record = self.fallback(identity)
        _LOGGER.info("Resolved model %s (tested=%s)", record.identity, record.tested)
        return record
