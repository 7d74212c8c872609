"""
Unit tests for the model database reader and model resolution.
"""
import pytest

from acpi_fancurve.errors import ParseError
from acpi_fancurve.model_database import (
    ModelRecord,
    ModelResolver,
    detect_identity,
    iter_model_lines,
    normalize_identity,
    parse_model_line,
    split_model_line,
)
from acpi_fancurve.settings import Settings


# =============================================================================
# Reader Tests
# =============================================================================

class TestReader:
    """Tests for reading database lines."""

    def test_lines_in_order(self, model_db):
        """Test that lines are yielded in file order without newlines."""
        lines = list(iter_model_lines(str(model_db)))
        assert lines[1] == "Inspiron7490|1335|52 57 62 66 70 74 78 82|"
        assert lines[2].startswith("XPS9300|1335 1400")
        assert len(lines) == 4

    def test_lazy(self, model_db):
        """Test that the reader is a lazy iterator."""
        lines = iter_model_lines(str(model_db))
        assert next(lines).startswith("#")

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises OSError."""
        with pytest.raises(OSError):
            list(iter_model_lines(str(tmp_path / "missing.db")))


# =============================================================================
# Record Parsing Tests
# =============================================================================

class TestParseModelLine:
    """Tests for parsing single records."""

    def test_trailing_separator(self):
        """Test a record with the trailing separator."""
        record = parse_model_line("XPS9300|1335 1400|50 55 60 65 70 75 80 85|")
        assert record == ModelRecord(
            "XPS9300", (1335, 1400), (50, 55, 60, 65, 70, 75, 80, 85), True
        )

    def test_without_trailing_separator(self):
        """Test a record with three fields."""
        record = parse_model_line("A1|10|1 2 3", tested=False)
        assert record.base_addresses == (10,)
        assert record.temp_count == 3
        assert record.tested is False

    def test_split_fields(self):
        """Test splitting into identity, addresses and temps."""
        assert split_model_line("A1| 10 |1 2|") == ["A1", "10", "1 2"]

    @pytest.mark.parametrize(
        "line",
        [
            "XPS9300",
            "XPS9300|1335",
            "XPS9300|1335|50 55|extra|",
            "|1335|50 55|",
            "XPS9300||50 55|",
            "XPS9300|1335||",
            "XPS9300|abc|50 55|",
            "XPS9300|1335|60 55|",
            "XPS9300|1335|50 -5|",
        ],
    )
    def test_malformed(self, line):
        """Test that malformed records raise ParseError."""
        with pytest.raises(ParseError):
            parse_model_line(line)


# =============================================================================
# Identity Tests
# =============================================================================

class TestIdentity:
    """Tests for host identity detection."""

    def test_normalize_strips_punctuation(self):
        """Test that non-alphanumeric characters are removed."""
        assert normalize_identity("ABC-123!") == "ABC123"

    def test_normalize_preserves_case(self):
        """Test that case is preserved."""
        assert normalize_identity("XPS 13 9300\n") == "XPS139300"
        assert normalize_identity("xps") == "xps"

    def test_detect_from_file(self, identity_file):
        """Test reading the identity from the platform file."""
        assert detect_identity(str(identity_file)) == "XPS9300"

    def test_detect_unreadable(self, tmp_path):
        """Test that an unreadable identity source raises OSError."""
        with pytest.raises(OSError):
            detect_identity(str(tmp_path / "missing"))


# =============================================================================
# Resolver Tests
# =============================================================================

class TestModelResolver:
    """Tests for resolving the host model."""

    def test_first_match_wins(self, settings):
        """Test that the first of duplicate identities is returned."""
        record = ModelResolver(settings).resolve()
        assert record.identity == "XPS9300"
        assert record.tested is True
        assert record.base_addresses == (1335, 1400)
        assert record.default_temps == (50, 55, 60, 65, 70, 75, 80, 85)

    def test_exact_match_only(self, settings):
        """Test that prefixes do not match."""
        assert ModelResolver(settings).find("XPS930") is None

    def test_fallback_when_unmatched(self, settings, identity_file):
        """Test the fallback record for unknown hosts."""
        identity_file.write_text("Unknown Laptop")
        record = ModelResolver(settings).resolve()
        assert record.identity == "UnknownLaptop"
        assert record.tested is False
        assert record.base_addresses == settings.fallback_addresses
        assert record.default_temps == settings.fallback_temps

    def test_missing_database(self, tmp_path, identity_file):
        """Test that a missing database falls back instead of failing."""
        settings = Settings(
            model_db_path=str(tmp_path / "missing.db"),
            identity_file=str(identity_file),
        )
        record = ModelResolver(settings).resolve()
        assert record.tested is False

    def test_empty_database_scenario(self, tmp_path, identity_file):
        """Test fallback values for XPS9300 with an empty database."""
        db = tmp_path / "empty.db"
        db.write_text("")
        settings = Settings.from_env({
            "ACPI_FANCURVE_MODEL_DB": str(db),
            "ACPI_FANCURVE_IDENTITY_FILE": str(identity_file),
            "ACPI_FANCURVE_FALLBACK_ADDRESSES": "1335",
            "ACPI_FANCURVE_FALLBACK_TEMPS": "55 60 62 65 68 72 76 80",
        })
        record = ModelResolver(settings).resolve()
        assert record.identity == "XPS9300"
        assert record.tested is False
        assert record.base_addresses == (1335,)
        assert len(record.default_temps) == 8

    def test_undecodable_database(self, settings, model_db):
        """Test that a database that is not UTF-8 falls back."""
        model_db.write_bytes(b"\xff\xfe|1|2|\n")
        record = ModelResolver(settings).resolve()
        assert record.identity == "XPS9300"
        assert record.tested is False

    def test_malformed_unrelated_line_ignored(self, settings, model_db):
        """Test that malformed lines of other models do not matter."""
        model_db.write_text("Other|bad\nXPS9300|1335|50 60|\n")
        record = ModelResolver(settings).resolve()
        assert record.default_temps == (50, 60)

    def test_malformed_matching_line(self, settings, model_db):
        """Test that a malformed matching record raises ParseError."""
        model_db.write_text("XPS9300|1335|60 50|\n")
        with pytest.raises(ParseError):
            ModelResolver(settings).resolve()

    def test_unreadable_identity(self, settings, tmp_path):
        """Test that identity detection failures propagate."""
        broken = Settings(
            model_db_path=settings.model_db_path,
            identity_file=str(tmp_path / "missing"),
        )
        with pytest.raises(OSError):
            ModelResolver(broken).resolve()

    def test_bundled_database(self, identity_file):
        """Test that the bundled database knows the XPS 9300."""
        record = ModelResolver(Settings(identity_file=str(identity_file))).resolve()
        assert record.tested is True
        assert record.base_addresses == (1335, 1400)
