"""Exceptions raised by the ACPI fan curve tool."""


class FanCurveError(Exception):
    """Base exception for the fan curve tool."""


class ArgumentError(FanCurveError):
    """A required protocol argument is missing or empty."""


class AcpiError(FanCurveError):
    """The firmware call interface reported an error or is inaccessible."""


class ValidationError(FanCurveError):
    """A temperature sequence failed validation."""


class ParseError(FanCurveError):
    """A model database record or a firmware result is malformed."""


class ConfigurationError(FanCurveError):
    """Configuration is invalid."""
