"""Error types raised by the parsing and extraction services."""


class ParseError(Exception):
    """Base class for parse and extraction failures."""

    error_type = "parse_error"

    def __init__(self, message: str, raw_content: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.raw_content = raw_content


class UnparseableInput(ParseError):
    """No grammar matched the input text."""

    error_type = "unparseable_input"


class ConfigError(ParseError):
    """The completion service is missing, unreachable or unauthorized."""

    error_type = "config_error"


class FormatError(ParseError):
    """The completion service returned content that is not JSON."""

    error_type = "format_error"


class SchemaError(ParseError):
    """The returned JSON is missing required fields or has wrong types."""

    error_type = "schema_error"


class LookupUnavailable(ParseError):
    """A nutrition or MET lookup failed or timed out."""

    error_type = "lookup_unavailable"
