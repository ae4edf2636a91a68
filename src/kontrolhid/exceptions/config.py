"""Errors raised while loading ~/.kontrolhid/config.json."""

from typing import Any

from .base import KontrolError

_JSON_HINTS = (
    "The file must be a single JSON object, for example:\n"
    '  {"model": "S61", "read_timeout_ms": 100}\n'
    "Look for a comma after the last field, single quotes or a missing brace."
)


class ConfigurationError(KontrolError):
    """The configuration cannot be loaded or saved."""


class ConfigFileInvalidError(ConfigurationError):
    """The file exists but is not valid JSON."""

    def __init__(self, file_path: str, parse_error: str):
        """
        Args:
            file_path: Path of the broken file
            parse_error: Parser message (from pydantic or the empty-file check)
        """
        lowered = parse_error.lower()
        if "trailing comma" in lowered:
            user_msg = "Configuration file has a trailing comma"
            recovery = f"Remove the comma after the last field in {file_path}"
        elif "empty" in lowered:
            user_msg = "Configuration file is empty"
            recovery = f"Delete {file_path} or run 'kontrolhid config reset'"
        else:
            user_msg = "Configuration file has invalid syntax"
            recovery = f"{_JSON_HINTS}\nFile: {file_path}"

        super().__init__(
            user_message=user_msg,
            technical_message=f"JSON parse error in {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=recovery,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """The JSON is well formed but a value is not accepted."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: str | None = None):
        """
        Args:
            field: Dotted name of the offending field, or "multiple fields"
            value: The rejected value (None when several fields failed)
            error_msg: Validation message
            file_path: Path of the config file, if loaded from one
        """
        hints = [f"Fix '{field}' or run 'kontrolhid config reset'"]
        if field == "model":
            hints.append("Valid models: S25, S49, S61, S88")
        elif field.endswith("_id"):
            hints.append("USB ids are plain integers, e.g. 6092 for vendor 0x17CC")
        if file_path:
            hints.append(f"Config file: {file_path}")

        super().__init__(
            user_message=f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"Config validation failed for {field}={value!r}: {error_msg}",
            recoverable=True,
            recovery_hint="\n".join(hints),
        )
        self.field = field
        self.value = value
        self.file_path = file_path
