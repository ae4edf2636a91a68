"""Tests for the exception hierarchy and error helpers."""

import pytest
from pydantic import BaseModel, ValidationError

from kontrolhid.exceptions import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    DeviceError,
    DeviceNotFoundError,
    DeviceWriteError,
    KontrolError,
    collect_errors,
    format_error_for_display,
    wrap_hid_open_error,
    wrap_pydantic_error,
)


class Settings(BaseModel):
    """Model used to produce real pydantic errors."""

    rate: int = 1
    name: str = "x"


def validation_error(json_text: str) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        Settings.model_validate_json(json_text)
    return exc_info.value


class TestExceptionHierarchy:
    """Test exception types and messages."""

    @pytest.mark.unit
    def test_device_not_found(self):
        error = DeviceNotFoundError(0x17CC, 0x1350, original_error="open failed")

        assert isinstance(error, DeviceError)
        assert isinstance(error, KontrolError)
        assert "17cc:1350" in error.user_message
        assert "open failed" in error.technical_message
        assert error.recoverable
        assert "Suggestion:" in error.get_full_message()

    @pytest.mark.unit
    def test_device_write_error(self):
        error = DeviceWriteError(0xE0, original_error="timeout")

        assert error.report_id == 0xE0
        assert "0xE0" in error.user_message
        assert "timeout" in error.technical_message

    @pytest.mark.unit
    def test_full_message_without_hint(self):
        error = KontrolError("Something broke")

        assert error.get_full_message() == "Something broke"
        assert error.technical_message == "Something broke"
        assert not error.recoverable

    @pytest.mark.unit
    def test_trailing_comma_message(self):
        error = ConfigFileInvalidError("/tmp/config.json", "trailing comma at line 3")

        assert isinstance(error, ConfigurationError)
        assert error.user_message == "Configuration file has a trailing comma"
        assert str(error) == error.user_message


class TestWrapPydanticError:
    """Test conversion of pydantic errors."""

    @pytest.mark.unit
    def test_invalid_json(self):
        error = wrap_pydantic_error(validation_error('{"rate": 1,}'), "/tmp/c.json")

        assert isinstance(error, ConfigFileInvalidError)
        assert error.file_path == "/tmp/c.json"

    @pytest.mark.unit
    def test_single_field(self):
        error = wrap_pydantic_error(validation_error('{"rate": "fast"}'), "/tmp/c.json")

        assert isinstance(error, ConfigValidationError)
        assert error.field == "rate"
        assert error.value == "fast"

    @pytest.mark.unit
    def test_multiple_fields(self):
        error = wrap_pydantic_error(
            validation_error('{"rate": "fast", "name": 5}'), "/tmp/c.json"
        )

        assert error.field == "multiple fields"
        assert "2 validation errors" in error.user_message


class TestErrorHelpers:
    """Test the remaining helpers."""

    @pytest.mark.unit
    def test_wrap_hid_open_error(self):
        error = wrap_hid_open_error(OSError("open failed"), 0x17CC, 0x1410)

        assert isinstance(error, DeviceNotFoundError)
        assert error.product_id == 0x1410

    @pytest.mark.unit
    def test_wrap_hid_open_error_keeps_kontrol_errors(self):
        original = DeviceNotFoundError(1, 2)

        assert wrap_hid_open_error(original, 1, 2) is original

    @pytest.mark.unit
    def test_format_error_for_display(self):
        assert format_error_for_display(ValueError("bad")) == ("ValueError: bad", None)

        message, hint = format_error_for_display(DeviceNotFoundError(1, 2))
        assert message.startswith("Could not open")
        assert hint is not None

    @pytest.mark.unit
    def test_collect_errors(self):
        collector = collect_errors("shut down")

        with collector.try_operation("first"):
            pass
        with collector.try_operation("second"):
            raise RuntimeError("broken")

        assert collector.error_count == 1
        assert collector.success_count == 1
        assert "second: broken" in collector.get_summary()

    @pytest.mark.unit
    def test_collect_errors_does_not_swallow_interrupts(self):
        collector = collect_errors("shut down")

        with pytest.raises(KeyboardInterrupt):
            with collector.try_operation("wait"):
                raise KeyboardInterrupt

        assert not collector.has_errors
