"""Tests for KontrolController."""

from unittest.mock import Mock

import pytest

from kontrolhid.devices import ButtonEvent, KontrolController
from kontrolhid.devices.kontrol1 import Button
from kontrolhid.exceptions import DeviceNotFoundError
from kontrolhid.models import Color, KontrolConfig, KontrolModel


class RecordingObserver:
    """Observer collecting every event it receives."""

    def __init__(self):
        self.events = []

    def on_kontrol_event(self, event):
        self.events.append(event)


def input_callback(transport):
    """The report handler the device registered on a mock transport."""
    return transport.set_input_callback.call_args_list[0].args[0]


class TestKontrolController:
    """Test the controller with a mock transport."""

    @pytest.fixture
    def config(self):
        return KontrolConfig(model=KontrolModel.S61)

    @pytest.fixture
    def controller(self, config, mock_transport):
        controller = KontrolController(config, transport_factory=lambda: mock_transport)
        controller.start()
        yield controller
        controller.stop()

    @pytest.mark.unit
    def test_start_opens_and_initializes(self, controller, mock_transport):
        mock_transport.open.assert_called_once()
        mock_transport.send_output_report.assert_called_once_with(0xA0, bytes(2))
        assert controller.is_connected

    @pytest.mark.unit
    def test_device_info_from_config(self, controller):
        assert controller.device_name == "Komplete Kontrol S61"
        assert controller.num_keys == 61
        assert controller.info.product_id == 0x1360

    @pytest.mark.unit
    def test_default_transport_uses_config(self):
        config = KontrolConfig(model=KontrolModel.S25, read_timeout_ms=20)
        controller = KontrolController(config)

        transport = controller._create_transport()

        assert transport.vendor_id == 0x17CC
        assert transport.product_id == 0x1340
        assert not transport.is_open

    @pytest.mark.unit
    def test_stop_turns_off_and_closes(self, config, mock_transport):
        controller = KontrolController(config, transport_factory=lambda: mock_transport)
        controller.start()

        controller.stop()

        mock_transport.close.assert_called_once()
        assert not controller.is_connected

    @pytest.mark.unit
    def test_context_manager(self, config, mock_transport):
        with KontrolController(config, transport_factory=lambda: mock_transport) as kontrol:
            assert kontrol.is_connected

        mock_transport.close.assert_called_once()

    @pytest.mark.integration
    def test_observers_receive_events(self, config, mock_transport, make_report):
        observer = RecordingObserver()
        controller = KontrolController(config, transport_factory=lambda: mock_transport)
        controller.register_observer(observer)
        controller.start()

        input_callback(mock_transport)(0x01, make_report(buttons=(0, 0, 0x01)))
        # stop() runs the already queued dispatches before returning
        controller.stop()

        assert observer.events == [ButtonEvent(button=Button.SHIFT, pressed=True)]

    @pytest.mark.integration
    def test_unregistered_observer_receives_nothing(self, config, mock_transport, make_report):
        observer = RecordingObserver()
        controller = KontrolController(config, transport_factory=lambda: mock_transport)
        controller.register_observer(observer)
        controller.unregister_observer(observer)
        controller.start()

        input_callback(mock_transport)(0x01, make_report(buttons=(0, 0, 0x01)))
        controller.stop()

        assert observer.events == []

    @pytest.mark.unit
    def test_helpers_write_only_on_flush(self, controller, mock_transport):
        mock_transport.reset_mock()

        controller.write_line(0, "HELLO")
        controller.set_bar(0, 64)
        controller.set_button_light(Button.PLAY, True)
        controller.set_key_color(0, Color(r=255, g=0, b=0))

        mock_transport.send_output_report.assert_not_called()
        assert controller.flush() == 5
        assert controller.flush() == 0

    @pytest.mark.unit
    def test_write_line_replaces_row(self, controller):
        controller.write_line(0, "HELLO WORLD")
        controller.write_line(0, "HI")

        display = controller._device.output._display
        assert display.get_glyph(0, 2) == display.get_glyph(0, 71)

    @pytest.mark.unit
    def test_button_light_intensity(self, controller):
        output = controller._device.output

        controller.set_button_light(Button.PLAY, True)
        assert output.get_button_led(Button.PLAY) == 0xFF

        controller.set_button_light(Button.PLAY, True, dim=True)
        assert output.get_button_led(Button.PLAY) == 0x20

        controller.set_button_light(Button.PLAY, False)
        assert output.get_button_led(Button.PLAY) == 0

    @pytest.mark.unit
    def test_set_note_color(self, controller, mock_transport, make_report):
        input_callback(mock_transport)(0x01, make_report(first_note=36))

        assert controller.first_note == 36
        assert controller.note_range == (36, 96)
        assert controller.set_note_color(38, Color(r=0, g=255, b=0)) is True
        assert controller._device.output.get_key_led(2) == (0, 127, 0)
        assert controller.set_note_color(20, Color(r=0, g=255, b=0)) is False

    @pytest.mark.unit
    def test_clear_key_colors(self, controller):
        controller.set_key_color(3, Color(r=10, g=10, b=10))

        controller.clear_key_colors()

        assert controller._device.output.get_key_led(3) == (0, 0, 0)


class TestDisconnectedController:
    """Test the controller when the keyboard cannot be opened."""

    @pytest.fixture
    def failing_transport(self):
        transport = Mock()
        transport.open.side_effect = DeviceNotFoundError(0x17CC, 0x1350)
        return transport

    @pytest.fixture
    def controller(self, failing_transport):
        controller = KontrolController(transport_factory=lambda: failing_transport)
        controller.start()
        yield controller
        controller.stop()

    @pytest.mark.unit
    def test_runs_as_stub(self, controller, failing_transport, caplog):
        assert not controller.is_connected
        failing_transport.send_output_report.assert_not_called()

    @pytest.mark.unit
    def test_open_failure_is_logged(self, failing_transport, caplog):
        controller = KontrolController(transport_factory=lambda: failing_transport)
        controller.start()
        controller.stop()

        assert "running without a keyboard" in caplog.text

    @pytest.mark.unit
    def test_helpers_still_work(self, controller, failing_transport):
        assert controller.write_line(0, "OFFLINE") is True
        assert controller.set_pan_bar(4, 64) is True
        assert controller.set_button_light(Button.SHIFT, True) is True
        assert controller.flush() == 0
        failing_transport.send_output_report.assert_not_called()

    @pytest.mark.unit
    def test_stop_does_not_close_failed_transport(self, failing_transport):
        controller = KontrolController(transport_factory=lambda: failing_transport)
        controller.start()
        controller.stop()

        failing_transport.close.assert_not_called()


class TestControllerNotStarted:
    """Test helpers before start()."""

    @pytest.mark.unit
    def test_helpers_return_false(self, caplog):
        controller = KontrolController()

        assert controller.write_line(0, "X") is False
        assert controller.set_cell(0, 0, "X") is False
        assert controller.set_bar(0, 1) is False
        assert controller.set_pan_bar(0, 1) is False
        assert controller.clear_display() is False
        assert controller.set_button_light(Button.PLAY, True) is False
        assert controller.turn_off_button_lights() is False
        assert controller.set_key_color(0, Color.off()) is False
        assert controller.set_note_color(60, Color.off()) is False
        assert controller.clear_key_colors() is False
        assert controller.flush() == 0
        assert "controller not started" in caplog.text

    @pytest.mark.unit
    def test_properties(self):
        controller = KontrolController()

        assert not controller.is_connected
        assert controller.first_note == 48
        assert controller.note_range == (48, 96)
