"""
Report ids and packet layout of the Kontrol S-series HID protocol.

Output reports
--------------

::

    0x80  button LEDs   21 intensity bytes, zero padded to 25
    0x82  key LEDs      R, G, B (0-127) per key, num_keys * 3 bytes
    0xA0  init          2 zero bytes
    0xE0  display row   8 byte header + data, zero padded to 248

Every display packet starts with the header ``00 00 <row> 00 48 00 01 00``.
Row 0 carries the bar graphs and dot markers, rows 1 and 2 the two text
rows.

Input report
------------

Report 0x01, offsets relative to the first byte after the report id::

    0-2    button bitmasks
    3      touch bitmask of the 8 value encoders
    4      touch bit of the main encoder
    5      main encoder position (4 bit)
    6-21   8 x 16 bit little endian encoder counters (0-999)
    36     first note (MIDI note on the lowest key)

This module only knows bytes. The layers above translate buttons,
characters and colors into them.
"""

REPORT_ID_INPUT_UI = 0x01

REPORT_ID_OUTPUT_LEDS = 0x80
REPORT_ID_OUTPUT_KEY_LEDS = 0x82
REPORT_ID_OUTPUT_INIT = 0xA0
REPORT_ID_OUTPUT_DISPLAY = 0xE0

SIZE_DISPLAY = 248
SIZE_BUTTON_LEDS = 25
SIZE_INIT = 2

NUM_DISPLAY_COLUMNS = 72
NUM_TEXT_ROWS = 2
NUM_KEY_LEDS = 88

# Input report offsets
OFFSET_BUTTONS = 0
OFFSET_TOUCH = 3
OFFSET_MAIN_TOUCH = 4
OFFSET_MAIN_ENCODER = 5
OFFSET_ENCODERS = 6
OFFSET_FIRST_NOTE = 36
MIN_INPUT_SIZE = OFFSET_FIRST_NOTE + 1


def display_header(row: int) -> bytes:
    """Header of a display packet for packet row 0 (bars), 1 or 2 (text)."""
    return bytes((0x00, 0x00, row, 0x00, 0x48, 0x00, 0x01, 0x00))


def pad(data: bytes | bytearray, size: int) -> bytes:
    """Zero pad (or cut) data to the fixed size of a report."""
    return bytes(data[:size]).ljust(size, b"\x00")


def init_payload() -> bytes:
    """Payload of the init report."""
    return bytes(SIZE_INIT)


def button_led_payload(states: bytes | bytearray) -> bytes:
    """Payload of the button LED report."""
    return pad(states, SIZE_BUTTON_LEDS)


def key_led_payload(colors: bytes | bytearray, num_keys: int) -> bytes:
    """Payload of the key LED report; only the keys the model has are sent."""
    size = num_keys * 3
    return pad(colors[:size], size)
