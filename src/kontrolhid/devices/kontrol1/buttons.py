"""Button ids, input bit layout and button LED slots."""

from enum import IntEnum


class Button(IntEnum):
    """Buttons and touch sensors reported in the input report."""

    MAIN_ENCODER = 1
    PRESET_UP = 2
    ENTER = 3
    PRESET_DOWN = 4
    BROWSE = 5
    INSTANCE = 6
    OCTAVE_DOWN = 7
    OCTAVE_UP = 8

    STOP = 9
    REC = 10
    PLAY = 11
    NAVIGATE_RIGHT = 12
    NAVIGATE_DOWN = 13
    NAVIGATE_LEFT = 14
    BACK = 15
    NAVIGATE_UP = 16

    SHIFT = 17
    SCALE = 18
    ARP = 19
    LOOP = 20
    PAGE_RIGHT = 21
    PAGE_LEFT = 22
    RWD = 23
    FWD = 24

    TOUCH_ENCODER_1 = 25
    TOUCH_ENCODER_2 = 26
    TOUCH_ENCODER_3 = 27
    TOUCH_ENCODER_4 = 28
    TOUCH_ENCODER_5 = 29
    TOUCH_ENCODER_6 = 30
    TOUCH_ENCODER_7 = 31
    TOUCH_ENCODER_8 = 32

    TOUCH_ENCODER_MAIN = 33

    @property
    def is_touch(self) -> bool:
        """True for the capacitive encoder touch sensors."""
        return self >= Button.TOUCH_ENCODER_1


# Bit n (LSB first) of each bitmask byte of the input report
BUTTON_BYTE_0 = (
    Button.MAIN_ENCODER,
    Button.PRESET_UP,
    Button.ENTER,
    Button.PRESET_DOWN,
    Button.BROWSE,
    Button.INSTANCE,
    Button.OCTAVE_DOWN,
    Button.OCTAVE_UP,
)
BUTTON_BYTE_1 = (
    Button.STOP,
    Button.REC,
    Button.PLAY,
    Button.NAVIGATE_RIGHT,
    Button.NAVIGATE_DOWN,
    Button.NAVIGATE_LEFT,
    Button.BACK,
    Button.NAVIGATE_UP,
)
BUTTON_BYTE_2 = (
    Button.SHIFT,
    Button.SCALE,
    Button.ARP,
    Button.LOOP,
    Button.PAGE_RIGHT,
    Button.PAGE_LEFT,
    Button.RWD,
    Button.FWD,
)
TOUCH_BYTE = (
    Button.TOUCH_ENCODER_1,
    Button.TOUCH_ENCODER_2,
    Button.TOUCH_ENCODER_3,
    Button.TOUCH_ENCODER_4,
    Button.TOUCH_ENCODER_5,
    Button.TOUCH_ENCODER_6,
    Button.TOUCH_ENCODER_7,
    Button.TOUCH_ENCODER_8,
)
MAIN_TOUCH_BYTE = (Button.TOUCH_ENCODER_MAIN,)

TEST_BITS = (0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80)

# Position of each lit button in the 0x80 button LED report
LED_MAPPING: dict[Button, int] = {
    Button.SHIFT: 0,
    Button.SCALE: 1,
    Button.ARP: 2,
    Button.LOOP: 3,
    Button.RWD: 4,
    Button.FWD: 5,
    Button.PLAY: 6,
    Button.REC: 7,
    Button.STOP: 8,
    Button.PAGE_LEFT: 9,
    Button.PAGE_RIGHT: 10,
    Button.BROWSE: 11,
    Button.PRESET_UP: 12,
    Button.INSTANCE: 13,
    Button.PRESET_DOWN: 14,
    Button.BACK: 15,
    Button.NAVIGATE_UP: 16,
    Button.ENTER: 17,
    Button.NAVIGATE_LEFT: 18,
    Button.NAVIGATE_DOWN: 19,
    Button.NAVIGATE_RIGHT: 20,
}

NUM_BUTTON_LEDS = len(LED_MAPPING)
