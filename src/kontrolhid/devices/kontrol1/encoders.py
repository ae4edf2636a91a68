"""
Wrap-around arithmetic of the two encoder types.

The main encoder reports a 4-bit position (0-15) that wraps in both
directions. The eight value encoders report an absolute counter between 0
and 999 that wraps as well; one detent moves it by 4.
"""

MAIN_ENCODER_MAX = 0x0F
ENCODER_RANGE = 1000
ENCODER_WRAP_THRESHOLD = 500
ENCODER_STEP = 4


def main_encoder_increased(old: int, new: int) -> bool:
    """
    Check whether the main encoder turned clockwise from `old` to `new`.

    15 -> 0 counts as an increase. 0 -> 15 is the opposite wrap and counts
    as a decrease.
    """
    wrapped_up = old == MAIN_ENCODER_MAX and new == 0
    wrapped_down = old == 0 and new == MAIN_ENCODER_MAX
    return (old < new or wrapped_up) and not wrapped_down


def encoder_difference(old: int, new: int) -> int:
    """
    Signed movement of a value encoder between two counter readings.

    A jump of more than half the range is a wrap: 998 -> 2 is +4 and
    2 -> 998 is -4.
    """
    diff = new - old
    if diff < -ENCODER_WRAP_THRESHOLD:
        diff += ENCODER_RANGE
    elif diff > ENCODER_WRAP_THRESHOLD:
        diff -= ENCODER_RANGE
    return diff


def encoder_delta(old: int, new: int) -> int:
    """Encoder movement in detents, truncated toward zero."""
    return int(encoder_difference(old, new) / ENCODER_STEP)
