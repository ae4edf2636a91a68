"""Tests for encoder wrap-around arithmetic."""

import pytest

from kontrolhid.devices.kontrol1.encoders import (
    encoder_delta,
    encoder_difference,
    main_encoder_increased,
)


@pytest.mark.unit
class TestMainEncoder:
    """Test direction detection of the 4-bit main encoder."""

    @pytest.mark.parametrize(
        "old,new,increased",
        [
            (15, 0, True),
            (0, 15, False),
            (5, 6, True),
            (6, 5, False),
            (0, 1, True),
            (1, 0, False),
            (14, 15, True),
        ],
    )
    def test_direction(self, old, new, increased):
        assert main_encoder_increased(old, new) is increased


@pytest.mark.unit
class TestValueEncoder:
    """Test wrap correction of the 0-999 value encoder counters."""

    def test_plain_difference(self):
        assert encoder_difference(100, 104) == 4
        assert encoder_difference(104, 100) == -4

    def test_wrap_while_increasing(self):
        assert encoder_difference(998, 2) == 4

    def test_wrap_while_decreasing(self):
        assert encoder_difference(2, 998) == -4

    def test_threshold_is_not_a_wrap(self):
        assert encoder_difference(0, 500) == 500
        assert encoder_difference(500, 0) == -500

    def test_delta_divides_by_step(self):
        assert encoder_delta(100, 108) == 2
        assert encoder_delta(108, 100) == -2

    def test_delta_truncates_toward_zero(self):
        assert encoder_delta(100, 103) == 0
        assert encoder_delta(100, 97) == 0
        assert encoder_delta(100, 94) == -1

    def test_delta_across_wrap(self):
        assert encoder_delta(998, 2) == 1
        assert encoder_delta(2, 998) == -1
