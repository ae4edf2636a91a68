"""Tests for the data models."""

import pytest
from pydantic import ValidationError

from kontrolhid.devices.kontrol1 import KontrolInfo
from kontrolhid.models import VENDOR_ID, Color, KontrolConfig, KontrolModel


class TestColor:
    """Test Color model."""

    @pytest.mark.unit
    def test_create(self):
        color = Color(r=255, g=128, b=0)

        assert color.to_rgb_tuple() == (255, 128, 0)
        assert color.to_hex() == "#FF8000"

    @pytest.mark.unit
    def test_to_7bit(self):
        assert Color(r=255, g=128, b=1).to_7bit() == (127, 64, 0)
        assert Color.off().to_7bit() == (0, 0, 0)

    @pytest.mark.unit
    def test_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            Color(r=256, g=0, b=0)
        with pytest.raises(ValidationError):
            Color(r=0, g=-1, b=0)

    @pytest.mark.unit
    def test_frozen(self):
        color = Color(r=1, g=2, b=3)

        with pytest.raises(ValidationError):
            color.r = 5

    @pytest.mark.unit
    def test_from_hex(self):
        assert Color.from_hex("#FF8000") == Color(r=255, g=128, b=0)
        assert Color.from_hex("00ff10").to_hex() == "#00FF10"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["#FFF", "#GG0000", ""])
    def test_from_hex_invalid(self, value):
        with pytest.raises(ValueError):
            Color.from_hex(value)


class TestKontrolModel:
    """Test model lookup tables."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "model,keys,product_id",
        [
            (KontrolModel.S25, 25, 0x1340),
            (KontrolModel.S49, 49, 0x1350),
            (KontrolModel.S61, 61, 0x1360),
            (KontrolModel.S88, 88, 0x1410),
        ],
    )
    def test_model_table(self, model, keys, product_id):
        assert model.num_keys == keys
        assert model.product_id == product_id
        assert KontrolModel.from_product_id(product_id) is model

    @pytest.mark.unit
    def test_unknown_product_id(self):
        assert KontrolModel.from_product_id(0x1234) is None

    @pytest.mark.unit
    def test_display_name(self):
        assert KontrolModel.S88.display_name == "Komplete Kontrol S88"


class TestKontrolInfo:
    """Test device metadata."""

    @pytest.mark.unit
    def test_from_model(self):
        info = KontrolInfo.from_model(KontrolModel.S88)

        assert info.vendor_id == VENDOR_ID
        assert info.product_id == 0x1410
        assert info.num_keys == 88
        assert info.key_led_size == 264

    @pytest.mark.unit
    def test_from_config_with_product_override(self):
        config = KontrolConfig(model=KontrolModel.S25, product_id=0x1341)

        info = KontrolInfo.from_config(config)

        assert info.product_id == 0x1341
        assert info.num_keys == 25


class TestKontrolConfig:
    """Test the configuration model."""

    @pytest.mark.unit
    def test_defaults(self):
        config = KontrolConfig()

        assert config.model is KontrolModel.S49
        assert config.vendor_id == 0x17CC
        assert config.product_id is None
        assert config.resolved_product_id == 0x1350

    @pytest.mark.unit
    def test_model_from_string(self):
        config = KontrolConfig.model_validate({"model": "S61"})

        assert config.model is KontrolModel.S61
        assert config.resolved_product_id == 0x1360

    @pytest.mark.unit
    def test_invalid_values_rejected(self):
        with pytest.raises(ValidationError):
            KontrolConfig(read_timeout_ms=0)
        with pytest.raises(ValidationError):
            KontrolConfig(input_report_size=16)
        with pytest.raises(ValidationError):
            KontrolConfig.model_validate({"model": "S100"})
