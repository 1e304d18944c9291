"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидатора конфигурации decay:
- Валидность самой схемы
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и pattern
- Детекция нарушений constraints (maxItems, minimum)
- Интеграция с Pydantic моделью и расчётом decay
"""

import copy

import pytest
from jsonschema import ValidationError
from pydantic import ValidationError as PydanticValidationError

from src.core.contracts import (
    DutchBlockDecayConfigValidator,
    SchemaLoader,
    parse_dutch_block_decay_config,
    validate_dutch_block_decay_config,
)
from src.core.decay import InvalidDecayCurve, get_block_decayed_amount, get_end_amount
from src.core.math import UINT256_MAX


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_config():
    """Валидная конфигурация decay для тестирования."""
    return {
        "decayStartBlock": 19000000,
        "startAmount": "1000000000000000000",
        "relativeBlocks": [50, 150],
        "relativeAmounts": ["5000000000000000", "20000000000000000"],
    }


# =============================================================================
# SCHEMA TESTS
# =============================================================================


class TestSchemaLoader:
    """Тесты загрузчика схем"""

    def test_load_schema(self) -> None:
        schema = SchemaLoader().load_schema("dutch_block_decay_config")
        assert schema["title"] == "DutchBlockDecayConfig"

    def test_schema_is_cached(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("dutch_block_decay_config") is loader.load_schema(
            "dutch_block_decay_config"
        )

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("no_such_schema")


class TestDutchBlockDecayConfigValidation:
    """Тесты валидации конфигурации decay"""

    def test_valid_config(self, valid_config) -> None:
        validate_dutch_block_decay_config(valid_config)
        assert DutchBlockDecayConfigValidator().is_valid(valid_config)

    def test_integer_amounts_accepted(self, valid_config) -> None:
        valid_config["startAmount"] = 1000
        valid_config["relativeAmounts"] = [5, -20]
        validate_dutch_block_decay_config(valid_config)

    def test_negative_relative_amount_string(self, valid_config) -> None:
        valid_config["relativeAmounts"] = ["5", "-20"]
        validate_dutch_block_decay_config(valid_config)

    def test_empty_curve(self, valid_config) -> None:
        valid_config["relativeBlocks"] = []
        valid_config["relativeAmounts"] = []
        validate_dutch_block_decay_config(valid_config)

    @pytest.mark.parametrize(
        "field", ["decayStartBlock", "startAmount", "relativeBlocks", "relativeAmounts"]
    )
    def test_missing_required_field(self, valid_config, field) -> None:
        del valid_config[field]
        with pytest.raises(ValidationError):
            validate_dutch_block_decay_config(valid_config)

    def test_additional_property_rejected(self, valid_config) -> None:
        valid_config["endAmount"] = "1"
        with pytest.raises(ValidationError):
            validate_dutch_block_decay_config(valid_config)

    @pytest.mark.parametrize("amount", ["-1", "1.5", "0x10", "", "01", -1])
    def test_invalid_start_amount(self, valid_config, amount) -> None:
        valid_config["startAmount"] = amount
        with pytest.raises(ValidationError):
            validate_dutch_block_decay_config(valid_config)

    def test_negative_decay_start_block(self, valid_config) -> None:
        valid_config["decayStartBlock"] = -1
        with pytest.raises(ValidationError):
            validate_dutch_block_decay_config(valid_config)

    def test_negative_relative_block(self, valid_config) -> None:
        valid_config["relativeBlocks"] = [-1, 150]
        with pytest.raises(ValidationError):
            validate_dutch_block_decay_config(valid_config)

    def test_too_many_points(self, valid_config) -> None:
        valid_config["relativeBlocks"] = list(range(1, 18))
        valid_config["relativeAmounts"] = ["1"] * 17
        with pytest.raises(ValidationError):
            validate_dutch_block_decay_config(valid_config)

    def test_iter_errors_reports_all_violations(self, valid_config) -> None:
        valid_config["decayStartBlock"] = -1
        valid_config["startAmount"] = "abc"
        errors = list(DutchBlockDecayConfigValidator().iter_errors(valid_config))
        assert len(errors) == 2


# =============================================================================
# PARSING / INTEGRATION
# =============================================================================


class TestParseDutchBlockDecayConfig:
    """Интеграция схемы с Pydantic моделью и расчётом"""

    def test_parse_valid(self, valid_config) -> None:
        config = parse_dutch_block_decay_config(valid_config)
        assert config.decay_start_block == 19000000
        assert config.start_amount == 10**18
        assert config.relative_blocks == (50, 150)
        assert config.relative_amounts == (5 * 10**15, 2 * 10**16)

    def test_parse_does_not_mutate_input(self, valid_config) -> None:
        original = copy.deepcopy(valid_config)
        parse_dutch_block_decay_config(valid_config)
        assert valid_config == original

    def test_parse_max_uint256(self, valid_config) -> None:
        valid_config["startAmount"] = str(UINT256_MAX)
        config = parse_dutch_block_decay_config(valid_config)
        assert config.start_amount == UINT256_MAX

    def test_parse_above_uint256_rejected_by_model(self, valid_config) -> None:
        """78 цифр проходят pattern, но не диапазон uint256"""
        valid_config["startAmount"] = str(UINT256_MAX + 1)
        validate_dutch_block_decay_config(valid_config)
        with pytest.raises(PydanticValidationError):
            parse_dutch_block_decay_config(valid_config)

    def test_parse_length_mismatch(self, valid_config) -> None:
        valid_config["relativeAmounts"] = ["1"]
        with pytest.raises(InvalidDecayCurve):
            parse_dutch_block_decay_config(valid_config)

    def test_parsed_config_evaluates(self, valid_config) -> None:
        config = parse_dutch_block_decay_config(valid_config)
        start = 10**18
        # [0, 50]: -5e15, elapsed 25
        assert get_block_decayed_amount(config, 19000025) == start - 25 * 10**14
        # [50, 150]: -5e15 → -2e16, elapsed 50 из 100
        assert get_block_decayed_amount(config, 19000100) == start - 125 * 10**14
        assert get_end_amount(config) == start - 2 * 10**16
        assert get_block_decayed_amount(config, 19000150) == get_end_amount(config)
