"""
DecayCurve — Модель кривой блочного Dutch decay

Immutable Pydantic модели, описывающие кривую, по которой сумма ордера
меняется после блока начала decay:
- DecayCurve: упорядоченные контрольные точки (relative_blocks, relative_amounts)
- DutchBlockDecayConfig: параметры одного ордера (start block, start amount, кривая)

Поля DutchBlockDecayConfig принимают как snake_case, так и camelCase имена
(decayStartBlock, startAmount, relativeBlocks, relativeAmounts).
Суммы могут приходить строками: uint256 не помещается в JSON number.
"""

from typing import Any, Final, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.math.uint256 import sub_uint256, validate_int256, validate_uint256


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Максимальное число контрольных точек кривой.
# relativeBlocks упакованы контрактом в один uint256 по 16 бит на точку.
MAX_CURVE_POINTS: Final[int] = 16


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidDecayCurve(Exception):
    """
    Некорректная кривая decay (ошибка конфигурации, не runtime edge case).

    Возникает если:
    1. Контрольных точек больше MAX_CURVE_POINTS
    2. len(relative_amounts) != len(relative_blocks)

    Не является ValueError: pydantic пропускает его без обёртки в ValidationError.
    """

    pass


class MissingConfiguration(Exception):
    """В конфигурации отсутствуют поля, необходимые для расчёта суммы."""

    pass


def validate_curve_shape(relative_blocks, relative_amounts) -> None:
    """
    Проверка формы кривой.

    Raises:
        InvalidDecayCurve: Если точек больше MAX_CURVE_POINTS или длины различаются
    """
    if len(relative_amounts) > MAX_CURVE_POINTS:
        raise InvalidDecayCurve(
            f"Decay curve has {len(relative_amounts)} points, "
            f"maximum is {MAX_CURVE_POINTS}"
        )
    if len(relative_amounts) != len(relative_blocks):
        raise InvalidDecayCurve(
            f"relative_amounts length {len(relative_amounts)} does not match "
            f"relative_blocks length {len(relative_blocks)}"
        )


def _parse_amount(value: Any) -> Any:
    # uint256 приходит из JSON десятичной строкой
    if isinstance(value, str):
        return int(value, 10)
    return value


def _parse_amounts(values: Any) -> Any:
    if isinstance(values, (list, tuple)):
        return tuple(_parse_amount(v) for v in values)
    return values


def _validate_blocks(blocks: tuple[int, ...]) -> tuple[int, ...]:
    for i, block in enumerate(blocks):
        if block < 0:
            raise ValueError(f"relative_blocks[{i}] must be non-negative, got {block}")
    return blocks


def _validate_amounts(amounts: tuple[int, ...]) -> tuple[int, ...]:
    for i, amount in enumerate(amounts):
        validate_int256(amount, f"relative_amounts[{i}]")
    return amounts


# =============================================================================
# DECAY CURVE
# =============================================================================


class DecayCurve(BaseModel):
    """
    Кусочно-линейная кривая decay.

    relative_blocks[i] — смещение в блоках относительно decay_start_block.
    relative_amounts[i] — накопленная величина, вычитаемая из start_amount
    по достижении relative_blocks[i]. Отрицательное значение означает рост суммы.

    Порядок relative_blocks не проверяется и не сортируется: контракт
    предполагает возрастание, ответственность на стороне построителя ордера.
    """

    relative_blocks: tuple[int, ...] = Field(
        default=(), alias="relativeBlocks", description="Смещения контрольных точек (блоки)"
    )
    relative_amounts: tuple[int, ...] = Field(
        default=(), alias="relativeAmounts", description="Накопленный decay в каждой точке"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("relative_amounts", mode="before")
    @classmethod
    def parse_relative_amounts(cls, v: Any) -> Any:
        return _parse_amounts(v)

    @field_validator("relative_blocks")
    @classmethod
    def validate_relative_blocks(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        return _validate_blocks(v)

    @field_validator("relative_amounts")
    @classmethod
    def validate_relative_amounts(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        return _validate_amounts(v)

    @model_validator(mode="after")
    def validate_shape(self) -> "DecayCurve":
        validate_curve_shape(self.relative_blocks, self.relative_amounts)
        return self

    def __len__(self) -> int:
        return len(self.relative_amounts)

    def end_amount(self, start_amount: int) -> int:
        """
        Сумма после полного завершения decay.

        Args:
            start_amount: Сумма в блоке начала decay

        Returns:
            start_amount - relative_amounts[-1] (start_amount для пустой кривой)

        Raises:
            Uint256RangeError: Если результат вне uint256
        """
        if not self.relative_amounts:
            return start_amount
        return sub_uint256(start_amount, self.relative_amounts[-1])


# =============================================================================
# DECAY CONFIG
# =============================================================================


class DutchBlockDecayConfig(BaseModel):
    """
    Параметры блочного decay одного ордера.

    Все поля опциональны: частичная конфигурация допустима для модели,
    а обёртки расчёта сами проверяют наличие нужных полей
    (MissingConfiguration).
    """

    decay_start_block: Optional[int] = Field(
        default=None, ge=0, alias="decayStartBlock", description="Абсолютный блок начала decay"
    )
    start_amount: Optional[int] = Field(
        default=None, alias="startAmount", description="Сумма до начала decay (uint256)"
    )
    relative_blocks: Optional[tuple[int, ...]] = Field(
        default=None, alias="relativeBlocks", description="Смещения контрольных точек"
    )
    relative_amounts: Optional[tuple[int, ...]] = Field(
        default=None, alias="relativeAmounts", description="Накопленный decay по точкам"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("start_amount", mode="before")
    @classmethod
    def parse_start_amount(cls, v: Any) -> Any:
        return _parse_amount(v)

    @field_validator("relative_amounts", mode="before")
    @classmethod
    def parse_relative_amounts(cls, v: Any) -> Any:
        return _parse_amounts(v)

    @field_validator("start_amount")
    @classmethod
    def validate_start_amount(cls, v: Optional[int]) -> Optional[int]:
        if v is not None:
            validate_uint256(v, "start_amount")
        return v

    @field_validator("relative_blocks")
    @classmethod
    def validate_relative_blocks(
        cls, v: Optional[tuple[int, ...]]
    ) -> Optional[tuple[int, ...]]:
        return v if v is None else _validate_blocks(v)

    @field_validator("relative_amounts")
    @classmethod
    def validate_relative_amounts(
        cls, v: Optional[tuple[int, ...]]
    ) -> Optional[tuple[int, ...]]:
        return v if v is None else _validate_amounts(v)

    @property
    def curve(self) -> DecayCurve:
        """
        Кривая decay из relative_blocks / relative_amounts.

        Raises:
            MissingConfiguration: Если relative_blocks или relative_amounts отсутствует
            InvalidDecayCurve: Если форма кривой некорректна
        """
        if self.relative_blocks is None or self.relative_amounts is None:
            raise MissingConfiguration(
                "relative_blocks and relative_amounts are required to build a decay curve"
            )
        return DecayCurve(
            relative_blocks=self.relative_blocks,
            relative_amounts=self.relative_amounts,
        )
