"""
BlockDecay — Расчёт суммы Dutch-ордера по номеру блока

Модуль повторяет арифметику NonlinearDutchDecayLib settlement контракта,
чтобы off-chain участники (market makers, fillers) получали ту же сумму,
что и контракт при исполнении в блоке current_block:
- Поиск сегмента кривой (линейный скан, первое совпадение >=)
- Линейная интерполяция внутри сегмента с mulDivDown
- Ограничение результата диапазоном [min, max] для input/output ордера
- Обёртки над конфигурацией ордера (сумма в блоке, сумма после decay)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление — floor на неотрицательных операндах (не Python floor от отрицательных)
2. Вычитание внутри интерполяции всегда в порядке, дающем неотрицательный операнд
3. До decay_start_block и для пустой кривой возвращается start_amount
4. После последней контрольной точки сумма не меняется
5. Кривая из более чем 16 точек отклоняется до любой арифметики

ФОРМУЛЫ:
    block_delta = current_block - decay_start_block
    end < start:  amount = start - floor((start - end) * elapsed / duration)
    end >= start: amount = start + floor((end - start) * elapsed / duration)
"""

import logging
from typing import Any, Mapping, Union

from src.core.domain.decay_curve import (
    DecayCurve,
    DutchBlockDecayConfig,
    MissingConfiguration,
    validate_curve_shape,
)
from src.core.math.uint256 import (
    UINT256_MAX,
    add_uint256,
    bound,
    mul_div_down,
    sub_uint256,
    validate_uint256,
)

logger = logging.getLogger(__name__)

ConfigLike = Union[DutchBlockDecayConfig, Mapping[str, Any]]


# =============================================================================
# ПОИСК СЕГМЕНТА
# =============================================================================


def locate_array_position(curve: DecayCurve, block_delta: int) -> tuple[int, int]:
    """
    Поиск сегмента кривой, содержащего block_delta.

    Скан relative_blocks от меньшего индекса к большему: первый индекс i
    с relative_blocks[i] >= block_delta становится next, prev — предыдущий
    посещённый индекс (0 при next == 0). Если совпадения нет, точка за
    концом кривой: возвращается (last, last).

    Порядок relative_blocks не проверяется: для неупорядоченной кривой
    результат детерминирован правилом скана.

    Args:
        curve: Кривая decay (не пустая)
        block_delta: Смещение в блоках от decay_start_block

    Returns:
        (prev, next) — индексы граничных контрольных точек

    Examples:
        >>> curve = DecayCurve(relative_blocks=(50, 150), relative_amounts=(5, 20))
        >>> locate_array_position(curve, 100)
        (0, 1)
        >>> locate_array_position(curve, 50)
        (0, 0)
        >>> locate_array_position(curve, 200)
        (1, 1)
    """
    prev = 0
    for next_index, relative_block in enumerate(curve.relative_blocks):
        if relative_block >= block_delta:
            return prev, next_index
        prev = next_index

    last = len(curve.relative_blocks) - 1
    return last, last


# =============================================================================
# ЛИНЕЙНАЯ ИНТЕРПОЛЯЦИЯ
# =============================================================================


def linear_decay(
    start_point: int,
    end_point: int,
    current_point: int,
    start_amount: int,
    end_amount: int,
) -> int:
    """
    Линейная интерполяция суммы внутри сегмента [start_point, end_point].

    Ветвление по направлению нужно для беззнаковой арифметики контракта:
    разность сумм всегда берётся в порядке, дающем неотрицательный операнд,
    затем mulDivDown округляет величину изменения вниз.
    Поэтому убывающая сумма округляется вверх, растущая — вниз
    (в обоих случаях к start_amount).

    Args:
        start_point: Начало сегмента (относительный блок)
        end_point: Конец сегмента (относительный блок)
        current_point: Текущий относительный блок
        start_amount: Сумма в start_point
        end_amount: Сумма в end_point

    Returns:
        Интерполированная сумма; end_amount при current_point >= end_point

    Examples:
        >>> linear_decay(0, 100, 50, 1000, 990)
        995
        >>> linear_decay(50, 150, 100, 495, 480)
        488
        >>> linear_decay(0, 100, 150, 1000, 990)
        990
    """
    if current_point >= end_point:
        return end_amount

    elapsed = current_point - start_point
    duration = end_point - start_point

    if end_amount < start_amount:
        magnitude = mul_div_down(start_amount - end_amount, elapsed, duration)
        return sub_uint256(start_amount, magnitude)

    magnitude = mul_div_down(end_amount - start_amount, elapsed, duration)
    return add_uint256(start_amount, magnitude)


# =============================================================================
# DECAY
# =============================================================================


def decay(
    curve: DecayCurve,
    start_amount: int,
    decay_start_block: int,
    current_block: int,
) -> int:
    """
    Сумма ордера в блоке current_block.

    Args:
        curve: Кривая decay
        start_amount: Сумма до начала decay (uint256)
        decay_start_block: Абсолютный блок начала decay
        current_block: Абсолютный блок, для которого считается сумма

    Returns:
        Сумма в current_block (uint256)

    Raises:
        InvalidDecayCurve: Если точек больше MAX_CURVE_POINTS или длины различаются
        ValueError: Если start_amount вне uint256
        Uint256RangeError: Если сумма в контрольной точке вне uint256
    """
    validate_curve_shape(curve.relative_blocks, curve.relative_amounts)
    validate_uint256(start_amount, "start_amount")

    # До начала decay или нечего интерполировать
    if decay_start_block >= current_block or len(curve.relative_amounts) == 0:
        return start_amount

    block_delta = current_block - decay_start_block
    relative_blocks = curve.relative_blocks
    relative_amounts = curve.relative_amounts

    # До первой контрольной точки: синтетический сегмент от (0, start_amount)
    if relative_blocks[0] > block_delta:
        logger.debug(
            "block_delta=%d before first control point %d", block_delta, relative_blocks[0]
        )
        return linear_decay(
            0,
            relative_blocks[0],
            block_delta,
            start_amount,
            sub_uint256(start_amount, relative_amounts[0]),
        )

    prev, next_index = locate_array_position(curve, block_delta)
    logger.debug(
        "block_delta=%d located in segment (%d, %d)", block_delta, prev, next_index
    )

    last_amount = sub_uint256(start_amount, relative_amounts[prev])
    next_amount = sub_uint256(start_amount, relative_amounts[next_index])
    return linear_decay(
        relative_blocks[prev],
        relative_blocks[next_index],
        block_delta,
        last_amount,
        next_amount,
    )


# =============================================================================
# BOUNDED DECAY (input / output)
# =============================================================================


def bounded_decay(
    curve: DecayCurve,
    start_amount: int,
    decay_start_block: int,
    current_block: int,
    min_amount: int,
    max_amount: int,
) -> int:
    """
    Сумма в current_block, ограниченная диапазоном [min_amount, max_amount].

    Raises:
        ValueError: Если min_amount > max_amount
        InvalidDecayCurve, Uint256RangeError: см. decay()
    """
    decayed = decay(curve, start_amount, decay_start_block, current_block)
    return bound(decayed, min_amount, max_amount)


def decay_input(
    curve: DecayCurve,
    start_amount: int,
    decay_start_block: int,
    current_block: int,
    max_amount: int,
) -> int:
    """Сумма input токена: не больше max_amount, который подписал swapper."""
    return bounded_decay(curve, start_amount, decay_start_block, current_block, 0, max_amount)


def decay_output(
    curve: DecayCurve,
    start_amount: int,
    decay_start_block: int,
    current_block: int,
    min_amount: int,
) -> int:
    """Сумма output токена: не меньше min_amount, который должен получить swapper."""
    return bounded_decay(
        curve, start_amount, decay_start_block, current_block, min_amount, UINT256_MAX
    )


# =============================================================================
# ОБЁРТКИ НАД КОНФИГУРАЦИЕЙ
# =============================================================================


def _as_config(config: ConfigLike) -> DutchBlockDecayConfig:
    if isinstance(config, DutchBlockDecayConfig):
        return config
    return DutchBlockDecayConfig.model_validate(config)


def get_block_decayed_amount(config: ConfigLike, at_block: int) -> int:
    """
    Сумма ордера в блоке at_block по его конфигурации decay.

    Args:
        config: DutchBlockDecayConfig или mapping с его полями (snake/camelCase)
        at_block: Абсолютный номер блока

    Returns:
        Сумма в at_block

    Raises:
        MissingConfiguration: Если в config нет одного из обязательных полей
        InvalidDecayCurve: Если кривая некорректна
    """
    cfg = _as_config(config)
    if cfg.decay_start_block is None or cfg.start_amount is None:
        raise MissingConfiguration(
            "decay_start_block and start_amount are required to evaluate decay"
        )
    return decay(cfg.curve, cfg.start_amount, cfg.decay_start_block, at_block)


def get_end_amount(config: ConfigLike) -> int:
    """
    Сумма после полного завершения decay, без номера блока.

    Совпадает с decay() в любом блоке >= decay_start_block + relative_blocks[-1].

    Args:
        config: Конфигурация (может быть частичной)

    Returns:
        start_amount - relative_amounts[-1]; start_amount для пустой кривой

    Raises:
        MissingConfiguration: Если нет start_amount или relative_amounts
        Uint256RangeError: Если результат вне uint256
    """
    cfg = _as_config(config)
    if cfg.start_amount is None or cfg.relative_amounts is None:
        raise MissingConfiguration(
            "start_amount and relative_amounts are required to compute the end amount"
        )
    if not cfg.relative_amounts:
        return cfg.start_amount
    return sub_uint256(cfg.start_amount, cfg.relative_amounts[-1])

