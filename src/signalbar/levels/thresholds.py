from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from signalbar.contracts.types import MeasurementKind, NetworkClass, SignalLevel, ValidatedReading

if TYPE_CHECKING:
    from signalbar.config import ClassifierConfig

TABLE_SIZE = 4

ThresholdTable = tuple[int, int, int, int]

# Boundary i is the lowest reading that maps to level i + 1.
DEFAULT_THRESHOLDS: dict[tuple[MeasurementKind, NetworkClass], ThresholdTable] = {
    (MeasurementKind.POWER, NetworkClass.TERRESTRIAL): (-128, -118, -108, -98),
    (MeasurementKind.QUALITY, NetworkClass.TERRESTRIAL): (-19, -17, -14, -12),
    (MeasurementKind.NOISE_RATIO, NetworkClass.TERRESTRIAL): (-3, 1, 5, 13),
    (MeasurementKind.POWER, NetworkClass.NON_TERRESTRIAL): (-118, -108, -98, -88),
    (MeasurementKind.QUALITY, NetworkClass.NON_TERRESTRIAL): (-17, -14, -12, -10),
    (MeasurementKind.NOISE_RATIO, NetworkClass.NON_TERRESTRIAL): (1, 5, 13, 17),
}


def default_table(kind: MeasurementKind, network_class: NetworkClass) -> ThresholdTable:
    return DEFAULT_THRESHOLDS[(kind, network_class)]


def is_valid_table(values: object) -> bool:
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        return False
    if len(values) != TABLE_SIZE:
        return False
    if not all(isinstance(value, int) and not isinstance(value, bool) for value in values):
        return False
    return all(lower < upper for lower, upper in zip(values, values[1:]))


def select_table(
    kind: MeasurementKind,
    network_class: NetworkClass,
    config: ClassifierConfig | None = None,
) -> ThresholdTable:
    if config is not None:
        override = config.thresholds_for(kind, network_class)
        if override is not None and is_valid_table(override):
            return override  # type: ignore[return-value]
    return default_table(kind, network_class)


def level_for(reading: ValidatedReading, table: Sequence[int]) -> SignalLevel:
    if not reading.available or reading.value is None:
        return SignalLevel.NONE_OR_UNKNOWN
    count = sum(1 for boundary in table if boundary <= reading.value)
    return SignalLevel(min(count, SignalLevel.GREAT))
