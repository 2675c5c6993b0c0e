from __future__ import annotations

from signalbar.contracts.types import UNAVAILABLE, MeasurementKind, ReadingStatus, ValidatedReading

MIN_RSRP = -140
MAX_RSRP_EXCLUSIVE = 0
MIN_RSRQ = -34
MAX_RSRQ = 3
MIN_RSSNR = -20
MAX_RSSNR = 30


def in_range(kind: MeasurementKind, value: int) -> bool:
    if kind == MeasurementKind.POWER:
        return MIN_RSRP <= value < MAX_RSRP_EXCLUSIVE
    if kind == MeasurementKind.QUALITY:
        return MIN_RSRQ <= value <= MAX_RSRQ
    return MIN_RSSNR <= value <= MAX_RSSNR


def validate(kind: MeasurementKind, raw: int | None) -> ValidatedReading:
    if raw is None or raw == UNAVAILABLE:
        return ValidatedReading(kind=kind, value=None, status=ReadingStatus.NOT_REPORTED)
    value = int(raw)
    if not in_range(kind, value):
        return ValidatedReading(kind=kind, value=None, status=ReadingStatus.INVALID)
    return ValidatedReading(kind=kind, value=value, status=ReadingStatus.VALID)
