from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

# Platform "not reported" marker carried by measurement updates.
UNAVAILABLE = 2**31 - 1


class MeasurementKind(str, Enum):
    POWER = "RSRP"
    QUALITY = "RSRQ"
    NOISE_RATIO = "RSSNR"

    @property
    def mask_bit(self) -> int:
        return _MASK_BITS[self]


_MASK_BITS = {
    MeasurementKind.POWER: 1,
    MeasurementKind.QUALITY: 2,
    MeasurementKind.NOISE_RATIO: 4,
}


class NetworkClass(str, Enum):
    TERRESTRIAL = "TERRESTRIAL"
    NON_TERRESTRIAL = "NON_TERRESTRIAL"

    @classmethod
    def from_ntn(cls, is_ntn: bool) -> NetworkClass:
        return cls.NON_TERRESTRIAL if is_ntn else cls.TERRESTRIAL


class SignalLevel(IntEnum):
    NONE_OR_UNKNOWN = 0
    POOR = 1
    MODERATE = 2
    GOOD = 3
    GREAT = 4


class ReadingStatus(str, Enum):
    VALID = "VALID"
    INVALID = "INVALID"
    NOT_REPORTED = "NOT_REPORTED"


@dataclass(frozen=True)
class ValidatedReading:
    kind: MeasurementKind
    value: int | None
    status: ReadingStatus

    @property
    def available(self) -> bool:
        return self.status == ReadingStatus.VALID

    def reported(self) -> int | ReadingStatus:
        if self.status == ReadingStatus.VALID and self.value is not None:
            return self.value
        return self.status


@dataclass(frozen=True)
class LteMeasurement:
    rsrp: int | None = None
    rsrq: int | None = None
    rssnr: int | None = None

    def raw(self, kind: MeasurementKind) -> int | None:
        if kind == MeasurementKind.POWER:
            return self.rsrp
        if kind == MeasurementKind.QUALITY:
            return self.rsrq
        return self.rssnr


@dataclass(frozen=True)
class SignalReport:
    network_class: NetworkClass
    readings: tuple[ValidatedReading, ...]
    kind_levels: tuple[tuple[MeasurementKind, SignalLevel], ...]
    enabled_kinds: frozenset[MeasurementKind]
    level: SignalLevel

    def reading(self, kind: MeasurementKind) -> ValidatedReading:
        for reading in self.readings:
            if reading.kind == kind:
                return reading
        return ValidatedReading(kind=kind, value=None, status=ReadingStatus.NOT_REPORTED)

    def value_of(self, kind: MeasurementKind) -> int | ReadingStatus:
        return self.reading(kind).reported()

    def level_of(self, kind: MeasurementKind) -> SignalLevel:
        return dict(self.kind_levels).get(kind, SignalLevel.NONE_OR_UNKNOWN)

    @property
    def is_ntn(self) -> bool:
        return self.network_class == NetworkClass.NON_TERRESTRIAL

    @property
    def rsrp(self) -> int | ReadingStatus:
        return self.value_of(MeasurementKind.POWER)

    @property
    def rsrq(self) -> int | ReadingStatus:
        return self.value_of(MeasurementKind.QUALITY)

    @property
    def rssnr(self) -> int | ReadingStatus:
        return self.value_of(MeasurementKind.NOISE_RATIO)
