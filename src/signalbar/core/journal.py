from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Iterable

from signalbar.contracts.types import (
    LteMeasurement,
    MeasurementKind,
    NetworkClass,
    ReadingStatus,
    SignalLevel,
    SignalReport,
    ValidatedReading,
)


def _encode_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value):
        return _encode_dataclass(value)
    return value


def _encode_dataclass(obj: Any) -> dict:
    return {field.name: _encode_value(getattr(obj, field.name)) for field in fields(obj)}


def encode_measurement(measurement: LteMeasurement, is_ntn: bool = False) -> dict:
    record = _encode_dataclass(measurement)
    record["is_ntn"] = bool(is_ntn)
    return record


def decode_measurement(record: dict, default_ntn: bool = False) -> tuple[LteMeasurement, bool]:
    measurement = LteMeasurement(
        rsrp=_optional_int(record.get("rsrp")),
        rsrq=_optional_int(record.get("rsrq")),
        rssnr=_optional_int(record.get("rssnr")),
    )
    return measurement, bool(record.get("is_ntn", default_ntn))


def encode_report(report: SignalReport) -> dict:
    return {
        "network_class": report.network_class.value,
        "readings": [_encode_dataclass(reading) for reading in report.readings],
        "kind_levels": [[kind.value, int(level)] for kind, level in report.kind_levels],
        "enabled_kinds": sorted(kind.value for kind in report.enabled_kinds),
        "level": int(report.level),
    }


def decode_report(record: dict) -> SignalReport:
    readings = tuple(
        ValidatedReading(
            kind=MeasurementKind(item["kind"]),
            value=_optional_int(item.get("value")),
            status=ReadingStatus(item["status"]),
        )
        for item in record.get("readings", [])
    )
    kind_levels = tuple(
        (MeasurementKind(kind), SignalLevel(int(level))) for kind, level in record.get("kind_levels", [])
    )
    return SignalReport(
        network_class=NetworkClass(record["network_class"]),
        readings=readings,
        kind_levels=kind_levels,
        enabled_kinds=frozenset(MeasurementKind(kind) for kind in record.get("enabled_kinds", [])),
        level=SignalLevel(int(record["level"])),
    )


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    return int(value)


class ReportWriter:
    def __init__(self, path: str) -> None:
        self._path = path

    def append(self, report: SignalReport) -> None:
        line = json.dumps(encode_report(report), separators=(",", ":"))
        with open(self._path, "a", encoding="utf-8") as handle:
            handle.write(line + "\n")


def iter_records(path: str) -> Iterable[dict]:
    with open(path, "r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line:
                continue
            yield json.loads(line)


def iter_measurements(path: str, default_ntn: bool = False) -> Iterable[tuple[LteMeasurement, bool]]:
    for record in iter_records(path):
        yield decode_measurement(record, default_ntn)


def iter_reports(path: str) -> Iterable[SignalReport]:
    for record in iter_records(path):
        yield decode_report(record)
