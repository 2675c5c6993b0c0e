from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import yaml

from signalbar.contracts.types import MeasurementKind, NetworkClass
from signalbar.levels.thresholds import is_valid_table

logger = logging.getLogger(__name__)

DEFAULT_SIGNAL_BAR_KINDS = frozenset({MeasurementKind.POWER})

_THRESHOLD_FIELDS = {
    (MeasurementKind.POWER, NetworkClass.TERRESTRIAL): "lte_rsrp_thresholds",
    (MeasurementKind.QUALITY, NetworkClass.TERRESTRIAL): "lte_rsrq_thresholds",
    (MeasurementKind.NOISE_RATIO, NetworkClass.TERRESTRIAL): "lte_rssnr_thresholds",
    (MeasurementKind.POWER, NetworkClass.NON_TERRESTRIAL): "ntn_lte_rsrp_thresholds",
    (MeasurementKind.QUALITY, NetworkClass.NON_TERRESTRIAL): "ntn_lte_rsrq_thresholds",
    (MeasurementKind.NOISE_RATIO, NetworkClass.NON_TERRESTRIAL): "ntn_lte_rssnr_thresholds",
}

_MASK_FIELDS = {
    NetworkClass.TERRESTRIAL: ("lte_signal_bar_kinds", "parameters_used_for_lte_signal_bar"),
    NetworkClass.NON_TERRESTRIAL: ("ntn_lte_signal_bar_kinds", "parameters_used_for_ntn_lte_signal_bar"),
}


@dataclass(frozen=True)
class ClassifierConfig:
    lte_rsrp_thresholds: tuple[int, ...] | None = None
    lte_rsrq_thresholds: tuple[int, ...] | None = None
    lte_rssnr_thresholds: tuple[int, ...] | None = None
    ntn_lte_rsrp_thresholds: tuple[int, ...] | None = None
    ntn_lte_rsrq_thresholds: tuple[int, ...] | None = None
    ntn_lte_rssnr_thresholds: tuple[int, ...] | None = None
    lte_signal_bar_kinds: frozenset[MeasurementKind] = field(default=DEFAULT_SIGNAL_BAR_KINDS)
    ntn_lte_signal_bar_kinds: frozenset[MeasurementKind] = field(default=DEFAULT_SIGNAL_BAR_KINDS)

    def __post_init__(self) -> None:
        for field_name in _THRESHOLD_FIELDS.values():
            value = getattr(self, field_name)
            if isinstance(value, (list, tuple)):
                object.__setattr__(self, field_name, tuple(value))
        for field_name, _ in _MASK_FIELDS.values():
            object.__setattr__(self, field_name, frozenset(getattr(self, field_name)))

    def thresholds_for(self, kind: MeasurementKind, network_class: NetworkClass) -> tuple[int, ...] | None:
        return getattr(self, _THRESHOLD_FIELDS[(kind, network_class)])

    def signal_bar_kinds(self, network_class: NetworkClass) -> frozenset[MeasurementKind]:
        return getattr(self, _MASK_FIELDS[network_class][0])


def _lookup(raw: Mapping[str, Any], name: str, suffix: str) -> Any:
    for key in (f"{name}{suffix}", name):
        if key in raw:
            return raw[key]
    return None


def _parse_thresholds(key: str, value: Any) -> tuple[int, ...] | None:
    if value is None:
        return None
    if not is_valid_table(value):
        logger.warning("Ignoring %s=%r: expected 4 strictly ascending integers", key, value)
        return None
    return tuple(int(item) for item in value)


def _kind_from_name(name: str) -> MeasurementKind | None:
    label = str(name).strip().upper()
    for kind in MeasurementKind:
        if label in (kind.value, kind.name):
            return kind
    return None


def parse_signal_bar_kinds(value: Any) -> frozenset[MeasurementKind]:
    # Unknown bits and names are dropped.
    if isinstance(value, bool):
        return frozenset()
    if isinstance(value, int):
        return frozenset(kind for kind in MeasurementKind if value & kind.mask_bit)
    if isinstance(value, str):
        value = [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        kinds = (_kind_from_name(item) for item in value)
        return frozenset(kind for kind in kinds if kind is not None)
    return frozenset()


def _parse_mask(key: str, value: Any) -> frozenset[MeasurementKind]:
    if value is None:
        return DEFAULT_SIGNAL_BAR_KINDS
    kinds = parse_signal_bar_kinds(value)
    if not kinds:
        logger.warning("Ignoring %s=%r: no known measurement selected, using RSRP", key, value)
        return DEFAULT_SIGNAL_BAR_KINDS
    return kinds


def config_from_mapping(raw: Mapping[str, Any] | None) -> ClassifierConfig:
    if raw is None:
        return ClassifierConfig()
    if not isinstance(raw, Mapping):
        raise ValueError(f"Carrier config must be a mapping, got {type(raw).__name__}")

    values: dict[str, Any] = {}
    for field_name in _THRESHOLD_FIELDS.values():
        value = _lookup(raw, field_name, "_int_array")
        values[field_name] = _parse_thresholds(field_name, value)

    for field_name, carrier_key in _MASK_FIELDS.values():
        value = _lookup(raw, carrier_key, "_int")
        if value is None:
            value = raw.get(field_name)
        values[field_name] = _parse_mask(carrier_key, value)

    return ClassifierConfig(**values)


def load_config(path: str) -> ClassifierConfig:
    with open(path, "r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    return config_from_mapping(raw)
