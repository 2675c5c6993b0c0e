from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Union

from signalbar.contracts.types import MeasurementKind, NetworkClass, SignalLevel

FALLBACK_KIND = MeasurementKind.POWER

EnabledKinds = Union[Iterable[MeasurementKind], Mapping[NetworkClass, Iterable[MeasurementKind]]]


def clamp_level(value: int) -> SignalLevel:
    return SignalLevel(max(SignalLevel.NONE_OR_UNKNOWN, min(SignalLevel.GREAT, int(value))))


def enabled_for(enabled: EnabledKinds, network_class: NetworkClass | None) -> list[MeasurementKind]:
    if isinstance(enabled, Mapping):
        active = network_class or NetworkClass.TERRESTRIAL
        enabled = enabled.get(active, ())
    return list(dict.fromkeys(enabled))


def effective_kinds(enabled: EnabledKinds, network_class: NetworkClass | None = None) -> list[MeasurementKind]:
    # An empty selection falls back to power alone.
    return enabled_for(enabled, network_class) or [FALLBACK_KIND]


def resolve(
    kind_levels: Mapping[MeasurementKind, int],
    enabled: EnabledKinds,
    network_class: NetworkClass | None = None,
) -> SignalLevel:
    selected = effective_kinds(enabled, network_class)
    levels = [clamp_level(kind_levels.get(kind, SignalLevel.NONE_OR_UNKNOWN)) for kind in selected]
    return min(levels)
