from __future__ import annotations

from typing import Any, Mapping

from signalbar.config import ClassifierConfig, config_from_mapping
from signalbar.contracts.types import LteMeasurement, MeasurementKind, NetworkClass, SignalReport
from signalbar.core.snapshot import ConfigSnapshotStore
from signalbar.levels import effective_kinds, level_for, resolve, select_table, validate


def classify(
    measurement: LteMeasurement,
    config: ClassifierConfig | None = None,
    is_ntn: bool = False,
) -> SignalReport:
    config = config or ClassifierConfig()
    network_class = NetworkClass.from_ntn(is_ntn)

    readings = tuple(validate(kind, measurement.raw(kind)) for kind in MeasurementKind)
    kind_levels = tuple(
        (reading.kind, level_for(reading, select_table(reading.kind, network_class, config)))
        for reading in readings
    )
    enabled = effective_kinds(config.signal_bar_kinds(network_class), network_class)
    level = resolve(dict(kind_levels), enabled, network_class)

    return SignalReport(
        network_class=network_class,
        readings=readings,
        kind_levels=kind_levels,
        enabled_kinds=frozenset(enabled),
        level=level,
    )


class LevelClassifier:
    def __init__(self, config: ClassifierConfig | None = None) -> None:
        self._store = ConfigSnapshotStore(config)

    @property
    def config(self) -> ClassifierConfig:
        return self._store.current().config

    @property
    def config_version(self) -> int:
        return self._store.current().version

    def update_config(self, config: ClassifierConfig) -> int:
        return self._store.publish(config)

    def on_carrier_config_changed(self, raw: Mapping[str, Any] | None) -> int:
        return self.update_config(config_from_mapping(raw))

    def classify(self, measurement: LteMeasurement, is_ntn: bool = False) -> SignalReport:
        snapshot = self._store.current()
        return classify(measurement, snapshot.config, is_ntn=is_ntn)
