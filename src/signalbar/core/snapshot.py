from __future__ import annotations

import threading
from dataclasses import dataclass

from signalbar.config import ClassifierConfig


@dataclass(frozen=True)
class ConfigSnapshot:
    version: int
    config: ClassifierConfig


class ConfigSnapshotStore:
    def __init__(self, config: ClassifierConfig | None = None) -> None:
        self._lock = threading.Lock()
        self._snapshot = ConfigSnapshot(version=0, config=config or ClassifierConfig())

    def current(self) -> ConfigSnapshot:
        return self._snapshot

    def publish(self, config: ClassifierConfig) -> int:
        with self._lock:
            snapshot = ConfigSnapshot(version=self._snapshot.version + 1, config=config)
            self._snapshot = snapshot
        return snapshot.version
