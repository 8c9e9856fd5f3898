# congestion/registry.py

import logging
import threading

from congestion.exceptions import (
    AlgorithmAlreadyRegisteredError,
    UnknownAlgorithmError,
)
from congestion.mario import MarioCongestionControl
from congestion.reno import RenoCongestionControl

logger = logging.getLogger(__name__)


class CongestionControlRegistry:
    """
    Table of selectable congestion control algorithms, keyed by name.

    A factory is any callable returning a CongestionControl; keyword
    arguments given to create() are passed through to it.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self._factories = {}

    def register(self, name: str, factory) -> None:
        with self.lock:
            if name in self._factories:
                raise AlgorithmAlreadyRegisteredError(name)
            self._factories[name] = factory
        logger.info("registered congestion control %r", name)

    def unregister(self, name: str) -> None:
        with self.lock:
            if name not in self._factories:
                raise UnknownAlgorithmError(name)
            del self._factories[name]
        logger.info("unregistered congestion control %r", name)

    def create(self, name: str, **kwargs):
        with self.lock:
            factory = self._factories.get(name)
        if factory is None:
            raise UnknownAlgorithmError(name)
        return factory(**kwargs)

    def names(self):
        with self.lock:
            return sorted(self._factories)

    def __contains__(self, name):
        with self.lock:
            return name in self._factories


def default_registry() -> CongestionControlRegistry:
    registry = CongestionControlRegistry()
    registry.register(MarioCongestionControl.name, MarioCongestionControl)
    registry.register(RenoCongestionControl.name, RenoCongestionControl)
    return registry
