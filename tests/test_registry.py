import pytest

from congestion.exceptions import (
    AlgorithmAlreadyRegisteredError,
    UnknownAlgorithmError,
)
from congestion.mario import MarioCongestionControl
from congestion.registry import CongestionControlRegistry, default_registry
from congestion.reno import RenoCongestionControl
from congestion.tunables import Tunables


def test_default_registry_names():
    registry = default_registry()

    assert registry.names() == ["mario", "reno"]
    assert "mario" in registry


def test_create_passes_kwargs():
    tunables = Tunables(bandwidth=5)
    algorithm = default_registry().create("mario", tunables=tunables)

    assert isinstance(algorithm, MarioCongestionControl)
    assert algorithm.tunables is tunables


def test_duplicate_registration_rejected():
    registry = CongestionControlRegistry()
    registry.register("reno", RenoCongestionControl)

    with pytest.raises(AlgorithmAlreadyRegisteredError):
        registry.register("reno", RenoCongestionControl)


def test_unregister_then_create_fails():
    registry = default_registry()
    registry.unregister("mario")

    assert "mario" not in registry
    with pytest.raises(UnknownAlgorithmError):
        registry.create("mario")
    with pytest.raises(UnknownAlgorithmError):
        registry.unregister("mario")
