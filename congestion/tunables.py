# congestion/tunables.py

import logging
import os
import threading

from congestion.exceptions import UnknownTunableError

logger = logging.getLogger(__name__)

INIT_FACTOR = 10

SYSCTL_PREFIX = "net.ipv4.tcp_mario"
ENV_PREFIX = "TCP_MARIO_"


class Tunables:
    """
    Operator-settable knobs shared by every connection running Mario.

    Two integer entries are exposed:
      - bandwidth: seeds the initial window and scales the calibrated one
      - factor:    divisor applied when the window is recalibrated

    Values are accepted as given (coerced to int) with no range checks.
    Writes never touch live windows; connections pick new values up on
    their next init() or completed sampling cycle.
    """

    NAMES = ("bandwidth", "factor")

    def __init__(self, bandwidth=0, factor=INIT_FACTOR):
        self.lock = threading.RLock()
        self._values = {
            "bandwidth": int(bandwidth),
            "factor": int(factor),
        }

    @classmethod
    def from_env(cls, environ=None):
        """
        Build tunables from TCP_MARIO_BANDWIDTH / TCP_MARIO_FACTOR.
        Missing variables keep their defaults.
        """
        environ = os.environ if environ is None else environ
        tunables = cls()
        for name in cls.NAMES:
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None:
                tunables.set(name, raw)
        return tunables

    # --------------------------------------------------
    # Named access
    # --------------------------------------------------

    def _resolve(self, name: str) -> str:
        if name.startswith(SYSCTL_PREFIX + "."):
            name = name[len(SYSCTL_PREFIX) + 1:]
        if name not in self._values:
            raise UnknownTunableError(name)
        return name

    def get(self, name: str) -> int:
        with self.lock:
            return self._values[self._resolve(name)]

    def set(self, name: str, value) -> None:
        with self.lock:
            key = self._resolve(name)
            old = self._values[key]
            self._values[key] = int(value)
            logger.debug("tunable %s: %d -> %d", key, old, self._values[key])

    def __getitem__(self, name):
        return self.get(name)

    def __setitem__(self, name, value):
        self.set(name, value)

    def snapshot(self) -> dict:
        with self.lock:
            return dict(self._values)

    @staticmethod
    def sysctl_key(name: str) -> str:
        if name not in Tunables.NAMES:
            raise UnknownTunableError(name)
        return f"{SYSCTL_PREFIX}.{name}"

    # --------------------------------------------------
    # Attribute access
    # --------------------------------------------------

    @property
    def bandwidth(self) -> int:
        return self.get("bandwidth")

    @bandwidth.setter
    def bandwidth(self, value):
        self.set("bandwidth", value)

    @property
    def factor(self) -> int:
        return self.get("factor")

    @factor.setter
    def factor(self, value):
        self.set("factor", value)

    def __repr__(self):
        values = self.snapshot()
        return f"Tunables(bandwidth={values['bandwidth']}, factor={values['factor']})"
