# congestion/state.py

import logging

from congestion.tunables import Tunables

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 100

# Initial window is bandwidth << 7 (x128), a nominal bandwidth-delay product.
INIT_WINDOW_SHIFT = 7
BANDWIDTH_SHIFT = 10

# Valid RTT band in milliseconds, exclusive on both ends.
RTT_FLOOR_MS = 0
RTT_CEILING_MS = 300

US_PER_MS = 1000


def us_to_ms(rtt_us: int) -> int:
    """Integer microseconds -> milliseconds, truncating toward zero."""
    ms = abs(rtt_us) // US_PER_MS
    return ms if rtt_us >= 0 else -ms


class CongestionState:
    """
    Per-connection Mario state.

    Owns the enforced window and one batch of RTT samples. Bandwidth and
    scale factor are not stored here: they are read through from the
    shared Tunables so that operator changes reach every connection.

    Sampling is a one-shot calibration. After SAMPLE_SIZE valid samples
    the window is recomputed once and further samples are ignored until
    reset() runs again.
    """

    def __init__(self, tunables: Tunables):
        self.tunables = tunables

        self.base_window = 0
        self.rtt_accumulator = 0
        self.sample_count = 0

    @property
    def bandwidth(self) -> int:
        return self.tunables.bandwidth

    @property
    def scale_factor(self) -> int:
        return self.tunables.factor

    @property
    def sampling_closed(self) -> bool:
        return self.sample_count >= SAMPLE_SIZE

    @property
    def average_rtt(self) -> int:
        if self.sample_count == 0:
            return 0
        return self.rtt_accumulator // self.sample_count

    def reset(self) -> int:
        """
        Seed the window from bandwidth alone and open a new sampling cycle.

        Returns:
          the new base window
        """
        bandwidth = self.bandwidth
        if bandwidth == 0:
            logger.warning("bandwidth is 0; connection starts with a zero window")

        self.base_window = bandwidth << INIT_WINDOW_SHIFT
        self.rtt_accumulator = 0
        self.sample_count = 0
        return self.base_window

    def add_sample(self, rtt_us: int) -> bool:
        """
        Ingest one RTT sample in microseconds.

        Returns:
          True if the sample fell in the valid band and was accumulated
        """
        if self.sampling_closed:
            return False

        rtt_ms = us_to_ms(rtt_us)
        if not RTT_FLOOR_MS < rtt_ms < RTT_CEILING_MS:
            return False

        self.sample_count += 1
        self.rtt_accumulator += rtt_ms

        if self.sample_count == SAMPLE_SIZE:
            self.recalibrate()
        return True

    def recalibrate(self) -> bool:
        """
        Recompute the window from the averaged RTT:

            1 + ((bandwidth << 10) * avg_rtt) // (factor * 1000)

        The shift binds before the multiply and divide. A zero factor
        leaves the window untouched.

        Returns:
          False if the computation was skipped
        """
        factor = self.scale_factor
        if factor == 0:
            logger.warning(
                "factor is 0; keeping window at %d after %d samples",
                self.base_window, self.sample_count,
            )
            return False

        avg_rtt = self.average_rtt
        numerator = (self.bandwidth << BANDWIDTH_SHIFT) * avg_rtt
        old = self.base_window
        self.base_window = 1 + numerator // (factor * US_PER_MS)

        logger.info(
            "calibrated window %d -> %d (avg_rtt=%dms, samples=%d)",
            old, self.base_window, avg_rtt, self.sample_count,
        )
        return True

    def __repr__(self):
        return (
            f"CongestionState(base_window={self.base_window}, "
            f"rtt_accumulator={self.rtt_accumulator}, "
            f"sample_count={self.sample_count})"
        )
