# congestion/mario.py

import logging

from congestion.base import CongestionControl
from congestion.state import CongestionState
from congestion.tunables import Tunables

logger = logging.getLogger(__name__)


class MarioCongestionControl(CongestionControl):
    """
    Bandwidth-driven congestion control.

    Behavior:
    - No slow start: the window is seeded from the configured bandwidth
    - RTT samples are batched and the window recalibrated once per batch
    - Any host-side reduction is overwritten with the computed window
    """

    name = "mario"

    def __init__(self, tunables: Tunables = None):
        self.tunables = tunables if tunables is not None else Tunables()

    def init(self, conn) -> None:
        state = CongestionState(self.tunables)
        state.reset()
        conn.ca_state = state
        conn.current_window = state.base_window
        logger.debug("mario init: window=%d", state.base_window)

    def cong_avoid(self, conn, ack: int, acked: int) -> None:
        # No additive increase, only repair.
        conn.current_window = self.state_of(conn).base_window

    def ssthresh(self, conn) -> int:
        base_window = self.state_of(conn).base_window
        conn.current_window = base_window
        return base_window

    def pkts_acked(self, conn, acked_count: int, rtt_sample_us: int) -> None:
        self.state_of(conn).add_sample(rtt_sample_us)

    def undo_cwnd(self, conn) -> int:
        conn.current_window = self.state_of(conn).base_window
        return conn.current_window
