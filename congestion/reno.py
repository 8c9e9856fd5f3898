# congestion/reno.py

from congestion.base import CongestionControl


class RenoState:

    def __init__(self):
        self.credit = 0
        self.loss_window = 0


class RenoCongestionControl(CongestionControl):
    """
    Simplified TCP Reno-style congestion control.

    Behavior:
    - On loss -> threshold drops to a fraction of the window
    - Otherwise -> window grows by increase_step per window of ACKs
    - No slow start phase
    """

    name = "reno"

    def __init__(self, initial_window=10, increase_step=1, decrease_factor=0.5):
        self.initial_window = initial_window
        self.increase_step = increase_step
        self.decrease_factor = decrease_factor

    def init(self, conn) -> None:
        conn.ca_state = RenoState()
        conn.current_window = self.initial_window

    def cong_avoid(self, conn, ack: int, acked: int) -> None:
        state = self.state_of(conn)
        window = max(1, conn.current_window)

        # Additive increase: one step per full window acknowledged
        state.credit += acked
        if state.credit >= window:
            state.credit -= window
            conn.current_window = window + self.increase_step

    def ssthresh(self, conn) -> int:
        state = self.state_of(conn)
        state.loss_window = conn.current_window
        return max(2, int(conn.current_window * self.decrease_factor))

    def pkts_acked(self, conn, acked_count: int, rtt_sample_us: int) -> None:
        # Loss-based: RTT does not drive the window.
        pass

    def undo_cwnd(self, conn) -> int:
        state = self.state_of(conn)
        conn.current_window = max(conn.current_window, state.loss_window)
        return conn.current_window
