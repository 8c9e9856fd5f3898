from abc import ABC, abstractmethod

from congestion.exceptions import AlgorithmNotInitializedError


class CongestionControl(ABC):
    """
    Abstract base class for congestion control algorithms.

    The host transport owns each connection and calls these hooks at
    fixed points of its lifecycle. A connection exposes:
      - current_window: the live congestion window (packets)
      - ca_state: private slot for the algorithm's per-connection state

    Hooks for one connection are never called concurrently.
    """

    name = None

    @abstractmethod
    def init(self, conn) -> None:
        """
        Connection adopts this algorithm.
        """
        pass

    @abstractmethod
    def cong_avoid(self, conn, ack: int, acked: int) -> None:
        """
        Called for each ACK processed in congestion avoidance.
        """
        pass

    @abstractmethod
    def ssthresh(self, conn) -> int:
        """
        Host needs a slow-start threshold, usually around a loss event.

        returns:
          the new threshold
        """
        pass

    @abstractmethod
    def pkts_acked(self, conn, acked_count: int, rtt_sample_us: int) -> None:
        """
        Fresh RTT measurement. rtt_sample_us may be <= 0 when unavailable.
        """
        pass

    @abstractmethod
    def undo_cwnd(self, conn) -> int:
        """
        A previous reduction was spurious.

        returns:
          the window the host should restore
        """
        pass

    def release(self, conn) -> None:
        conn.ca_state = None

    def state_of(self, conn):
        state = getattr(conn, "ca_state", None)
        if state is None:
            raise AlgorithmNotInitializedError(
                f"{self.name or type(self).__name__}: init() was not called"
            )
        return state
