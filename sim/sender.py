import logging

from sim.connection import Connection
from sim.packet import Packet

logger = logging.getLogger(__name__)

US_PER_MS = 1000

# How long (timesteps) a packet declared lost can still be recognised
# as a spurious loss if its ACK turns up late.
LOSS_MEMORY = 100


class Sender:
    """
    Window-limited sender acting as the host transport stack.

    It owns one Connection and drives the congestion control hooks:
      - init() on construction
      - pkts_acked() then cong_avoid() for every ACK
      - ssthresh() plus the host's own window cut on loss
      - undo_cwnd() when a packet declared lost is ACKed after all
    """

    def __init__(self, algorithm, tick_ms: int = 10, max_burst: int = None):
        self.algorithm = algorithm
        self.tick_ms = tick_ms              # milliseconds per timestep
        self.max_burst = max_burst          # per-step send cap, None = window only

        self.conn = Connection()
        self.next_seq = 0

        # seq -> Packet
        self.in_flight = {}
        # seq -> (Packet, time declared lost)
        self.presumed_lost = {}

        # Per-timestep metrics
        self.acked_packets = 0
        self.lost_packets = 0
        self.rtt_samples = []
        self.undos = 0

        # -------- RTT / RTO estimation (TCP-like) --------
        self.srtt = None
        self.rttvar = None
        self.rto = 10  # conservative initial timeout

        self.algorithm.init(self.conn)

    @property
    def window(self) -> int:
        return self.conn.current_window

    # --------------------------------------------------
    # Sending
    # --------------------------------------------------

    def send(self, current_time):
        """
        Fill the congestion window with new packets.
        """
        budget = max(0, self.conn.current_window - len(self.in_flight))
        if self.max_burst is not None:
            budget = min(budget, self.max_burst)

        packets = []
        for _ in range(budget):
            pkt = Packet(seq=self.next_seq, send_time=current_time)
            self.next_seq += 1
            packets.append(pkt)
            self.in_flight[pkt.seq] = pkt
        return packets

    # --------------------------------------------------
    # ACK processing + RTT estimation
    # --------------------------------------------------

    def receive_acks(self, acked_packets, current_time):
        """
        Process ACKed packets, feed RTT samples to the algorithm and let it
        repair the window.
        """
        for pkt in acked_packets:
            if pkt.seq in self.in_flight:
                del self.in_flight[pkt.seq]
                self.acked_packets += 1

                rtt = current_time - pkt.send_time
                self.rtt_samples.append(rtt)
                self._update_rto(rtt)

                rtt_us = int(rtt * self.tick_ms * US_PER_MS)
                self.algorithm.pkts_acked(self.conn, 1, rtt_us)
                self.algorithm.cong_avoid(self.conn, pkt.seq, 1)

            elif pkt.seq in self.presumed_lost:
                del self.presumed_lost[pkt.seq]
                self.undos += 1
                self.conn.current_window = self.algorithm.undo_cwnd(self.conn)
                logger.debug(
                    "spurious loss of seq %d, window restored to %d",
                    pkt.seq, self.conn.current_window,
                )

    def _update_rto(self, rtt):
        if self.srtt is None:
            self.srtt = rtt
            self.rttvar = rtt / 2
        else:
            alpha = 0.125
            beta = 0.25

            self.rttvar = (
                (1 - beta) * self.rttvar
                + beta * abs(self.srtt - rtt)
            )
            self.srtt = (1 - alpha) * self.srtt + alpha * rtt

        # ----- Adaptive RTO with bounds -----
        self.rto = self.srtt + 4 * self.rttvar
        self.rto = min(max(self.rto, 2), 50)

    # --------------------------------------------------
    # Loss detection via adaptive timeout
    # --------------------------------------------------

    def detect_loss(self, current_time):
        """
        Infer packet loss using adaptive RTO and react once per timestep.
        """
        timeout = self.rto
        lost = [
            pkt for pkt in self.in_flight.values()
            if current_time - pkt.send_time > timeout
        ]

        for pkt in lost:
            del self.in_flight[pkt.seq]
            self.presumed_lost[pkt.seq] = (pkt, current_time)

        self._forget_old_losses(current_time)

        if lost:
            self.lost_packets += len(lost)
            self.on_loss()
        return len(lost)

    def on_loss(self):
        self.conn.ssthresh = self.algorithm.ssthresh(self.conn)

        # Generic multiplicative decrease, applied whatever the algorithm.
        self.conn.current_window = max(
            1, min(self.conn.current_window // 2, self.conn.ssthresh)
        )

    def _forget_old_losses(self, current_time):
        expired = [
            seq for seq, (_, lost_at) in self.presumed_lost.items()
            if current_time - lost_at > LOSS_MEMORY
        ]
        for seq in expired:
            del self.presumed_lost[seq]

    # --------------------------------------------------
    # Observable metrics
    # --------------------------------------------------

    def get_metrics(self):
        """
        Return observable metrics for this timestep.
        """
        avg_rtt = (
            sum(self.rtt_samples) / len(self.rtt_samples)
            if self.rtt_samples else 0
        )

        metrics = {
            "throughput": self.acked_packets,
            "avg_rtt": avg_rtt,
            "loss": self.lost_packets,
            "cwnd": self.conn.current_window,
            "ssthresh": self.conn.ssthresh,
            "in_flight": len(self.in_flight),
            "undos": self.undos,
        }

        # Reset timestep metrics
        self.acked_packets = 0
        self.lost_packets = 0
        self.rtt_samples = []
        self.undos = 0

        return metrics

    def close(self):
        self.algorithm.release(self.conn)
