class Packet:
    """
    Minimal packet abstraction for the simulator.

    A packet knows its sequence number and when it was sent.
    RTT is inferred when an ACK is received.
    """

    def __init__(self, seq: int, send_time: int):
        self.seq = seq
        self.send_time = send_time

    def __repr__(self):
        return f"Packet(seq={self.seq}, send_time={self.send_time})"
