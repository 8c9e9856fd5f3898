import random
from collections import deque


class Link:
    """
    Simulates a single bottleneck network link with:
    - finite bandwidth
    - finite queue
    - random wireless loss
    - queue-induced delay (RTT increase)
    """

    def __init__(
        self,
        capacity: int,
        queue_limit: int,
        base_rtt: float,
        noise_prob: float,
        rng: random.Random = None,
    ):
        self.capacity = capacity              # packets per timestep
        self.queue_limit = queue_limit        # max packets in queue
        self.base_rtt = base_rtt              # timesteps
        self.noise_prob = noise_prob
        self.rng = rng if rng is not None else random.Random()

        self.queue = deque()                  # FIFO queue

    def enqueue(self, packets):
        """
        Add incoming packets to the queue.
        Returns number of packets dropped due to congestion (tail drop).
        """
        room = max(0, self.queue_limit - len(self.queue))
        accepted = packets[:room]
        self.queue.extend(accepted)
        return len(packets) - len(accepted)

    def step(self):
        """
        Process one timestep.
        Returns:
          delivered_packets: list[Packet]
          current_rtt: float
          wireless_drops: int
        """
        delivered = []
        wireless_drops = 0

        queue_delay = len(self.queue) / self.capacity
        current_rtt = self.base_rtt + queue_delay

        for _ in range(min(self.capacity, len(self.queue))):
            pkt = self.queue.popleft()

            if self.rng.random() < self.noise_prob:
                wireless_drops += 1
                continue

            delivered.append(pkt)

        return delivered, current_rtt, wireless_drops
