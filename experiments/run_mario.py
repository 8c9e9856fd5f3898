# experiments/run_mario.py

import logging

from congestion.registry import default_registry
from congestion.tunables import Tunables
from sim.environment import Environment
from sim.sender import Sender
from sim.link import Link
from sim.receiver import Receiver

TOTAL_STEPS = 60
TICK_MS = 10


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # --- 1. Operator knobs (env overrides: TCP_MARIO_BANDWIDTH / TCP_MARIO_FACTOR) ---
    tunables = Tunables.from_env()
    if tunables.bandwidth == 0:
        tunables.bandwidth = 4

    registry = default_registry()
    algorithm = registry.create("mario", tunables=tunables)

    # --- 2. Network ---
    # Link parameters: capacity, queue_limit, base_rtt (timesteps), noise_prob
    link = Link(
        capacity=4,
        queue_limit=15,
        base_rtt=5.0,
        noise_prob=0.02,
    )
    sender = Sender(algorithm, tick_ms=TICK_MS)
    receiver = Receiver()
    env = Environment(sender, link, receiver)

    print(f"Tunables: {tunables}")
    print(f"{'Time':<5} | {'Cwnd':<5} | {'Thr':<5} | {'RTT':<8} | {'Loss':<5} | {'Undo':<5} | {'Samples':<7}")
    print("-" * 60)

    # --- 3. Run ---
    for _ in range(TOTAL_STEPS):
        metrics = env.step()
        state = sender.conn.ca_state

        print(
            f"{metrics['time']:<5} | "
            f"{metrics['cwnd']:<5} | "
            f"{metrics['throughput']:<5} | "
            f"{metrics['avg_rtt']:<8.2f} | "
            f"{metrics['loss']:<5} | "
            f"{metrics['undos']:<5} | "
            f"{state.sample_count:<7}"
        )

    state = sender.conn.ca_state
    print("\n=== Calibration ===")
    print(f"Samples        : {state.sample_count}")
    print(f"Avg RTT (ms)   : {state.average_rtt}")
    print(f"Base window    : {state.base_window}")

    sender.close()


if __name__ == "__main__":
    main()
