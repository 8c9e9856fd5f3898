# experiments/compare_algorithms.py

import logging
import random

import numpy as np

from congestion.registry import default_registry
from congestion.tunables import Tunables
from sim.environment import Environment
from sim.sender import Sender
from sim.link import Link
from sim.receiver import Receiver


NUM_ENVS = 10
TOTAL_STEPS = 600
SETTLE_STEPS = 200   # ignored when averaging
TICK_MS = 10
SEED = 7


def make_random_link(rng):
    return dict(
        capacity=rng.randint(2, 8),
        queue_limit=rng.randint(8, 40),
        base_rtt=rng.uniform(4.0, 10.0),
        noise_prob=rng.uniform(0.01, 0.05),
    )


def run_single_env(algorithm, link_params, seed):
    """
    Run one algorithm over one link. Returns per-step throughput,
    RTT, loss and window arrays (after the settling period).
    """
    rng = random.Random(seed)
    link = Link(rng=rng, **link_params)
    sender = Sender(algorithm, tick_ms=TICK_MS)
    receiver = Receiver(rng=rng)
    env = Environment(sender, link, receiver)

    history = env.run(TOTAL_STEPS)[SETTLE_STEPS:]
    sender.close()

    return {
        "thr": np.array([m["throughput"] for m in history]),
        "rtt": np.array([m["avg_rtt"] for m in history if m["avg_rtt"] > 0]),
        "loss": np.array([m["loss"] for m in history]),
        "cwnd": np.array([m["cwnd"] for m in history]),
    }


def summarize(label, runs, capacities):
    thr = np.concatenate([r["thr"] for r in runs])
    util = np.concatenate([r["thr"] / c for r, c in zip(runs, capacities)])
    rtt = np.concatenate([r["rtt"] for r in runs])
    loss = np.concatenate([r["loss"] for r in runs])

    print(f"\n=== {label} (post-settling) ===")
    print(f"Avg Throughput  : {thr.mean():.2f}")
    print(f"Avg Utilization : {util.mean():.2f}")
    print(f"Avg RTT         : {rtt.mean() if rtt.size else 0.0:.2f}")
    print(f"p95 RTT         : {np.percentile(rtt, 95) if rtt.size else 0.0:.2f}")
    print(f"Avg Loss        : {loss.mean():.2f}")


def main():
    logging.basicConfig(level=logging.WARNING)

    rng = random.Random(SEED)
    registry = default_registry()

    results = {"reno": [], "mario": []}
    capacities = []

    for i in range(NUM_ENVS):
        link_params = make_random_link(rng)
        capacity = link_params["capacity"]
        capacities.append(capacity)
        seed = rng.randrange(1 << 30)

        # Operator sets bandwidth to the link capacity; with 10ms ticks and
        # the default factor the calibrated window lands near the BDP.
        tunables = Tunables(bandwidth=capacity)

        reno = run_single_env(registry.create("reno"), link_params, seed)
        mario = run_single_env(registry.create("mario", tunables=tunables), link_params, seed)
        results["reno"].append(reno)
        results["mario"].append(mario)

        print(
            f"Env {i:02d} cap={capacity} q={link_params['queue_limit']:>2} "
            f"rtt={link_params['base_rtt']:.1f} | "
            f"Reno thr={reno['thr'].mean():.2f} cwnd={reno['cwnd'].mean():.1f} | "
            f"Mario thr={mario['thr'].mean():.2f} cwnd={mario['cwnd'].mean():.1f}"
        )

    summarize("Reno", results["reno"], capacities)
    summarize("Mario", results["mario"], capacities)


if __name__ == "__main__":
    main()
