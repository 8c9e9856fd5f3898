import random

from congestion.mario import MarioCongestionControl
from congestion.reno import RenoCongestionControl
from congestion.tunables import Tunables
from sim.environment import Environment
from sim.link import Link
from sim.receiver import Receiver
from sim.sender import Sender


def mario_sender(bandwidth=1, factor=10):
    algorithm = MarioCongestionControl(Tunables(bandwidth=bandwidth, factor=factor))
    return Sender(algorithm, tick_ms=10)


def test_sender_fills_window():
    sender = mario_sender(bandwidth=1)

    assert len(sender.send(0)) == 128
    assert sender.send(1) == []


def test_max_burst_caps_sending():
    sender = Sender(RenoCongestionControl(initial_window=10), max_burst=3)

    assert len(sender.send(0)) == 3
    assert len(sender.send(1)) == 3


def test_acks_feed_rtt_in_microseconds():
    sender = mario_sender(bandwidth=1)
    packets = sender.send(0)

    sender.receive_acks(packets[:3], 5)

    state = sender.conn.ca_state
    assert state.sample_count == 3
    assert state.rtt_accumulator == 3 * 50
    assert sender.window == 128


def test_loss_cut_is_repaired_by_next_ack():
    sender = mario_sender(bandwidth=1)
    sender.send(0)

    lost = sender.detect_loss(11)

    assert lost == 128
    assert sender.conn.ssthresh == 128
    assert sender.window == 64

    retransmit = sender.send(11)
    sender.receive_acks(retransmit[:1], 16)
    assert sender.window == 128


def test_late_ack_triggers_undo():
    sender = mario_sender(bandwidth=1)
    packets = sender.send(0)
    sender.detect_loss(11)

    sender.receive_acks(packets[:1], 12)

    assert sender.window == 128
    assert sender.get_metrics()["undos"] == 1


def test_reno_host_cut_and_undo():
    sender = Sender(RenoCongestionControl(initial_window=10))
    packets = sender.send(0)

    sender.detect_loss(11)
    assert sender.conn.ssthresh == 5
    assert sender.window == 5

    sender.receive_acks(packets[:1], 12)
    assert sender.window == 10


def test_environment_calibrates_mario_window():
    rng = random.Random(3)
    sender = mario_sender(bandwidth=1, factor=10)
    link = Link(capacity=200, queue_limit=1000, base_rtt=5.0, noise_prob=0.0, rng=rng)
    receiver = Receiver(ack_loss_prob=0.0, ack_jitter=0.0, rng=rng)
    env = Environment(sender, link, receiver)

    history = env.run(20)

    state = sender.conn.ca_state
    assert state.sample_count == 100
    # First flight: 5 ticks + 128/200 queueing, ACKed 6 ticks later (60 ms)
    assert state.average_rtt == 60
    assert state.base_window == 1 + ((1 << 10) * 60) // (10 * 1000)
    assert sender.window == state.base_window
    assert sum(m["loss"] for m in history) == 0
    assert history[-1]["cwnd"] == state.base_window


def test_lost_acks_are_counted():
    rng = random.Random(0)
    sender = Sender(RenoCongestionControl(initial_window=4))
    link = Link(capacity=10, queue_limit=10, base_rtt=2.0, noise_prob=0.0, rng=rng)
    receiver = Receiver(ack_loss_prob=1.0, ack_jitter=0.0, rng=rng)
    env = Environment(sender, link, receiver)

    history = env.run(4)

    assert sum(m["ack_losses"] for m in history) == 4
    assert sum(m["throughput"] for m in history) == 0
