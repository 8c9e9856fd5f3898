from congestion.reno import RenoCongestionControl
from sim.connection import Connection


def make_reno(**kwargs):
    algorithm = RenoCongestionControl(**kwargs)
    conn = Connection()
    algorithm.init(conn)
    return algorithm, conn


def test_init_window():
    algorithm, conn = make_reno(initial_window=10)

    assert conn.current_window == 10


def test_additive_increase_per_window_of_acks():
    algorithm, conn = make_reno(initial_window=4)

    for ack in range(3):
        algorithm.cong_avoid(conn, ack, 1)
    assert conn.current_window == 4

    algorithm.cong_avoid(conn, 3, 1)
    assert conn.current_window == 5


def test_ssthresh_halves_with_floor():
    algorithm, conn = make_reno(initial_window=10)
    assert algorithm.ssthresh(conn) == 5

    conn.current_window = 3
    assert algorithm.ssthresh(conn) == 2


def test_undo_restores_window_before_loss():
    algorithm, conn = make_reno(initial_window=10)
    conn.ssthresh = algorithm.ssthresh(conn)
    conn.current_window = conn.ssthresh

    assert algorithm.undo_cwnd(conn) == 10
    assert conn.current_window == 10
