import pytest

from congestion.state import CongestionState, SAMPLE_SIZE, us_to_ms
from congestion.tunables import Tunables


def make_state(bandwidth=1000, factor=10):
    state = CongestionState(Tunables(bandwidth=bandwidth, factor=factor))
    state.reset()
    return state


@pytest.mark.parametrize("rtt_us, expected", [
    (50000, 50),
    (50999, 50),
    (999, 0),
    (-5, 0),
    (-1500, -1),
    (305000, 305),
])
def test_us_to_ms_truncates_toward_zero(rtt_us, expected):
    assert us_to_ms(rtt_us) == expected


def test_reset_seeds_window_from_bandwidth():
    state = make_state(bandwidth=3)

    assert state.base_window == 3 * 128
    assert state.rtt_accumulator == 0
    assert state.sample_count == 0


def test_reset_with_zero_bandwidth_gives_zero_window():
    state = make_state(bandwidth=0)

    assert state.base_window == 0


@pytest.mark.parametrize("rtt_us", [-5, 0, 999, 300000, 305000])
def test_samples_outside_band_are_dropped(rtt_us):
    state = make_state()

    assert state.add_sample(rtt_us) is False
    assert state.sample_count == 0
    assert state.rtt_accumulator == 0


def test_band_edges():
    state = make_state()

    assert state.add_sample(1000) is True
    assert state.add_sample(299999) is True
    assert state.sample_count == 2
    assert state.rtt_accumulator == 1 + 299


def test_batch_recompute_uses_shift_then_scale():
    state = make_state(bandwidth=1000, factor=10)

    for _ in range(SAMPLE_SIZE - 1):
        state.add_sample(50000)
    assert state.base_window == 1000 * 128

    state.add_sample(50000)

    # 1 + ((1000 << 10) * 50) // (10 * 1000)
    assert state.base_window == 5121
    assert state.average_rtt == 50


def test_sampling_closes_after_one_batch():
    state = make_state(bandwidth=1000, factor=10)
    for _ in range(SAMPLE_SIZE):
        state.add_sample(50000)

    assert state.sampling_closed
    assert state.add_sample(10000) is False
    assert state.sample_count == SAMPLE_SIZE
    assert state.rtt_accumulator == 5000
    assert state.base_window == 5121


def test_zero_factor_skips_recompute():
    state = make_state(bandwidth=1000, factor=0)
    for _ in range(SAMPLE_SIZE):
        state.add_sample(50000)

    assert state.sample_count == SAMPLE_SIZE
    assert state.base_window == 1000 * 128
    assert state.recalibrate() is False


def test_tunable_changes_apply_at_next_cycle_only():
    tunables = Tunables(bandwidth=10)
    state = CongestionState(tunables)
    state.reset()

    tunables.bandwidth = 20
    assert state.bandwidth == 20
    assert state.base_window == 10 * 128

    state.reset()
    assert state.base_window == 20 * 128
