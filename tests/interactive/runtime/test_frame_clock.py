import time

from noisedrift.interactive.runtime.frame_clock import RealTimeClock


def test_real_time_clock_returns_elapsed_seconds_and_ms():
    start_time = time.perf_counter() - 1.0
    clock = RealTimeClock(start_time=start_time)
    assert 0.5 < clock.t() < 1.5
    assert 500.0 < clock.now_ms() < 1500.0


def test_real_time_clock_is_monotonic():
    clock = RealTimeClock(start_time=time.perf_counter())
    samples = [clock.now_ms() for _ in range(100)]
    assert all(b >= a for a, b in zip(samples, samples[1:]))
