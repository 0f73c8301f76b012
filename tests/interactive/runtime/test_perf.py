import pytest

from noisedrift.interactive.runtime.perf import PerfCollector


def test_disabled_collector_is_noop(capsys: pytest.CaptureFixture[str]) -> None:
    perf = PerfCollector(enabled=False, print_every=1)
    with perf.frame():
        with perf.section("render"):
            pass
    assert perf.last_report is None
    assert capsys.readouterr().out == ""


def test_enabled_collector_reports_every_n_frames(capsys: pytest.CaptureFixture[str]) -> None:
    perf = PerfCollector(enabled=True, print_every=2)
    for _ in range(2):
        with perf.frame():
            with perf.section("render"):
                pass
            with perf.section("present"):
                pass

    out = capsys.readouterr().out
    assert out.startswith("[noisedrift-perf] frame=")
    assert perf.last_report is not None
    assert "present=" in perf.last_report
    assert "render=" in perf.last_report


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOISEDRIFT_PERF", "1")
    monkeypatch.setenv("NOISEDRIFT_PERF_EVERY", "abc")
    perf = PerfCollector.from_env()
    assert perf.enabled
    assert perf.print_every == 60

    monkeypatch.setenv("NOISEDRIFT_PERF", "off")
    assert not PerfCollector.from_env().enabled


def test_report_marks_sections_entered_several_times_per_frame(capsys: pytest.CaptureFixture[str]) -> None:
    perf = PerfCollector(enabled=True, print_every=2)
    for _ in range(2):
        with perf.frame():
            for _ in range(3):
                with perf.section("render"):
                    pass
            with perf.section("present"):
                pass

    report = perf.last_report
    assert report is not None
    assert "(3.0x)" in report
    present = next(p for p in report.split(" ") if p.startswith("present="))
    assert present.endswith("ms")
    assert "present=" in capsys.readouterr().out
