from heartgarden.run import (
    DEFAULT_WINDOW, RESIZE_DEBOUNCE, ResizeDebounce, pause_when_hidden, window_from_env,
)
from heartgarden.scheduler import FrameScheduler


def test_resize_waits_for_quiet_period():
    debounce = ResizeDebounce()
    debounce.request(800, 600, now=1.0)
    assert debounce.due(1.0) is None
    assert debounce.due(1.0 + RESIZE_DEBOUNCE / 2) is None
    assert debounce.due(1.0 + RESIZE_DEBOUNCE + 0.01) == (800, 600)
    assert debounce.due(2.0) is None


def test_resize_burst_applies_last_size_once():
    debounce = ResizeDebounce(delay=0.15)
    debounce.request(500, 400, now=0.0)
    debounce.request(600, 500, now=0.1)
    debounce.request(700, 650, now=0.2)
    # 0.3 is only 0.1s after the last request
    assert debounce.due(0.3) is None
    assert debounce.due(0.36) == (700, 650)
    assert debounce.due(0.5) is None


def test_nothing_due_without_request():
    assert ResizeDebounce().due(100.0) is None


def test_hidden_window_pauses_scheduler():
    frames = []
    scheduler = FrameScheduler(frames.append)
    on_visibility = pause_when_hidden(scheduler)
    scheduler.start()
    assert scheduler.tick(0)

    on_visibility(False)
    assert not scheduler.running
    assert scheduler.tick(16) is False

    on_visibility(True)
    assert scheduler.running
    assert scheduler.tick(32)
    assert frames == [0, 32]


def test_window_from_env(monkeypatch):
    monkeypatch.setenv("HEARTGARDEN_WINDOW", "400x700")
    assert window_from_env() == (400, 700)
    monkeypatch.setenv("HEARTGARDEN_WINDOW", "1280X800")
    assert window_from_env() == (1280, 800)


def test_window_from_env_unset(monkeypatch):
    monkeypatch.delenv("HEARTGARDEN_WINDOW", raising=False)
    assert window_from_env() == DEFAULT_WINDOW
    assert window_from_env((320, 480)) == (320, 480)


def test_window_from_env_malformed_falls_back(monkeypatch, capsys):
    for value in ("big", "800x", "1x2x3"):
        monkeypatch.setenv("HEARTGARDEN_WINDOW", value)
        assert window_from_env() == DEFAULT_WINDOW
    assert "Ignoring malformed" in capsys.readouterr().out
