from toolbox_website.collaborators import SEVERITIES
from toolbox_website.collaborators import ToastNotifier
from toolbox_website.collaborators import render_icon
from toolbox_website.collaborators import render_sparkline


def test_render_icon_escapes_path_descriptor():
    svg = str(render_icon('M4 4h16"/><script>', "tool-icon"))
    assert svg.startswith('<svg class="tool-icon"')
    assert "<script>" not in svg
    assert "&quot;" in svg


def test_render_sparkline_handles_short_and_flat_series():
    assert render_sparkline([]) == "─" * 12
    assert render_sparkline([5]) == "─" * 12
    assert render_sparkline([3, 3, 3]) == "▄▄▄"


def test_render_sparkline_scales_to_range():
    line = render_sparkline([0, 50, 100])
    assert line[0] == "▁"
    assert line[-1] == "▇"
    assert len(render_sparkline(list(range(40)), width=8)) == 8


def test_render_sparkline_averages_long_series_into_buckets():
    # The spike is not on a bucket boundary but still raises its bucket.
    assert render_sparkline([0] * 6 + [100] * 6, width=2) == "▁▇"
    assert render_sparkline([0, 0, 0, 0, 90, 0], width=2) == "▁▇"


def test_toast_notifier_maps_unknown_severity_to_info(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "toolbox_website.collaborators.add_toast", lambda session, message, typ: calls.append((message, typ))
    )
    notify = ToastNotifier({})
    notify("Saved", "success")
    notify("Odd severity", "critical")

    assert "success" in SEVERITIES
    assert calls == [("Saved", "success"), ("Odd severity", "info")]


def test_toast_notifier_queues_on_session():
    session = {}
    ToastNotifier(session)("Saved", "success")
    assert session
