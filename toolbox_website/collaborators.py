"""Rendering and notification collaborators used by the views."""

import html
import statistics
from typing import Any
from typing import MutableMapping
from typing import Protocol
from typing import Sequence

from fasthtml.common import NotStr
from fasthtml.common import add_toast

SPARK_CHARS = "▁▂▃▄▅▆▇"
SEVERITIES = ("info", "success", "warning", "error")


class IconRenderer(Protocol):
    def __call__(self, path_d: str, css_class: str = ...) -> Any: ...


class ChartRenderer(Protocol):
    def __call__(self, values: Sequence[float], width: int = ...) -> str: ...


class Notifier(Protocol):
    def __call__(self, message: str, severity: str = ...) -> None: ...


def render_icon(path_d: str, css_class: str = "icon") -> NotStr:
    """Outline SVG glyph for a path descriptor."""
    return NotStr(
        f'<svg class="{html.escape(css_class, quote=True)}" viewBox="0 0 24 24" fill="none" stroke="currentColor" '
        f'stroke-width="2" aria-hidden="true"><path stroke-linecap="round" stroke-linejoin="round" '
        f'd="{html.escape(path_d or "", quote=True)}"/></svg>'
    )


def render_sparkline(values: Sequence[float], width: int = 12) -> str:
    """Text trend line; long series are averaged down to ``width`` buckets."""
    if len(values) < 2:
        return "─" * width

    if len(values) > width:
        size = len(values) / width
        values = [statistics.fmean(values[int(i * size) : int((i + 1) * size)]) for i in range(width)]

    low, high = min(values), max(values)
    if low == high:
        return "▄" * len(values)
    top = len(SPARK_CHARS) - 1
    return "".join(SPARK_CHARS[round((v - low) / (high - low) * top)] for v in values)


class ToastNotifier:
    """Queues an ephemeral message on the visitor's session."""

    def __init__(self, session: MutableMapping):
        self._session = session

    def __call__(self, message: str, severity: str = "info") -> None:
        add_toast(self._session, message, severity if severity in SEVERITIES else "info")
