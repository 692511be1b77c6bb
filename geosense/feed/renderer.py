# geosense/feed/renderer.py
from __future__ import annotations
import sys
from typing import Any, Dict, List, Optional, Protocol, TextIO

from dateutil import parser as dtparser

from ..config import NEWS_RENDER_LIMIT

__all__ = ["Renderer", "ConsoleRenderer", "format_date_dmy"]


class Renderer(Protocol):
    def transition_out(self, direction: int) -> None:
        """Finish any exit transition for what is on screen; return when done."""
        ...

    def render(self, batch: List[Dict[str, Any]]) -> None: ...


def format_date_dmy(value: Optional[str]) -> str:
    """'2025-10-20T08:15:00Z' -> '20/10/2025'; '' when unparseable."""
    if not value:
        return ""
    try:
        d = dtparser.parse(value)
    except (ValueError, OverflowError, TypeError):
        return ""
    return d.strftime("%d/%m/%Y")


class ConsoleRenderer:
    """Plain-text renderer for the interactive reader."""

    def __init__(self, out: Optional[TextIO] = None, limit: int = NEWS_RENDER_LIMIT):
        self.out = out or sys.stdout
        self.limit = limit
        self.shown: List[Dict[str, Any]] = []

    def transition_out(self, direction: int) -> None:
        if not self.shown:
            return
        arrow = "→ newer" if direction > 0 else "← older"
        print(f"\n────────── {arrow} ──────────\n", file=self.out)

    def render(self, batch: List[Dict[str, Any]]) -> None:
        items = [a for a in (batch or [])
                 if isinstance(a, dict) and (a.get("title") or a.get("description") or a.get("content"))]
        self.shown = items[: self.limit]

        for i, a in enumerate(self.shown, 1):
            title = a.get("title") or "Untitled"
            by = a.get("author") or a.get("source") or "Unknown"
            published = format_date_dmy(a.get("publishedAt"))
            body = a.get("description") or a.get("content") or ""

            print(f"{i}. {title}", file=self.out)
            print(f"   {by}" + (f", Published on {published}" if published else ""), file=self.out)
            if body:
                print(f"   {body}", file=self.out)
            if a.get("url"):
                print(f"   {a['url']}", file=self.out)
        self.out.flush()
