#!/usr/bin/env python3
"""
GeoSense terminal reader.

Usage:
    python -m geosense.reader                          # gateway on localhost:8000
    python -m geosense.reader --gateway URL --state PATH

Commands: n/next (newer batch), p/prev (older batch), r/reset, q/quit
"""
import argparse
import logging

from dotenv import load_dotenv

from .config import GATEWAY_URL, STATE_PATH
from .feed.history import BatchHistoryStore
from .feed.navigator import Direction, FeedNavigator
from .feed.news_client import NewsClient
from .feed.renderer import ConsoleRenderer
from .feed.storage import JsonFileStore

COMMANDS = {
    "n": Direction.FORWARD, "next": Direction.FORWARD,
    "p": Direction.BACKWARD, "prev": Direction.BACKWARD,
}


def build_navigator(gateway: str, state: str) -> FeedNavigator:
    history = BatchHistoryStore(JsonFileStore(state))
    return FeedNavigator(history, NewsClient(gateway), ConsoleRenderer())


def main(argv=None) -> None:
    load_dotenv()
    ap = argparse.ArgumentParser(description="Browse top headlines four at a time.")
    ap.add_argument("--gateway", default=GATEWAY_URL, help="news gateway URL")
    ap.add_argument("--state", default=STATE_PATH, help="where history is kept")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    nav = build_navigator(args.gateway, args.state)
    try:
        if not nav.load_feed():
            print("⚠️  No news yet. Is the gateway running at", args.gateway, "?")
        _loop(nav)
    finally:
        nav.client.close()


def _loop(nav: FeedNavigator) -> None:
    while True:
        try:
            cmd = input("\n[n]ext [p]rev [r]eset [q]uit > ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if cmd in ("q", "quit"):
            break
        if cmd in ("r", "reset"):
            nav.history.clear()
            nav.load_feed()
            continue
        direction = COMMANDS.get(cmd)
        if direction is None:
            continue
        if not nav.navigate(direction):
            print("(nothing", "newer)" if direction is Direction.FORWARD else "older)")


if __name__ == "__main__":
    main()
