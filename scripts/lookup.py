#!/usr/bin/env python3
"""Console host for trying aqivoice against the live providers.

Each line typed on stdin is delivered as a transcription; rendered text is
printed to stdout. ``--lat``/``--lon`` push a device location before the
first cycle.

Configuration comes from the environment (``AQI_TOKEN`` is required, see
``AqiConfig.from_env``).

Examples:
  scripts/lookup.py --once
  scripts/lookup.py --lat 40.7128 --lon -74.006
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from aqivoice import AirQualityApp, AqiConfig, AqiConfigError, EventChannel  # noqa: E402
from aqivoice.host import Handler, Subscription  # noqa: E402


class ConsoleHost:
    """Host session backed by stdin/stdout."""

    def __init__(self, session_id: str = "console") -> None:
        self.session_id = session_id
        self.transcriptions = EventChannel("transcription")
        self.locations = EventChannel("location")

    def on_transcription(self, handler: Handler) -> Subscription:
        return self.transcriptions.subscribe(handler)

    def on_location(self, handler: Handler) -> Subscription:
        return self.locations.subscribe(handler)

    async def show_text(self, text: str, *, duration_ms: int) -> None:
        print(f"\n[{duration_ms / 1000:.0f}s]\n{text}", flush=True)

    def push_location(self, payload: Mapping[str, Any]) -> None:
        self.locations.emit(payload)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run aqivoice against a console host")
    parser.add_argument("--lat", type=float, default=None, help="Device latitude to push before the first cycle.")
    parser.add_argument("--lon", type=float, default=None, help="Device longitude to push before the first cycle.")
    parser.add_argument(
        "--once",
        action="store_true",
        help="Exit after the initial lookup instead of reading utterances from stdin.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging.")
    return parser.parse_args()


async def _read_lines(host: ConsoleHost) -> None:
    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            return
        host.transcriptions.emit({"text": line.strip(), "isFinal": True})
        # Let a scheduled cycle start before blocking on stdin again.
        await asyncio.sleep(0)


async def _run(args: argparse.Namespace) -> int:
    try:
        config = AqiConfig.from_env()
    except AqiConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    host = ConsoleHost()
    async with AirQualityApp(config) as app:
        # Subscribe first so the pushed location lands before the initial cycle runs.
        session = await app.on_session(host)
        if args.lat is not None and args.lon is not None:
            host.push_location({"latitude": args.lat, "longitude": args.lon})

        task = session.cycle_task
        if task is not None:
            await task
        if not args.once:
            await _read_lines(host)
            task = session.cycle_task
            if task is not None and not task.done():
                await task
        await app.on_session_end(host.session_id)
    return 0


def main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
