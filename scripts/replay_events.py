#!/usr/bin/env python3
"""Replay a captured Scrappers event log offline.

Feeds every line of a newline-delimited JSON capture (as sent by the game
server) through the agent's decoder and state processor, then prints the
resulting roster split by ownership. Useful for checking what the replica
looked like at the end of a recorded session without a running server.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from scrapperbot.exceptions import ScrapperStartupError  # noqa: E402
from scrapperbot.ingestion.processor import StateProcessor  # noqa: E402
from scrapperbot.ingestion.queue import EventQueue  # noqa: E402
from scrapperbot.state.events import InboundEvent  # noqa: E402
from scrapperbot.state.store import GameStateStore  # noqa: E402

_LOG = logging.getLogger("replay_events")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replay a Scrappers event capture into a fresh state store.")
    parser.add_argument("capture", type=Path, help="File with one inbound JSON message per line.")
    parser.add_argument("--json", action="store_true", help="Print the final roster as JSON.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logs.")
    return parser.parse_args()


async def _replay(capture: Path) -> tuple[GameStateStore, StateProcessor]:
    store = GameStateStore()
    queue = EventQueue()
    processor = StateProcessor(queue, store)
    consumer = asyncio.create_task(processor.run())
    with capture.open(encoding="utf-8") as handle:
        for line in handle:
            if line.strip():
                await queue.put(InboundEvent(line=line))
    queue.close()
    await consumer
    return store, processor


def _main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        store, processor = asyncio.run(_replay(args.capture))
    except OSError as exc:
        print(f"[replay] Cannot read {args.capture}: {exc}", file=sys.stderr)
        return 2
    except ScrapperStartupError as exc:
        print(f"[replay] {exc}", file=sys.stderr)
        return 5

    snapshot = store.snapshot()
    if args.json:
        print(
            json.dumps(
                {
                    "player_id": store.player_id,
                    "mine": [unit.model_dump() for unit in snapshot.mine],
                    "theirs": [unit.model_dump() for unit in snapshot.theirs],
                },
                indent=2,
            )
        )
        return 0

    print(f"[replay] player id : {store.player_id}")
    print(f"[replay] processed : {processor.processed}")
    print(f"[replay] skipped   : {processor.skipped}")
    for label, units in (("mine", snapshot.mine), ("theirs", snapshot.theirs)):
        print(f"[replay] {label} ({len(units)})")
        for unit in units:
            print(f"[replay]   {unit.unit_id}  pos=({unit.x}, {unit.y})  health={unit.health}")
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
