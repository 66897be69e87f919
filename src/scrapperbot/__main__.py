"""Command-line entry point: ``python -m scrapperbot``."""

from __future__ import annotations

import argparse
import asyncio
import logging

from scrapperbot._constants import DEFAULT_LOG_LEVEL
from scrapperbot.agent import ScrapperAgent
from scrapperbot.config import AgentConfig
from scrapperbot.exceptions import ExitCode, ScrapperConfigError, ScrapperError
from scrapperbot.strategies import available_strategies

_logger = logging.getLogger("scrapperbot")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="scrapperbot",
        description="Client agent for the Scrappers arena game.",
    )
    parser.add_argument("--host", default=None, help="Game server host (default: localhost).")
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port that the Scrappers game is listening on (default: 50000).",
    )
    parser.add_argument(
        "--strategy",
        choices=available_strategies(),
        default=None,
        help="Tactical policy to run (default: rush).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for randomized strategies.")
    parser.add_argument(
        "--queue-capacity",
        type=int,
        default=None,
        help="Inbound events buffered before the reader blocks.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logs (same as SCRAPPERS_LOG_LEVEL=DEBUG).",
    )
    return parser.parse_args(argv)


async def _run(config: AgentConfig) -> None:
    async with ScrapperAgent(config) as agent:
        await agent.run()


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        config = AgentConfig.from_env(
            host=args.host,
            port=args.port,
            strategy=args.strategy,
            seed=args.seed,
            queue_capacity=args.queue_capacity,
            log_level="DEBUG" if args.verbose else None,
        ).validate()
    except ScrapperConfigError as exc:
        _configure_logging(DEFAULT_LOG_LEVEL)
        _logger.error("%s", exc)
        return int(exc.exit_code)
    _configure_logging(config.log_level)

    try:
        asyncio.run(_run(config))
    except ScrapperError as exc:
        _logger.error("%s", exc)
        return int(exc.exit_code)
    except KeyboardInterrupt:
        _logger.info("Interrupted")
        return int(ExitCode.OK)
    return int(ExitCode.OK)


if __name__ == "__main__":
    raise SystemExit(main())
