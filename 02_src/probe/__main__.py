"""Start a run against a running service and wait for it to finish."""

import argparse
import asyncio
import os
import sys

from latency.logging_config import setup_logging

from .probe import Probe


async def _run(api_url: str, poll_interval: float, timeout: float) -> bool:
    probe = Probe(api_url=api_url)
    try:
        await probe.start()
        return await probe.wait_for_completion(poll_interval=poll_interval, timeout=timeout)
    finally:
        await probe.close()


def main() -> None:
    """Run the probe."""
    parser = argparse.ArgumentParser(description="Start a latency run and wait for it")
    parser.add_argument(
        "--api-url",
        default=f"http://{os.getenv('API_HOST', 'localhost')}:{os.getenv('API_PORT', '8000')}",
    )
    parser.add_argument("--poll-interval", type=float, default=2.0)
    parser.add_argument("--timeout", type=float, default=600.0)
    args = parser.parse_args()

    setup_logging(console_only=True)
    completed = asyncio.run(_run(args.api_url, args.poll_interval, args.timeout))
    sys.exit(0 if completed else 1)


if __name__ == "__main__":
    main()
