"""
Blob sidecar backfill CLI entry point.

Download blob sidecars and canonical block roots for a slot range from a
Beacon API and store them locally.

Usage::

    python -m blob_backfill --api-url http://localhost:5052 -f 8626176 -t 8627000 -d ./data
    python -m blob_backfill --api-url http://localhost:5052 -f 0 -d ./data --sink jsonl
    python -m blob_backfill --api-url http://localhost:5052 -f 0 -d ./data --network sepolia

Options:
    --api-url           Base URL of the Beacon API (required)
    -f, --from-slot     First slot to backfill (clamped to the blob activation slot)
    -t, --to-slot       Last slot to backfill (default: current head)
    -c, --concurrency   Slots per window (default: 20)
    -d, --data-dir      Directory holding the output (required)
    --sink              Output backend: store (SQLite) or jsonl (default: store)
    --network           Network preset for the activation slot (default: mainnet)
    --metrics-textfile  Write Prometheus metrics to this file when the run ends
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from blob_backfill.api import (
    DEFAULT_RETRIES,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
    BeaconApiClient,
)
from blob_backfill.chain import NETWORKS
from blob_backfill.containers import Slot
from blob_backfill.exceptions import BackfillError
from blob_backfill.metrics import write_metrics
from blob_backfill.storage import JsonlSink, KeyValueSink, SidecarSink, SQLiteBlobStore
from blob_backfill.sync import (
    DEFAULT_CONCURRENCY,
    JSONL_FILE_NAME,
    STORE_FILE_NAME,
    BackfillProgress,
    BackfillService,
    plan_range,
)

logger = logging.getLogger(__name__)


LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_RESET = "\x1b[0m"
_LEVEL_COLORS = {
    logging.DEBUG: "\x1b[2m",
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
    logging.CRITICAL: "\x1b[1;31m",
}


class ColoredFormatter(logging.Formatter):
    """Colors the level name of every record for terminal output."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().formatMessage(record)
        plain = record.levelname
        record.levelname = f"{color}{plain}{_RESET}"
        try:
            return super().formatMessage(record)
        finally:
            record.levelname = plain


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Send log records to stderr, colored unless `no_color` is set."""
    level = logging.DEBUG if verbose else logging.INFO
    formatter_class = logging.Formatter if no_color else ColoredFormatter

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter_class(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def non_negative_int(value: str) -> int:
    """Argparse type for slot numbers."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def positive_int(value: str) -> int:
    """Argparse type for counts that must be at least one."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def open_sink(kind: str, data_dir: Path) -> SidecarSink:
    """
    Open the output backend inside `data_dir`.

    Args:
        kind: "store" for the SQLite keyed store, "jsonl" for the append log.
        data_dir: Directory holding the output. Created if missing.
    """
    data_dir.mkdir(parents=True, exist_ok=True)
    if kind == "jsonl":
        return JsonlSink(data_dir / JSONL_FILE_NAME)
    if kind == "store":
        return KeyValueSink(SQLiteBlobStore(data_dir / STORE_FILE_NAME))
    raise ValueError(f"Unknown sink: {kind}")


async def run_backfill(
    api_url: str,
    from_slot: int,
    to_slot: int | None,
    data_dir: Path,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
    sink_kind: str = "store",
    network: str = "mainnet",
    retries: int = DEFAULT_RETRIES,
    retry_delay: float = DEFAULT_RETRY_DELAY,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> BackfillProgress:
    """
    Run one backfill.

    Args:
        api_url: Base URL of the Beacon API.
        from_slot: Requested first slot.
        to_slot: Requested last slot, or None for the current head.
        data_dir: Directory holding the output.
        concurrency: Slots per window.
        sink_kind: "store" or "jsonl".
        network: Network preset name, selects the activation slot.
        retries: Attempts per request.
        retry_delay: Seconds between attempts.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport for the API client.

    Raises:
        BackfillError: On the first fatal error.
    """
    network_config = NETWORKS[network]
    floor = Slot(network_config.activation_slot)

    async with BeaconApiClient(
        api_url,
        retries=retries,
        retry_delay=retry_delay,
        timeout=timeout,
        max_connections=2 * concurrency,
        transport=transport,
    ) as client:
        slot_range = await plan_range(
            client,
            Slot(from_slot),
            Slot(to_slot) if to_slot is not None else None,
            floor,
        )

        sink = open_sink(sink_kind, data_dir)
        try:
            service = BackfillService(client=client, sink=sink, concurrency=concurrency)
            return await service.run(slot_range)
        finally:
            sink.close()


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Backfill blob sidecars from a Beacon API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--api-url",
        required=True,
        help="Base URL of the Beacon API (e.g., http://localhost:5052)",
    )
    parser.add_argument(
        "-f",
        "--from-slot",
        required=True,
        type=non_negative_int,
        help="First slot to backfill",
    )
    parser.add_argument(
        "-t",
        "--to-slot",
        type=non_negative_int,
        default=None,
        help="Last slot to backfill (default: current head)",
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=positive_int,
        default=DEFAULT_CONCURRENCY,
        help=f"Slots per window (default: {DEFAULT_CONCURRENCY})",
    )
    parser.add_argument(
        "-d",
        "--data-dir",
        required=True,
        type=Path,
        help="Directory holding the output",
    )
    parser.add_argument(
        "--sink",
        choices=["store", "jsonl"],
        default="store",
        help="Output backend (default: store)",
    )
    parser.add_argument(
        "--network",
        choices=sorted(NETWORKS),
        default="mainnet",
        help="Network preset for the blob activation slot (default: mainnet)",
    )
    parser.add_argument(
        "--retries",
        type=positive_int,
        default=DEFAULT_RETRIES,
        help=f"Attempts per request (default: {DEFAULT_RETRIES})",
    )
    parser.add_argument(
        "--retry-delay",
        type=float,
        default=DEFAULT_RETRY_DELAY,
        help=f"Seconds between attempts (default: {DEFAULT_RETRY_DELAY})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Per-request timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--metrics-textfile",
        type=Path,
        default=None,
        help="Write Prometheus metrics to this file when the run ends",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    args = parser.parse_args()

    setup_logging(args.verbose, args.no_color)

    exit_code = 0
    try:
        asyncio.run(
            run_backfill(
                args.api_url,
                args.from_slot,
                args.to_slot,
                args.data_dir,
                concurrency=args.concurrency,
                sink_kind=args.sink,
                network=args.network,
                retries=args.retries,
                retry_delay=args.retry_delay,
                timeout=args.timeout,
            )
        )
    except BackfillError as e:
        if e.slot is not None:
            logger.error("Backfill aborted at slot %d: %s: %s", e.slot, e.kind, e)
        else:
            logger.error("Backfill aborted: %s: %s", e.kind, e)
        exit_code = 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        exit_code = 130
    finally:
        if args.metrics_textfile is not None:
            write_metrics(args.metrics_textfile)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
