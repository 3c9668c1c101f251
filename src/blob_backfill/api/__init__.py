"""
Beacon API client module.

Provides the retrying client used to read:
- /eth/v1/beacon/blob_sidecars/{slot} - Blob sidecars of a slot
- /eth/v1/beacon/headers/{slot} - Canonical block root of a slot
- /eth/v1/beacon/headers - Current head slot
"""

from .client import (
    DEFAULT_RETRIES,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
    EMPTY_ROOT,
    BeaconApiClient,
)
from .routes import get_url

__all__ = [
    "BeaconApiClient",
    "DEFAULT_RETRIES",
    "DEFAULT_RETRY_DELAY",
    "DEFAULT_TIMEOUT",
    "EMPTY_ROOT",
    "get_url",
]
