"""
Global configuration for the blob backfill tool.

This module contains environment-specific settings that apply across all modules.
"""

import os

_SUPPORTED_ENVS: list[str] = ["prod", "test"]

BLOB_BACKFILL_ENV = os.environ.get("BLOB_BACKFILL_ENV", "prod").lower()
"""The environment flag ('prod' or 'test'). Defaults to 'prod'."""

if BLOB_BACKFILL_ENV not in _SUPPORTED_ENVS:
    raise ValueError(
        f"Invalid BLOB_BACKFILL_ENV environment variable: '{BLOB_BACKFILL_ENV}'. "
        f"Supported values: {_SUPPORTED_ENVS}"
    )
