"""Backfill blob sidecars and canonical block roots from a Beacon API into local storage."""
