"""Normalisation of upstream roster and availability payloads."""

from rosterview.ingest.payload import (
    PayloadError,
    load_roster_result,
    parse_availability_records,
    parse_roster_result,
)

__all__ = [
    "PayloadError",
    "load_roster_result",
    "parse_availability_records",
    "parse_roster_result",
]
