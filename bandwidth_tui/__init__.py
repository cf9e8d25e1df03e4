"""Terminal viewer for per-path bandwidth totals in NDJSON access logs."""

__version__ = "0.1.0"
