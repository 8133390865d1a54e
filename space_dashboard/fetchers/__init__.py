"""
Upstream fetchers for the telemetry collector.

Each fetcher pulls one public API and writes to the database. Fetchers raise
on failure; the background runner logs and retries on the next tick.
"""
