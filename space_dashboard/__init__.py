"""
Space Dashboard: ISS telemetry, NASA OSDR and astronomy data in one place.

Two services share this package: the telemetry collector (periodic fetchers
plus a small JSON API over the database) and the web dashboard (HTML pages
and JSON endpoints that proxy the collector and third-party APIs).
"""

__version__ = "0.1.0"
