"""
Periodic runner: one daemon thread per upstream source.

- build_jobs(): the six collector loops (OSDR, ISS, APOD, NEO, DONKI, SpaceX)
  with their intervals from Settings.
- run_periodic_job(): run a job, wait its interval, repeat until stop_event.
  A failing tick is logged; the loop continues.
- start_background_tasks(): start every job in its own thread. Started by the
  collector's lifespan; never blocks the API.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

from space_dashboard.config.settings import Settings
from space_dashboard.space_logging import get_logger

logger = get_logger(__name__)

SHUTDOWN_JOIN_TIMEOUT_SEC = 15.0
MIN_INTERVAL_SEC = 1.0


@dataclass
class PeriodicJob:
    """A named fetch function and how often to run it."""

    name: str
    func: Callable[[], Any]
    interval_sec: float


def build_jobs(settings: Settings) -> list[PeriodicJob]:
    from space_dashboard.fetchers.iss import fetch_and_store_iss
    from space_dashboard.fetchers.osdr import fetch_and_store_osdr
    from space_dashboard.fetchers.space import fetch_apod, fetch_donki, fetch_neo_feed, fetch_spacex_next

    return [
        PeriodicJob("osdr", lambda: fetch_and_store_osdr(settings), settings.every_osdr),
        PeriodicJob("iss", lambda: fetch_and_store_iss(settings), settings.every_iss),
        PeriodicJob("apod", lambda: fetch_apod(settings), settings.every_apod),
        PeriodicJob("neo", lambda: fetch_neo_feed(settings), settings.every_neo),
        PeriodicJob("donki", lambda: fetch_donki(settings), settings.every_donki),
        PeriodicJob("spacex", lambda: fetch_spacex_next(settings), settings.every_spacex),
    ]


def run_periodic_job(job: PeriodicJob, stop_event: threading.Event) -> None:
    """
    Run job.func every job.interval_sec until stop_event is set. The first
    tick runs immediately. Exceptions in a tick are logged, never raised.
    """
    interval = max(MIN_INTERVAL_SEC, float(job.interval_sec))
    logger.info("periodic_job_started", job=job.name, interval_sec=interval)
    tick_count = 0
    while not stop_event.is_set():
        tick_start = time.monotonic()
        tick_count += 1
        try:
            job.func()
            logger.debug("periodic_tick_done", job=job.name, tick=tick_count)
        except Exception as e:
            logger.warning("periodic_tick_failed", job=job.name, tick=tick_count, error=str(e))
        deadline = tick_start + interval
        stop_event.wait(timeout=max(0.0, deadline - time.monotonic()))
    logger.info("periodic_job_stopped", job=job.name, tick_count=tick_count)


def start_background_tasks(
    settings: Settings,
    stop_event: threading.Event,
    jobs: list[PeriodicJob] | None = None,
) -> list[threading.Thread]:
    """Start one daemon thread per job. Returns the started threads."""
    threads: list[threading.Thread] = []
    for job in jobs if jobs is not None else build_jobs(settings):
        thread = threading.Thread(
            target=run_periodic_job,
            args=(job, stop_event),
            name=f"fetch-{job.name}",
            daemon=True,
        )
        thread.start()
        threads.append(thread)
    return threads


def join_background_tasks(threads: list[threading.Thread], timeout_sec: float = SHUTDOWN_JOIN_TIMEOUT_SEC) -> None:
    """Join threads after stop_event is set; log the ones that did not stop in time."""
    deadline = time.monotonic() + timeout_sec
    for thread in threads:
        thread.join(timeout=max(0.0, deadline - time.monotonic()))
        if thread.is_alive():
            logger.warning("periodic_job_shutdown_timeout", thread=thread.name, timeout_sec=timeout_sec)
