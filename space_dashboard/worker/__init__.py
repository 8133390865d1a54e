"""
Background fetch loops for the telemetry collector.
"""

from space_dashboard.worker.runner import PeriodicJob, build_jobs, run_periodic_job, start_background_tasks

__all__ = ["PeriodicJob", "build_jobs", "run_periodic_job", "start_background_tasks"]
