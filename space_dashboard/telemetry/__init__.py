"""
Telemetry collector: periodic fetchers plus a JSON API over the stored data.

Run with: uvicorn space_dashboard.telemetry.app:app --host 0.0.0.0 --port 3000
"""
