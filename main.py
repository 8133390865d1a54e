"""
Main entrypoint: run the web dashboard or the telemetry collector under uvicorn.

    python main.py web        --port 8080
    python main.py telemetry  --port 3000

The collector starts its background fetch loops in its lifespan (disable with
TELEMETRY_BACKGROUND=0). Env: DATABASE_URL or SPACE_DB_PATH, ISS_BASE_URL,
NASA_API_KEY, JWST_API_KEY, ASTRO_APP_ID, ASTRO_APP_SECRET, LOG_LEVEL, etc.

Equivalent without this script:
    uvicorn space_dashboard.web.app:app --host 0.0.0.0 --port 8080
    uvicorn space_dashboard.telemetry.app:app --host 0.0.0.0 --port 3000
"""

import argparse
import os

# Configure structured JSON logging before other imports that may log
from space_dashboard.space_logging import configure_logging, get_logger

logger = get_logger("main")

APPS = {
    "web": ("space_dashboard.web.app:app", 8080),
    "telemetry": ("space_dashboard.telemetry.app:app", 3000),
}


def main() -> None:
    parser = argparse.ArgumentParser(description="Run a Space Dashboard service.")
    parser.add_argument("service", choices=sorted(APPS), help="Which app to serve")
    parser.add_argument("--host", default=os.getenv("API_HOST", "0.0.0.0").strip())
    parser.add_argument("--port", type=int, default=None, help="Default: 8080 for web, 3000 for telemetry")
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL")
    parser.add_argument("--log-format", choices=("json", "console"), default=None, help="Overrides LOG_FORMAT")
    args = parser.parse_args()

    os.environ.setdefault("SPACE_SERVICE", args.service)
    if args.log_level or args.log_format:
        configure_logging(level=args.log_level, fmt=args.log_format)

    import uvicorn

    target, default_port = APPS[args.service]
    port = args.port or int(os.getenv("API_PORT", str(default_port)).strip() or default_port)
    logger.info("main_server_starting", service=args.service, host=args.host, port=port)
    uvicorn.run(target, host=args.host, port=port, log_level=(args.log_level or os.getenv("LOG_LEVEL", "info")).lower())


if __name__ == "__main__":
    main()
