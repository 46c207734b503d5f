"""Uvicorn runner for the notification service.

Configures logging before the app is built so startup (executor sizing,
broker subscription) is captured.

Usage:
    python src/server.py                      # 0.0.0.0:8081
    python src/server.py --port 9090
    python src/server.py --no-subscribe       # skip broker registration
"""

import argparse

import uvicorn

from notifier.utils.logging import configure_logging


def main():
    parser = argparse.ArgumentParser(description="Notification service runner")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8081, help="Bind port (default: 8081)")
    parser.add_argument(
        "--no-subscribe",
        action="store_true",
        help="Do not register with the event broker at startup",
    )
    args = parser.parse_args()

    configure_logging()

    from app import create_app
    from notifier.config import get_settings

    overrides = {"subscribe_on_startup": False} if args.no_subscribe else {}
    app = create_app(get_settings(**overrides))

    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
