#!/usr/bin/env python3
"""
Keep-alive HTTP endpoint.

Hosting platforms that put idle web services to sleep ping `/` to keep the
process up. The Flask app runs on a daemon thread next to the bot.
"""
import logging
import math
import threading
from typing import Optional

from flask import Flask, jsonify

logger = logging.getLogger(__name__)


def create_app(bot=None) -> Flask:
    """Build the keep-alive app. `bot` is only read, never mutated."""
    app = Flask(__name__)

    @app.route("/")
    def index():
        return "Bot is alive!"

    @app.route("/health")
    def health():
        ready = bool(bot is not None and bot.is_ready())
        latency = getattr(bot, "latency", None) if ready else None
        latency_ms = round(latency * 1000) if latency is not None and math.isfinite(latency) else None
        return jsonify({"status": "ok" if ready else "starting", "ready": ready, "latency_ms": latency_ms})

    return app


def start_keepalive(bot=None, host: str = "0.0.0.0", port: int = 3000) -> threading.Thread:
    """Serve the keep-alive app on a daemon thread."""
    app = create_app(bot)

    def serve():
        logger.info(f"Keep-alive server running on port {port}")
        app.run(host=host, port=port, debug=False, use_reloader=False)

    thread = threading.Thread(target=serve, name="keepalive", daemon=True)
    thread.start()
    return thread


def start_from_config(config, bot=None) -> Optional[threading.Thread]:
    """Start the server if enabled in `config.web`."""
    if not config.web.enabled:
        logger.info("Keep-alive server disabled")
        return None
    return start_keepalive(bot, host=config.web.host, port=config.web.port)
