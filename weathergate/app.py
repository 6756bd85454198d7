# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import sys

from flask import Flask

from weathergate.container import Container
from weathergate.infrastructure.observability import configure_metrics
from weathergate.shared.config import AppConfig, load_config
from weathergate.shared.errors import StorageIOError
from weathergate.shared.logging import logger, setup_logging
from weathergate.shared.middleware.error_handler import configure_error_handling
from weathergate.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    if container is not None:
        config = container.config
    config = config or load_config()
    setup_logging(
        "DEBUG" if config.debug_logging else config.log_level,
        config.log_file,
    )

    container = container or Container(config)
    container.open_stores()

    if config.static_dir is not None:
        app = Flask(__name__, static_folder=str(config.static_dir.resolve()), static_url_path="")
    else:
        app = Flask(__name__, static_folder=None)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_metrics(app, enabled=config.observability.metrics_enabled)

    app.extensions["weathergate"] = container
    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.weather_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(
        f"app: initialized users={container.user_directory.count()} "
        f"sessions={container.session_registry.count()}"
    )
    return app


def main() -> None:
    config = load_config()
    try:
        app = create_app(config)
    except StorageIOError as exc:
        logger.critical(f"app: cannot start, backing store {exc.path} is unusable: {exc.reason}")
        sys.exit(1)
    app.run(host="0.0.0.0", port=config.port)


if __name__ == "__main__":
    main()
