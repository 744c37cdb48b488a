"""Application factory for the Dalgona diary API."""

from __future__ import annotations

from flask import Flask

from dalgona.core.config import BaseConfig, get_config
from dalgona.core.logger import configure_logging


def _load_config(
    app: Flask,
    config: str | type[BaseConfig] | object | None,
    instance_config_filename: str | None,
) -> None:
    app.config.from_object(get_config() if config is None else config)
    if instance_config_filename:
        # Instance folder overrides (secrets on a deployed host).
        app.config.from_pyfile(instance_config_filename, silent=True)


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str | None = "config.py",
) -> Flask:
    """
    Build the diary API.

    :param config: Config class, import path or object; ``APP_ENV`` decides
        when omitted.
    :param instance_relative_config: Read ``instance_config_filename`` from
        the Flask instance folder after ``config``.
    :param instance_config_filename: Override file name inside the instance folder.
    :returns: Configured application with every blueprint registered.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)
    _load_config(app, config, instance_config_filename if instance_relative_config else None)

    configure_logging(
        app.config.get("LOG_LEVEL", "INFO"),
        fmt=app.config.get("LOG_FORMAT", "json"),
        overrides=app.config.get("LOG_LEVELS"),
    )

    # Korean messages go out unescaped.
    app.json.ensure_ascii = bool(app.config.get("JSON_AS_ASCII", False))
    app.json.sort_keys = bool(app.config.get("JSON_SORT_KEYS", False))

    from dalgona import cli
    from dalgona.api import init_app as init_api
    from dalgona.core import errors, extensions, logger, web

    web.init_proxy(app)
    extensions.init_app(app)
    logger.init_app(app)
    web.init_cors(app)
    init_api(app)
    errors.init_app(app)
    cli.init_app(app)

    return app
