"""
Structured logging configuration using structlog.

- Structured JSON output for easy parsing and analysis
- Request-aware logging (request IDs, endpoint, client address)
- Signing secrets and tokens are redacted before anything is written
- Clean human-readable console output in development

Usage in Flask:
    from app.structured_logging import configure_structlog
    configure_structlog(app, role="web")

Usage in code:
    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("signed_url_issued", path="/folder/file.webp", expires=1700000300)
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

try:
    from pythonjsonlogger.json import JsonFormatter as jsonlogger
except ImportError:
    # python-json-logger < 3.1
    from pythonjsonlogger.jsonlogger import JsonFormatter as jsonlogger  # type: ignore

# Module-level guard to avoid duplicate configuration
_STRUCTLOG_CONFIGURED = False

SENSITIVE_KEYS = frozenset(
    {
        "password",
        "api_key",
        "secret",
        "token",
        "authorization",
        "cookie",
    }
)

NOISY_PATHS = ("/api/health", "/health")


def _ensure_dir(path: str) -> None:
    """Ensure directory exists."""
    try:
        Path(path).mkdir(parents=True, exist_ok=True)
    except OSError:
        pass


def get_log_dir(instance_path: str, override: str | None = None) -> str:
    """Resolve the directory where log files will be stored.

    Order of preference:
    1) explicit override argument
    2) LOG_DIR env var
    3) <instance_path>/logs
    """
    base = override or os.environ.get("LOG_DIR")
    if not base:
        base = os.path.join(instance_path, "logs")
    _ensure_dir(base)
    return base


def _add_request_context(logger, method_name, event_dict):
    """Add Flask request context to log events."""
    from flask import g, has_request_context, request

    if has_request_context():
        event_dict.setdefault("endpoint", request.endpoint)
        event_dict.setdefault("method", request.method)
        event_dict.setdefault("request_path", request.path)
        event_dict.setdefault("remote_addr", request.remote_addr)
        if hasattr(g, "request_id"):
            event_dict["request_id"] = g.request_id
    return event_dict


def _filter_health_checks(logger, method_name, event_dict):
    """Drop INFO/WARNING events emitted while serving health checks."""
    if event_dict.get("level") in ("info", "warning"):
        path = event_dict.get("request_path") or ""
        if any(path.startswith(p) for p in NOISY_PATHS):
            raise structlog.DropEvent
    return event_dict


def _censor_sensitive_data(logger, method_name, event_dict):
    """Remove or redact sensitive data from logs."""
    for key in list(event_dict.keys()):
        if any(sens in key.lower() for sens in SENSITIVE_KEYS):
            event_dict[key] = "***REDACTED***"
    return event_dict


def _build_json_handler(path: str, level: int) -> RotatingFileHandler:
    """Build a rotating file handler with JSON formatting."""
    # 50 MB per file, keep 10 backups
    handler = RotatingFileHandler(path, maxBytes=50 * 1024 * 1024, backupCount=10)
    handler.setLevel(level)
    handler.setFormatter(
        jsonlogger(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    return handler


def _build_console_handler(
    level: int, use_colors: bool = True
) -> logging.StreamHandler:
    """Build a console handler with human-readable formatting."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if use_colors and sys.stderr.isatty():
        fmt, datefmt = "%(asctime)s [%(levelname)-8s] %(name)-25s: %(message)s", "%H:%M:%S"
    else:
        fmt, datefmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    return handler


def get_log_level(app_config: dict | None = None) -> int:
    """Determine log level from config or environment."""
    if app_config and "LOG_LEVEL" in app_config:
        level_name = str(app_config["LOG_LEVEL"])
    else:
        level_name = os.environ.get("LOG_LEVEL", "INFO")

    return getattr(logging, level_name.upper(), logging.INFO)


def configure_component_loggers(base_level: int) -> None:
    """Quiet third-party loggers unless running at DEBUG."""
    logging.getLogger("werkzeug").setLevel(
        logging.DEBUG if base_level <= logging.DEBUG else logging.WARNING
    )
    logging.getLogger("flask_limiter").setLevel(max(base_level, logging.INFO))
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def configure_structlog(app, role: str = "web") -> dict:
    """Configure structlog for the Flask application.

    Args:
        app: Flask app instance (must have .instance_path and .config)
        role: process role used in the debug banner

    Returns:
        dict with keys: log_dir, app_log, error_log
    """
    global _STRUCTLOG_CONFIGURED

    # Never configure file logging in tests
    if app.config.get("TESTING"):
        if not _STRUCTLOG_CONFIGURED:
            structlog.configure(
                processors=[
                    structlog.processors.add_log_level,
                    structlog.processors.TimeStamper(fmt="iso"),
                    _censor_sensitive_data,
                    structlog.dev.ConsoleRenderer(),
                ],
                wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
                context_class=dict,
                logger_factory=structlog.PrintLoggerFactory(),
                cache_logger_on_first_use=True,
            )
            _STRUCTLOG_CONFIGURED = True
        return {"log_dir": "", "app_log": "", "error_log": ""}

    log_dir = get_log_dir(app.instance_path)
    app_log_path = os.path.join(log_dir, "app.json")
    error_log_path = os.path.join(log_dir, "error.json")

    level = get_log_level(app.config)

    if not _STRUCTLOG_CONFIGURED:
        root = logging.getLogger()
        root.setLevel(level)
        root.handlers.clear()

        root.addHandler(_build_json_handler(app_log_path, level))
        # Separate error log (WARNING and above only)
        root.addHandler(_build_json_handler(error_log_path, logging.WARNING))
        root.addHandler(_build_console_handler(level, use_colors=app.debug))

        configure_component_loggers(level)

        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_logger_name,
            structlog.processors.CallsiteParameterAdder(
                {
                    structlog.processors.CallsiteParameter.FILENAME,
                    structlog.processors.CallsiteParameter.LINENO,
                }
            ),
            _add_request_context,
            _filter_health_checks,
            _censor_sensitive_data,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(level),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

        _STRUCTLOG_CONFIGURED = True

    logger = structlog.get_logger(__name__)
    logger.debug(
        "logging_configured",
        role=role,
        log_dir=log_dir,
        level=logging.getLevelName(level),
    )

    return {"log_dir": log_dir, "app_log": app_log_path, "error_log": error_log_path}
