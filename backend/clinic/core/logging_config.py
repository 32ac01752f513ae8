"""
Centralized logging configuration for the clinic backend.

This module provides structured logging with:
- JSON formatting for production
- Console formatting for development
- Optional SQLAlchemy query timing
- Request/response logging
- Log rotation

Usage:
    from clinic.core.logging_config import setup_logging, get_logger

    # In main.py
    setup_logging(app, log_level="INFO")

    # In any module
    logger = get_logger(__name__)
    logger.info("Patient created", extra={"context": {"patient_id": 123}})
"""

import json
import logging
import logging.handlers
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from flask import Flask, g, request
from sqlalchemy import event
from sqlalchemy.engine import Engine

_sql_timing_registered = False


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging.
    Outputs logs as JSON with timestamp, level, message, and extra context.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "context"):
            log_data["context"] = getattr(record, "context", {})

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter with colors for development.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Format a copy so other handlers keep the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, self.RESET)
        colored.levelname = f"{color}{record.levelname:8}{self.RESET}"
        return super().format(colored)


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    enable_sql_echo: bool = False,
    log_to_file: bool = False,
    use_json_format: bool = False,
    log_dir: Optional[Path] = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        app: Flask application instance (enables request/response hooks)
        log_level: Logging level (int like logging.INFO or string "INFO")
        enable_sql_echo: Log SQL statements with their duration
        log_to_file: Write logs to rotating files under ``log_dir``
        use_json_format: Use JSON format instead of console format
        log_dir: Directory for log files (defaults to ``<backend>/logs``)
    """
    level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    if use_json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            ConsoleFormatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    root_logger.addHandler(console_handler)

    if log_to_file:
        _add_file_handlers(root_logger, level, log_dir)

    if enable_sql_echo:
        _register_sql_timing()

    if app is not None:
        _register_request_hooks(app)

    # Suppress noisy third-party loggers
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)

    app_logger = logging.getLogger("clinic")
    app_logger.setLevel(level)
    app_logger.info(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"sql_echo={enable_sql_echo}, log_to_file={log_to_file}, "
        f"json_format={use_json_format}"
    )


def _add_file_handlers(
    root_logger: logging.Logger, level: int, log_dir: Optional[Path]
) -> None:
    target = log_dir or Path(__file__).parent.parent.parent / "logs"
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        root_logger.warning(
            f"Failed to create logs directory: {e}. Logging will only go to console.",
            extra={"context": {"component": "logging_setup"}},
        )
        return

    file_formatter = JSONFormatter()  # Always JSON for files

    for filename, handler_level in (
        ("clinic.log", level),
        ("clinic_errors.log", logging.ERROR),
    ):
        try:
            handler = logging.handlers.RotatingFileHandler(
                target / filename,
                maxBytes=10 * 1024 * 1024,  # 10 MB
                backupCount=5,
                encoding="utf-8",
            )
        except OSError as e:
            root_logger.warning(
                f"Failed to create file handler for {filename}: {e}. "
                "Falling back to console-only logging.",
                extra={"context": {"component": "logging_setup"}},
            )
            continue
        handler.setLevel(handler_level)
        handler.setFormatter(file_formatter)
        root_logger.addHandler(handler)


def _register_sql_timing() -> None:
    global _sql_timing_registered
    if _sql_timing_registered:
        return
    _sql_timing_registered = True

    @event.listens_for(Engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.time())

    @event.listens_for(Engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        total_time = time.time() - conn.info["query_start_time"].pop(-1)
        logging.getLogger("sqlalchemy.performance").info(
            f"Query executed in {total_time * 1000:.2f}ms",
            extra={
                "context": {
                    "sql_query": statement[:500],
                    "sql_duration_ms": round(total_time * 1000, 2),
                }
            },
        )


def _register_request_hooks(app: Flask) -> None:
    @app.before_request
    def log_request():
        g.request_start_time = time.time()
        g.request_id = f"{time.time()}-{id(request)}"
        logging.getLogger("flask.request").info(
            f"{request.method} {request.path}",
            extra={
                "context": {
                    "request_id": g.request_id,
                    "method": request.method,
                    "path": request.path,
                    "remote_addr": request.remote_addr,
                }
            },
        )

    @app.after_request
    def log_response(response):
        if hasattr(g, "request_start_time"):
            duration_ms = (time.time() - g.request_start_time) * 1000
            logging.getLogger("flask.response").info(
                f"{request.method} {request.path} {response.status_code} in {duration_ms:.2f}ms",
                extra={
                    "context": {
                        "request_id": g.get("request_id"),
                        "status_code": response.status_code,
                        "doctor_id": g.get("doctor_id"),
                        "duration_ms": round(duration_ms, 2),
                    }
                },
            )
        return response


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Example:
        logger = get_logger(__name__)
        logger.info("Doctor logged in", extra={"context": {"doctor_id": 1}})
    """
    return logging.getLogger(name)
