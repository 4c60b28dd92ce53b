import logging
import os

import structlog

_HANDLER_NAME = "oshi"


def setup_logging(level: str | None = None, dev: bool | None = None) -> None:
    """Configure structlog on top of the stdlib logging module.

    Args:
        level: Log level name. Defaults to OSHI_LOG_LEVEL, or INFO.
        dev: Human readable console output instead of JSON lines.
            Defaults to OSHI_LOG_FORMAT == "dev".

    Calling it again replaces the handler installed by a previous call.
    """
    level = (level or os.getenv("OSHI_LOG_LEVEL", "INFO")).upper()
    if dev is None:
        dev = os.getenv("OSHI_LOG_FORMAT", "") == "dev"

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    processors.append(structlog.dev.set_exc_info if dev else structlog.processors.format_exc_info)

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer = structlog.dev.ConsoleRenderer(event_key="message") if dev else structlog.processors.JSONRenderer()
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # Logs go to stderr so command output on stdout stays parseable.
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for h in list(root.handlers):
        if h.get_name() == _HANDLER_NAME:
            root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)

    # httpx logs every request at INFO.
    if level != "DEBUG":
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
