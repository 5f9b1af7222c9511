"""structlog configuration for the sectionrag CLI.

Every log event goes to stderr; stdout is reserved for command results
(chunk counts, search hits) so ``sectionrag query ... | jq`` stays clean.

Two output shapes share one processor chain: a console renderer for
interactive runs and one JSON object per line for log shippers.  The CLI
picks JSON when ``--json-logs`` is given or ``APP_ENV=production``.
Standard-library loggers (httpx, openai) are routed through the same
renderer.
"""

import logging
import sys

import structlog


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _select_renderer(json_output: bool) -> structlog.types.Processor:
    """Return the final processor: JSON lines, or console text coloured on a TTY."""
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _route_stdlib_logging(level: int, renderer: structlog.types.Processor) -> None:
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_shared_processors(),
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # One httpx INFO line per embedded chunk would drown the progress events.
    logging.getLogger("httpx").setLevel(max(logging.WARNING, level))


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """Install the structlog pipeline for a CLI run.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL, any case.
        json_output: Emit JSON lines instead of console text.
    """
    level = logging.getLevelName(log_level.upper())
    renderer = _select_renderer(json_output)

    structlog.configure(
        processors=[*_shared_processors(), renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    _route_stdlib_logging(level, renderer)
