"""log.py - subsystem logger and tracer.

every line goes to stderr: stdout belongs to the JSON the editor reads.
each log call is also recorded as an event on the current span, so a
--trace run shows what happened inside which command.
"""

import sys
from contextlib import contextmanager
from datetime import datetime

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    SimpleSpanProcessor,
    ConsoleSpanExporter,
)

from neo_reviewer import __version__

# ============================================================
# TRACER SETUP
# ============================================================

_provider = TracerProvider()
_tracer = _provider.get_tracer("neo_reviewer", __version__)
_console_export = False


def enable_console_export():
    """turn on span export to stderr."""
    global _console_export
    if not _console_export:
        _provider.add_span_processor(
            SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr))
        )
        _console_export = True


def add_exporter(exporter):
    """add a custom span exporter (OTLP, Jaeger, etc)."""
    _provider.add_span_processor(SimpleSpanProcessor(exporter))


# ============================================================
# LOGGER
# ============================================================

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_level = LEVELS["info"]


def set_level(level):
    """only messages at or above level are printed. spans get everything."""
    global _level
    _level = LEVELS.get(str(level).lower(), LEVELS["info"])


def get_level() -> str:
    for name, value in LEVELS.items():
        if value == _level:
            return name
    return "info"


def log(subsystem: str, level: str, message: str, **attrs):
    """log to stderr and record as a span event."""
    if LEVELS.get(level, LEVELS["info"]) >= _level:
        ts = datetime.now().strftime("%H:%M:%S")
        print(f"[{ts} neo-reviewer:{subsystem}] {message}", file=sys.stderr)

    span = trace.get_current_span()
    if span and span.is_recording():
        span.add_event(
            f"neo_reviewer.{subsystem}.{level}",
            attributes={"message": message, "subsystem": subsystem,
                        **{k: str(v) for k, v in attrs.items()}},
        )


def debug(subsystem: str, message: str, **attrs):
    log(subsystem, "debug", message, **attrs)


def info(subsystem: str, message: str, **attrs):
    log(subsystem, "info", message, **attrs)


def warn(subsystem: str, message: str, **attrs):
    log(subsystem, "warn", message, **attrs)


def error(subsystem: str, message: str, **attrs):
    log(subsystem, "error", message, **attrs)


# ============================================================
# SPANS
# ============================================================

@contextmanager
def span(name: str, subsystem: str = "neo_reviewer", **attrs):
    """Create a traced span. Logs inside it become its events.

    Usage:
        with span("fetch", subsystem="commands", url=url):
            client.get_pr(pr_ref)
            # nested spans (github requests, git calls) are children
    """
    with _tracer.start_as_current_span(
        f"neo_reviewer.{subsystem}.{name}",
        attributes={f"neo_reviewer.{k}": str(v) for k, v in attrs.items()},
    ) as s:
        s.set_attribute("neo_reviewer.subsystem", subsystem)
        yield s
