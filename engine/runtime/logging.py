"""Engine logging implementation.

Console output is written synchronously. When a run log file is configured,
every record goes through a queue so file I/O happens on a listener thread.
"""

from __future__ import annotations

import logging
import queue
from dataclasses import dataclass, field
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from engine.api.logging import EngineLoggingConfig, JsonFormatter

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(slots=True)
class _LoggingPipeline:
    handlers: list[logging.Handler]
    file_path: Path | None = None
    listener: QueueListener | None = field(default=None)
    root_handler: logging.Handler | None = field(default=None)
    root: logging.Logger | None = field(default=None)

    def start(self, root: logging.Logger) -> None:
        self.root = root
        if self.file_path is None:
            self.root_handler = self.handlers[0]
            root.addHandler(self.root_handler)
            return
        log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
        self.root_handler = QueueHandler(log_queue)
        root.addHandler(self.root_handler)
        self.listener = QueueListener(log_queue, *self.handlers, respect_handler_level=True)
        self.listener.start()

    def stop(self) -> None:
        if self.root is not None and self.root_handler is not None:
            self.root.removeHandler(self.root_handler)
        self.root_handler = None
        self.root = None
        if self.listener is not None:
            self.listener.stop()
            self.listener = None
        for handler in self.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.close()


_PIPELINE: _LoggingPipeline | None = None


def configure_engine_logging(config: EngineLoggingConfig) -> None:
    """Replace root handlers with a console handler and an optional run log file."""
    global _PIPELINE

    shutdown_engine_logging()
    level = logging.getLevelNamesMapping().get(config.level_name.strip().upper(), logging.INFO)

    console = logging.StreamHandler()
    console.setFormatter(_resolve_formatter(config.console_format))
    pipeline = _LoggingPipeline(handlers=[console])
    if config.file_path:
        pipeline.file_path = Path(config.file_path)
        pipeline.file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(pipeline.file_path, mode="a", encoding="utf-8", delay=True)
        file_handler.setFormatter(_resolve_formatter(config.file_format))
        pipeline.handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    pipeline.start(root)
    _PIPELINE = pipeline


def active_log_file() -> Path | None:
    """Run log file the current pipeline writes to, if any."""
    if _PIPELINE is None:
        return None
    return _PIPELINE.file_path


def shutdown_engine_logging() -> None:
    """Drain queued records and close the run log file."""
    global _PIPELINE

    if _PIPELINE is None:
        return
    _PIPELINE.stop()
    _PIPELINE = None


def _resolve_formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT)
