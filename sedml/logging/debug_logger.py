# sedml/logging/debug_logger.py
"""
Event logging for the SED-ML reader, writer and object model.

Every record carries an event keyword from a fixed vocabulary plus key=value
fields. The document being processed and the id of the element being read are
bound as context and stamped onto each record emitted inside the binding, so a
diagnostic can be traced to the element that raised it. XML payloads and
oversize values go to content-addressed blob files and the log line keeps a
reference to them.

The library only emits records. configure_root_logging() is for applications
that want the same handlers the test and debugging setups use.
"""

import contextvars
import hashlib
import json
import logging
import os
import traceback
from contextlib import contextmanager
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from lxml import etree

from ._config import BLOB_DIR, INCLUDE_STACK_TRACES, LOG_DIR, MAX_FIELD_LENGTH

# ==================== Event Types ====================


class EventType(Enum):
    """Fixed vocabulary of events for consistent grepping and diffing."""

    DOCUMENT_READ_START = "DOCUMENT_READ_START"
    DOCUMENT_READ_END = "DOCUMENT_READ_END"
    DOCUMENT_WRITE = "DOCUMENT_WRITE"
    XML_PARSE_ERROR = "XML_PARSE_ERROR"
    ELEMENT_UNRECOGNIZED = "ELEMENT_UNRECOGNIZED"
    MATH_REJECTED = "MATH_REJECTED"
    DIAGNOSTIC_LOGGED = "DIAGNOSTIC_LOGGED"
    CONSISTENCY_CHECK = "CONSISTENCY_CHECK"

    def __str__(self) -> str:
        return self.value


# ==================== Context ====================

# Context fields, in the order they are printed
CONTEXT_KEYS = ("document_id", "element_id")

_context: Dict[str, contextvars.ContextVar] = {key: contextvars.ContextVar(key, default=None) for key in CONTEXT_KEYS}


@contextmanager
def bind(**kwargs):
    """
    Bind document_id and/or element_id for the duration of the block.

    A None value leaves any outer binding in place, so callers can pass an
    optional id straight through.

    Raises:
        TypeError: For any key other than document_id or element_id
    """
    unknown = sorted(set(kwargs) - set(CONTEXT_KEYS))
    if unknown:
        raise TypeError(f"Cannot bind {', '.join(unknown)}")
    tokens = [_context[key].set(value) for key, value in kwargs.items() if value is not None]
    try:
        yield
    finally:
        for token in reversed(tokens):
            token.var.reset(token)


def current_context() -> Dict[str, Any]:
    """Return the bound context values, omitting unbound keys."""
    return {key: var.get() for key, var in _context.items() if var.get() is not None}


class ContextFilter(logging.Filter):
    """Stamp the bound context onto each record. Never drops a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in current_context().items():
            setattr(record, key, value)
        return True


# ==================== Emitting ====================


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def event(logger: logging.Logger, ev: EventType, msg: str = "", /, **kw) -> None:
    """
    Log an event at INFO.

    Args:
        logger: Logger to emit on
        ev: Event keyword
        msg: Message (defaults to the keyword)
        **kw: Fields printed as key=value
    """
    logger.info(msg or str(ev), extra={"event": str(ev), **kw})


# ==================== Formatting ====================

# Attributes every LogRecord has; anything else on a record is a field
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
    "event",
}


class TruncatingFormatter(logging.Formatter):
    """
    One line per record: timestamp, level, logger, event, then key=value fields.

    Context fields come first, the rest follow in key order. lxml elements are
    serialised. Values of XML_KEYS, and any value longer than MAX_FIELD_LENGTH,
    are stored as blobs and printed as blob:<path>.
    """

    XML_KEYS = {"xml_document", "xml_fragment"}

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="milliseconds")
        keyword = getattr(record, "event", None) or record.getMessage()
        line = f"{ts} {record.levelname[:5]:<5} {record.name[:35]:<35} {keyword}"

        fields = [f"{key}={self.render(key, value)}" for key, value in self._fields(record)]
        if fields:
            line += " " + " ".join(fields)

        if record.exc_info and INCLUDE_STACK_TRACES:
            line += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return line

    @staticmethod
    def _fields(record: logging.LogRecord) -> List[Tuple[str, Any]]:
        extras = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        context = [(key, extras.pop(key)) for key in CONTEXT_KEYS if key in extras]
        return context + sorted(extras.items())

    def render(self, key: str, value: Any) -> str:
        """Render one field value, moving XML and oversize text to a blob."""
        if isinstance(value, etree._Element):
            text = etree.tostring(value, encoding="unicode")
        elif isinstance(value, (dict, list)):
            text = json.dumps(value, separators=(",", ":"), default=str)
        elif isinstance(value, bytes):
            try:
                text = value.decode("utf-8")
            except UnicodeDecodeError:
                text = repr(value)
        else:
            text = str(value)

        if key in self.XML_KEYS or len(text) > MAX_FIELD_LENGTH:
            return f"blob:{_store_blob(text)}"
        return text


# ==================== Handlers ====================


class DailyFileHandler(logging.FileHandler):
    """
    File handler writing to <log_dir>/YYYY-MM-DD.log.

    The file is chosen from each record's timestamp and reopened when the date
    changes. Nothing is opened until the first record arrives.
    """

    def __init__(self, log_dir: Path):
        self.log_dir = Path(log_dir)
        self._current_date = None
        super().__init__(self._path_for(datetime.now().date()), encoding="utf-8", delay=True)

    def _path_for(self, day) -> Path:
        return self.log_dir / f"{day:%Y-%m-%d}.log"

    def emit(self, record: logging.LogRecord) -> None:
        try:
            day = datetime.fromtimestamp(record.created).date()
            if day != self._current_date:
                if self.stream is not None:
                    self.stream.close()
                    self.stream = None
                self.baseFilename = os.path.abspath(self._path_for(day))
                self._current_date = day
            if self.stream is None:
                self.stream = self._open()
            self.stream.write(self.format(record) + self.terminator)
            self.flush()
        except Exception:
            self.handleError(record)


# Logger levels set by configure_root_logging: (DEBUG=1, otherwise)
_PACKAGE_LEVELS = {
    "sedml": (logging.DEBUG, logging.INFO),
    "sedml.services": (logging.DEBUG, logging.WARNING),
    "sedml.models": (logging.DEBUG, logging.WARNING),
}


def configure_root_logging(log_dir: Optional[Path] = None) -> None:
    """
    Attach a daily file handler and a console handler to the root logger.

    Does nothing when the root logger already has handlers.

    Args:
        log_dir: Directory for daily log files (defaults to SEDML_LOG_DIR)
    """
    root = logging.getLogger()
    if root.handlers:
        return

    log_dir = Path(log_dir) if log_dir is not None else LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    formatter = TruncatingFormatter()
    context_filter = ContextFilter()
    for handler in (DailyFileHandler(log_dir), logging.StreamHandler()):
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    debug_mode = os.getenv("DEBUG", "1") == "1"
    for name, (verbose, quiet) in _PACKAGE_LEVELS.items():
        logging.getLogger(name).setLevel(verbose if debug_mode else quiet)


# ==================== Internal Utilities ====================


def _store_blob(text: str) -> str:
    """
    Write text to BLOB_DIR/<date>/<sha256>.txt, once per distinct payload.

    Returns:
        The blob path, relative to the working directory when it lies below it
    """
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    blob_dir = BLOB_DIR / datetime.now().strftime("%Y-%m-%d")
    blob_dir.mkdir(parents=True, exist_ok=True)
    blob_path = blob_dir / f"{digest}.txt"
    if not blob_path.exists():
        blob_path.write_text(text, encoding="utf-8")

    try:
        return blob_path.relative_to(Path.cwd()).as_posix()
    except ValueError:
        return blob_path.as_posix()
