"""
Recovery of structured validation errors from rule engine failures.

The engine does not report validation failures as typed errors: they
show up as JSON fragments inside a rendered diagnostic, sometimes nested
inside a node error. Extraction is therefore an ordered chain of
strategies over the diagnostic text, first success wins:

1. StructuredEnvelope - bracket patterns locate a JSON fragment which is
   parsed as a validation-error envelope.
2. SourceLine - a schema violation rendered as ``<path>: <message>``
   lines, the form a node error carries in its ``source``.
3. ManualKeyScan - for enum violations, ad-hoc substring scan for
   "message"/"path" pairs in possibly truncated JSON.

A failure nothing can be recovered from yields None and the caller
surfaces the original error.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Protocol

from pydantic import ValidationError

from .errors import EngineEvaluationError
from .schemas import FieldError, ValidationErrorDetails, ValidationErrorSource

logger = logging.getLogger(__name__)

UNKNOWN_PATH = "/input/unknown"
ENUM_VIOLATION_MARKER = "is not one of"

# (opening substring, closing substring), in priority order.
BRACKET_PATTERNS: list[tuple[str, str]] = [
    ('{"source":{"errors":', '"type":"Validation"}'),
    ('{"errors":', '"type":"Validation"}'),
    ('"errors":[', "]"),
]

# "/input/relationship: \"brother\" is not one of ..."
SOURCE_LINE_RE = re.compile(r"^(/[^\s:]*): (.+)$")


class ExtractionStrategy(Protocol):
    """One way of turning diagnostic text into field errors."""

    name: str

    def extract(self, text: str) -> list[FieldError] | None: ...


def parse_envelope(fragment: str) -> list[FieldError] | None:
    """Parse a fragment as ``{"source":{"errors":[..]}}`` or ``{"errors":[..]}``."""
    if not fragment.startswith("{"):
        fragment = "{" + fragment + "}"

    try:
        errors = ValidationErrorDetails.model_validate_json(fragment).source.errors
    except ValidationError:
        try:
            errors = ValidationErrorSource.model_validate_json(fragment).errors
        except ValidationError:
            return None

    return errors or None


class StructuredEnvelope:
    """Locate a bracketed JSON fragment and parse it as an error envelope."""

    name = "structured_envelope"

    def __init__(self, patterns: list[tuple[str, str]] | None = None):
        self.patterns = patterns or BRACKET_PATTERNS

    def extract(self, text: str) -> list[FieldError] | None:
        for start_pattern, end_pattern in self.patterns:
            fragment = self._bracketed(text, start_pattern, end_pattern)
            if fragment is None:
                continue
            errors = parse_envelope(fragment)
            if errors:
                return errors
        return None

    @staticmethod
    def _bracketed(text: str, start_pattern: str, end_pattern: str) -> str | None:
        start = text.find(start_pattern)
        if start == -1:
            return None
        end = text.find(end_pattern, start + len(start_pattern))
        if end == -1:
            return None
        return text[start:end + len(end_pattern)]


class ManualKeyScan:
    """Pick a single message/path out of an enum-violation rendering.

    Works on comma-separated pieces with plain substring search, so it
    copes with text that is not valid JSON.
    """

    name = "manual_key_scan"

    message_key = '"message":"'
    path_key = '"path":"'

    def extract(self, text: str) -> list[FieldError] | None:
        if ENUM_VIOLATION_MARKER not in text:
            return None

        message = ""
        path = ""
        for piece in text.split(","):
            message = self._value_after(piece, self.message_key) or message
            path = self._value_after(piece, self.path_key) or path

        if not message:
            return None
        return [FieldError(message=message, path=path or UNKNOWN_PATH)]

    @staticmethod
    def _value_after(piece: str, key: str) -> str | None:
        start = piece.find(key)
        if start == -1:
            return None
        value_start = start + len(key)
        end = piece.find('"', value_start)
        if end == -1:
            return None
        return piece[value_start:end]


class SourceLine:
    """Read ``<path>: <message>`` lines reporting enum violations."""

    name = "source_line"

    def extract(self, text: str) -> list[FieldError] | None:
        errors = []
        for line in text.splitlines():
            line = line.strip()
            if ENUM_VIOLATION_MARKER not in line:
                continue
            match = SOURCE_LINE_RE.match(line)
            if match:
                errors.append(FieldError(path=match.group(1), message=match.group(2)))
        return errors or None


DEFAULT_STRATEGIES: list[ExtractionStrategy] = [
    StructuredEnvelope(),
    SourceLine(),
    ManualKeyScan(),
]


def diagnostic_texts(error: EngineEvaluationError | BaseException | str) -> list[str]:
    """Texts to scan, most specific first.

    A node error renders as ``{"type":"NodeError",...,"source":...}``; its
    source (the nested cause) comes before the full rendering.
    """
    if isinstance(error, EngineEvaluationError):
        text = error.detail
    else:
        text = str(error)

    texts = []
    nested = _node_error_source(text)
    if nested:
        texts.append(nested)
    if text not in texts:
        texts.append(text)
    return texts


def _node_error_source(text: str) -> str | None:
    # The rendering may be followed by a backtrace.
    try:
        rendered, _ = json.JSONDecoder().raw_decode(text.lstrip())
    except ValueError:
        return None
    if not isinstance(rendered, dict) or rendered.get("type") != "NodeError":
        return None

    source = rendered.get("source")
    if source is None:
        return None
    if isinstance(source, str):
        return source
    return json.dumps(source, separators=(",", ":"))


class ErrorExtractor:
    """Runs the strategy chain over every diagnostic text of a failure."""

    def __init__(self, strategies: list[ExtractionStrategy] | None = None):
        self.strategies = list(strategies) if strategies is not None else list(DEFAULT_STRATEGIES)

    def extract(
        self, error: EngineEvaluationError | BaseException | str
    ) -> list[FieldError] | None:
        texts = diagnostic_texts(error)
        for strategy in self.strategies:
            for text in texts:
                errors = strategy.extract(text)
                if errors:
                    logger.debug("Recovered %d field error(s) via %s", len(errors), strategy.name)
                    return errors
        return None


def extract_validation_errors(
    error: EngineEvaluationError | BaseException | str,
) -> list[FieldError] | None:
    """Recover field errors from an engine failure using the default chain."""
    return ErrorExtractor().extract(error)
