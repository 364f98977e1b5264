"""
Protocol Server

Line-delimited JSON transport. Every input line produces exactly one output
line, in input order. Lines are processed one at a time to completion.

Per-line flow:
- size check against the frame ceiling (no parse, no id)
- JSON parse (no id on failure)
- envelope shape check (id echoed when extractable)
- routing of ``list_actions`` to the registry and ``invoke`` to the dispatcher
"""

import json
import signal
from decimal import Decimal
from typing import Any, BinaryIO, Callable, Iterator, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from advisory_mcp.contracts.action_spec import InvokeRequest
from advisory_mcp.contracts.envelope import (
    RequestEnvelope,
    ResponseEnvelope,
    ValidationIssue,
    issues_from_error,
)
from advisory_mcp.contracts.error_spec import DispatchError, ErrorCode
from advisory_mcp.core.dispatcher import ActionDispatcher
from advisory_mcp.core.registry import ContractRegistry

logger = structlog.get_logger(__name__)

MAX_LINE_BYTES = 512 * 1024

INTERNAL_ERROR_MESSAGE = "Internal error while handling request"


class ServerShutdown(Exception):
    """Raised from the signal handler to break out of an idle read."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant: {name}")


def _parse_int(text: str) -> Any:
    # int() refuses very long digit strings on newer interpreters.
    try:
        return int(text)
    except ValueError:
        return Decimal(text)


def parse_json_line(line: bytes) -> Any:
    """
    Strict JSON parse.

    Raises ValueError for invalid UTF-8 or JSON, RecursionError for nesting
    deeper than the interpreter can decode.
    """
    return json.loads(
        line.decode("utf-8"),
        parse_constant=_reject_constant,
        parse_int=_parse_int,
    )


def size_label(max_bytes: int) -> str:
    if max_bytes >= 1024:
        return f"{max_bytes // 1024} KB"
    return f"{max_bytes} bytes"


def iter_frames(
    stream: BinaryIO,
    max_bytes: int,
    readline: Optional[Callable[[BinaryIO, int], bytes]] = None,
) -> Iterator[Optional[bytes]]:
    """
    Yield each line without its terminator, or None for an oversized line.

    Never buffers more than a few bytes past the ceiling; the remainder of an
    oversized line is read and discarded. ``readline(stream, size)`` replaces
    ``stream.readline(size)`` when given.
    """
    read = readline or (lambda source, size: source.readline(size))
    limit = max_bytes + 2  # room for "\r\n"
    while True:
        chunk = read(stream, limit + 1)
        if not chunk:
            return

        if chunk.endswith(b"\n") or len(chunk) <= limit:
            line = chunk[:-1] if chunk.endswith(b"\n") else chunk
            if line.endswith(b"\r"):
                line = line[:-1]
            yield line if len(line) <= max_bytes else None
            continue

        while chunk and not chunk.endswith(b"\n"):
            chunk = read(stream, limit + 1)
        yield None


def _extract_id(parsed: Any) -> Optional[str]:
    if isinstance(parsed, dict) and isinstance(parsed.get("id"), str):
        return parsed["id"]
    return None


class ProtocolServer:
    """Single-stream request/response server."""

    def __init__(
        self,
        registry: ContractRegistry,
        dispatcher: ActionDispatcher,
        max_line_bytes: int = MAX_LINE_BYTES,
    ):
        self.registry = registry
        self.dispatcher = dispatcher
        self.max_line_bytes = max_line_bytes
        self.requests_total = 0
        self.errors_total = 0
        self._stopping = False
        self._waiting = False

    # Lifecycle

    @property
    def stopping(self) -> bool:
        return self._stopping

    def request_stop(self) -> None:
        self._stopping = True

    def _on_signal(self, signum: int, frame: Any) -> None:
        logger.info("Shutdown signal received", signal=signal.Signals(signum).name, waiting=self._waiting)
        self.request_stop()
        # Only a blocked read is interrupted; a line already read is finished first.
        if self._waiting:
            raise ServerShutdown()

    def install_signal_handlers(self) -> None:
        signal.signal(signal.SIGTERM, self._on_signal)
        signal.signal(signal.SIGINT, self._on_signal)

    def _readline(self, stream: BinaryIO, size: int) -> bytes:
        self._waiting = True
        try:
            return stream.readline(size)
        finally:
            self._waiting = False

    def serve(self, instream: BinaryIO, outstream: BinaryIO) -> int:
        """Process lines until end of stream or a stop request. Returns lines handled."""
        handled = 0
        try:
            for frame in iter_frames(instream, self.max_line_bytes, self._readline):
                self.write(outstream, self.respond(frame))
                handled += 1
                if self._stopping:
                    break
        except ServerShutdown:
            pass

        logger.info(
            "Server stopped",
            lines_handled=handled,
            requests_total=self.requests_total,
            errors_total=self.errors_total,
        )
        return handled

    def respond(self, frame: Optional[bytes]) -> bytes:
        """Encoded response line for one frame; never raises."""
        try:
            return self.encode(self.handle_frame(frame))
        except Exception:
            logger.exception("Line handling failed unexpectedly")
            self.errors_total += 1
            return self.encode(ResponseEnvelope.failure(None, INTERNAL_ERROR_MESSAGE))

    @staticmethod
    def encode(response: ResponseEnvelope) -> bytes:
        body = json.dumps(response.to_wire(), ensure_ascii=False, separators=(",", ":"))
        return body.encode("utf-8") + b"\n"

    @staticmethod
    def write(outstream: BinaryIO, body: bytes) -> None:
        outstream.write(body)
        outstream.flush()

    # Per-line handling

    def _reject(
        self,
        code: ErrorCode,
        request_id: Optional[str],
        message: str,
        issues: Optional[List[ValidationIssue]] = None,
    ) -> ResponseEnvelope:
        self.errors_total += 1
        logger.info("Request rejected", error_code=code.value, request_id=request_id)
        return ResponseEnvelope.failure(request_id, message, issues)

    def handle_frame(self, frame: Optional[bytes]) -> ResponseEnvelope:
        """Turn one raw line into one response."""
        self.requests_total += 1

        if frame is None or len(frame) > self.max_line_bytes:
            return self._reject(
                ErrorCode.FRAME_TOO_LARGE,
                None,
                f"Request exceeds maximum size ({size_label(self.max_line_bytes)})",
            )

        try:
            parsed = parse_json_line(frame)
        except (ValueError, RecursionError):
            return self._reject(ErrorCode.MALFORMED_JSON, None, "Malformed JSON request")

        try:
            envelope = RequestEnvelope.model_validate(parsed)
        except PydanticValidationError as e:
            return self._reject(
                ErrorCode.INVALID_ENVELOPE,
                _extract_id(parsed),
                "Invalid request envelope",
                issues_from_error(e),
            )

        return self.route(envelope)

    def handle_line(self, line: str) -> ResponseEnvelope:
        return self.handle_frame(line.encode("utf-8"))

    def route(self, envelope: RequestEnvelope) -> ResponseEnvelope:
        if envelope.type == "list_actions":
            return ResponseEnvelope.success(envelope.id, self.registry.listing())

        if envelope.type == "invoke":
            return self._invoke(envelope)

        return self._reject(ErrorCode.UNSUPPORTED_REQUEST_TYPE, envelope.id, "Unsupported request type")

    def _invoke(self, envelope: RequestEnvelope) -> ResponseEnvelope:
        try:
            request = InvokeRequest.model_validate(envelope.payload)
        except PydanticValidationError as e:
            return self._reject(
                ErrorCode.INVALID_INVOKE_PAYLOAD,
                envelope.id,
                "Invalid invoke payload",
                issues_from_error(e),
            )

        try:
            result = self.dispatcher.invoke(request.action, request.input)
        except DispatchError as e:
            return self._reject(e.error_code, envelope.id, e.message)
        except Exception:
            logger.exception("Handler raised unexpectedly", action=request.action, request_id=envelope.id)
            return self._reject(ErrorCode.INTERNAL_ERROR, envelope.id, INTERNAL_ERROR_MESSAGE)

        return ResponseEnvelope.success(envelope.id, result.to_wire())
