"""
Exception hierarchy for the TaskPilot extraction core.

Provides layered exception structure for generation, markup and
orchestration failures. All exceptions include context for observability
and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the extraction core
"""

from typing import Any


class TaskPilotException(Exception):
    """Base exception for all TaskPilot core errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidGenerationResponse(TaskPilotException):
    """Raised when the generation service returns empty or unparseable content."""

    def __init__(
        self,
        message: str,
        chunk_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize invalid generation response error.

        Args:
            message: Error message
            chunk_index: Index of the chunk whose extraction failed
            details: Additional context
        """
        details = dict(details or {})
        if chunk_index is not None:
            details["chunk_index"] = chunk_index
        self.chunk_index = chunk_index
        super().__init__(message, details)

    def attach_chunk_index(self, chunk_index: int) -> "InvalidGenerationResponse":
        """Record the originating chunk on an error raised below the pipeline."""
        self.chunk_index = chunk_index
        self.details["chunk_index"] = chunk_index
        return self


class GenerationTimeoutError(InvalidGenerationResponse):
    """Raised when a generation call exceeds its configured timeout."""

    def __init__(
        self,
        timeout_seconds: float,
        chunk_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize generation timeout error.

        Args:
            timeout_seconds: Timeout that was exceeded
            chunk_index: Index of the chunk whose call timed out
            details: Additional context
        """
        details = dict(details or {})
        details["timeout_seconds"] = timeout_seconds
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Generation call timed out after {timeout_seconds}s",
            chunk_index=chunk_index,
            details=details,
        )


class MalformedEquationMarkup(TaskPilotException):
    """Raised when an equation open marker is never closed."""

    def __init__(
        self,
        position: int,
        open_marker: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize malformed markup error.

        Args:
            position: Offset of the unmatched open marker in the task string
            open_marker: The open delimiter that was left unterminated
            details: Additional context
        """
        details = dict(details or {})
        details["position"] = position
        self.position = position
        super().__init__(f"Unterminated equation starting with {open_marker!r}", details)


class ChunkCountMismatch(TaskPilotException):
    """Raised when collected per-chunk results do not match the dispatched chunks."""

    def __init__(
        self,
        expected: int,
        received: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize chunk count mismatch error.

        Args:
            expected: Number of chunks dispatched
            received: Number of results collected
            details: Additional context
        """
        details = dict(details or {})
        details.update({"expected": expected, "received": received})
        self.expected = expected
        self.received = received
        super().__init__(
            f"Expected {expected} chunk results, received {received}",
            details,
        )
