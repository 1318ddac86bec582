"""
Exception hierarchy for csexp.

Every error carries a message plus optional context and suggestions, and
formats them consistently:

- Context information (byte offset, declared length, missing terminator)
- Suggestions for how to fix the input
- Clear, formatted error messages

Example::

    from csexp.exceptions import LengthMismatchError

    raise LengthMismatchError(
        declared=7,
        actual=6,
        offset=8,
        suggestions=["Check the decimal length prefix of the atom"],
    )

Parse errors are fatal for the ``parse``/``read`` call that raised them; no
partial result is returned alongside.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class CSExpError(Exception):
    """
    Base exception for all csexp errors.

    Attributes:
        context: Dictionary of contextual information (offset, lengths, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ParseError(CSExpError):
    """
    Reading an S-expression from bytes failed.

    Base class of every error raised by ``parse``, ``read`` and ``Reader``.
    The ``offset`` convenience parameter is the position in the stream at
    which the problem was detected.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        offset: Optional[int] = None,
    ):
        ctx = context or {}
        if offset is not None and "offset" not in ctx:
            ctx["offset"] = offset
        self.offset = offset
        super().__init__(message, ctx, suggestions)


class SyntaxError(ParseError):
    """
    Malformed input: an unrecognised leading byte, a bad escape sequence,
    or a hex/base64 string outside its alphabet.

    Example::

        raise SyntaxError("unrecognised character ')'", offset=0)
    """

    pass


class LengthMismatchError(ParseError):
    """
    A declared length prefix disagrees with the decoded byte count.

    The comparison is made against decoded bytes, so ``3#616263#`` is valid
    even though six hex digits were read.

    Attributes:
        declared: Length given by the decimal prefix
        actual: Number of bytes actually decoded
    """

    def __init__(
        self,
        declared: int,
        actual: int,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        offset: Optional[int] = None,
    ):
        self.declared = declared
        self.actual = actual
        ctx = dict(context or {})
        ctx.setdefault("declared", declared)
        ctx.setdefault("actual", actual)
        super().__init__(
            f"expected {declared} bytes; got {actual}", ctx, suggestions, offset
        )


class UnterminatedError(ParseError):
    """
    The stream ended before a required terminator.

    Attributes:
        terminator: The closing byte that was never seen (``)``, ``"``,
            ``#``, ``|``, ``]`` or ``}``)
    """

    def __init__(
        self,
        message: str,
        terminator: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        offset: Optional[int] = None,
    ):
        self.terminator = terminator
        ctx = dict(context or {})
        ctx.setdefault("expected", repr(terminator))
        super().__init__(message, ctx, suggestions, offset)


class UnexpectedEndOfStreamError(ParseError):
    """
    The stream ended where another byte was required.

    Distinct from a clean end at a value boundary, which ``read`` reports by
    returning ``None`` rather than raising.
    """

    pass


__all__ = [
    "CSExpError",
    "ParseError",
    "SyntaxError",
    "LengthMismatchError",
    "UnterminatedError",
    "UnexpectedEndOfStreamError",
]
