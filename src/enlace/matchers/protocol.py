"""Matcher protocol.

A matcher classifies one candidate token. Accepting returns a recognized
token; rejecting returns None and never raises, so a rejected candidate is
simply left as written.

Thread Safety:
Matchers hold only immutable configuration (the TLD set, the scheme flag).
One instance may serve any number of concurrent scans.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from enlace.tokens import RecognizedToken, TokenKind


@runtime_checkable
class Matcher(Protocol):
    """Protocol for entity matchers."""

    @property
    def kind(self) -> TokenKind:
        """Entity kind this matcher recognizes."""
        ...

    def match(self, candidate: str) -> RecognizedToken | None:
        """Classify a candidate token.

        Args:
            candidate: Text buffered by the scanner between two boundaries

        Returns:
            The recognized token, or None to leave the candidate unchanged
        """
        ...
