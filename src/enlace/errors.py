"""Exception classes for enlace.

Rejected tokens are never errors: a matcher that does not accept a token
leaves it unmodified. Exceptions are reserved for caller contract violations.
"""

from __future__ import annotations


class EnlaceError(Exception):
    """Base exception for all enlace errors.

    Subclass this for specific error categories.
    """

    pass


class OptionError(EnlaceError):
    """Invalid option value.

    Raised when LinkOptions is constructed with a value that can never work,
    e.g. a handler slot holding a non-callable.
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize option error.

        Args:
            option: Name of the offending option (e.g., "mention_handler")
            message: Description of the problem
        """
        self.option = option
        super().__init__(f"Option '{option}': {message}")


class HandlerError(EnlaceError):
    """Custom handler broke its return contract.

    Handlers must return either ``(replacement, user_acc)`` or a bare
    replacement string.
    """

    def __init__(self, handler: str, message: str) -> None:
        """Initialize handler error.

        Args:
            handler: Option slot the handler was installed in
            message: Description of the contract violation
        """
        self.handler = handler
        super().__init__(f"Handler '{handler}': {message}")
