"""
Errors raised by the prompt builders.

All errors derive from PromptError, itself a ValueError, so that
callers may catch either. A prompt builder never returns a partial
prompt: it either returns the complete prompt string or raises.
"""


class PromptError(ValueError):
    """Base class of the prompt construction errors."""


class NoMessagesError(PromptError):
    """The conversation contains no messages."""

    def __init__(self, msg: str = "There must be at least one message.") -> None:
        super().__init__(msg)


class NoAssistantMessageError(PromptError):
    """An assistant message has neither content nor tool calls."""

    def __init__(
        self,
        msg: str = "The assistant message must have content or tool calls.",
    ) -> None:
        super().__init__(msg)


class BadMessagesError(PromptError):
    """The order or roles of the messages do not fit the grammar."""


class OperationError(PromptError):
    """An internal step of the prompt construction failed."""
