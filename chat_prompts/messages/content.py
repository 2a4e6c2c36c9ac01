"""
Flattening of message content into text.
"""

from .messages import (
    TextContentPart,
    UserMessageContent,
    AssistantMessage,
)


def user_message_content(content: UserMessageContent) -> str:
    """
    Returns the text of the content of a user message.

    Plain text is returned verbatim. For multi-part content, the text
    of each text part is returned in order, each followed by a
    newline; other parts (images) are skipped.
    """
    match content:
        case str():
            return content
        case list():
            text = ""
            for part in content:
                if isinstance(part, TextContentPart):
                    text += part.text + "\n"
            return text
        case _:  # do not remove this
            raise ValueError(f"Invalid user content: {content}")


def assistant_message_content(message: AssistantMessage) -> str | None:
    """
    Returns the text of an assistant message, the empty string for a
    message with tool calls and no content, and None if the message
    has neither content nor tool calls.
    """
    if message.content is not None:
        return message.content
    if message.tool_calls:
        return ""
    return None
