"""
Data structures for chat conversations and tool definitions.

A conversation is a list of messages. Each message is one of
`SystemMessage`, `UserMessage`, `AssistantMessage`, or `ToolMessage`,
discriminated by the `role` field, so that a list of dictionaries
(for example, the body of a chat completion request) can be validated
in one go:

    ```python
    from chat_prompts.messages import parse_messages

    messages = parse_messages([
        {'role': "system", 'content': "You are a helpful assistant."},
        {'role': "user", 'content': [
            {'type': "text", 'text': "What is in this picture?"},
            {'type': "image_url", 'image_url': {'url': "https://..."}},
        ]},
    ])
    ```

Tool definitions follow the same layout as those sent to chat
completion endpoints, i.e. a `function` object with the name, an
optional description and the JSON schema of the parameters.
"""

from typing import Annotated, Any, Literal
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class TextContentPart(BaseModel):
    """A text segment of a multi-part user message."""

    type: Literal['text'] = 'text'
    text: str


class ImageUrl(BaseModel):
    url: str
    detail: str | None = None


class ImageContentPart(BaseModel):
    """An image segment of a multi-part user message. Prompt builders
    ignore these parts."""

    type: Literal['image_url'] = 'image_url'
    image_url: ImageUrl


ContentPart = Annotated[
    TextContentPart | ImageContentPart, Field(discriminator='type')
]

# The content of a user message: either plain text, or an ordered
# list of parts.
UserMessageContent = str | list[ContentPart]


class ToolCallFunction(BaseModel):
    name: str
    arguments: str = Field(
        default="{}",
        description="JSON-encoded arguments of the call",
    )


class ToolCall(BaseModel):
    """Represents a tool call requested by the model."""

    id: str
    type: Literal['function'] = 'function'
    function: ToolCallFunction


class SystemMessage(BaseModel):
    """A system message. The content may be empty."""

    role: Literal['system'] = 'system'
    content: str = ""
    name: str | None = None


class UserMessage(BaseModel):
    """A user message, with plain text or multi-part content."""

    role: Literal['user'] = 'user'
    content: UserMessageContent
    name: str | None = None


class AssistantMessage(BaseModel):
    """An assistant message.

    The content may be absent only if the message carries tool calls.
    This is not checked here: prompt builders raise
    NoAssistantMessageError when they meet a message with neither.
    """

    role: Literal['assistant'] = 'assistant'
    content: str | None = None
    name: str | None = None
    tool_calls: list[ToolCall] | None = None


class ToolMessage(BaseModel):
    """The result returned by a tool."""

    role: Literal['tool'] = 'tool'
    content: str
    tool_call_id: str | None = Field(
        default=None,
        description="ID of the tool call this message responds to",
    )


ChatMessage = Annotated[
    SystemMessage | UserMessage | AssistantMessage | ToolMessage,
    Field(discriminator='role'),
]


class ToolFunction(BaseModel):
    """The function exposed by a tool: name, description, and the
    JSON schema of its parameters."""

    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None

    model_config = ConfigDict(extra='ignore')


class Tool(BaseModel):
    """A tool definition, as given in chat completion requests."""

    type: Literal['function'] = 'function'
    function: ToolFunction

    model_config = ConfigDict(extra='ignore')


_messages_adapter = TypeAdapter(list[ChatMessage])
_tools_adapter = TypeAdapter(list[Tool])


def parse_messages(data: list[dict[str, Any]]) -> list[ChatMessage]:
    """
    Validate a list of dictionaries into a list of chat messages.

    Raises:
        ValidationError: if a message is malformed or its role is
            unknown.
    """
    return _messages_adapter.validate_python(data)


def parse_tools(data: list[dict[str, Any]]) -> list[Tool]:
    """
    Validate a list of dictionaries into a list of tool definitions.

    Raises:
        ValidationError: if a definition is malformed.
    """
    return _tools_adapter.validate_python(data)


def tools_to_json(tools: list[Tool]) -> str:
    """Compact JSON serialization of a list of tools, without absent
    optional fields."""
    return _tools_adapter.dump_json(tools, exclude_none=True).decode()


def tool_function_to_json(tool: Tool) -> str:
    """Two-space indented JSON serialization of the function of a
    tool, without absent optional fields."""
    return tool.function.model_dump_json(indent=2, exclude_none=True)
