# pyright: reportUnusedImport=false
# flake8: noqa

from .messages import (
    TextContentPart,
    ImageUrl,
    ImageContentPart,
    ContentPart,
    UserMessageContent,
    ToolCallFunction,
    ToolCall,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolMessage,
    ChatMessage,
    ToolFunction,
    Tool,
    parse_messages,
    parse_tools,
    tools_to_json,
    tool_function_to_json,
)
from .content import (
    user_message_content,
    assistant_message_content,
)
