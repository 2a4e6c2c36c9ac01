# pyright: reportUnusedImport=false
# flake8: noqa

from .errors import (
    PromptError,
    NoMessagesError,
    NoAssistantMessageError,
    BadMessagesError,
    OperationError,
)
from .base import BuildChatPrompt, HistoryChatPrompt
from .deepseek import (
    DeepseekChatPrompt,
    DeepseekCoderPrompt,
    DeepseekChat2Prompt,
    DeepseekChat25Prompt,
    DeepseekToolPrompt,
)
from .cohere import CohereChatPrompt
from .library import (
    prompt_builders,
    register_prompt_builder,
    build_prompt,
)
