"""
A library of the prompt builders, indexed by template name.

The supported template names are listed in
`chat_prompts.config.PromptTemplateType`:

    - "deepseek-chat"
    - "deepseek-coder"
    - "deepseek-chat-2"
    - "deepseek-chat-25"
    - "deepseek-tool"
    - "cohere-chat"

**Example**:

    ```python
    from chat_prompts.prompts.library import prompt_builders, build_prompt

    builder = prompt_builders["deepseek-coder"]
    prompt: str = builder.build(messages)

    # the same, using the template configured in config.toml
    prompt: str = build_prompt(messages)
    ```

Builders are stateless, and the same instance is returned for each
lookup of a name. A custom builder may be registered with
`register_prompt_builder`.
"""

from chat_prompts.config.config import PromptTemplateType, Settings
from chat_prompts.messages import ChatMessage, Tool
from .base import BuildChatPrompt
from .cohere import CohereChatPrompt
from .deepseek import (
    DeepseekChatPrompt,
    DeepseekCoderPrompt,
    DeepseekChat2Prompt,
    DeepseekChat25Prompt,
    DeepseekToolPrompt,
)
from .lazy_dict import LazyLoadingDict


# The factory function that creates the builders.
def _create_prompt_builder(template: PromptTemplateType) -> BuildChatPrompt:
    match template:
        case 'deepseek-chat':
            return DeepseekChatPrompt()
        case 'deepseek-coder':
            return DeepseekCoderPrompt()
        case 'deepseek-chat-2':
            return DeepseekChat2Prompt()
        case 'deepseek-chat-25':
            return DeepseekChat25Prompt()
        case 'deepseek-tool':
            return DeepseekToolPrompt()
        case 'cohere-chat':
            return CohereChatPrompt()
        case _:  # do not remove this
            raise ValueError(f"Invalid prompt template: {template}")


# a module-level typed dictionary for the prompt builders
prompt_builders = LazyLoadingDict(_create_prompt_builder)


def register_prompt_builder(name: str, builder: BuildChatPrompt) -> None:
    """
    Adds a custom prompt builder to the library.

    Raises:
        ValueError: if a builder with the same name was already used
            or registered.
    """
    # Literals are not checked at runtime, which allows adding names
    # to the library.
    prompt_builders[name] = builder  # type: ignore


def build_prompt(
    messages: list[ChatMessage],
    template: PromptTemplateType | None = None,
    tools: list[Tool] | None = None,
    settings: Settings | None = None,
) -> str:
    """
    Build the prompt for a conversation with a builder of the library.

    Args:
        messages: the conversation. The cohere-chat template replaces
            the last message of the list.
        template: the name of the template. Defaults to the template
            in the settings.
        tools: tool definitions. If given, the prompt is built with
            `build_with_tools`.
        settings: the settings object. Defaults to Settings().

    Raises:
        ValueError: for an invalid template name.
        PromptError: if the prompt cannot be built.
    """
    if template is None:
        settings = settings or Settings()
        template = settings.prompts.template

    builder = prompt_builders[template]
    if tools is not None:
        return builder.build_with_tools(messages, tools)
    return builder.build(messages)
