"""
Abstract base classes of the prompt builders.

A prompt builder turns a conversation into the text string expected
by one model family. All builders share the same interface:

    - `build(messages)`: the prompt for a conversation
    - `build_with_tools(messages, tools)`: the prompt for a
        conversation in which the model may call the given tools.
        Builders for grammars without tool support ignore the tools.

Most grammars accumulate the prompt turn by turn: each user or
assistant message is appended to the prompt built so far, using the
turn markers of the grammar, and a final generation cue tells the
model where to begin its answer. `HistoryChatPrompt` implements this
scheme from a set of class-level templates, so that a new grammar is
defined by its literal strings only:

    ```python
    class MyChatPrompt(HistoryChatPrompt):
        default_system_prompt = "You are a helpful assistant."
        first_user_template = "{system_prompt}\\nUser: {user_message}"
        user_template = "{chat_history}\\nUser: {user_message}"
        assistant_template = "{chat_history}\\nBot: {assistant_message}"
        generation_cue = "\\nBot:"
    ```

The templates are filled with str.format, with the fields
`system_prompt`, `chat_history`, `user_message`, `assistant_message`
and `system_message`. History and message text are trimmed before
insertion.
"""

from abc import ABC, abstractmethod

from chat_prompts.messages import (
    ChatMessage,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    Tool,
    user_message_content,
    assistant_message_content,
)
from chat_prompts.utils.logging import LoggerBase, get_logger
from .errors import NoMessagesError, NoAssistantMessageError

logger: LoggerBase = get_logger(__name__)


class BuildChatPrompt(ABC):
    """Abstract base class for prompt builders."""

    def __init__(self, logger: LoggerBase = logger) -> None:
        self.logger = logger

    @abstractmethod
    def build(self, messages: list[ChatMessage]) -> str:
        """
        Build the prompt for a conversation.

        Args:
            messages: the conversation, in order.

        Returns:
            the prompt string.

        Raises:
            NoMessagesError: if messages is empty.
            PromptError: if the messages do not fit the grammar.
        """
        pass

    def build_with_tools(
        self,
        messages: list[ChatMessage],
        tools: list[Tool] | None = None,
    ) -> str:
        """
        Build the prompt for a conversation with available tools.

        The default implementation ignores the tools and delegates
        to `build`.
        """
        return self.build(messages)


class HistoryChatPrompt(BuildChatPrompt):
    """
    Prompt builder for grammars that append user and assistant turns
    to the history using fixed templates.

    The system prompt is taken from the first message if it is a
    system message, and from `default_system_prompt` otherwise or if
    the system message is empty. System and tool messages are not
    otherwise rendered.
    """

    default_system_prompt: str = ""
    system_prompt_template: str = "{system_message}"
    first_user_template: str = "{system_prompt}{user_message}"
    user_template: str = "{chat_history}{user_message}"
    assistant_template: str = "{chat_history}{assistant_message}"
    generation_cue: str = ""

    def create_system_prompt(self, message: SystemMessage) -> str:
        """Create the system prompt from a system message."""
        if not message.content:
            return self.default_system_prompt
        return self.system_prompt_template.format(
            system_message=message.content
        )

    def get_system_prompt(self, messages: list[ChatMessage]) -> str:
        """The system prompt of a non-empty conversation."""
        match messages[0]:
            case SystemMessage() as message:
                return self.create_system_prompt(message)
            case _:
                return self.default_system_prompt

    def append_user_message(
        self,
        chat_history: str,
        system_prompt: str,
        message: UserMessage,
    ) -> str:
        """Append a user turn to the history. The system prompt
        replaces the history in the first turn."""
        content = user_message_content(message.content)
        if not chat_history:
            return self.first_user_template.format(
                system_prompt=system_prompt.strip(),
                user_message=content.strip(),
            )
        return self.user_template.format(
            chat_history=chat_history.strip(),
            user_message=content.strip(),
        )

    def append_assistant_message(
        self, chat_history: str, message: AssistantMessage
    ) -> str:
        """
        Append an assistant turn to the history.

        Raises:
            NoAssistantMessageError: if the message has neither
                content nor tool calls.
        """
        content = assistant_message_content(message)
        if content is None:
            self.logger.error(
                "Assistant message without content or tool calls"
            )
            raise NoAssistantMessageError()
        return self.assistant_template.format(
            chat_history=chat_history.strip(),
            assistant_message=content.strip(),
        )

    def append_messages(
        self,
        chat_history: str,
        system_prompt: str,
        messages: list[ChatMessage],
    ) -> str:
        """Append the user and assistant turns of the conversation
        to the history, skipping the other messages."""
        prompt = chat_history
        for message in messages:
            match message:
                case UserMessage():
                    prompt = self.append_user_message(
                        prompt, system_prompt, message
                    )
                case AssistantMessage():
                    prompt = self.append_assistant_message(
                        prompt, message
                    )
                case _:
                    continue
        return prompt

    def build(self, messages: list[ChatMessage]) -> str:
        if not messages:
            raise NoMessagesError()

        system_prompt = self.get_system_prompt(messages)
        prompt = self.append_messages("", system_prompt, messages)
        return prompt + self.generation_cue
