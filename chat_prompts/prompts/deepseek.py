"""
Prompt builders for the DeepSeek model families.

    - `DeepseekChatPrompt`: DeepSeek-LLM-Chat
    - `DeepseekCoderPrompt`: DeepSeek-Coder
    - `DeepseekChat2Prompt`: DeepSeek-V2
    - `DeepseekChat25Prompt`: DeepSeek-V2.5
    - `DeepseekToolPrompt`: DeepSeek-V2.5 with tool calls

Note that the begin of sentence marker uses the character U+2581
('▁') between words, and ASCII vertical bars.
"""

from chat_prompts.messages import (
    ChatMessage,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolMessage,
    Tool,
    tools_to_json,
    tool_function_to_json,
)
from .base import HistoryChatPrompt
from .errors import NoMessagesError

BEGIN_OF_SENTENCE = "<|begin▁of▁sentence|>"
END_OF_SENTENCE = "<|end_of_sentence|>"

CODER_SYSTEM_PROMPT = (
    "You are an AI programming assistant, utilizing the DeepSeek "
    "Coder model, developed by DeepSeek Company, and you only answer "
    "questions related to computer science. For politically "
    "sensitive questions, security and privacy issues, and other "
    "non-computer science questions, you will refuse to answer."
)
ASSISTANT_SYSTEM_PROMPT = "You are a helpful Assistant."

# Header of the tools section appended to the system prompt, and the
# entry of each tool.
TOOLS_SECTION = (
    "\n\n## Tools\n\n### Function\n\n"
    "You have the following functions available:"
)
TOOL_ENTRY_TEMPLATE = "\n\n- `{name}`:\n```json\n{function}\n```"

# Generic function-calling preamble, used when the conversation has no
# system message. The backslash-n sequences are literal, not newlines.
FUNCTION_CALLING_BEGIN = r"""<|im_start|>system\nYou are a function calling AI model. You are provided with function signatures within <tools></tools> XML tags. You may call one or more functions to assist with the user query. Don't make assumptions about what values to plug into functions. Here are the available tools:"""
FUNCTION_CALLING_END = r"""Use the following pydantic model json schema for each tool call you will make: {"properties": {"arguments": {"title": "Arguments", "type": "object"}, "name": {"title": "Name", "type": "string"}}, "required": ["arguments", "name"], "title": "FunctionCall", "type": "object"} For each function call return a json object with function name and arguments within <tool_call></tool_call> XML tags as follows:\n<tool_call>\n{"arguments": <args-dict>, "name": <function-name>}\n</tool_call><|im_end|>"""
FUNCTION_CALLING_DEFAULT = (
    "<|im_start|>system\nAnswer as concisely as possible.<|im_end|>"
)


class DeepseekChatPrompt(HistoryChatPrompt):
    """Generate prompts for the `DeepSeek-LLM-Chat` model. This
    grammar has no system prompt; system messages are ignored."""

    first_user_template = "User: {user_message}"
    user_template = "{chat_history}User: {user_message}"
    assistant_template = (
        "{chat_history}\n\nAssistant: {assistant_message}"
        + END_OF_SENTENCE
    )
    generation_cue = "\n\nAssistant:"


class DeepseekCoderPrompt(HistoryChatPrompt):
    """Generate prompts for the `DeepSeek-Coder` model."""

    default_system_prompt = CODER_SYSTEM_PROMPT
    first_user_template = "{system_prompt}\n### Instruction:\n{user_message}"
    user_template = "{chat_history}\n### Instruction:\n{user_message}"
    assistant_template = (
        "{chat_history}\n### Response:\n{assistant_message}\n<|EOT|>"
    )
    generation_cue = "\n### Response:"


class DeepseekChat2Prompt(HistoryChatPrompt):
    """Generate prompts for the `DeepSeek-V2` models."""

    default_system_prompt = BEGIN_OF_SENTENCE + CODER_SYSTEM_PROMPT
    system_prompt_template = BEGIN_OF_SENTENCE + "{system_message}"
    first_user_template = "{system_prompt}\n\nUser: {user_message}"
    user_template = "{chat_history}User: {user_message}"
    assistant_template = (
        "{chat_history}\n\nAssistant: {assistant_message}"
        + END_OF_SENTENCE
    )
    generation_cue = "\n\nAssistant:"


class DeepseekChat25Prompt(HistoryChatPrompt):
    """Generate prompts for the `DeepSeek-V2.5` models."""

    default_system_prompt = BEGIN_OF_SENTENCE + ASSISTANT_SYSTEM_PROMPT
    system_prompt_template = BEGIN_OF_SENTENCE + "{system_message}"
    first_user_template = "{system_prompt}<|User|>{user_message}"
    user_template = "{chat_history}<|User|>{user_message}"
    assistant_template = (
        "{chat_history}<|Assistant|>{assistant_message}"
        + END_OF_SENTENCE
    )
    generation_cue = "<|Assistant|>"


class DeepseekToolPrompt(DeepseekChat25Prompt):
    """
    Generate prompts for the `DeepSeek-V2.5` models for tool use.

    Without tools, `build` produces the same prompt as
    DeepseekChat25Prompt. With `build_with_tools`, the tool
    definitions are rendered in the system prompt and tool messages
    are appended to the history with the `<|tool|>` marker.
    """

    tool_template = "{chat_history}<|tool|>{tool_message}"

    def create_system_prompt_tool(
        self,
        message: SystemMessage,
        tools: list[Tool] | None,
    ) -> str:
        """Create a system prompt listing the available tools after
        the content of the system message."""
        if not tools:
            return self.create_system_prompt(message)

        content = message.content or ASSISTANT_SYSTEM_PROMPT
        content += TOOLS_SECTION
        for tool in tools:
            content += TOOL_ENTRY_TEMPLATE.format(
                name=tool.function.name,
                function=tool_function_to_json(tool),
            )
        return self.system_prompt_template.format(system_message=content)

    def create_function_calling_prompt(
        self, tools: list[Tool] | None
    ) -> str:
        """The generic function-calling system prompt, used when the
        conversation does not start with a system message."""
        if not tools:
            return FUNCTION_CALLING_DEFAULT
        available_tools = f"<tools> {tools_to_json(tools)} </tools>"
        return " ".join(
            [FUNCTION_CALLING_BEGIN, available_tools, FUNCTION_CALLING_END]
        )

    def append_tool_message(
        self, chat_history: str, message: ToolMessage
    ) -> str:
        """Append the result of a tool call to the history."""
        return self.tool_template.format(
            chat_history=chat_history.strip(),
            tool_message=message.content.strip(),
        )

    def build_with_tools(
        self,
        messages: list[ChatMessage],
        tools: list[Tool] | None = None,
    ) -> str:
        if not messages:
            raise NoMessagesError()

        system_prompt: str
        match messages[0]:
            case SystemMessage() as message:
                system_prompt = self.create_system_prompt_tool(
                    message, tools
                )
            case _:
                if not tools:
                    self.logger.info(
                        "No tools given, using the default system prompt"
                    )
                system_prompt = self.create_function_calling_prompt(tools)

        prompt = ""
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
                case ToolMessage():
                    prompt = self.append_tool_message(prompt, message)
                case _:
                    continue

        return prompt + self.generation_cue
