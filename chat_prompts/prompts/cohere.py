"""
Prompt builder for the Cohere Command-R retrieval-augmented grammar.

The last user message of the conversation is expected to carry the
retrieved documents after the user query, starting with a
`<result>...</result>` block:

    ```
    What is the capital of France? <result>Paris is the capital and
    largest city of France.</result>
    ```

The builder splits the message at the first result block. The text
before it is the user query; the block and everything after it is the
retrieval context, which is moved into a system turn placed after the
conversation and followed by the grounding instructions.

Warning: `CohereChatPrompt.build` replaces the last message of the
list it is given with a user message holding only the query. Pass a
copy of the conversation if the original message is still needed.
"""

import re

from chat_prompts.messages import ChatMessage, UserMessage
from .base import HistoryChatPrompt
from .errors import BadMessagesError, NoMessagesError, OperationError

START_OF_TURN = "<|START_OF_TURN_TOKEN|>"
END_OF_TURN = "<|END_OF_TURN_TOKEN|>"
SYSTEM_TURN = START_OF_TURN + "<|SYSTEM_TOKEN|>"
USER_TURN = START_OF_TURN + "<|USER_TOKEN|>"
CHATBOT_TURN = START_OF_TURN + "<|CHATBOT_TOKEN|>"

RESULT_PATTERN = r"(?s)(<result>.*?</result>)"

PREAMBLE = """# Safety Preamble
The instructions in this section override those in the task description and style guide sections. Don't answer questions that are harmful or immoral.

# System Preamble
## Basic Rules
You are a powerful conversational AI trained by Cohere to help people. You are augmented by a number of tools, and your job is to use and consume the output of these tools to best help the user. You will see a conversation history between yourself and a user, ending with an utterance from the user. You will then see a specific instruction instructing you what kind of response to generate. When you answer the user's requests, you cite your sources in your answers, according to those instructions.

# User Preamble
## Task and Context
You help people answer their questions and other requests interactively. You will be asked a very wide array of requests on all kinds of topics. You will be equipped with a wide range of search engines or similar tools to help you, which you use to research your answer. You should focus on serving the user's needs as best you can, which will be wide-ranging.

## Style Guide
Unless the user asks for a different style of answer, you should answer in full sentences, using proper grammar and spelling."""

GROUNDING_INSTRUCTIONS = """Carefully perform the following instructions, in order, starting each with a new line.
Firstly, Decide which of the retrieved documents are relevant to the user's last input by writing 'Relevant Documents:' followed by comma-separated list of document numbers. If none are relevant, you should instead write 'None'.
Secondly, Decide which of the retrieved documents contain facts that should be cited in a good answer to the user's last input by writing 'Cited Documents:' followed a comma-separated list of document numbers. If you dont want to cite any of them, you should instead write 'None'.
Thirdly, Write 'Answer:' followed by a response to the user's last input in high quality natural english. Use the retrieved documents to help you. Do not insert any citations or grounding markup.
Finally, Write 'Grounded answer:' followed by a response to the user's last input in high quality natural english. Use the symbols <co: doc> and </co: doc> to indicate when a fact comes from a document in the search result, e.g <co: 0>my fact</co: 0> for a fact from document 0."""


class CohereChatPrompt(HistoryChatPrompt):
    """Generate prompts for the Cohere `command-r` models with
    retrieved documents."""

    default_system_prompt = (
        "<BOS_TOKEN>" + SYSTEM_TURN + PREAMBLE + END_OF_TURN
    )
    first_user_template = (
        "{system_prompt}" + USER_TURN + "{user_message}" + END_OF_TURN
    )
    user_template = (
        "{chat_history}" + USER_TURN + "{user_message}" + END_OF_TURN
    )
    assistant_template = (
        "{chat_history}" + CHATBOT_TURN + "{assistant_message}" + END_OF_TURN
    )
    generation_cue = CHATBOT_TURN

    def get_system_prompt(self, messages: list[ChatMessage]) -> str:
        # the preamble is fixed, system messages are not used
        return self.default_system_prompt

    def extract_context(self, messages: list[ChatMessage]) -> str:
        """
        Split the last message into the user query and the retrieved
        context. The last message of `messages` is replaced by a user
        message holding the query.

        Returns:
            the retrieved context, from the first result block to the
            end of the message.

        Raises:
            BadMessagesError: if the last message is not a user
                message with text content.
            OperationError: if the message contains no result block.
        """
        last_message = messages[-1]
        if not (
            isinstance(last_message, UserMessage)
            and isinstance(last_message.content, str)
        ):
            err_msg = (
                "The last message in the chat request is not a user "
                "message with text content."
            )
            self.logger.error(err_msg)
            raise BadMessagesError(err_msg)

        try:
            pattern = re.compile(RESULT_PATTERN)
        except re.error as e:
            self.logger.error(f"Invalid result pattern: {e}")
            raise OperationError(str(e)) from e

        content: str = last_message.content
        found = pattern.search(content)
        if found is None:
            self.logger.error(
                "No retrieved context found in the last user message"
            )
            raise OperationError("No match found")

        start = found.start()
        messages[-1] = UserMessage(
            content=content[:start], name=last_message.name
        )
        return content[start:]

    def build(self, messages: list[ChatMessage]) -> str:
        if not messages:
            raise NoMessagesError()

        context = self.extract_context(messages)
        system_prompt = self.get_system_prompt(messages)

        prompt = self.append_messages("", system_prompt, messages)
        prompt += SYSTEM_TURN + context + END_OF_TURN
        prompt += SYSTEM_TURN + GROUNDING_INSTRUCTIONS + END_OF_TURN
        return prompt + self.generation_cue
