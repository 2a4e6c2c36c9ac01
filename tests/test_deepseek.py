"""Test the DeepSeek prompt builders"""

# pyright: basic

import json
import unittest

from chat_prompts.messages import (
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolMessage,
    TextContentPart,
    ImageContentPart,
    ImageUrl,
    ToolCall,
    ToolCallFunction,
    Tool,
    ToolFunction,
)
from chat_prompts.prompts import (
    DeepseekChatPrompt,
    DeepseekCoderPrompt,
    DeepseekChat2Prompt,
    DeepseekChat25Prompt,
    DeepseekToolPrompt,
    CohereChatPrompt,
    NoMessagesError,
    NoAssistantMessageError,
)
from chat_prompts.prompts.deepseek import (
    BEGIN_OF_SENTENCE,
    CODER_SYSTEM_PROMPT,
    FUNCTION_CALLING_BEGIN,
    FUNCTION_CALLING_DEFAULT,
)
from chat_prompts.utils.logging import LoglistLogger

BOS = "<|begin▁of▁sentence|>"

weather_tool = Tool(
    function=ToolFunction(
        name="get_weather",
        description="Get the current weather in a city",
        parameters={
            'type': "object",
            'properties': {'city': {'type': "string"}},
            'required': ["city"],
        },
    )
)

tool_call = ToolCall(
    id="call_1",
    function=ToolCallFunction(
        name="get_weather", arguments='{"city": "Paris"}'
    ),
)


def conversation():
    return [
        SystemMessage(content="You are a poet."),
        UserMessage(content="Hello "),
        AssistantMessage(content=" Hi there"),
        UserMessage(content="Write a haiku."),
    ]


class TestEmptyConversation(unittest.TestCase):

    def test_no_messages(self):
        builders = [
            DeepseekChatPrompt(),
            DeepseekCoderPrompt(),
            DeepseekChat2Prompt(),
            DeepseekChat25Prompt(),
            DeepseekToolPrompt(),
            CohereChatPrompt(),
        ]
        for builder in builders:
            with self.assertRaises(NoMessagesError):
                builder.build([])
            with self.assertRaises(NoMessagesError):
                builder.build_with_tools([], [weather_tool])


class TestDeepseekChatPrompt(unittest.TestCase):

    def test_build(self):
        prompt = DeepseekChatPrompt().build(conversation())
        self.assertEqual(
            prompt,
            "User: Hello\n\nAssistant: Hi there<|end_of_sentence|>"
            "User: Write a haiku.\n\nAssistant:",
        )

    def test_single_user(self):
        prompt = DeepseekChatPrompt().build([UserMessage(content="Hi")])
        self.assertEqual(prompt, "User: Hi\n\nAssistant:")

    def test_no_assistant_content(self):
        messages = [UserMessage(content="Hi"), AssistantMessage()]
        with self.assertRaises(NoAssistantMessageError):
            DeepseekChatPrompt().build(messages)


class TestDeepseekCoderPrompt(unittest.TestCase):

    def test_build(self):
        prompt = DeepseekCoderPrompt().build(conversation())
        self.assertEqual(
            prompt,
            "You are a poet.\n### Instruction:\nHello"
            "\n### Response:\nHi there\n<|EOT|>"
            "\n### Instruction:\nWrite a haiku."
            "\n### Response:",
        )

    def test_default_system_prompt(self):
        prompt = DeepseekCoderPrompt().build([UserMessage(content="Hi")])
        self.assertEqual(
            prompt,
            CODER_SYSTEM_PROMPT + "\n### Instruction:\nHi\n### Response:",
        )

    def test_empty_system_message(self):
        messages = [SystemMessage(content=""), UserMessage(content="Hi")]
        prompt = DeepseekCoderPrompt().build(messages)
        self.assertTrue(prompt.startswith(CODER_SYSTEM_PROMPT))

    def test_tool_messages_skipped(self):
        messages = [
            UserMessage(content="Hi"),
            ToolMessage(content="ignored"),
        ]
        prompt = DeepseekCoderPrompt().build(messages)
        self.assertNotIn("ignored", prompt)

    def test_multipart_content(self):
        messages = [
            UserMessage(
                content=[
                    TextContentPart(text="Fix"),
                    ImageContentPart(
                        image_url=ImageUrl(url="http://x/y.png")
                    ),
                    TextContentPart(text="this code"),
                ]
            )
        ]
        prompt = DeepseekCoderPrompt().build(messages)
        self.assertIn("### Instruction:\nFix\nthis code\n### Response:", prompt)

    def test_no_assistant_content_logged(self):
        loglist = LoglistLogger()
        messages = [UserMessage(content="Hi"), AssistantMessage()]
        with self.assertRaises(NoAssistantMessageError):
            DeepseekCoderPrompt(logger=loglist).build(messages)
        self.assertEqual(loglist.count_logs(level=2), 1)


class TestDeepseekChat2Prompt(unittest.TestCase):

    def test_build(self):
        prompt = DeepseekChat2Prompt().build(conversation())
        self.assertEqual(
            prompt,
            BOS + "You are a poet.\n\nUser: Hello"
            "\n\nAssistant: Hi there<|end_of_sentence|>"
            "User: Write a haiku.\n\nAssistant:",
        )

    def test_default_system_prompt(self):
        prompt = DeepseekChat2Prompt().build([UserMessage(content="Hi")])
        self.assertEqual(
            prompt,
            BOS + CODER_SYSTEM_PROMPT + "\n\nUser: Hi\n\nAssistant:",
        )


class TestDeepseekChat25Prompt(unittest.TestCase):

    def test_begin_of_sentence_marker(self):
        self.assertEqual(BEGIN_OF_SENTENCE, BOS)
        self.assertIn("▁", BEGIN_OF_SENTENCE)

    def test_build(self):
        prompt = DeepseekChat25Prompt().build(conversation())
        self.assertEqual(
            prompt,
            BOS + "You are a poet.<|User|>Hello"
            "<|Assistant|>Hi there<|end_of_sentence|>"
            "<|User|>Write a haiku.<|Assistant|>",
        )

    def test_default_system_prompt(self):
        prompt = DeepseekChat25Prompt().build([UserMessage(content="Hi")])
        self.assertEqual(
            prompt,
            BOS + "You are a helpful Assistant.<|User|>Hi<|Assistant|>",
        )

    def test_tool_call_only_assistant(self):
        messages = [
            UserMessage(content="Weather in Paris?"),
            AssistantMessage(tool_calls=[tool_call]),
        ]
        prompt = DeepseekChat25Prompt().build(messages)
        self.assertTrue(
            prompt.endswith(
                "<|User|>Weather in Paris?"
                "<|Assistant|><|end_of_sentence|><|Assistant|>"
            )
        )

    def test_ignores_tools(self):
        messages = conversation()
        self.assertEqual(
            DeepseekChat25Prompt().build_with_tools(
                messages, [weather_tool]
            ),
            DeepseekChat25Prompt().build(messages),
        )

    def test_deterministic(self):
        self.assertEqual(
            DeepseekChat25Prompt().build(conversation()),
            DeepseekChat25Prompt().build(conversation()),
        )


class TestDeepseekToolPrompt(unittest.TestCase):

    def test_build_without_tools(self):
        self.assertEqual(
            DeepseekToolPrompt().build(conversation()),
            DeepseekChat25Prompt().build(conversation()),
        )

    def test_tools_in_system_prompt(self):
        messages = [
            SystemMessage(content="You check the weather."),
            UserMessage(content="Weather in Paris?"),
        ]
        prompt = DeepseekToolPrompt().build_with_tools(
            messages, [weather_tool]
        )
        pretty = json.dumps(
            weather_tool.function.model_dump(exclude_none=True), indent=2
        )
        self.assertEqual(
            prompt,
            BOS + "You check the weather.\n\n## Tools\n\n### Function\n\n"
            "You have the following functions available:"
            "\n\n- `get_weather`:\n```json\n" + pretty + "\n```"
            "<|User|>Weather in Paris?<|Assistant|>",
        )

    def test_tools_with_empty_system_message(self):
        messages = [
            SystemMessage(content=""),
            UserMessage(content="Weather in Paris?"),
        ]
        prompt = DeepseekToolPrompt().build_with_tools(
            messages, [weather_tool]
        )
        self.assertTrue(
            prompt.startswith(
                BOS + "You are a helpful Assistant.\n\n## Tools"
            )
        )
        self.assertIn("- `get_weather`:", prompt)

    def test_system_message_empty_tools(self):
        messages = [
            SystemMessage(content="You check the weather."),
            UserMessage(content="Weather in Paris?"),
        ]
        prompt = DeepseekToolPrompt().build_with_tools(messages, [])
        self.assertEqual(
            prompt,
            BOS + "You check the weather.<|User|>Weather in Paris?"
            "<|Assistant|>",
        )

    def test_function_calling_preamble(self):
        messages = [UserMessage(content="Weather in Paris?")]
        prompt = DeepseekToolPrompt().build_with_tools(
            messages, [weather_tool]
        )
        self.assertTrue(prompt.startswith(FUNCTION_CALLING_BEGIN + " <tools> ["))
        self.assertIn('"name":"get_weather"', prompt)
        self.assertIn('"required":["city"]', prompt)
        self.assertIn(" </tools> Use the following pydantic model", prompt)
        # literal backslash-n sequences, as in the model's template
        self.assertIn(r"\n<tool_call>\n", prompt)
        self.assertTrue(
            prompt.endswith(
                "</tool_call><|im_end|><|User|>Weather in Paris?"
                "<|Assistant|>"
            )
        )
        self.assertEqual(prompt.count("get_weather"), 1)

    def test_no_tools_default(self):
        messages = [UserMessage(content="Hi")]
        expected = FUNCTION_CALLING_DEFAULT + "<|User|>Hi<|Assistant|>"
        self.assertEqual(
            DeepseekToolPrompt().build_with_tools(messages, None), expected
        )
        self.assertEqual(
            DeepseekToolPrompt().build_with_tools(messages, []), expected
        )

    def test_tool_messages(self):
        messages = [
            SystemMessage(content="You check the weather."),
            UserMessage(content="Weather in Paris?"),
            AssistantMessage(tool_calls=[tool_call]),
            ToolMessage(content=" sunny, 21C \n", tool_call_id="call_1"),
        ]
        prompt = DeepseekToolPrompt().build_with_tools(
            messages, [weather_tool]
        )
        self.assertTrue(
            prompt.endswith(
                "<|User|>Weather in Paris?"
                "<|Assistant|><|end_of_sentence|>"
                "<|tool|>sunny, 21C<|Assistant|>"
            )
        )

    def test_tool_messages_skipped_by_build(self):
        messages = [
            UserMessage(content="Weather in Paris?"),
            ToolMessage(content="sunny"),
        ]
        prompt = DeepseekToolPrompt().build(messages)
        self.assertNotIn("<|tool|>", prompt)

    def test_no_assistant_content_with_tools(self):
        messages = [
            UserMessage(content="Weather in Paris?"),
            AssistantMessage(tool_calls=[]),
        ]
        with self.assertRaises(NoAssistantMessageError):
            DeepseekToolPrompt().build_with_tools(messages, [weather_tool])


if __name__ == "__main__":
    unittest.main()
