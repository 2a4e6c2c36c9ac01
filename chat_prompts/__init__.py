"""
Prompt construction for chat language models.

The package converts a role-tagged conversation into the literal text
string that a specific model family expects as its input.

**Example**:

    ```python
    from chat_prompts.messages import parse_messages
    from chat_prompts.prompts import prompt_builders

    messages = parse_messages([
        {'role': "system", 'content': "You are a terse assistant."},
        {'role': "user", 'content': "What is a logit?"},
    ])
    prompt: str = prompt_builders["deepseek-chat-25"].build(messages)
    ```
"""
