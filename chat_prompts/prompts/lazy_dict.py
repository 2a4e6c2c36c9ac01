"""
The utility class `LazyLoadingDict` stores memoized objects produced
by a factory function from the dictionary key.

It is used to hold the prompt builders by template name: a builder is
created the first time its name is looked up, and the same instance is
returned afterwards. An invalid name raises the error of the factory
function.
"""

from collections.abc import Callable
from typing import TypeVar

# ValueT is the parameter for the stored valued, KeyT for the keys.
ValueT = TypeVar('ValueT')
KeyT = TypeVar('KeyT')


class LazyLoadingDict(dict[KeyT, ValueT]):
    """A lazy dictionary class with memoized objects of type ValueT.

    Example:
    ```python
    from typing import Literal

    TemplateName = Literal['deepseek-chat', 'deepseek-coder']

    # The factory maps the permissible keys to instances. The runtime
    # error is raised here, as literals are not checked at runtime.
    def _create_builder(name: TemplateName) -> BuildChatPrompt:
        match name:
            case 'deepseek-chat':
                return DeepseekChatPrompt()
            case 'deepseek-coder':
                return DeepseekCoderPrompt()
            case _:
                raise ValueError(f"Invalid template: {name}")

    builders = LazyLoadingDict(_create_builder)
    builder = builders['deepseek-coder']  # created and memoized
    ```

    It is also possible to assign to the dictionary directly, thus
    bypassing the factory function.

    Expected behaviour: may raise the errors of the factory function,
    and ValueError when assigning to an existing key.
    """

    def __init__(self, key_creator_func: Callable[[KeyT], ValueT]):
        super().__init__()
        self._key_creator_func = key_creator_func

    def __getitem__(self, key: KeyT) -> ValueT:
        # Check if the value is already cached
        if key in self:
            return super().__getitem__(key)

        # Lazy-load the value, cache it, and return
        value: ValueT = self._key_creator_func(key)
        super().__setitem__(key, value)
        return value

    def __setitem__(self, key: KeyT, value: ValueT) -> None:
        """Allow direct setting of key/value pairs.

        This bypasses the factory function for the given key.

        Raises:
            ValueError: If the key already exists in the dictionary.
        """
        if key in self:
            raise ValueError(
                f"Key '{key}' already exists. Delete it first to overwrite."
            )
        super().__setitem__(key, value)
