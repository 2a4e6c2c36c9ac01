"""
Read and write configuration file.

This file also contains the names of the prompt templates supported
in the package.

Settings are read from `config.toml` in the working directory, if
present, and from environment variables with the prefix
`CHATPROMPTS_`, e.g. `CHATPROMPTS_PROMPTS__TEMPLATE=deepseek-coder`.
Values in the configuration file take precedence over the
environment.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

# Define supported prompt templates. These templates must also be
# created in the factory function of chat_prompts.prompts.library
PromptTemplateType = Literal[
    'deepseek-chat',
    'deepseek-coder',
    'deepseek-chat-2',
    'deepseek-chat-25',
    'deepseek-tool',
    'cohere-chat',
]

DEFAULT_CONFIG_FILE = "config.toml"
ENV_PREFIX = "CHATPROMPTS_"


class PromptSettings(BaseModel):
    """
    Specification of the prompt builder.

    Attributes:
        template: the name of the prompt template used when none is
            given explicitly
    """

    template: PromptTemplateType = Field(
        default='deepseek-chat-25',
        description="Default prompt template",
    )

    model_config = ConfigDict(frozen=True, extra='forbid')


class SearchSettings(BaseModel):
    """
    Specification of the processing of search results.

    Attributes:
        max_search_results: maximum number of results kept
        size_per_result: number of characters each result is clipped to
        head_prompt: text preceding the results in the summary prompt
        tail_prompt: text following the results in the summary prompt
    """

    max_search_results: int = Field(
        default=5, ge=1, description="Maximum number of search results"
    )
    size_per_result: int = Field(
        default=300,
        ge=1,
        description="Number of characters each result is clipped to",
    )
    head_prompt: str = Field(
        default="The following are search results I found on the internet:",
        description="Text preceding the search results",
    )
    tail_prompt: str = Field(
        default="To sum up them up: ",
        description="Text following the search results",
    )

    model_config = ConfigDict(frozen=True, extra='forbid')


class Settings(BaseSettings):
    """
    A pydantic settings object containing the fields with the
    configuration information.

    Attributes:
        prompts: prompt builder configuration
        search: search results configuration
    """

    prompts: PromptSettings = Field(
        default_factory=PromptSettings,
        description="Prompt builder configuration",
    )
    search: SearchSettings = Field(
        default_factory=SearchSettings,
        description="Search results configuration",
    )

    model_config = SettingsConfigDict(
        toml_file=DEFAULT_CONFIG_FILE,
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        frozen=True,
        extra='ignore',
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources."""
        return (
            init_settings,
            TomlConfigSettingsSource(settings_cls),
            env_settings,
        )


def serialize_settings(sets: BaseSettings) -> str:
    """Transform the settings into a string in TOML format.

    Args:
        sets: The settings object to serialize

    Returns:
        TOML formatted string representation of settings
    """
    import tomlkit

    doc = tomlkit.document()
    doc.add(tomlkit.comment("Configuration file"))
    doc.add(tomlkit.nl())

    data: dict[str, Any] = sets.model_dump()
    for key, value in data.items():
        if isinstance(value, dict):
            tbl = tomlkit.table()
            for kkey, vvalue in value.items():  # type: ignore
                # None values cannot be serialized to TOML
                if vvalue is not None:
                    tbl[kkey] = vvalue
            doc[key] = tbl
        elif value is not None:
            doc[key] = value

    return tomlkit.dumps(doc)


def export_settings(
    settings: BaseSettings, file_path: str | Path | None = None
) -> None:
    """Save settings to file in TOML format.

    Args:
        settings: A settings object to save
        file_path: The settings file path (defaults to config.toml)

    Raises:
        OSError: If file cannot be written
    """
    file_path = Path(file_path or DEFAULT_CONFIG_FILE)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w", encoding="utf-8") as f:
        f.write(serialize_settings(settings))


def create_default_config_file(
    file_path: str | Path | None = None,
) -> None:
    """Create a settings file with the default values, replacing an
    existing file.

    Args:
        file_path: Target file path (defaults to config.toml)
    """
    file_path = Path(file_path or DEFAULT_CONFIG_FILE)
    export_settings(
        Settings(prompts=PromptSettings(), search=SearchSettings()),
        file_path,
    )


def load_settings(file_path: str | Path | None = None) -> Settings:
    """Load settings from TOML file.

    Args:
        file_path: Path to settings file (defaults to config.toml)

    Returns:
        Loaded settings object

    Raises:
        FileNotFoundError: If settings file doesn't exist
        ValueError: If settings file is invalid
    """
    file_path = Path(file_path or DEFAULT_CONFIG_FILE)
    if not file_path.exists():
        raise FileNotFoundError(f"Settings file not found: {file_path}")

    try:
        # A settings class reading the specified file
        class FileSettings(Settings):
            model_config = SettingsConfigDict(
                toml_file=str(file_path),
                env_prefix=ENV_PREFIX,
                env_nested_delimiter="__",
                frozen=True,
                extra='ignore',
            )

        return FileSettings()
    except Exception as e:
        raise ValueError(
            f"Failed to load settings from {file_path}: {e}"
        ) from e
