"""
Processing of web search results for use in prompts.

Search providers return JSON documents with provider-specific layouts.
The functions of this module convert these documents into a
`SearchOutput`, clip it to the configured size, and build the prompt
asking a model to summarize the results. They do not perform the
search themselves.

**Example**:

    ```python
    from chat_prompts.search import (
        parse_tavily_results,
        clip_search_output,
        build_summary_prompt,
    )

    output = parse_tavily_results(response.json())
    output = clip_search_output(output)  # uses config.toml
    prompt = build_summary_prompt(output)
    ```
"""

import json
from typing import Any
from pydantic import BaseModel

from chat_prompts.config.config import Settings
from chat_prompts.utils.logging import LoggerBase, get_logger

logger: LoggerBase = get_logger(__name__)


class SearchError(ValueError):
    """A search provider document could not be processed."""


class SearchResult(BaseModel):
    """An individual search result."""

    url: str
    site_name: str
    text_content: str


class SearchOutput(BaseModel):
    """The search results, in the order given by the provider."""

    results: list[SearchResult] = []


def _text(value: Any) -> str:
    # absent fields become empty strings
    if value is None:
        return ""
    return value if isinstance(value, str) else json.dumps(value)


def _entries(
    results: list[Any], provider: str, logger: LoggerBase
) -> list[dict[str, Any]]:
    entries: list[dict[str, Any]] = []
    for result in results:
        if not isinstance(result, dict):
            logger.warning(
                f"{provider} parser: skipping result that is not "
                f"an object: {_text(result)}"
            )
            continue
        entries.append(result)  # type: ignore
    return entries


def parse_tavily_results(
    raw_results: dict[str, Any], logger: LoggerBase = logger
) -> SearchOutput:
    """
    Convert the response of the Tavily search API. Entries that
    are not JSON objects are skipped with a warning.

    Raises:
        SearchError: if the document has no list of results.
    """
    results_array = raw_results.get('results')
    if not isinstance(results_array, list):
        msg = "No results returned from server"
        logger.error(f"tavily parser: {msg}")
        raise SearchError(msg)

    return SearchOutput(
        results=[
            SearchResult(
                url=_text(result.get('url')),
                site_name=_text(result.get('title')),
                text_content=_text(result.get('content')),
            )
            for result in _entries(results_array, "tavily", logger)
        ]
    )


def parse_bing_results(
    raw_results: dict[str, Any], logger: LoggerBase = logger
) -> SearchOutput:
    """
    Convert the response of the Bing web search API. Entries that
    are not JSON objects are skipped with a warning.

    Raises:
        SearchError: if the document has no web pages, or the web
            pages have no list of values.
    """
    web_pages = raw_results.get('webPages')
    if not isinstance(web_pages, dict):
        msg = "no webpages found when parsing query."
        logger.error(f"bing parser: {msg}")
        raise SearchError(msg)

    values = web_pages.get('value')  # type: ignore
    if not isinstance(values, list):
        msg = 'could not convert the "value" field of "webPages" to an array'
        logger.error(f"bing parser: {msg}")
        raise SearchError(msg)

    return SearchOutput(
        results=[
            SearchResult(
                url=_text(result.get('url')),
                site_name=_text(result.get('siteName')),
                text_content=_text(result.get('snippet')),
            )
            for result in _entries(values, "bing", logger)
        ]
    )


def clip_search_output(
    search_output: SearchOutput,
    max_results: int | None = None,
    size_per_result: int | None = None,
    settings: Settings | None = None,
) -> SearchOutput:
    """
    Keep the first max_results results, and clip the text of each to
    size_per_result characters. Unspecified limits are taken from the
    settings. Returns a new object.
    """
    if max_results is None or size_per_result is None:
        settings = settings or Settings()
        if max_results is None:
            max_results = settings.search.max_search_results
        if size_per_result is None:
            size_per_result = settings.search.size_per_result

    return SearchOutput(
        results=[
            result.model_copy(
                update={
                    'text_content': result.text_content[:size_per_result]
                }
            )
            for result in search_output.results[:max_results]
        ]
    )


def build_summary_prompt(
    search_output: SearchOutput,
    head_prompt: str | None = None,
    tail_prompt: str | None = None,
    settings: Settings | None = None,
) -> str:
    """
    The prompt asking a model to summarize the search results. The
    text of all results is placed between the head and tail prompts.
    """
    if head_prompt is None or tail_prompt is None:
        settings = settings or Settings()
        if head_prompt is None:
            head_prompt = settings.search.head_prompt
        if tail_prompt is None:
            tail_prompt = settings.search.tail_prompt

    texts = "".join(r.text_content for r in search_output.results)
    if not texts:
        logger.warning("Building summary prompt with no search results")
    return f"{head_prompt}\n\n{texts}\n\n{tail_prompt}".strip()
