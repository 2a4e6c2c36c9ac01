# pyright: reportUnusedImport=false
# flake8: noqa

from .results import (
    SearchError,
    SearchResult,
    SearchOutput,
    parse_tavily_results,
    parse_bing_results,
    clip_search_output,
    build_summary_prompt,
)
