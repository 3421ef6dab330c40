from __future__ import annotations

from typing import Any, Dict, List, Tuple

from llm_scraper.schemas import ScrapeRequest


WEB_FETCH_MAX_USES = 5
WEB_SEARCH_MAX_USES = 3

WEB_FETCH_TOOL: Dict[str, Any] = {
    "type": "web_fetch_20250910",
    "name": "web_fetch",
    "max_uses": WEB_FETCH_MAX_USES,
}

WEB_SEARCH_TOOL: Dict[str, Any] = {
    "type": "web_search_20250305",
    "name": "web_search",
    "max_uses": WEB_SEARCH_MAX_USES,
}


def _search_prompt(req: ScrapeRequest) -> str:
    if req.mode == "markdown":
        return (
            f'Search for "{req.search_query}" and return the most relevant content as markdown. '
            "Focus on recent, high-quality results."
        )

    prompt = (
        f'Search for "{req.search_query}" and extract structured data from the most relevant results. '
        "Return ONLY valid JSON."
    )
    if req.custom_prompt:
        prompt += f" {req.custom_prompt}"
    return prompt


def _url_prompt(req: ScrapeRequest) -> str:
    if req.mode == "markdown":
        return (
            f"Extract and return all content from {req.url} as markdown (nothing else around it). "
            "Don't hallucinate, paraphrase or make anything up, just 1:1 content."
        )

    prompt = (
        f"Fetch the content from {req.url} and extract structured data. "
        "Your response must be ONLY valid JSON with no additional text, explanations, or markdown formatting."
    )
    # A schema fixes the output shape, so the custom prompt is ignored when both are given
    if req.schema_:
        prompt += f" Use this exact JSON schema structure: {req.schema_}"
    elif req.custom_prompt:
        prompt += f" Extract data based on these instructions: {req.custom_prompt}."
    else:
        prompt += (
            " Extract the main content and organize it into a clean JSON format "
            "with relevant fields like title, description, content, etc."
        )
    return prompt


def build_tools(req: ScrapeRequest) -> List[Dict[str, Any]]:
    tools: List[Dict[str, Any]] = []
    if req.search_query:
        tools.append(dict(WEB_SEARCH_TOOL))
    tools.append(dict(WEB_FETCH_TOOL))
    return tools


def build_prompt(req: ScrapeRequest) -> Tuple[str, List[Dict[str, Any]]]:
    """
    Turn a scrape request into the instruction text and the tool grants for it.

    A search query takes precedence over a URL when both are set.

    Returns:
        Tuple of (prompt, tools)
    """
    if req.search_query:
        prompt = _search_prompt(req)
    else:
        prompt = _url_prompt(req)
    return prompt, build_tools(req)
