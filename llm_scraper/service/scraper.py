from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from llm_scraper.llm.model import AnthropicClient
from llm_scraper.schemas import FetchedDocument, ScrapeRequest, ScrapeResponse
from llm_scraper.service.prompts import build_prompt
from llm_scraper.utils.text import repair_json_prefix


logger = logging.getLogger(__name__)

JSON_PREFILL = "{"


def extract_text(content: List[Dict[str, Any]]) -> str:
    """Join the text blocks of a message, in order, separated by blank lines."""
    return "\n\n".join(block.get("text") or "" for block in content if block.get("type") == "text")


def extract_documents(content: List[Dict[str, Any]]) -> List[FetchedDocument]:
    """
    Collect the documents the web_fetch tool retrieved during the model's turn.

    Only successful fetches that carry a document source are kept; fetch errors
    and search results are skipped.
    """
    documents: List[FetchedDocument] = []
    for block in content:
        if block.get("type") != "web_fetch_tool_result":
            continue
        result = block.get("content") or {}
        if result.get("type") != "web_fetch_result":
            continue
        doc = result.get("content") or {}
        source = doc.get("source")
        if doc.get("type") != "document" or not source:
            continue
        documents.append(
            FetchedDocument(
                url=result.get("url"),
                retrieved_at=result.get("retrieved_at"),
                title=doc.get("title") or None,
                content_type=source.get("media_type") or "text/plain",
                content=source.get("data") or "",
            )
        )
    return documents


async def scrape_with_llm(req: ScrapeRequest, client: AnthropicClient) -> ScrapeResponse:
    """
    Run one extraction: build the prompt, make the single provider call and
    shape its reply.

    Raises UpstreamError when the provider answers with a non-2xx status; any
    other failure propagates unchanged.
    """
    start = time.time()

    prompt, tools = build_prompt(req)
    logger.debug("Prompt: %s", prompt)

    prefill: Optional[str] = JSON_PREFILL if req.mode == "json" else None
    logger.info("Calling %s with tools %s", client.model_id, [t["name"] for t in tools])
    data = await client.create_message(prompt, tools, prefill=prefill)

    content = data.get("content") or []
    result = extract_text(content)
    documents = extract_documents(content)

    if prefill:
        result = repair_json_prefix(result, prefill)

    elapsed_ms = int((time.time() - start) * 1000)
    logger.info("Extracted %d web_fetch results in %d ms", len(documents), elapsed_ms)
    logger.debug("Result: %s", (result[:500] + "...") if len(result) > 500 else result)

    return ScrapeResponse(
        success=True,
        mode=req.mode,
        raw_content=documents,
        claude_result=result,
        original_url=req.url or req.search_query or "",
        search_query=req.search_query,
        schema_used=req.schema_,
        custom_prompt=req.custom_prompt,
    )
