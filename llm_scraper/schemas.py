from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


Mode = Literal["markdown", "json"]


class ScrapeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = Field(None, description="Page to extract from")
    search_query: Optional[str] = Field(None, alias="searchQuery", description="Web search to run instead of a URL")
    mode: Mode = Field("json", description="markdown (verbatim content) or json (structured extraction)")
    schema_: Optional[str] = Field(None, alias="schema", description="JSON shape the output must follow")
    custom_prompt: Optional[str] = Field(None, alias="prompt", description="Extra extraction instructions")

    @field_validator("url", "search_query", "schema_", "custom_prompt", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("mode", mode="before")
    @classmethod
    def _default_mode(cls, value):
        return value or "json"


class FetchedDocument(BaseModel):
    type: Literal["web_fetch"] = "web_fetch"
    url: Optional[str] = None
    retrieved_at: Optional[str] = None
    title: Optional[str] = None
    content_type: str = "text/plain"
    content: str = ""


class ScrapeResponse(BaseModel):
    success: bool = True
    mode: Mode
    raw_content: List[FetchedDocument]
    claude_result: str
    original_url: str
    search_query: Optional[str] = None
    schema_used: Optional[str] = None
    custom_prompt: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
