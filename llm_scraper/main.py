import logging
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from llm_scraper.llm.model import AnthropicClient, UpstreamError
from llm_scraper.schemas import ErrorResponse, ScrapeRequest, ScrapeResponse
from llm_scraper.service.scraper import scrape_with_llm
from llm_scraper.utils.logging import configure_logging


configure_logging()
logger = logging.getLogger(__name__)

INDEX_HTML = Path(__file__).parent / "static" / "index.html"
GENERIC_ERROR = "Failed to scrape the website. Please try again later."

app = FastAPI(title="LLM Web Scraper", version="0.1.0")


def get_client() -> AnthropicClient:
    return AnthropicClient.get()


@app.exception_handler(StarletteHTTPException)
def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
def validation_error(request: Request, exc: RequestValidationError):
    logger.info("Rejected request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.get("/", response_class=HTMLResponse)
def index():
    return HTMLResponse(INDEX_HTML.read_text(encoding="utf-8"))


@app.post(
    "/api/scrape",
    response_model=ScrapeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def scrape(req: ScrapeRequest, client: AnthropicClient = Depends(get_client)):
    logger.info("Request: %s mode for %s", req.mode, req.url or f"search: {req.search_query}")
    logger.info(
        "Has custom prompt: %s, has schema: %s, has search query: %s",
        bool(req.custom_prompt), bool(req.schema_), bool(req.search_query),
    )

    if not req.url and not req.search_query:
        raise HTTPException(status_code=400, detail="URL or search query is required")

    try:
        return await scrape_with_llm(req, client)
    except UpstreamError as e:
        logger.error("Provider error: %s %s", e.status_code, e.body[:500])
        raise HTTPException(status_code=e.status_code, detail=f"API error: {e.status_code}")
    except Exception:
        logger.exception("Scrape failed")
        raise HTTPException(status_code=500, detail=GENERIC_ERROR)
