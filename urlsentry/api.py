import logging
import os
from typing import List, Literal, Dict, Any

from fastapi import FastAPI, Depends, HTTPException, status
from fastapi.security import APIKeyHeader
from pydantic import BaseModel

from .scoring import enrich_score


VERSION = "0.1.0"

logging.basicConfig(level=os.getenv("URLSENTRY_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("urlsentry.api")


class ScoreResponse(BaseModel):
    schema_version: Literal["1.0"] = "1.0"
    url: str
    status: Literal["safe", "suspicious", "dangerous"]
    score: int
    reasons: List[str]
    features: Dict[str, Any]
    recommendation: str | None = None


API_KEY_NAME = "X-API-KEY"
API_KEY = os.getenv("URLSENTRY_API_KEY")

api_key_header = APIKeyHeader(name=API_KEY_NAME, auto_error=False)


async def require_api_key(api_key: str | None = Depends(api_key_header)):
    # No key configured means the API is open.
    if API_KEY is None:
        return
    if api_key is None or api_key != API_KEY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )


app = FastAPI(title="urlsentry", version=VERSION)


class ScoreUrlRequest(BaseModel):
    url: str


class ScoreUrlsRequest(BaseModel):
    urls: List[str]


def _score(url: str) -> Dict[str, Any]:
    if not url.strip():
        raise HTTPException(
            status_code=422,
            detail="URL Required",
        )
    result = enrich_score(url)
    result["schema_version"] = "1.0"
    logger.info("Scored %s: %s (%d)", url, result["status"], result["score"])
    return result


@app.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}


@app.post("/score-url", response_model=ScoreResponse, dependencies=[Depends(require_api_key)])
async def score_url(body: ScoreUrlRequest):
    return _score(body.url)


class ScoreUrlsResponse(BaseModel):
    results: List[ScoreResponse]


@app.post("/score-urls", response_model=ScoreUrlsResponse, dependencies=[Depends(require_api_key)])
async def score_urls(body: ScoreUrlsRequest):
    results: List[Dict[str, Any]] = [_score(url) for url in body.urls]
    return {"results": results}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("urlsentry.api:app", host="0.0.0.0", port=8000, reload=True)
