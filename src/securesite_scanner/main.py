"""FastAPI application for repository security scanning."""

import logging
import os
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from .config import ScanConfig
from .errors import (
    CancelledBeforeTree,
    InvalidRepository,
    RateLimitExceeded,
    RepositoryNotFoundOrPrivate,
    UpstreamError,
)
from .locator import parse_github_url
from .models import ScanResult
from .ratelimit import FixedWindowRateLimiter, RateLimitDecision, get_client_ip
from .scanner import scan_repository

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="SecureSite Scanner",
    description="Pattern-based security scan of GitHub repositories with a 0-100 security score",
    version="0.1.0",
)

# CORS - allow common development origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8000",
    ],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)

rate_limiter = FixedWindowRateLimiter()


class ScanRequest(BaseModel):
    """Request body for POST /scan."""

    model_config = ConfigDict(populate_by_name=True)

    repo_url: str = Field(alias="repoUrl", min_length=1, max_length=500, description="GitHub repository URL")
    github_token: Optional[str] = Field(
        default=None,
        alias="githubToken",
        max_length=200,
        description="Optional GitHub token for private repositories",
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 Bad Request."""
    return JSONResponse(status_code=400, content={"detail": "Invalid request: repoUrl is required and must be a GitHub URL"})


def enforce_rate_limit(request: Request) -> RateLimitDecision:
    """Reject the request with 429 once the client exceeds its window."""
    decision = rate_limiter.hit(get_client_ip(request))
    if not decision.allowed:
        raise HTTPException(
            status_code=429,
            detail="Rate limit exceeded. Please wait a minute before trying again.",
            headers={
                "X-RateLimit-Limit": str(rate_limiter.max_requests),
                "X-RateLimit-Remaining": "0",
                "Retry-After": str(decision.retry_after),
            },
        )
    return decision


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/scan", response_model=ScanResult, response_model_by_alias=True)
async def scan(
    request: ScanRequest,
    response: Response,
    decision: RateLimitDecision = Depends(enforce_rate_limit),
) -> ScanResult:
    """
    Scan a GitHub repository for security issues.

    - **repoUrl**: URL of the GitHub repository to scan
    - **githubToken**: Optional token; falls back to the server's GITHUB_TOKEN
    """
    response.headers["X-RateLimit-Limit"] = str(rate_limiter.max_requests)
    response.headers["X-RateLimit-Remaining"] = str(decision.remaining)

    try:
        parse_github_url(request.repo_url)
    except InvalidRepository:
        raise HTTPException(
            status_code=400,
            detail="Invalid GitHub URL. Please provide a valid repository URL.",
        )

    token = request.github_token or os.environ.get("GITHUB_TOKEN") or None

    try:
        logger.info(f"Scan requested for {request.repo_url}")
        return await scan_repository(request.repo_url, token, ScanConfig.from_env())
    except InvalidRepository as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RepositoryNotFoundOrPrivate:
        raise HTTPException(
            status_code=404,
            detail="This repo appears to be private or inaccessible. Provide a GitHub token to scan private repositories.",
        )
    except RateLimitExceeded as e:
        headers = {}
        if e.reset_at is not None:
            headers["X-GitHub-RateLimit-Reset"] = e.reset_at.isoformat()
        raise HTTPException(status_code=429, detail=str(e), headers=headers or None)
    except CancelledBeforeTree as e:
        raise HTTPException(status_code=504, detail=str(e))
    except UpstreamError as e:
        logger.warning(f"GitHub request failed for {request.repo_url}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.error(f"Scan failed for {request.repo_url}: {e}")
        raise HTTPException(status_code=500, detail="An error occurred while scanning. Please try again.")
