"""FastAPI web application for the wakachi tokenization service."""

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .. import __version__
from ..pipeline import MAX_BODY_SIZE
from .state import ServiceState

DEMO_TEXT = "すもももももももものうち"


async def read_body(request: Request, limit: int = MAX_BODY_SIZE) -> bytes:
    """
    Read the request body, rejecting it once it reaches ``limit`` bytes.

    Raises:
        HTTPException: 413 for an oversized body, 400 for a malformed
            Content-Length header.
    """
    too_large = HTTPException(
        status_code=413,
        detail=f"request body must be smaller than {limit} bytes",
    )

    content_length = request.headers.get("content-length")
    if content_length is not None:
        try:
            declared = int(content_length)
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid Content-Length header") from None
        if declared >= limit:
            raise too_large

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) >= limit:
            raise too_large
    return bytes(body)


def create_app(state: ServiceState) -> FastAPI:
    """
    Create the web application serving from a prepared service state.

    Args:
        state: Engine handle, pipeline and configuration built at startup.

    Returns:
        FastAPI: The application, with ``POST /tokenize`` and, in demo
        mode, ``GET /``.
    """
    app = FastAPI(
        title="wakachi",
        description="Morphological tokenization over HTTP",
        version=__version__,
    )
    app.state.service = state

    @app.post("/tokenize")
    async def tokenize(request: Request):
        """Tokenize the raw UTF-8 request body."""
        body = await read_body(request)
        payload = await run_in_threadpool(state.pipeline.run, body)
        return JSONResponse(content=payload)

    if state.config.demo:

        @app.get("/")
        async def demo():
            """Tokenize a fixed example sentence."""
            payload = await run_in_threadpool(state.pipeline.run, DEMO_TEXT.encode("utf-8"))
            return JSONResponse(content=payload)

    return app
