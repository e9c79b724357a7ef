"""Parse service — exposes a parser collaborator as ``POST /parse``.

Browser front-ends call this directly, so CORS is wide open for POST.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ast_graph.parsers import AstParser, ParseError, StreeParser

logger = logging.getLogger(__name__)


class ParseRequest(BaseModel):
    code: str


def create_app(parser: AstParser | None = None) -> FastAPI:
    """Build the FastAPI app; defaults to a local ``stree json`` parser."""
    app = FastAPI(title="ast-graph parse service")
    app.state.parser = parser or StreeParser()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request, exc):
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})

    @app.post("/parse")
    def parse(req: ParseRequest):
        try:
            ast = app.state.parser.parse(req.code)
        except ParseError:
            logger.exception("Error parsing submitted code")
            return JSONResponse(status_code=500, content={"detail": "Failed to execute parser"})
        return JSONResponse(content=ast)

    return app


def run(host: str = "0.0.0.0", port: int = 4000, parser: AstParser | None = None) -> None:
    """Serve the app with uvicorn (blocks)."""
    import uvicorn

    logger.info("Server starting on %s:%d", host, port)
    uvicorn.run(create_app(parser), host=host, port=port)
