"""FastAPI application for the orgmarkup local JSON API."""

import secrets
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .. import __version__
from ..adapters.renderers import HtmlRenderer
from ..adapters.yaml_codec import buffer_to_dict
from ..runtime import Runtime


class FormatRequest(BaseModel):
    text: str
    style: bool | None = None
    with_marks: bool | None = None
    linkify: bool | None = None
    html: bool = False
    unfold: bool = False


def create_app(runtime: Runtime, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance with settings and property index
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="orgmarkup API",
        description="Org inline markup formatting over local JSON",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    security_scheme = HTTPBearer(auto_error=False)

    async def verify_token(
        credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
    ) -> None:
        """Verify bearer token when one is configured."""
        if token is None:
            return None
        if credentials is None or credentials.credentials != token:
            raise HTTPException(status_code=401, detail="Invalid or missing token")

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.post("/format")
    async def format_text(
        request: FormatRequest,
        auth: None = Depends(verify_token),
    ) -> dict[str, Any]:
        """Format Org markup; returns text plus spans, and HTML if asked."""
        config = runtime.format_config(
            style=request.style,
            with_marks=request.with_marks,
            linkify=request.linkify,
        )
        buffer = runtime.format(request.text, config, unfold=request.unfold)

        result = buffer_to_dict(buffer)
        if request.html:
            result["html"] = HtmlRenderer().render(buffer)
        return result

    @app.get("/property")
    async def resolve_property(
        name: str = Query(..., description="Property name, e.g. CUSTOM_ID or ID"),
        value: str = Query(..., description="Property value"),
        auth: None = Depends(verify_token),
    ) -> dict[str, Any]:
        """Find the note a property link points to."""
        path = runtime.properties.open_note_with_property(name, value)
        if path is None:
            raise HTTPException(status_code=404, detail=f"No note with {name} = {value}")
        return {"name": name, "value": value, "path": str(path.absolute())}

    @app.post("/reindex")
    async def reindex(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Rescan notes for property drawers."""
        runtime.properties.rebuild()
        return {"status": "ok"}

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
