"""Provider service: FastAPI app exposing the resource lifecycle over HTTP."""

from __future__ import annotations

import structlog
from fastapi import Depends, FastAPI, HTTPException

from dokploy_client import Dokploy, get_settings
from dokploy_provider import __version__
from dokploy_provider.auth import require_service_key
from dokploy_provider.log_config import configure_logging
from dokploy_provider.manifest import build_manifest
from dokploy_provider.schemas import HealthResponse, ProviderManifest, ResourceCall, ResourceResult
from dokploy_provider.tools import ProviderTools

settings = get_settings()
configure_logging(settings)

logger = structlog.get_logger()
app = FastAPI(title="Dokploy Provider", version=__version__)

_tools: ProviderTools | None = None


@app.on_event("startup")
def startup():
    global _tools

    if not settings.host or not settings.api_key:
        logger.warning("dokploy_not_configured", msg="Set DOKPLOY_HOST and DOKPLOY_API_KEY")
        return
    _tools = ProviderTools(Dokploy.from_settings(settings))
    logger.info("provider_ready", host=settings.host)


@app.on_event("shutdown")
def shutdown():
    if _tools is not None:
        _tools.api.close()


def get_tools() -> ProviderTools:
    if _tools is None:
        raise HTTPException(status_code=503, detail="Provider is not configured")
    return _tools


@app.get("/manifest", response_model=ProviderManifest)
def manifest(_=Depends(require_service_key)):
    """Return the attribute schema of every resource and data source."""
    return build_manifest()


@app.post("/execute", response_model=ResourceResult)
def execute(
    call: ResourceCall,
    _=Depends(require_service_key),
    tools: ProviderTools = Depends(get_tools),
):
    """Run one lifecycle operation."""
    try:
        return tools.execute(call)
    except Exception as e:
        logger.error(
            "resource_operation_error",
            type_name=call.type_name,
            operation=call.operation,
            error=str(e),
            exc_info=True,
        )
        return ResourceResult(success=False, error=str(e))


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok")
