"""Admin API routes for health and runtime configuration."""

from starlette.requests import Request
from starlette.responses import JSONResponse

from webparser_mcp.admin.service import get_current_config, update_config


async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint for container orchestration.

    Returns:
        JSONResponse with status: healthy
    """
    return JSONResponse({"status": "healthy"})


async def api_config_get(request: Request) -> JSONResponse:
    """Get current runtime configuration.

    Returns:
        JSONResponse with current config values
    """
    return JSONResponse(get_current_config())


async def api_config_update(request: Request) -> JSONResponse:
    """Update runtime configuration.

    Returns:
        JSONResponse with operation status
    """
    try:
        body = await request.json()
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")
        config_updates = body.get("config", {})
        if not isinstance(config_updates, dict):
            raise ValueError("'config' must be an object")
        result = update_config(config_updates)
        return JSONResponse(result)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError
        return JSONResponse(
            {
                "status": "error",
                "message": str(e),
            },
            status_code=400,
        )
