"""OpenProject module — FastAPI service for project and Gantt planning."""

from __future__ import annotations

import structlog
from fastapi import Depends, FastAPI

from modules.openproject.client import OpenProjectClient
from modules.openproject.manifest import MANIFEST
from modules.openproject.tools import OpenProjectTools
from shared.auth import require_service_auth
from shared.config import get_settings
from shared.schemas.common import HealthResponse
from shared.schemas.tools import ModuleManifest, ToolCall, ToolResult

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer(),
    ],
)

logger = structlog.get_logger()
app = FastAPI(title="OpenProject Module", version="1.0.0")

tools: OpenProjectTools | None = None

# Allowlist of valid tool methods (must match manifest tool names)
_ALLOWED_TOOLS = {
    "list_projects", "get_project", "create_project",
    "list_work_packages", "create_work_package", "delete_work_package",
    "create_dependency", "create_project_plan",
}


@app.on_event("startup")
async def startup():
    global tools
    settings = get_settings()

    # No upfront validation: a missing URL or key surfaces on the first call.
    client = OpenProjectClient(
        base_url=settings.openproject_url,
        api_key=settings.openproject_api_key,
        default_type_id=settings.openproject_default_type_id,
        timeout=settings.openproject_timeout,
    )
    tools = OpenProjectTools(client)
    logger.info("openproject_module_ready", url=settings.openproject_url)


@app.on_event("shutdown")
async def shutdown():
    if tools is not None:
        tools.client.close()


@app.get("/manifest", response_model=ModuleManifest)
async def manifest(_=Depends(require_service_auth)):
    """Return the module manifest."""
    return MANIFEST


@app.post("/execute", response_model=ToolResult)
async def execute(call: ToolCall, _=Depends(require_service_auth)):
    """Execute a tool call."""
    if tools is None:
        return ToolResult(tool_name=call.tool_name, success=False, error="Module not ready")

    try:
        tool_name = call.tool_name.split(".")[-1]
        if tool_name not in _ALLOWED_TOOLS:
            return ToolResult(
                tool_name=call.tool_name,
                success=False,
                error=f"Unknown tool: {call.tool_name}",
            )

        handler = getattr(tools, tool_name)
        result = await handler(**call.arguments)
        return ToolResult(tool_name=call.tool_name, success=True, result=result)
    except Exception as e:
        logger.error("tool_execution_error", tool=call.tool_name, error=str(e), exc_info=True)
        return ToolResult(tool_name=call.tool_name, success=False, error=str(e))


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="ok")
