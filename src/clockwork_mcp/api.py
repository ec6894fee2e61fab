"""FastAPI application setup for the Clockwork MCP Server."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clockwork_mcp.clockwork_server import ClockworkMCPServer
from clockwork_mcp.settings import settings

server = ClockworkMCPServer()

# Select transport protocol
if settings.MCP_TRANSPORT_PROTOCOL == "sse":
    from fastmcp.server.http import create_sse_app  # type: ignore

    mcp_app = create_sse_app(server.mcp, message_path="/sse/message", sse_path="/sse")
    mcp_endpoint = "/sse"
else:
    mcp_app = server.mcp.http_app(path="/mcp")
    mcp_endpoint = "/mcp"

# Initialize FastAPI with MCP lifespan
app = FastAPI(lifespan=mcp_app.lifespan)

# Optional CORS
if settings.CORS_ENABLED:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )


@app.get("/health")
async def health_check():
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "service": "clockwork-mcp-server",
            "transport_protocol": settings.MCP_TRANSPORT_PROTOCOL,
            "mcp_endpoint": mcp_endpoint,
        },
    )


# The MCP app is mounted at root and catches every unmatched route,
# so all FastAPI routes must be defined above this point.
def _enforce_no_routes_after_mount():
    """Prevent accidental route additions after MCP mount."""
    def _blocked_route(*args, **kwargs):
        raise RuntimeError(
            "Cannot add routes after mounting MCP app at root. "
            "Move all route definitions before app.mount('/', mcp_app)"
        )

    app.add_route = _blocked_route
    app.add_api_route = _blocked_route


app.mount("/", mcp_app)
_enforce_no_routes_after_mount()
