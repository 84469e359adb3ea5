from fastapi import FastAPI
from mcp.server.fastmcp import FastMCP

from storefront.routes import register_api_routes
from storefront.mcp_handlers import register_mcp

# =====================================================
# 1) FastAPI app
# =====================================================
app = FastAPI(title="Watch Storefront")

# =====================================================
# 2) MCP Server
# =====================================================
# Full paths here, the SSE app is mounted at the root so the advertised
# message endpoint needs no mount prefix.
mcp = FastMCP(
    name="storefront-mcp",
    sse_path="/mcp/sse",
    message_path="/mcp/messages/"
)

register_mcp(mcp)

# =====================================================
# 3) Pages + JSON API
# =====================================================
register_api_routes(app)

# =====================================================
# 4) Debug route
# =====================================================
@app.get("/__routes__")
async def debug_routes():
    return [{"path": route.path, "methods": list(route.methods) if hasattr(route, 'methods') else None} for route in app.router.routes]

# =====================================================
# 5) MCP SSE transport (last: only paths no route above matched)
# =====================================================
app.mount("/", mcp.sse_app())


if __name__ == "__main__":
    import uvicorn, os
    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
