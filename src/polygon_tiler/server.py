"""MCP server for polygon-tiler.

Registers all tools and runs via stdio transport.
"""

from mcp.server.fastmcp import FastMCP

from .tools.subject import register_subject_tools
from .tools.tiling import register_tiling_tools
from .tools.export import register_export_tools
from .tools.session import register_session_tools
from .tools.status import register_status_tools

mcp = FastMCP(
    "polygon-tiler",
    instructions="Cut planar polygons into per-cell fragments by a grid or a repeating convex shape",
)

# Register all tool groups
register_subject_tools(mcp)
register_tiling_tools(mcp)
register_export_tools(mcp)
register_session_tools(mcp)
register_status_tools(mcp)


def main():
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
