"""Server bootstrap for the file normaliser MCP service.

Creates the FastMCP instance, registers the normaliser tool and starts
the MCP server (stdio transport).
"""

from mcp.server.fastmcp import FastMCP

from config import LOG_LEVEL
from core.log import configure_logging

from tools.normalise_files import register as register_normalise_files

mcp = FastMCP("file-normaliser")


def register_all() -> None:
    register_normalise_files(mcp)


register_all()


def main() -> None:
    configure_logging(LOG_LEVEL)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
