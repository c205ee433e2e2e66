"""Nextscope - static analysis of React/Next.js source trees over MCP."""

# Load .env so NEXTSCOPE_PROJECT_PATH, NEXTSCOPE_TIMEOUT, etc. are set
# for any entry point (CLI, pytest, MCP server) that imports nextscope.
from dotenv import load_dotenv

load_dotenv()

# Keep in sync with pyproject.toml [project] version.
__version__ = "0.1.0"


def run_server() -> None:
    """Run the Nextscope MCP server (blocking).

    Uses stdio transport for communication with MCP clients.
    """
    from nextscope.mcp.server import run_server as _run_server
    _run_server()
