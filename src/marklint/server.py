"""marklint MCP Server - Main entry point."""
import logging
import sys

from mcp.server.fastmcp import FastMCP

from marklint.config import Config
from marklint.tools import lint

# Configure logging to stderr (CRITICAL: stdout is reserved for JSON-RPC)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)]
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("marklint")

# Load configuration
config = Config.load()

logger.info(f"marklint v{config.version} starting...")
logger.info(f"Lint config: {config.config_path or 'built-in defaults'}")
logger.info(f"Result version: {config.result_version}")


def main():
    """Main entry point for the MCP server."""
    try:
        logger.info("Registering tools...")
        lint.register(mcp, config)
        logger.info("Tools registered: lint_markdown, fix_markdown, get_lint_rules")

        logger.info("Starting MCP server on stdio...")
        mcp.run(transport="stdio")

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
