"""Main application entry point.

Serves the NiceGUI knowledge vault page (default port 8080).
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point."""
    from nicegui import ui

    from knowledge_vault.config import get_client_config
    from knowledge_vault.ui.vault_page import vault_page  # noqa: F401 - Registers the page

    config = get_client_config()
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))

    logger.info(f"Backend API at {config.api_base_url}")
    logger.info(f"Knowledge vault UI available at http://localhost:{port}/")

    ui.run(
        title="AI Knowledge Vault",
        host=host,
        port=port,
        reload=False,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "knowledge-vault-secret"),
    )


if __name__ == "__main__":
    main()
