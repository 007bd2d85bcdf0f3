"""
Entry point for the Bank Products Backend
"""

import logging
from dotenv import load_dotenv

# Load environment variables from .env file before settings are read
load_dotenv()

from bankproducts.config.settings import PORT, LOG_LEVEL  # noqa: E402

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Bank Products Backend on port {PORT}")
    uvicorn.run("bankproducts.app:app", host="0.0.0.0", port=PORT)
