"""
Executive Order Tracker Configuration

All settings come from the process environment and are read once at import.

DEFAULTS:
- FEDERAL_REGISTER_API_URL=https://www.federalregister.gov/api/v1/documents.json
- EO_SNAPSHOT_PATH=<repo>/public/data.json
- EO_SNAPSHOT_SOURCE=EO_SNAPSHOT_PATH (a file path or an http(s) URL)
- EO_PRESIDENT=donald-trump
- EO_SIGNING_DATE_FROM=01/20/2025
"""

import os
import logging

logger = logging.getLogger(__name__)

FEDERAL_REGISTER_API_URL = os.environ.get(
    "FEDERAL_REGISTER_API_URL", "https://www.federalregister.gov/api/v1/documents.json"
)

DEFAULT_SNAPSHOT_PATH = os.path.join(os.path.dirname(__file__), "..", "public", "data.json")
SNAPSHOT_PATH = os.environ.get("EO_SNAPSHOT_PATH", DEFAULT_SNAPSHOT_PATH)

# Where the web surface loads the snapshot from; may point at a published copy
SNAPSHOT_SOURCE = os.environ.get("EO_SNAPSHOT_SOURCE", SNAPSHOT_PATH)

PRESIDENT = os.environ.get("EO_PRESIDENT", "donald-trump")
SIGNING_DATE_FROM = os.environ.get("EO_SIGNING_DATE_FROM", "01/20/2025")
PER_PAGE = int(os.environ.get("EO_PER_PAGE", "1000"))
REQUEST_TIMEOUT = float(os.environ.get("EO_REQUEST_TIMEOUT", "60"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

USER_AGENT = 'Executive-Order-Tracker/1.0 (public records republisher)'

_config_logged = False

def log_effective_config():
    """Log effective configuration. Call once at startup."""
    global _config_logged
    if _config_logged:
        return
    _config_logged = True

    logger.info(
        f"[Config] api={FEDERAL_REGISTER_API_URL}, snapshot_path={SNAPSHOT_PATH}, "
        f"snapshot_source={SNAPSHOT_SOURCE}, president={PRESIDENT}, "
        f"signing_date_from={SIGNING_DATE_FROM}, per_page={PER_PAGE}"
    )
