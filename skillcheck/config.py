"""Central configuration defaults and constants for the skill-check engine."""

import os

# Dice pool
POOL_SIZE = 5  # attribute + fate dice
MAX_ATTRIBUTE_DICE = 10
ATTRIBUTE_DIE_FACES = 10
FATE_DIE_FACES = 6

# Record flags (namespace/key holding the replay configuration)
FLAG_SCOPE = "cryptomancer"
FLAG_KEY = "check-config"

# Rendering
DEFAULT_TEMPLATE_ID = os.getenv("SKILLCHECK_TEMPLATE_ID", "skill-check.html.j2")
DEFAULT_LANGUAGE = os.getenv("SKILLCHECK_LANGUAGE", "en")

# Roll privacy
DEFAULT_ROLL_MODE = os.getenv("SKILLCHECK_ROLL_MODE", "publicroll")
# GM recipients - parse from comma-separated env var or use default set
_gm_recipients_env = os.getenv("SKILLCHECK_GM_RECIPIENTS")
DEFAULT_GM_RECIPIENTS = (
    [r.strip() for r in _gm_recipients_env.split(",") if r.strip()]
    if _gm_recipients_env
    else ["gm"]
)

# Persistence
DEFAULT_RECORD_DIR = os.getenv("SKILLCHECK_RECORD_DIR", "/var/skillcheck")
DEFAULT_USE_JSON_STORE = os.getenv("SKILLCHECK_USE_JSON_STORE", "false").lower() in ("true", "1", "yes", "on")

# Logging
DEFAULT_LOG_LEVEL = os.getenv("SKILLCHECK_LOG_LEVEL", "INFO").upper()
