import os
import dotenv
import logging

dotenv.load_dotenv()

GITHUB_TOKEN = os.environ.get("GITHUB_TOKEN")
GITHUB_GRAPHQL_URL = os.environ.get(
    "GITHUB_GRAPHQL_URL", "https://api.github.com/graphql"
)

OVERRIDE_LOGGING = logging.getLevelName(os.environ.get("OVERRIDE_LOGGING", "WARNING"))

TELEGRAM_TOKEN = os.environ.get("TELEGRAM_TOKEN")
TELEGRAM_CHAT_ID = os.environ.get("TELEGRAM_CHAT_ID")

PUSH_GATEWAY = os.environ.get("PUSH_GATEWAY")

SNAPSHOT_ADAPTER = os.environ.get("SNAPSHOT_ADAPTER", "policy")

COMMENT_COUNT_THRESHOLD = int(os.environ.get("COMMENT_COUNT_THRESHOLD", 5))

PREPARATION_STATUS = os.environ.get("PREPARATION_STATUS", "Preparation")
AWAITING_QUALITY_CHECK_STATUS = os.environ.get(
    "AWAITING_QUALITY_CHECK_STATUS", "Awaiting Quality Check"
)
