"""
Constants for redirect_scanner package.

Centralizes design defaults used by the settings and the CLI.
"""

# Concurrency
DEFAULT_MAX_CONCURRENCY = 5  # In-flight probes at any instant

# Probe timing (seconds)
DEFAULT_PROBE_TIMEOUT = 15.0  # Hard deadline per navigation
DEFAULT_SETTLE_DELAY = 4.0  # Wait for client-side / multi-hop redirects

# Schemes tried in order when the input has none
DEFAULT_SCHEMES = ("http://", "https://")

# Output
DEFAULT_OUTPUT_FILE = "redirects.txt"
REPORT_GROUP_HEADER = "{host} redirects"

# Navigation engines
NAVIGATOR_HTTP = "http"
NAVIGATOR_BROWSER = "browser"
NAVIGATORS = (NAVIGATOR_HTTP, NAVIGATOR_BROWSER)
DEFAULT_NAVIGATOR = NAVIGATOR_BROWSER

# A modern desktop Chrome UA
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/127.0.0.0 Safari/537.36"
)

# Outcome classifications
OUTCOME_NO_REDIRECT = "no_redirect"
OUTCOME_SAFE = "safe"
OUTCOME_NOTABLE = "notable"
OUTCOME_UNCLASSIFIABLE = "unclassifiable"
