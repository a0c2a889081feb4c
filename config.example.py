"""
Example configuration file for the Otakudesu API
Copy this file to config.py and adjust the values
"""

# === Upstream Site ===
BASE_URL = 'https://otakudesu.best/'  # Trailing slash is added if missing

# === Fetch / Retry Configuration ===
MAX_ATTEMPTS = 3  # Total attempts per upstream request
BACKOFF_SECONDS = 2.0  # Wait BACKOFF_SECONDS * attempt between attempts
REQUEST_TIMEOUT = 30.0  # Seconds per attempt, None waits forever

# === Logging Configuration ===
LOG_LEVEL = 'INFO'  # Options: DEBUG, INFO, WARNING, ERROR, CRITICAL
API_LOG_FILE = 'logs/otakudesu_api.log'

# === Server ===
API_HOST = '0.0.0.0'
API_PORT = 8100
