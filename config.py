"""Configuration settings for the Submission Link Checker."""

import os
import logging
from typing import Dict, Final, List

# Debug flag: 1 = debug mode (verbose logging), 0 = production mode
DEBUG: Final[int] = int(os.environ.get("GRADER_DEBUG", "0"))

# --- Network Settings ---

GITHUB_API_URL: Final[str] = os.environ.get("GITHUB_API_URL", "https://api.github.com").rstrip("/")
# Per-request timeout in seconds
HTTP_TIMEOUT: Final[float] = float(os.environ.get("GRADER_HTTP_TIMEOUT", "10"))
# Attempts (including the first one) for transient network errors
RETRY_ATTEMPTS: Final[int] = int(os.environ.get("GRADER_RETRY_ATTEMPTS", "3"))
USER_AGENT: Final[str] = "submission-link-checker/1.0"

# Optional Google API key. Only public Drive file metadata is read with it.
GOOGLE_API_KEY: Final[str | None] = os.environ.get("GOOGLE_API_KEY")

if not GOOGLE_API_KEY and DEBUG:
    logging.warning("GOOGLE_API_KEY environment variable not set. Drive links will be checked by HTTP probe only.")

# --- File Paths ---
HISTORY_FILE: Final[str] = os.environ.get("GRADER_HISTORY_FILE", "recent_results.json")
EXPORT_DIR: Final[str] = os.environ.get("GRADER_EXPORT_DIR", "exports")
RULES_FILE: Final[str | None] = os.environ.get("GRADER_RULES_FILE")
LOG_FILE: Final[str] = os.environ.get("GRADER_LOG_FILE", os.path.join("logs", "grader_app.log"))

# --- Grading Settings ---

# Required file extensions (leading dot) or file names per assignment type
DEFAULT_RULES: Final[Dict[str, List[str]]] = {
    "Web Development": [".html", ".css", ".js", "README.md"],
    "Data Analysis": [".ipynb", ".csv", "README.md"],
    "Generative AI": [".py", ".txt", "README.md"],
    "Cybersecurity": [".txt", ".py", "README.md"],
    "Graphics/Design": [".png", ".psd", "README.md"],
}

GRADING_WEIGHTS: Final[Dict[str, float]] = {
    "accessibility": 0.4,
    "requiredFiles": 0.3,
    "structure": 0.3,
}

PROJECT_DIRS: Final[List[str]] = [
    "models", "views", "controllers", "public", "static",
    "routes", "assets", "templates", "src",
]

# Basenames tried against a GitHub Pages site for each extension rule
PAGES_GUESSES: Final[List[str]] = [
    "index", "main", "script", "style", "app", "notebook",
    "data", "model", "requirements", "log", "design",
]

RECENT_RESULTS_LIMIT: Final[int] = 5

# --- Logging Configuration ---
LOG_LEVEL = logging.DEBUG if DEBUG else logging.INFO
# Structured log format: timestamp, level, logger, module.function:line, message
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s'
