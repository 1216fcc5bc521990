"""Constants for revfix."""

CONFIG_DIR = ".revfix"
CONFIG_FILE = "config.toml"

# Trimmed snippets of this length or shorter are not searched for
MIN_SNIPPET_LENGTH = 5

DEFAULT_EXCLUDE_PATTERNS = ("node_modules/**", "dist/**", "build/**", "*.min.js")
