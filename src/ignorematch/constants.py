"""
Central configuration for ignore file processing
"""

# Name of the ignore file searched for by the locator
IGNORE_FILENAME = ".gitignore"

# Directory marking the top of a repository; the upward scan stops here
REPO_MARKER = ".git"

# Limits for security and performance
MAX_IGNORE_FILE_SIZE = 1024 * 1024  # 1MB
MAX_PATTERNS_PER_FILE = 10000

# Wildcards wrapped around every rule before compilation
RECURSIVE_PREFIX = "**/"
RECURSIVE_SUFFIX = "/**"

# Environment overrides
ENV_IGNORE_FILENAME = "IGNOREMATCH_FILENAME"
ENV_REPO_MARKER = "IGNOREMATCH_REPO_MARKER"
ENV_MAX_FILE_SIZE = "IGNOREMATCH_MAX_FILE_SIZE"
ENV_MAX_PATTERNS = "IGNOREMATCH_MAX_PATTERNS"
ENV_LOG_LEVEL = "IGNOREMATCH_LOG_LEVEL"
ENV_LOG_FORMAT = "IGNOREMATCH_LOG_FORMAT"
