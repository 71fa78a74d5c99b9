# sedml/logging/_config.py
"""Configuration for debug logging system."""

from pathlib import Path
import os

# Maximum length for field values before they're stored as blobs
MAX_FIELD_LENGTH = int(os.getenv("SEDML_MAX_FIELD_LEN", 8000))

# Directory for storing large field values, created on first use
BLOB_DIR = Path(os.getenv("SEDML_BLOB_DIR", "logs/blobs")).absolute()

# Directory for daily log files
LOG_DIR = Path(os.getenv("SEDML_LOG_DIR", "logs/debug")).absolute()

# Whether to include stack traces in error logs (can be disabled for cleaner output)
INCLUDE_STACK_TRACES = os.getenv("SEDML_STACK_TRACES", "1") == "1"
