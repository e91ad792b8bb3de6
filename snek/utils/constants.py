"""Reusable header names, content types and defaults."""
VERSION = "0.1.0"
LIBRARY_NAME = "snek-python"

CONTENT_TYPE = "content-type"
USER_AGENT = "user-agent"

JSON_TYPE = "application/json"
FORM_TYPE = "application/x-www-form-urlencoded"

# Substring checks used when deciding how to serialize a request body.
JSON_MARKER = "application/json"
FORM_MARKER = "urlencoded"

DEFAULT_CHARSET = "utf-8"
DEFAULT_CHUNK_SIZE = 8192
