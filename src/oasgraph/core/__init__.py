from __future__ import annotations

# Nested translation steps allowed before a build is aborted
DEFAULT_MAX_ITERATIONS = 20
# Appended to schema names to key them in the input namespace
INPUT_SUFFIX = "Input"
# Name for inline array items without a `title`
ARRAY_ITEMS_NAME = "ArrayItems"
# Link parameter expressions pointing into the parent response body
BODY_POINTER_MARKER = "body#/"
