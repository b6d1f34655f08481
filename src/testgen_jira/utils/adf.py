"""Plain-text extraction from Atlassian Document Format (ADF) values.

Jira Cloud's REST API v3 returns rich text fields as ADF trees::

    {"type": "doc", "version": 1, "content": [
        {"type": "paragraph", "content": [{"type": "text", "text": "..."}]}
    ]}

Server/Data Center and API v2 return the same fields as wiki-markup strings.
"""

from typing import Any


def is_adf_document(value: Any) -> bool:
    """Check whether a field value looks like an ADF node."""
    return isinstance(value, dict) and isinstance(value.get("content"), list)


def first_text_run(value: Any) -> str:
    """
    Return the first text run of the first block of a rich text value.

    Plain strings are returned unchanged. Anything without that structure,
    including ``None`` and empty documents, yields an empty string.

    Args:
        value: A field value as returned by the Jira API

    Returns:
        The extracted text or an empty string
    """
    if isinstance(value, str):
        return value
    if not is_adf_document(value):
        return ""

    blocks = value["content"]
    if not blocks or not isinstance(blocks[0], dict):
        return ""

    runs = blocks[0].get("content")
    if not isinstance(runs, list) or not runs or not isinstance(runs[0], dict):
        return ""

    text = runs[0].get("text")
    return text if isinstance(text, str) else ""
