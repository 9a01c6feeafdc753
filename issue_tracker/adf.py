"""Helpers for Atlassian Document Format (ADF), Jira's rich-text JSON."""

from __future__ import annotations

from typing import Any


def paragraph_document(text: str) -> dict:
    """Wrap plain text as a single-paragraph ADF document."""
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }


def first_text_run(adf: Any) -> str:
    """
    Return the text of the first text node of the first block in an ADF document.

    Anything that does not look like ``{"content": [{"content": [{"text": ...}]}]}``
    yields an empty string. Plain strings (Jira API v2 descriptions) are returned as-is.
    """
    if isinstance(adf, str):
        return adf
    if not isinstance(adf, dict):
        return ""

    blocks = adf.get("content")
    if not isinstance(blocks, list) or not blocks:
        return ""

    first_block = blocks[0]
    if not isinstance(first_block, dict):
        return ""

    inline = first_block.get("content")
    if not isinstance(inline, list) or not inline:
        return ""

    first_node = inline[0]
    if not isinstance(first_node, dict):
        return ""

    text = first_node.get("text")
    return text if isinstance(text, str) else ""
