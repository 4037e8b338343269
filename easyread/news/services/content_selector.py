from typing import Any


def select_content(content: Any = None, description: Any = None, title: Any = None) -> str:
    """
    Pick the longest non-empty text among body, description and title.

    Sources often put a short "Read more" stub in one field and a fuller text
    in another, so the longest one gives the enrichment step the most context.
    Ties go to the earlier field.
    """
    candidates = [text for text in (content, description, title) if isinstance(text, str) and text]
    if not candidates:
        return ""
    return max(candidates, key=len)
