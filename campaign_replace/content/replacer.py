"""
Literal find-and-replace over campaign content.

All matching is plain substring matching: the find text is never interpreted
as a pattern. Absent content (None) never matches and is never rewritten.
"""

from typing import Optional

from campaign_replace.models.campaign import Campaign


def contains(content: Optional[str], find: str) -> bool:
    """Return True if find occurs in content. None content never matches."""
    return content is not None and find in content


def matches(html_content: Optional[str], plain_text_content: Optional[str], find: str) -> bool:
    """
    Check whether either content field contains the find text.

    Args:
        html_content: Campaign HTML body, or None if absent
        plain_text_content: Campaign plain-text body, or None if absent
        find: Literal text to look for

    Returns:
        True if find occurs in at least one present field
    """
    return contains(html_content, find) or contains(plain_text_content, find)


def replace(content: Optional[str], find: str, replacement: str) -> Optional[str]:
    """
    Replace every literal occurrence of find in content.

    Args:
        content: Text to rewrite, or None
        find: Literal text to replace (must be non-empty)
        replacement: Text substituted for each occurrence (may be empty)

    Returns:
        The rewritten text, or None if content was None

    Raises:
        ValueError: If find is empty
    """
    if not find:
        raise ValueError("find text must not be empty")
    if content is None:
        return None
    return content.replace(find, replacement)


def count_occurrences(
    html_content: Optional[str], plain_text_content: Optional[str], find: str
) -> int:
    """Count non-overlapping occurrences of find across both content fields."""
    if not find:
        return 0
    return sum(text.count(find) for text in (html_content, plain_text_content) if text)


def campaign_matches(campaign: Campaign, find: str) -> bool:
    """Check a campaign's HTML and plain-text content for the find text."""
    return matches(campaign.html_content, campaign.plain_text_content, find)


def apply_replacement(campaign: Campaign, find: str, replacement: str) -> Campaign:
    """
    Return a copy of the campaign with both content fields rewritten.

    The input campaign is left untouched; every other attribute is preserved.
    """
    return campaign.model_copy(
        update={
            "html_content": replace(campaign.html_content, find, replacement),
            "plain_text_content": replace(campaign.plain_text_content, find, replacement),
        }
    )
