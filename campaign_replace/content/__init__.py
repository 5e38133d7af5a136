"""Campaign content matching and replacement."""

from campaign_replace.content.replacer import (
    apply_replacement,
    campaign_matches,
    count_occurrences,
    matches,
    replace,
)

__all__ = ["apply_replacement", "campaign_matches", "count_occurrences", "matches", "replace"]
