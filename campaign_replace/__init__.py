"""
Bulk find-and-replace for dotdigital email campaigns.

Replaces literal text in the HTML and plain-text content of campaigns, pacing
remote updates with a rate limiter and retrying transient failures.
"""

__version__ = "1.0.0"
