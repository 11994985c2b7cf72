"""Free-text search over local messaging data.

Fans a sanitized query out to contacts, conversations and message content
and returns the results as lazily built lists.
"""

__version__ = "1.0.0"
