"""
Publication dates embedded in URLs.

News and blog URLs often carry their date in the path
(e.g. https://example.com/2016/05/12/some-story.html). The date is used as
the TextDocument timestamp when the caller gives none.
"""

import re
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit

# Most specific layout first; all groups are (year, month, day)
DATE_PATTERNS = [
    re.compile(r'/((?:19|20)\d{2})/(\d{1,2})/(\d{1,2})(?:/|$|[^\d])'),
    re.compile(r'(?:^|[/_.-])((?:19|20)\d{2})-(\d{2})-(\d{2})(?:$|[^\d])'),
    re.compile(r'/((?:19|20)\d{2})(\d{2})(\d{2})(?:/|$)'),
]


def date_from_url(url: str) -> Optional[datetime]:
    """
    Find a date in the path of a URL.

    Returns:
        Midnight UTC of the date found, or None
    """
    if not url:
        return None

    path = urlsplit(url).path
    for pattern in DATE_PATTERNS:
        for m in pattern.finditer(path):
            year, month, day = (int(g) for g in m.groups())
            try:
                return datetime(year, month, day, tzinfo=timezone.utc)
            except ValueError:
                continue
    return None
