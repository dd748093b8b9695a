"""Regex and XPath selectors for the 24h.com.vn gold price chart box."""

import re

# All script elements, in document order
SCRIPT_ELEMENTS = "//script"

# categories: ["01/10", "02/10", ...]
CATEGORIES_PATTERN = re.compile(r"categories\s*:\s*\[([^\]]*)\]")

# name: 'Mua vào', color: '#...', data: [123, 456, ...]
SERIES_PATTERN = re.compile(
    r"name\s*:\s*['\"]([^'\"]*)['\"]\s*,\s*"
    r"color\s*:\s*['\"]([^'\"]*)['\"]\s*,\s*"
    r"data\s*:\s*\[([^\]]*)\]"
)
