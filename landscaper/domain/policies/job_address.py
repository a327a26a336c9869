"""Custom job address micro-format embedded in a job's free-text description.

A job whose site differs from the client's stored address carries the site
inside its description, between two marker lines:

    ---JOB_ADDRESS---
    123 Main St
    Springfield, IL 62701
    ---END_ADDRESS---

Anything that does not match this shape exactly is treated as "no custom
address" so the caller falls back to the client's address.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

BEGIN_MARKER = "---JOB_ADDRESS---"
END_MARKER = "---END_ADDRESS---"

_BLOCK_RE = re.compile(
    re.escape(BEGIN_MARKER) + r"(?P<body>.*?)" + re.escape(END_MARKER),
    re.DOTALL,
)
# "<city>, <state> <zip>"; state is the last token before the zip
_CITY_LINE_RE = re.compile(r"^(?P<city>[^,]+),\s*(?P<state>.+?)\s+(?P<zip>\S+)$")


@dataclass(frozen=True)
class JobAddress:
    street: str
    city: str
    state: str
    zip_code: str

    def one_line(self) -> str:
        return f"{self.street}, {self.city}, {self.state} {self.zip_code}"


def parse_job_address(description: str | None) -> JobAddress | None:
    """Extract the custom address block from a job description.

    Returns None when the description has no block, or when the block does
    not hold exactly a street line and a "city, state zip" line.
    """
    if not description:
        return None

    match = _BLOCK_RE.search(description)
    if not match:
        return None

    lines = [line.strip() for line in match.group("body").splitlines() if line.strip()]
    if len(lines) != 2:
        return None

    street, city_line = lines
    city_match = _CITY_LINE_RE.match(city_line)
    if not city_match:
        return None

    return JobAddress(
        street=street,
        city=city_match.group("city").strip(),
        state=city_match.group("state").strip(),
        zip_code=city_match.group("zip").strip(),
    )


def format_job_address_block(address: JobAddress) -> str:
    """Render the block the way the job form writes it into a description."""
    return (
        f"{BEGIN_MARKER}\n"
        f"{address.street}\n"
        f"{address.city}, {address.state} {address.zip_code}\n"
        f"{END_MARKER}"
    )


def strip_job_address(description: str | None) -> str:
    """Return the description with the address block (if any) removed."""
    if not description:
        return ""
    return _BLOCK_RE.sub("", description).strip()
