"""Parser for IBW (Imaginary Brick Wall) prospect rankings in text form."""

import logging
import re
from pathlib import Path

from prospects import Prospect

log = logging.getLogger(__name__)

# "<number>) <name> - <team>, <position>, <age>[. description]"
IBW_LINE_RE = re.compile(r'^(\d+)\)\s*([^-]+)-\s*([^,]+),\s*([^,]+),\s*(\d+\.?\d*)')

IBW_HEADERS = ['Number', 'Player', 'Team', 'Position', 'Age']


def prospect_to_row(prospect: Prospect, headers: list[str] = IBW_HEADERS) -> dict:
    """Convert a Prospect to a flat row, naming the five columns by ``headers``."""
    values = [
        str(prospect.number),
        prospect.name,
        prospect.team,
        prospect.position,
        f'{prospect.age:g}',
    ]
    return dict(zip(headers, values))


def parse_ibw_text(text: str) -> list[Prospect]:
    """Parse IBW ranking text into Prospect records.

    Blank lines are ignored. Lines that do not follow the ranking format
    or lack a name, team or position are skipped with a warning.

    Args:
        text: Raw IBW text content.

    Returns:
        List of Prospect objects in ranking order.

    Raises:
        ValueError: If the input is empty or no line could be parsed.
    """
    if not text or not isinstance(text, str):
        raise ValueError("Invalid input: IBW text must be a non-empty string")

    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        raise ValueError("Invalid IBW file: no content found")

    prospects: list[Prospect] = []
    skipped = 0

    for line_num, line in enumerate(lines, start=1):
        m = IBW_LINE_RE.match(line)
        if not m:
            reason = 'does not match expected IBW format'
        else:
            number, name, team, position, age = (g.strip() for g in m.groups())
            if name and team and position:
                prospects.append(Prospect(
                    number=int(number),
                    name=name,
                    team=team,
                    position=position,
                    age=float(age),
                ))
                continue
            reason = 'missing required fields'

        skipped += 1
        log.warning("Line %d skipped: %s - %r", line_num, reason, line[:50])

    if skipped:
        log.warning("Skipped %d lines that did not match IBW format", skipped)

    if not prospects:
        raise ValueError(
            "No valid player data found in IBW text. Please check the input format."
        )

    log.info("%d players parsed from IBW text", len(prospects))
    return prospects


def parse_ibw_file(path: str | Path) -> list[Prospect]:
    """Read and parse an IBW text file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file holds no parseable entries.
    """
    path = Path(path)
    text = path.read_text(encoding='utf-8-sig')
    return parse_ibw_text(text)
