"""Report generation for match results (CSV, HTML, summary)."""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from prospects import Match, MatchStats
from prospects.fields import get_field_value
from prospects.reader import write_csv

log = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / 'templates'

OUTPUT_COLUMNS = [
    'IBW Rank',
    'IBW Player',
    'IBW Team',
    'Fantrax Number',
    'Fantrax Player',
    'Fantrax Team',
    'Fantrax Position',
    'Fantrax Age',
    'Match Type',
]

# Conventional column names tried after the configured one
NUMBER_ALIASES = ['Number', '#', 'ID']
POSITION_ALIASES = ['Position', 'Pos']


def _with_aliases(configured, aliases: list[str]) -> list:
    candidates = configured if isinstance(configured, (list, tuple)) else [configured]
    return [c for c in [*candidates, *aliases] if c is not None]


def _match_to_row(match: Match, column_mapping: dict) -> dict:
    """Convert a Match to a flat dict for CSV/HTML output."""
    ibw_roles = column_mapping.get('ibw', {})
    fantrax_roles = column_mapping.get('fantrax', {})
    ibw = match.ibw_player
    fx = match.fantrax_player
    return {
        'IBW Rank': get_field_value(ibw, ibw_roles.get('rank')),
        'IBW Player': get_field_value(ibw, ibw_roles.get('player')),
        'IBW Team': get_field_value(ibw, ibw_roles.get('team')),
        'Fantrax Number': get_field_value(
            fx, _with_aliases(fantrax_roles.get('number'), NUMBER_ALIASES),
        ),
        'Fantrax Player': get_field_value(fx, fantrax_roles.get('player')),
        'Fantrax Team': get_field_value(fx, fantrax_roles.get('team')),
        'Fantrax Position': get_field_value(
            fx, _with_aliases(fantrax_roles.get('position'), POSITION_ALIASES),
        ),
        'Fantrax Age': get_field_value(fx, fantrax_roles.get('age') or 'Age'),
        'Match Type': match.match_type,
    }


def format_results(matches: list[Match], column_mapping: dict) -> list[dict]:
    """Flatten matches into output rows.

    Every row has exactly the keys in OUTPUT_COLUMNS; values that cannot be
    resolved are empty strings.

    Args:
        matches: Matches as returned by reconcile().
        column_mapping: The resolved column mapping used for matching.

    Returns:
        One dict per match, in match order.
    """
    return [_match_to_row(m, column_mapping) for m in matches]


def write_csv_report(
    rows: list[dict],
    output_path: Path,
    columns: list[str] = OUTPUT_COLUMNS,
) -> None:
    """Write formatted match rows as a CSV report.

    Args:
        rows: Rows as returned by format_results().
        output_path: Path for the output CSV file.
        columns: Column order.
    """
    count = write_csv(rows, output_path, columns)
    log.info("CSV report written: %s (%d rows)", output_path, count)


def write_html_report(
    rows: list[dict],
    stats: MatchStats,
    output_path: Path,
    title: str = '',
) -> None:
    """Write formatted match rows as an HTML report using Jinja2.

    Args:
        rows: Rows as returned by format_results().
        stats: Statistics of the matching pass.
        output_path: Path for the output HTML file.
        title: Report title, usually the IBW file name.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template('report.html')

    html = template.render(
        title=title,
        rows=rows,
        stats=stats,
        columns=OUTPUT_COLUMNS,
    )

    output_path.write_text(html, encoding='utf-8')
    log.info("HTML report written: %s", output_path)


def print_summary(stats: MatchStats, title: str = '') -> None:
    """Print a summary of the matching statistics to stdout."""
    print(f"\n=== Match report: {title} ===")
    print(f"Total IBW players:             {stats.total_ibw_players:>5}")
    print(f"Total matches found:           {stats.total_matches:>5}")
    print(f"Exact matches (name + team):   {stats.exact_matches:>5}")
    print(f"Name-only matches:             {stats.name_only_matches:>5}")
    print(f"Match rate:                    {stats.match_rate:>5.1f}%")
    print()
