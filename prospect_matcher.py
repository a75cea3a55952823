"""prospect-matcher – CLI tool to match IBW prospect rankings against Fantrax exports."""

import argparse
import logging
import sys
from pathlib import Path

from prospects import SchemaError
from prospects.fields import get_field_value
from prospects.ibw import IBW_HEADERS, parse_ibw_file, prospect_to_row
from prospects.mapping import resolve_column
from prospects.matching import reconcile
from prospects.reader import filter_fypd, read_csv, write_csv
from prospects.reporter import (
    format_results,
    print_summary,
    write_csv_report,
    write_html_report,
)

log = logging.getLogger('prospect_matcher')


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        description='Match IBW prospect rankings against a Fantrax player export.',
        prog='prospect-matcher',
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Verbose output (debug logging, list individual matches)',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    convert = subparsers.add_parser(
        'convert', help='Convert an IBW text file to CSV',
    )
    convert.add_argument(
        '-i', '--input', required=True, type=Path,
        help='Path to the IBW text file',
    )
    convert.add_argument(
        '-o', '--output', required=True, type=Path,
        help='Path for the CSV output',
    )
    convert.add_argument(
        '--headers', default=','.join(IBW_HEADERS),
        help='Custom CSV headers, comma-separated (default: %(default)s)',
    )
    convert.add_argument(
        '--validate', action='store_true',
        help='Print sample converted entries',
    )

    match = subparsers.add_parser(
        'match', help='Match an IBW CSV against a Fantrax CSV',
    )
    match.add_argument(
        '-f', '--fantrax', required=True, type=Path,
        help='Path to the Fantrax CSV file',
    )
    match.add_argument(
        '-i', '--ibw', required=True, type=Path,
        help='Path to the IBW CSV file',
    )
    match.add_argument(
        '-o', '--output', required=True, type=Path,
        help='Path for the CSV report',
    )
    match.add_argument(
        '--fantrax-player-col', default='1',
        help='Fantrax player column name or index (default: %(default)s)',
    )
    match.add_argument(
        '--fantrax-team-col', default='2',
        help='Fantrax team column name or index (default: %(default)s)',
    )
    match.add_argument(
        '--ibw-player-col', default='5',
        help='IBW player column name or index (default: %(default)s)',
    )
    match.add_argument(
        '--ibw-team-col', default='6',
        help='IBW team column name or index (default: %(default)s)',
    )
    match.add_argument(
        '--ibw-rank-col', default='0',
        help='IBW rank column name or index (default: %(default)s)',
    )
    match.add_argument(
        '--ibw-header', action='store_true',
        help='The IBW file has a header row (columns addressed by name)',
    )
    match.add_argument(
        '--keep-fypd', action='store_true',
        help='Do not filter out FYPD entries from the IBW file',
    )
    match.add_argument(
        '--html', action='store_true',
        help='Also write an HTML report next to the CSV report',
    )
    match.add_argument(
        '--show-samples', action='store_true',
        help='Show sample data for troubleshooting',
    )
    return parser


def run_convert(args: argparse.Namespace) -> int:
    """Convert an IBW text file to CSV."""
    entries = parse_ibw_file(args.input)

    headers = [h.strip() for h in args.headers.split(',')]
    if len(headers) != len(IBW_HEADERS):
        log.warning(
            "Expected %d headers (%s), got %d",
            len(IBW_HEADERS), ','.join(IBW_HEADERS), len(headers),
        )

    rows = [prospect_to_row(p, headers) for p in entries]
    count = write_csv(rows, args.output, headers)
    log.info("%d players converted, written to %s", count, args.output.resolve())

    if args.validate:
        print("Sample converted entries:")
        for p in entries[:3]:
            print(f"  {p.number}. {p.name} ({p.team}, {p.position}, Age {p.age:g})")
    return 0


def _build_column_mapping(
    args: argparse.Namespace,
    fantrax_players: list,
    ibw_players: list,
) -> dict:
    """Build the column mapping from the command line options.

    Fantrax columns may be given by name or index and are resolved to
    header names. IBW columns are used as given: indices for a headerless
    file, or names resolved against the header with --ibw-header.
    """
    headers = list(fantrax_players[0].keys())
    ibw_player, ibw_team, ibw_rank = args.ibw_player_col, args.ibw_team_col, args.ibw_rank_col
    if args.ibw_header and ibw_players:
        ibw_headers = list(ibw_players[0].keys())
        ibw_player = resolve_column(ibw_headers, ibw_player, 'IBW player')
        ibw_team = resolve_column(ibw_headers, ibw_team, 'IBW team')
        ibw_rank = resolve_column(ibw_headers, ibw_rank, 'IBW rank')
    return {
        'fantrax': {
            'player': resolve_column(headers, args.fantrax_player_col, 'Fantrax player'),
            'team': resolve_column(headers, args.fantrax_team_col, 'Fantrax team'),
            'number': 'Number' if 'Number' in headers else None,
            'position': 'Position' if 'Position' in headers else None,
            'age': 'Age' if 'Age' in headers else None,
        },
        'ibw': {
            'player': ibw_player,
            'team': ibw_team,
            'rank': ibw_rank,
            'number': ibw_rank,
        },
    }


def _print_samples(fantrax_players: list, ibw_players: list, mapping: dict) -> None:
    fx, ibw = mapping['fantrax'], mapping['ibw']
    print("Sample data:")
    print("Fantrax (first 2 records):")
    for i, record in enumerate(fantrax_players[:2], start=1):
        print(f'  {i}: Player="{record.get(fx["player"])}" Team="{record.get(fx["team"])}"')
    print("IBW (first 2 records):")
    for i, record in enumerate(ibw_players[:2], start=1):
        print(f'  {i}: {record}')
    print()


def run_match(args: argparse.Namespace) -> int:
    """Match an IBW CSV file against a Fantrax CSV file."""
    fantrax_players = read_csv(args.fantrax)
    ibw_players = read_csv(args.ibw, header=args.ibw_header)
    if not args.keep_fypd:
        ibw_players = filter_fypd(ibw_players)

    column_mapping = _build_column_mapping(args, fantrax_players, ibw_players)
    log.debug("Column mapping: %s", column_mapping)

    if args.show_samples:
        _print_samples(fantrax_players, ibw_players, column_mapping)

    result = reconcile(fantrax_players, ibw_players, column_mapping)
    stats = result.stats

    print_summary(stats, args.ibw.name)

    if stats.total_matches == 0:
        log.error("No matches found!")
        print("Troubleshooting suggestions:")
        print("1. Check that player names are spelled consistently between files")
        print("2. Verify team names match between files")
        print("3. Use --show-samples to inspect the data")
        print("4. Try different column mappings with --fantrax-player-col, --ibw-player-col, etc.")
        return 1

    if args.verbose:
        ibw_roles = result.column_mapping['ibw']
        print("Individual matches:")
        for i, m in enumerate(result.matches, start=1):
            name = get_field_value(m.ibw_player, ibw_roles.get('player'))
            team = get_field_value(m.ibw_player, ibw_roles.get('team')) or 'N/A'
            print(f"  {i}. {name} ({team}) - {m.match_type} match")

    rows = format_results(result.matches, result.column_mapping)
    write_csv_report(rows, args.output)

    if args.html:
        write_html_report(rows, stats, args.output.with_suffix('.html'), args.ibw.stem)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )

    try:
        if args.command == 'convert':
            return run_convert(args)
        return run_match(args)
    except FileNotFoundError as exc:
        log.error("%s", exc)
        log.error("Hint: check that the input file paths are correct and the files exist.")
    except SchemaError as exc:
        log.error("%s", exc)
        log.error("Hint: check the column mappings; use --show-samples to see available columns.")
    except ValueError as exc:
        log.error("%s", exc)
        log.error(
            "Hint: CSV input needs a header row for Fantrax; IBW text must follow "
            "\"number) name - team, position, age\"."
        )
    except OSError as exc:
        log.error("Could not write output: %s", exc)
    return 1


if __name__ == '__main__':
    sys.exit(main())
