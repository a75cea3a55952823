"""Tests for prospects.reporter module."""

import re

from prospects import Match, MatchStats
from prospects.mapping import merge_column_mapping
from prospects.matching import reconcile
from prospects.reader import read_csv
from prospects.reporter import (
    OUTPUT_COLUMNS,
    format_results,
    print_summary,
    write_csv_report,
    write_html_report,
)


def _match(ibw: dict, fantrax: dict, match_type: str = 'exact') -> Match:
    return Match(ibw_player=ibw, fantrax_player=fantrax, match_type=match_type, ibw_index=0)


class TestFormatResults:
    """Tests for flattening matches into output rows."""

    def test_format_fixture_matches(self, fantrax_players, ibw_players):
        result = reconcile(fantrax_players, ibw_players)
        rows = format_results(result.matches, result.column_mapping)
        assert len(rows) == 4
        assert rows[0] == {
            'IBW Rank': '1',
            'IBW Player': 'Ronald Acuna Jr.',
            'IBW Team': 'ATL',
            'Fantrax Number': '1',
            'Fantrax Player': 'Ronald Acuna Jr.',
            'Fantrax Team': 'ATL',
            'Fantrax Position': 'OF',
            'Fantrax Age': '26',
            'Match Type': 'exact',
        }

    def test_missing_data_renders_empty(self):
        match = _match(
            {'Number': '1', 'Player': 'Test Player', 'Team': ''},
            {'Number': '1', 'Player': 'Test Player', 'Team': '', 'Position': '', 'Age': ''},
            'name-only',
        )
        row = format_results([match], merge_column_mapping())[0]
        assert row['IBW Team'] == ''
        assert row['Fantrax Position'] == ''
        assert row['Fantrax Age'] == ''
        assert row['Match Type'] == 'name-only'

    def test_fixed_key_set(self):
        match = _match({'Player': 'A'}, {'Player': 'A'})
        mapping = merge_column_mapping({
            'fantrax': {'team': None, 'number': None, 'position': None, 'age': None},
            'ibw': {'team': None, 'rank': None},
        })
        row = format_results([match], mapping)[0]
        assert list(row) == OUTPUT_COLUMNS
        assert row['IBW Rank'] == ''
        assert row['Fantrax Team'] == ''

    def test_number_aliases(self):
        mapping = merge_column_mapping({'fantrax': {'number': None}})
        for record, expected in [
            ({'Player': 'A', 'Number': '9'}, '9'),
            ({'Player': 'A', '#': '8'}, '8'),
            ({'Player': 'A', 'ID': '*07abc*'}, '*07abc*'),
        ]:
            row = format_results([_match({'Player': 'A'}, record)], mapping)[0]
            assert row['Fantrax Number'] == expected

    def test_configured_number_column_first(self):
        mapping = merge_column_mapping({'fantrax': {'number': 'Rk'}})
        record = {'Player': 'A', 'Rk': '4', 'Number': '9'}
        row = format_results([_match({'Player': 'A'}, record)], mapping)[0]
        assert row['Fantrax Number'] == '4'

    def test_position_alias(self):
        mapping = merge_column_mapping({'fantrax': {'position': None}})
        record = {'Player': 'A', 'Pos': 'SS'}
        row = format_results([_match({'Player': 'A'}, record)], mapping)[0]
        assert row['Fantrax Position'] == 'SS'

    def test_age_defaults_to_age_column(self):
        mapping = merge_column_mapping({'fantrax': {'age': None}})
        record = {'Player': 'A', 'Age': '21'}
        row = format_results([_match({'Player': 'A'}, record)], mapping)[0]
        assert row['Fantrax Age'] == '21'

    def test_positional_ibw_record(self):
        mapping = merge_column_mapping({'ibw': {'player': '5', 'team': '6', 'rank': '0'}})
        ibw = ['7', '9', '5', 'x', 'x', 'Juan Soto', 'NYY']
        row = format_results([_match(ibw, {'Player': 'Juan Soto'})], mapping)[0]
        assert (row['IBW Rank'], row['IBW Player'], row['IBW Team']) == ('7', 'Juan Soto', 'NYY')

    def test_no_matches(self):
        assert format_results([], merge_column_mapping()) == []


class TestReports:
    """Tests for CSV, HTML and console reports."""

    def _rows_and_stats(self, fantrax_players, ibw_players):
        result = reconcile(fantrax_players, ibw_players)
        return format_results(result.matches, result.column_mapping), result.stats

    def test_csv_report(self, tmp_path, fantrax_players, ibw_players):
        rows, _ = self._rows_and_stats(fantrax_players, ibw_players)
        out = tmp_path / 'out' / 'matches.csv'
        write_csv_report(rows, out)
        written = read_csv(out)
        assert list(written[0]) == OUTPUT_COLUMNS
        assert written == rows

    def test_html_report(self, tmp_path, fantrax_players, ibw_players):
        rows, stats = self._rows_and_stats(fantrax_players, ibw_players)
        out = tmp_path / 'matches.html'
        write_html_report(rows, stats, out, 'sample <ibw>')
        html = out.read_text(encoding='utf-8')
        assert 'Match report: sample &lt;ibw&gt;' in html
        assert 'Fernando Tatis Jr.' in html
        assert '100.0%' in html

    def test_print_summary(self, capsys):
        stats = MatchStats(exact_matches=3, name_only_matches=1, total_ibw_players=8)
        print_summary(stats, 'ibw.csv')
        out = capsys.readouterr().out
        assert '=== Match report: ibw.csv ===' in out
        assert re.search(r'Total matches found:\s+4\n', out)
        assert '50.0%' in out


class TestMatchStats:
    """Tests for derived statistics."""

    def test_totals(self):
        stats = MatchStats(exact_matches=2, name_only_matches=3, total_ibw_players=10)
        assert stats.total_matches == 5
        assert stats.match_rate == 50.0

    def test_empty_rate(self):
        assert MatchStats().match_rate == 0.0
