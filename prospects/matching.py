"""Two-stage matching engine for Fantrax and IBW player records."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from prospects import Match, MatchResult, MatchStats, SchemaError, ValidationError
from prospects.fields import available_fields, get_field_value, has_field
from prospects.mapping import (
    DATASET_LABELS,
    REQUIRED_ROLES,
    merge_column_mapping,
    suggest_column,
)

log = logging.getLogger(__name__)

EXACT = 'exact'
NAME_ONLY = 'name-only'


@dataclass
class PlayerIndex:
    """Hash indices over one dataset, keyed by normalized match keys."""

    exact: dict[str, Any] = field(default_factory=dict)      # name + team
    name_only: dict[str, Any] = field(default_factory=dict)  # name


def make_key(name: str, team: Optional[str] = None) -> str:
    """Build a normalized key for hash-index lookup.

    Name and team are trimmed and lowercased. The team is appended with an
    underscore whenever it is passed, even as an empty string, so a record
    with a blank team column gets ``"name_"`` while a key built without a
    team stays ``"name"``.
    """
    key = name.strip().lower()
    if team is None:
        return key
    return f'{key}_{team.strip().lower()}'


def build_index(records: list, role_mapping: dict) -> PlayerIndex:
    """Build the exact and name-only indices for a dataset.

    Records with an empty player name are skipped. For the exact index a
    later record with the same name and team replaces the earlier one; the
    name-only index keeps the first record seen for each name.

    Args:
        records: Keyed or positional records.
        role_mapping: Role to field spec mapping for this dataset.

    Returns:
        PlayerIndex with both lookup tables.
    """
    index = PlayerIndex()
    for record in records:
        name = get_field_value(record, role_mapping.get('player'))
        if not name:
            continue
        team = get_field_value(record, role_mapping.get('team'))

        index.exact[make_key(name, team)] = record
        index.name_only.setdefault(make_key(name), record)
    return index


def _spec_candidates(field_spec) -> list:
    if field_spec is None:
        return []
    if isinstance(field_spec, (list, tuple)):
        return [c for c in field_spec if c is not None]
    return [field_spec]


def validate_columns(sample_record: Any, role_mapping: dict, dataset: str) -> None:
    """Check that the configured columns exist on a sample record.

    Required roles must resolve, otherwise a SchemaError is raised. A list
    of candidates is satisfied when any one of them exists. Optional roles
    that do not resolve only produce a warning, since their values are
    rendered as empty strings.

    Args:
        sample_record: Representative record, usually the first one.
        role_mapping: Role to field spec mapping for this dataset.
        dataset: Dataset key ('fantrax' or 'ibw').

    Raises:
        SchemaError: If a required column is missing.
    """
    label = DATASET_LABELS.get(dataset, dataset)
    available = available_fields(sample_record)
    missing: list[str] = []

    for role, field_spec in role_mapping.items():
        candidates = _spec_candidates(field_spec)
        if not candidates:
            if role in REQUIRED_ROLES:
                missing.append(f'<{role}>')
            continue
        if any(has_field(sample_record, c) for c in candidates):
            continue
        if role in REQUIRED_ROLES:
            missing.extend(str(c) for c in candidates)
        else:
            log.warning(
                "%s column for %s not found: %s",
                label, role, ', '.join(str(c) for c in candidates),
            )

    if not missing:
        return

    if not available:
        available_text = 'none'
    elif isinstance(sample_record, Mapping):
        available_text = ', '.join(available)
    else:
        available_text = f'0-{len(available) - 1}'
    message = (
        f"Missing required columns in {label} data: {', '.join(missing)}. "
        f"Available columns: {available_text}"
    )
    hints = []
    for col in missing:
        hint = suggest_column(col, available)
        if hint:
            hints.append(f'"{col}" -> "{hint}"')
    if hints:
        message += f". Did you mean: {', '.join(hints)}?"
    raise SchemaError(message)


def _check_dataset(records: Any, dataset: str) -> None:
    if not isinstance(records, (list, tuple)) or not records:
        raise ValidationError(
            f"{DATASET_LABELS[dataset]} players must be a non-empty list"
        )


def reconcile(
    fantrax_players: list,
    ibw_players: list,
    column_mapping: Optional[dict] = None,
) -> MatchResult:
    """Match IBW records against Fantrax records.

    Each IBW record is looked up in two stages:
    1. Exact match on normalized name and team
    2. Name-only match on the normalized name
    IBW records without a player name are skipped.

    Args:
        fantrax_players: Records from the Fantrax export.
        ibw_players: Records from the IBW ranking, in ranking order.
        column_mapping: Overrides for the default column mapping.

    Returns:
        MatchResult with the matches in IBW order, the statistics and the
        column mapping that was used.

    Raises:
        ValidationError: If either dataset is empty or not a list.
        SchemaError: If a required column is missing.
    """
    _check_dataset(fantrax_players, 'fantrax')
    _check_dataset(ibw_players, 'ibw')

    mapping = merge_column_mapping(column_mapping)
    fantrax_roles = mapping['fantrax']
    ibw_roles = mapping['ibw']

    validate_columns(fantrax_players[0], fantrax_roles, 'fantrax')
    validate_columns(ibw_players[0], ibw_roles, 'ibw')

    index = build_index(fantrax_players, fantrax_roles)
    stats = MatchStats(total_ibw_players=len(ibw_players))
    matches: list[Match] = []

    for position, ibw_player in enumerate(ibw_players):
        name = get_field_value(ibw_player, ibw_roles.get('player'))
        if not name:
            continue
        team = get_field_value(ibw_player, ibw_roles.get('team'))

        # Stage 1: name + team
        fantrax_player = index.exact.get(make_key(name, team))
        if fantrax_player is not None:
            match_type = EXACT
            stats.exact_matches += 1
        else:
            # Stage 2: name only
            fantrax_player = index.name_only.get(make_key(name))
            if fantrax_player is None:
                continue
            match_type = NAME_ONLY
            stats.name_only_matches += 1

        matches.append(Match(
            ibw_player=ibw_player,
            fantrax_player=fantrax_player,
            match_type=match_type,
            ibw_index=position,
        ))

    log.info(
        "Matching finished: %d of %d IBW players matched (%d exact, %d name-only)",
        stats.total_matches, stats.total_ibw_players,
        stats.exact_matches, stats.name_only_matches,
    )
    return MatchResult(matches=matches, stats=stats, column_mapping=mapping)
