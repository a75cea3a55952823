"""Column mapping defaults, merging and column reference resolution."""

import copy
from typing import Optional

from rapidfuzz import process, utils
from rapidfuzz.distance import JaroWinkler

from prospects import SchemaError, ValidationError

DATASETS = ('fantrax', 'ibw')

DATASET_LABELS: dict[str, str] = {
    'fantrax': 'Fantrax',
    'ibw': 'IBW',
}

REQUIRED_ROLES = ('player',)

DEFAULT_COLUMN_MAPPING: dict[str, dict] = {
    'fantrax': {
        'player': 'Player',
        'team': 'Team',
        'number': 'Number',
        'position': 'Position',
        'age': 'Age',
    },
    'ibw': {
        'player': 'Player',
        'team': 'Team',
        'rank': 'Number',
        'number': 'Number',
    },
}

# Minimum Jaro-Winkler similarity for a "did you mean" column hint
SUGGESTION_THRESHOLD = 0.85


def merge_column_mapping(overrides: Optional[dict] = None) -> dict:
    """Merge caller overrides over the default column mapping.

    The merge is shallow per dataset: a role given in the overrides replaces
    the default for that role and dataset only. The defaults themselves are
    never modified.

    Args:
        overrides: Nested dict like ``{'ibw': {'player': '5'}}``.

    Returns:
        A new, fully resolved mapping with an entry for every dataset.

    Raises:
        ValidationError: If the overrides name an unknown dataset.
    """
    overrides = overrides or {}
    unknown = set(overrides) - set(DATASETS)
    if unknown:
        raise ValidationError(
            f"Unknown dataset(s) in column mapping: {', '.join(sorted(unknown))}. "
            f"Expected: {', '.join(DATASETS)}"
        )

    merged = {}
    for dataset in DATASETS:
        roles = copy.deepcopy(DEFAULT_COLUMN_MAPPING[dataset])
        roles.update(copy.deepcopy(overrides.get(dataset) or {}))
        merged[dataset] = roles
    return merged


def suggest_column(column: str, available: list[str]) -> Optional[str]:
    """Return the available column that most resembles ``column``, if any."""
    if not available:
        return None
    best = process.extractOne(
        str(column), available,
        scorer=JaroWinkler.normalized_similarity,
        processor=utils.default_process,
        score_cutoff=SUGGESTION_THRESHOLD,
    )
    return best[0] if best else None


def resolve_column(headers: list[str], column_ref: str, description: str) -> str:
    """Resolve a column reference given by name or index to a header name.

    An exact header name always wins; otherwise a non-negative integer is
    treated as the zero-based position of the header.

    Args:
        headers: Header names of the dataset, in file order.
        column_ref: Column name or index as given on the command line.
        description: Human readable role name for error messages.

    Returns:
        The header name.

    Raises:
        SchemaError: If the reference matches no header.
    """
    if column_ref in headers:
        return column_ref

    if column_ref.isdecimal():
        index = int(column_ref)
        if index < len(headers):
            return headers[index]
        raise SchemaError(
            f"{description} column index {index} is out of bounds. "
            f"Available columns: 0-{len(headers) - 1}"
        )

    message = (
        f'{description} column "{column_ref}" not found. '
        f"Available columns: {', '.join(headers)}"
    )
    suggestion = suggest_column(column_ref, headers)
    if suggestion:
        message += f'. Did you mean "{suggestion}"?'
    raise SchemaError(message)
