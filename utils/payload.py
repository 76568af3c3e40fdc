"""
Conversion between JSON request bodies and the AHP methods.

Callers such as a web layer receive plain dicts and lists. These helpers
turn them into hierarchy descriptors and matrix assignments once, and turn
results back into JSON-ready dicts.
"""
import re
from typing import Any, Dict, List, Union

from methods import analyze_matrix, calculate_global_priorities
from methods.errors import StructuralError
from methods.models import ClassicHierarchy, Level, MultiLevelHierarchy

LEVEL_KEY = re.compile(r'^(?:level-)?(\d+)$')


def _item_names(items: Any, where: str) -> List[str]:
    """Get item labels from a list of strings or of dicts with a 'name'."""
    if not isinstance(items, (list, tuple)):
        raise StructuralError(f"{where} must be a list")

    names = []
    for item in items:
        if isinstance(item, dict):
            if 'name' not in item:
                raise StructuralError(f"{where} contains an item without a name")
            names.append(str(item['name']))
        else:
            names.append(str(item))
    return names


def parse_hierarchy(payload: Dict[str, Any]) -> Union[ClassicHierarchy, MultiLevelHierarchy]:
    """Build a hierarchy descriptor from its JSON form.

    A payload with a 'levels' list becomes a MultiLevelHierarchy, otherwise
    'criteria' and 'alternatives' are required.
    """
    if not isinstance(payload, dict):
        raise StructuralError("Hierarchy must be an object")

    goal = payload.get('goal')

    if payload.get('levels') is not None:
        raw_levels = payload['levels']
        if not isinstance(raw_levels, list) or len(raw_levels) < 2:
            count = len(raw_levels) if isinstance(raw_levels, list) else 0
            raise StructuralError(f"Hierarchy must have at least 2 levels, got {count}")

        levels = []
        for i, raw in enumerate(raw_levels):
            if not isinstance(raw, dict) or 'items' not in raw:
                raise StructuralError(f"Level {i} must be an object with 'items'")
            levels.append(Level(name=str(raw.get('name') or f'Level {i}'),
                                items=_item_names(raw['items'], f'Level {i} items')))
        return MultiLevelHierarchy(levels=levels, goal=goal)

    if not payload.get('criteria') or not payload.get('alternatives'):
        raise StructuralError("Hierarchy needs 'criteria' and 'alternatives' or 'levels'")

    return ClassicHierarchy(criteria=_item_names(payload['criteria'], 'Criteria'),
                            alternatives=_item_names(payload['alternatives'], 'Alternatives'),
                            goal=goal)


def parse_matrix_assignment(payload: Any) -> Dict[int, Any]:
    """Key level matrices by level index.

    Accepts {'level-0': ..., 'level-1': [...]}, plain index keys, or a list
    ordered by level.
    """
    if isinstance(payload, list):
        return dict(enumerate(payload))
    if not isinstance(payload, dict):
        raise StructuralError("Level matrices must be an object keyed by level")

    assignment = {}
    for key, matrices in payload.items():
        match = LEVEL_KEY.match(str(key))
        if not match:
            raise StructuralError(f"Unknown level key {key!r}")
        assignment[int(match.group(1))] = matrices
    return assignment


def analyze_payload(body: Dict[str, Any]) -> Dict[str, Any]:
    """Check consistency of the matrix in {'matrix': [[...], ...]}."""
    if not isinstance(body, dict) or body.get('matrix') is None:
        raise StructuralError("Request must contain a 'matrix'")
    return analyze_matrix(body['matrix']).to_dict()


def synthesize_payload(body: Dict[str, Any]) -> Dict[str, Any]:
    """Calculate global priorities from a request body.

    The body holds 'hierarchy' and 'criteriaMatrix'. For a classic
    hierarchy 'alternativeMatrices' lists one matrix per criterion; for a
    multi-level one 'criteriaMatrix' holds the matrices keyed by level.
    """
    if not isinstance(body, dict) or not body.get('hierarchy'):
        raise StructuralError("Request must contain a 'hierarchy'")

    hierarchy = parse_hierarchy(body['hierarchy'])

    if isinstance(hierarchy, MultiLevelHierarchy):
        raw = body.get('matrices', body.get('criteriaMatrix'))
        if raw is None:
            raise StructuralError("Request must contain the level matrices")
        result = calculate_global_priorities(hierarchy, parse_matrix_assignment(raw))
    else:
        if body.get('criteriaMatrix') is None or body.get('alternativeMatrices') is None:
            raise StructuralError("Request must contain 'criteriaMatrix' and 'alternativeMatrices'")
        result = calculate_global_priorities(hierarchy, body['criteriaMatrix'], body['alternativeMatrices'])

    return result.to_dict()
