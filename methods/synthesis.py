"""
Classic three-level AHP synthesis: goal -> criteria -> alternatives.
"""
import logging

import numpy as np

from .config import WEIGHT_SUM_TOLERANCE
from .ahp import analyze_matrix, as_matrix
from .errors import DimensionMismatchError, MalformedMatrixError, StructuralError
from .models import ClassicHierarchy, GlobalPriority, LevelResult, SynthesisResult

logger = logging.getLogger(__name__)


def calculate_scores(decision_matrix, weights):
    """Weight the local priorities of items into global priorities.

    Args:
        decision_matrix (np.array): Local priorities, one column per parent
        weights (np.array): Global priorities of the parents

    Returns:
        np.array: Global priority of each row item
    """
    return np.dot(decision_matrix, weights)


def rank_items(names, priorities):
    """Rank items by descending priority.

    Equal priorities keep their original order.

    Returns:
        tuple: GlobalPriority entries, best first, ranks starting at 1
    """
    order = np.argsort(-np.asarray(priorities, dtype=float), kind='stable')
    return tuple(
        GlobalPriority(name=names[i], priority=float(priorities[i]), rank=rank)
        for rank, i in enumerate(order, start=1)
    )


def check_weight_sum(weights, what='criteria'):
    """Log a warning when weights drift away from summing to 1."""
    total = float(np.sum(weights))
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        logger.warning("Sum of %s priorities is %s, expected 1.0", what, total)
    return total


def log_inconsistency(consistency, level, parent=None):
    if consistency.is_consistent:
        return
    if parent is None:
        logger.warning("Comparisons at level %s are inconsistent (CR=%.4f)", level, consistency.cr)
    else:
        logger.warning("Comparisons at level %s for parent %s are inconsistent (CR=%.4f)",
                       level, parent, consistency.cr)


def build_result(level_results, goal=None):
    """Assemble a SynthesisResult from per-level results, root first."""
    root = level_results[0]
    below_root = [c for level in level_results[1:] for c in level.consistencies]

    return SynthesisResult(
        global_priorities=level_results[-1].ranking,
        criteria_priorities=root.global_priorities,
        criteria_consistency=root.consistencies[0],
        alternative_priorities_by_criteria=level_results[1].local_priorities,
        alternative_consistencies=tuple(below_root),
        levels=tuple(level_results),
        goal=goal,
    )


def synthesize(hierarchy, criteria_matrix, alternative_matrices):
    """Calculate global priorities of alternatives in a three-level hierarchy.

    Args:
        hierarchy (ClassicHierarchy): Criteria and alternatives
        criteria_matrix: Comparison matrix of the criteria
        alternative_matrices: One comparison matrix of the alternatives per criterion

    Returns:
        SynthesisResult: Ranked alternatives plus per-matrix details
    """
    if not isinstance(hierarchy, ClassicHierarchy):
        raise StructuralError("Three-level synthesis needs criteria and alternatives")
    if not hierarchy.criteria:
        raise StructuralError("Hierarchy has no criteria")
    if not hierarchy.alternatives:
        raise StructuralError("Hierarchy has no alternatives")

    criteria = hierarchy.criteria
    alternatives = hierarchy.alternatives

    # Validate every matrix before computing anything
    criteria_matrix = as_matrix(criteria_matrix)
    if len(criteria_matrix) != len(criteria):
        raise DimensionMismatchError('criteria matrix', len(criteria), len(criteria_matrix), level=0)

    if not isinstance(alternative_matrices, (list, tuple, np.ndarray)):
        raise MalformedMatrixError(
            f"Alternative matrices must be a list with one matrix per criterion, "
            f"got {type(alternative_matrices).__name__}")
    if len(alternative_matrices) != len(criteria):
        raise DimensionMismatchError('number of alternative matrices', len(criteria),
                                     len(alternative_matrices), level=1)

    matrices = []
    for j, matrix in enumerate(alternative_matrices):
        matrix = as_matrix(matrix)
        if len(matrix) != len(alternatives):
            raise DimensionMismatchError(f'alternative matrix for criterion {criteria[j]!r}',
                                         len(alternatives), len(matrix), level=1, parent=j)
        matrices.append(matrix)

    # Criteria weights
    criteria_consistency = analyze_matrix(criteria_matrix)
    criteria_weights = criteria_consistency.priorities
    check_weight_sum(criteria_weights)
    log_inconsistency(criteria_consistency, 0)

    # Local priorities of the alternatives under each criterion
    alternative_consistencies = []
    for j, matrix in enumerate(matrices):
        consistency = analyze_matrix(matrix)
        log_inconsistency(consistency, 1, j)
        alternative_consistencies.append(consistency)

    local_priorities = tuple(c.priorities for c in alternative_consistencies)
    decision_matrix = np.column_stack(local_priorities)
    global_priorities = calculate_scores(decision_matrix, criteria_weights)

    levels = [
        LevelResult(
            name='criteria',
            items=criteria,
            local_priorities=(criteria_weights,),
            consistencies=(criteria_consistency,),
            global_priorities=criteria_weights,
            ranking=rank_items(criteria, criteria_weights),
        ),
        LevelResult(
            name='alternatives',
            items=alternatives,
            local_priorities=local_priorities,
            consistencies=tuple(alternative_consistencies),
            global_priorities=global_priorities,
            ranking=rank_items(alternatives, global_priorities),
        ),
    ]

    return build_result(levels, goal=hierarchy.goal)
