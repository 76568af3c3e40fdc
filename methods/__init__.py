"""
Analytic Hierarchy Process methods package.
"""
from .ahp import ConsistencyResult, analyze_matrix, build_pairwise_matrix, calculate_priorities
from .errors import AHPError, DimensionMismatchError, MalformedMatrixError, StructuralError
from .hierarchy import synthesize_hierarchy
from .models import ClassicHierarchy, GlobalPriority, Level, MultiLevelHierarchy, SynthesisResult
from .synthesis import synthesize


def calculate_global_priorities(hierarchy, criteria_matrix, alternative_matrices=None):
    """Calculate global priorities for either kind of hierarchy.

    Args:
        hierarchy (ClassicHierarchy | MultiLevelHierarchy): The hierarchy
        criteria_matrix: Criteria matrix for a classic hierarchy, or the
            matrices keyed by level index for a multi-level one
        alternative_matrices: Alternative matrices per criterion (classic only)

    Returns:
        SynthesisResult: Ranked alternatives plus per-matrix details
    """
    if isinstance(hierarchy, MultiLevelHierarchy):
        return synthesize_hierarchy(hierarchy.levels, criteria_matrix, goal=hierarchy.goal)
    if isinstance(hierarchy, ClassicHierarchy):
        return synthesize(hierarchy, criteria_matrix, alternative_matrices)

    raise StructuralError(f"Unknown hierarchy type: {type(hierarchy).__name__}")


__all__ = [
    'AHPError',
    'ClassicHierarchy',
    'ConsistencyResult',
    'DimensionMismatchError',
    'GlobalPriority',
    'Level',
    'MalformedMatrixError',
    'MultiLevelHierarchy',
    'StructuralError',
    'SynthesisResult',
    'analyze_matrix',
    'build_pairwise_matrix',
    'calculate_global_priorities',
    'calculate_priorities',
    'synthesize',
    'synthesize_hierarchy',
]
