"""
AHP synthesis over a hierarchy with any number of levels.

Level 0 is compared with a single matrix. Every later level is compared
once per item of the level above it (its parent):

* a level is split between the parents in positional order, so each
  parent's matrix only covers that parent's own children and the block
  sizes come from the matrix dimensions;
* the last level may instead be compared in full under every parent, when
  every one of its matrices covers all of its items.

Global priorities flow from the root down: an item's global priority is
its parent's global priority times its local priority. An alternative
compared under every parent sums this product over all its parents.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .ahp import analyze_matrix, as_matrix
from .errors import DimensionMismatchError, MalformedMatrixError, StructuralError
from .models import Level, LevelResult, MultiLevelHierarchy, Partition
from .synthesis import build_result, calculate_scores, check_weight_sum, log_inconsistency, rank_items

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelPlan:
    """A level with its validated matrices and partition between parents."""
    index: int
    level: Level
    matrices: Tuple[np.ndarray, ...]
    partition: Optional[Partition] = None

    @property
    def is_root(self):
        return self.index == 0


def _level_matrices(matrices_by_level, index):
    if isinstance(matrices_by_level, Mapping):
        if index not in matrices_by_level:
            raise StructuralError(f"No comparison matrices given for level {index}")
        return matrices_by_level[index]

    if index >= len(matrices_by_level):
        raise StructuralError(f"No comparison matrices given for level {index}")
    return matrices_by_level[index]


def plan_hierarchy(levels, matrices_by_level):
    """Validate a hierarchy against its matrices.

    Args:
        levels (list): Level objects, root first
        matrices_by_level: Mapping (or sequence) from level index to the
            level's matrix (level 0) or list of matrices (one per parent)

    Returns:
        list: LevelPlan per level, with partitions of intermediate levels

    Raises:
        StructuralError: Too few levels, empty levels or missing matrices
        DimensionMismatchError: A matrix does not fit its level
        MalformedMatrixError: A matrix is not a square array of numbers
    """
    levels = tuple(levels)
    if len(levels) < 2:
        raise StructuralError(f"Hierarchy must have at least 2 levels, got {len(levels)}")
    for i, level in enumerate(levels):
        if not isinstance(level, Level):
            raise StructuralError(f"Level {i} must be a Level, got {type(level).__name__}")
        if not level.items:
            raise StructuralError(f"Level {i} ({level.name!r}) has no items")
    if matrices_by_level is None:
        raise StructuralError("No comparison matrices given")

    last = len(levels) - 1
    plans = []

    root_matrix = as_matrix(_level_matrices(matrices_by_level, 0))
    if len(root_matrix) != len(levels[0]):
        raise DimensionMismatchError(f'matrix of level {levels[0].name!r}',
                                     len(levels[0]), len(root_matrix), level=0)
    plans.append(LevelPlan(index=0, level=levels[0], matrices=(root_matrix,)))

    for i in range(1, len(levels)):
        level, parent_level = levels[i], levels[i - 1]
        raw = _level_matrices(matrices_by_level, i)

        if not isinstance(raw, (list, tuple, np.ndarray)):
            raise MalformedMatrixError(
                f"Matrices of level {i} must be a list with one matrix per parent, got {type(raw).__name__}")
        if len(raw) != len(parent_level):
            raise DimensionMismatchError(f'number of matrices of level {level.name!r}',
                                         len(parent_level), len(raw), level=i)

        matrices = tuple(as_matrix(matrix) for matrix in raw)

        # Alternatives may be compared in full under every parent
        if i == last and all(len(matrix) == len(level) for matrix in matrices):
            plans.append(LevelPlan(index=i, level=level, matrices=matrices))
            continue

        # Each parent's matrix size is the number of its children
        partition = Partition.from_sizes(len(matrix) for matrix in matrices)
        if i == last and len(partition.parents) != len(level):
            parent, matrix = next((p, m) for p, m in enumerate(matrices) if len(m) != len(level))
            raise DimensionMismatchError(f'matrix of level {level.name!r}',
                                         len(level), len(matrix), level=i, parent=parent)
        if len(partition.parents) != len(level):
            raise DimensionMismatchError(f'children of level {level.name!r} across all parents',
                                         len(level), len(partition.parents), level=i)
        plans.append(LevelPlan(index=i, level=level, matrices=matrices, partition=partition))

    return plans


def _analyze_level(plan):
    consistencies = []
    for parent, matrix in enumerate(plan.matrices):
        consistency = analyze_matrix(matrix)
        log_inconsistency(consistency, plan.index, None if plan.is_root else parent)
        consistencies.append(consistency)
    return tuple(consistencies)


def _descend(plans, index, parent_globals=None):
    """Compute level ``index`` and every level below it."""
    plan = plans[index]
    consistencies = _analyze_level(plan)
    local_priorities = tuple(c.priorities for c in consistencies)

    if plan.is_root:
        # The goal is an implicit apex with weight 1
        global_priorities = local_priorities[0]
        check_weight_sum(global_priorities, plan.level.name)
    elif plan.partition is not None:
        global_priorities = np.zeros(len(plan.level))
        for parent, start, stop in plan.partition.blocks():
            global_priorities[start:stop] = parent_globals[parent] * local_priorities[parent]
    else:
        decision_matrix = np.column_stack(local_priorities)
        global_priorities = calculate_scores(decision_matrix, parent_globals)

    logger.debug("Level %s (%s): global priorities %s", index, plan.level.name, global_priorities)

    result = LevelResult(
        name=plan.level.name,
        items=plan.level.items,
        local_priorities=local_priorities,
        consistencies=consistencies,
        global_priorities=global_priorities,
        ranking=rank_items(plan.level.items, global_priorities),
        partition=plan.partition,
    )

    if index == len(plans) - 1:
        return [result]
    return [result] + _descend(plans, index + 1, global_priorities)


def synthesize_hierarchy(levels, matrices_by_level, goal=None):
    """Calculate global priorities of the last level of a hierarchy.

    Args:
        levels: Level objects root first, or a MultiLevelHierarchy
        matrices_by_level: Mapping from level index to matrices, see plan_hierarchy
        goal (str): Optional label of the decision goal

    Returns:
        SynthesisResult: Ranked alternatives plus per-level details
    """
    if isinstance(levels, MultiLevelHierarchy):
        goal = goal if goal is not None else levels.goal
        levels = levels.levels

    plans = plan_hierarchy(levels, matrices_by_level)
    level_results = _descend(plans, 0)

    return build_result(level_results, goal=goal)
