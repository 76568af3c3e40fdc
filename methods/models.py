"""
Data types for hierarchies and synthesis results.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from .ahp import ConsistencyResult


@dataclass(frozen=True)
class Level:
    """One level of a decision hierarchy.

    Items are identified by position, so duplicate labels are distinct items.
    """
    name: str
    items: Tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, 'items', tuple(self.items))

    def __len__(self):
        return len(self.items)


@dataclass(frozen=True)
class ClassicHierarchy:
    """Goal -> criteria -> alternatives."""
    criteria: Tuple[str, ...]
    alternatives: Tuple[str, ...]
    goal: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'criteria', tuple(self.criteria))
        object.__setattr__(self, 'alternatives', tuple(self.alternatives))

    @property
    def levels(self):
        return (Level('criteria', self.criteria), Level('alternatives', self.alternatives))


@dataclass(frozen=True)
class MultiLevelHierarchy:
    """Ordered levels, root first and alternatives last."""
    levels: Tuple[Level, ...]
    goal: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'levels', tuple(self.levels))


@dataclass(frozen=True)
class Partition:
    """How the items of one level are split between the parents above it.

    Items belong to parents in positional order: the first ``sizes[0]``
    items to parent 0, the next ``sizes[1]`` to parent 1 and so on.
    """
    sizes: Tuple[int, ...]
    parents: Tuple[int, ...]

    @classmethod
    def from_sizes(cls, sizes):
        sizes = tuple(int(s) for s in sizes)
        parents = tuple(p for p, size in enumerate(sizes) for _ in range(size))
        return cls(sizes=sizes, parents=parents)

    def blocks(self):
        """Yield (parent, start, stop) for each parent's block of items."""
        start = 0
        for parent, size in enumerate(self.sizes):
            yield parent, start, start + size
            start += size


@dataclass(frozen=True)
class GlobalPriority:
    name: str
    priority: float
    rank: int

    def to_dict(self):
        return {'name': self.name, 'priority': float(self.priority), 'rank': int(self.rank)}


@dataclass(frozen=True)
class LevelResult:
    """Priorities of one level.

    ``local_priorities`` holds one vector per comparison matrix of the level
    (a single vector for the root level). ``partition`` is set for
    intermediate levels whose items are split between parents.
    """
    name: str
    items: Tuple[str, ...]
    local_priorities: Tuple[np.ndarray, ...] = field(repr=False)
    consistencies: Tuple[ConsistencyResult, ...] = field(repr=False)
    global_priorities: np.ndarray = field(repr=False)
    ranking: Tuple[GlobalPriority, ...]
    partition: Optional[Partition] = None

    def to_dict(self):
        return {
            'name': self.name,
            'items': list(self.items),
            'localPriorities': [[float(p) for p in local] for local in self.local_priorities],
            'consistencies': [c.to_dict() for c in self.consistencies],
            'globalPriorities': [item.to_dict() for item in self.ranking],
            'partition': list(self.partition.sizes) if self.partition else None,
        }


@dataclass(frozen=True)
class SynthesisResult:
    """Outcome of synthesizing a whole hierarchy.

    ``alternative_consistencies`` lists the consistency of every matrix
    below the root level, root to leaf. ``consistencies`` adds the root
    matrix in front.
    """
    global_priorities: Tuple[GlobalPriority, ...]
    criteria_priorities: np.ndarray = field(repr=False)
    criteria_consistency: ConsistencyResult = field(repr=False)
    alternative_priorities_by_criteria: Tuple[np.ndarray, ...] = field(repr=False)
    alternative_consistencies: Tuple[ConsistencyResult, ...] = field(repr=False)
    levels: Tuple[LevelResult, ...] = field(repr=False)
    goal: Optional[str] = None

    @property
    def consistencies(self):
        return (self.criteria_consistency,) + tuple(self.alternative_consistencies)

    @property
    def is_consistent(self):
        return all(c.is_consistent for c in self.consistencies)

    def to_dict(self):
        return {
            'goal': self.goal,
            'globalPriorities': [item.to_dict() for item in self.global_priorities],
            'criteriaPriorities': [float(p) for p in self.criteria_priorities],
            'criteriaConsistency': self.criteria_consistency.to_dict(),
            'alternativePrioritiesByCriteria': [
                [float(p) for p in local] for local in self.alternative_priorities_by_criteria
            ],
            'alternativeConsistencies': [c.to_dict() for c in self.alternative_consistencies],
            'consistencies': [c.to_dict() for c in self.consistencies],
            'isConsistent': self.is_consistent,
            'levels': [level.to_dict() for level in self.levels],
        }
