"""
Analytic Hierarchy Process (AHP) implementation.

Priorities are derived with the geometric mean of each row of the pairwise
comparison matrix, which approximates the principal eigenvector without
iterating.
"""
from dataclasses import dataclass, field

import numpy as np

from .config import CONSISTENCY_THRESHOLD, RANDOM_INDEX, RANDOM_INDEX_FALLBACK
from .errors import MalformedMatrixError


@dataclass(frozen=True)
class ConsistencyResult:
    """Priorities and consistency figures of one comparison matrix."""
    priorities: np.ndarray = field(repr=False)
    lambda_max: float
    ci: float
    cr: float
    is_consistent: bool
    is_applicable: bool
    n: int

    def to_dict(self):
        return {
            'priorities': [float(p) for p in self.priorities],
            'lambdaMax': float(self.lambda_max),
            'ci': float(self.ci),
            'cr': float(self.cr),
            'isConsistent': bool(self.is_consistent),
            'isApplicable': bool(self.is_applicable),
            'n': int(self.n),
        }


def as_matrix(matrix):
    """Convert a comparison matrix to a square float array.

    Args:
        matrix: Nested sequences of numbers or a 2-D array

    Returns:
        np.array: The matrix as a float array of shape (n, n)

    Raises:
        MalformedMatrixError: If the input is empty, ragged, not square
            or contains non-numeric, non-finite or non-positive values
    """
    try:
        array = np.asarray(matrix, dtype=float)
    except (TypeError, ValueError) as e:
        raise MalformedMatrixError(f"Comparison matrix must be an array of arrays of numbers: {e}") from e

    if array.ndim != 2 or array.shape[0] == 0:
        raise MalformedMatrixError(f"Comparison matrix must be a non-empty 2-D array, got shape {array.shape}")
    if array.shape[0] != array.shape[1]:
        raise MalformedMatrixError(f"Comparison matrix must be square, got {array.shape[0]}x{array.shape[1]}")
    if not np.all(np.isfinite(array)):
        raise MalformedMatrixError("Comparison matrix contains non-finite values")
    if np.any(array <= 0):
        raise MalformedMatrixError("Comparison matrix entries must be positive")

    return array


def calculate_priorities(pairwise_matrix):
    """Calculate the priority vector of a pairwise comparison matrix.

    Args:
        pairwise_matrix (np.array): Square matrix of pairwise comparisons

    Returns:
        np.array: Normalized priorities, one per row, summing to 1
    """
    matrix = as_matrix(pairwise_matrix)
    n = len(matrix)

    # Geometric mean of each row
    geom_means = np.prod(matrix, axis=1) ** (1.0 / n)

    return geom_means / np.sum(geom_means)


def calculate_lambda_max(pairwise_matrix, priorities):
    """Estimate the principal eigenvalue of a comparison matrix.

    Rows whose priority is zero or not finite do not contribute.

    Args:
        pairwise_matrix (np.array): Square matrix of pairwise comparisons
        priorities (np.array): Priority vector of the matrix

    Returns:
        float: Estimated lambda max
    """
    matrix = as_matrix(pairwise_matrix)
    priorities = np.asarray(priorities, dtype=float)
    n = len(matrix)

    weighted_sums = np.dot(matrix, priorities)
    usable = np.isfinite(priorities) & (priorities != 0)

    return float(np.sum(weighted_sums[usable] / priorities[usable]) / n)


def calculate_ci(lambda_max, n):
    """Consistency index. Zero for matrices of size 1 or 2."""
    if n <= 2:
        return 0.0
    return (lambda_max - n) / (n - 1)


def random_index(n):
    """Random consistency index for a matrix of size n."""
    if 1 <= n <= len(RANDOM_INDEX):
        return RANDOM_INDEX[n - 1]
    return RANDOM_INDEX_FALLBACK


def calculate_cr(ci, n):
    """Calculate the consistency ratio.

    Args:
        ci (float): Consistency index
        n (int): Matrix size

    Returns:
        tuple: (cr, is_applicable). The ratio is not applicable to matrices
        smaller than 3x3, in which case cr is 0.
    """
    ri = random_index(n)

    if n < 3 or ri == 0:
        return 0.0, False

    return ci / ri, True


def analyze_matrix(pairwise_matrix):
    """Derive priorities and check consistency of one comparison matrix.

    Args:
        pairwise_matrix: Square matrix of pairwise comparisons

    Returns:
        ConsistencyResult: Priorities, lambda max, CI, CR and verdicts
    """
    matrix = as_matrix(pairwise_matrix)
    n = len(matrix)

    priorities = calculate_priorities(matrix)
    lambda_max = calculate_lambda_max(matrix, priorities)
    ci = calculate_ci(lambda_max, n)
    cr, is_applicable = calculate_cr(ci, n)

    return ConsistencyResult(
        priorities=priorities,
        lambda_max=lambda_max,
        ci=ci,
        cr=cr,
        # Too small to violate transitivity
        is_consistent=cr < CONSISTENCY_THRESHOLD if is_applicable else True,
        is_applicable=is_applicable,
        n=n,
    )


def build_pairwise_matrix(n, comparisons):
    """Build a reciprocal comparison matrix from individual judgments.

    Args:
        n (int): Number of compared items
        comparisons (dict): Judgment values keyed by (i, j) tuples or 'i_j'
            strings, meaning "item i compared to item j"

    Returns:
        np.array: n x n reciprocal matrix, unset pairs default to 1
    """
    matrix = np.ones((n, n))

    for key, value in comparisons.items():
        if isinstance(key, str):
            try:
                i, j = map(int, key.split('_'))
            except ValueError as e:
                raise MalformedMatrixError(f"Invalid comparison key {key!r}") from e
        else:
            i, j = key

        if not (0 <= i < n and 0 <= j < n):
            raise MalformedMatrixError(f"Comparison ({i}, {j}) is outside a {n}x{n} matrix")
        if i == j:
            continue

        value = float(value)
        if not np.isfinite(value) or value <= 0:
            raise MalformedMatrixError(f"Comparison ({i}, {j}) must be a positive number, got {value}")

        matrix[i][j] = value
        matrix[j][i] = 1.0 / value

    return matrix
