"""
Constants shared by the AHP calculations.
"""

# Random consistency index (Saaty) for matrix sizes 1..15
RANDOM_INDEX = (0.0, 0.0, 0.58, 0.90, 1.12, 1.24, 1.32, 1.41, 1.45, 1.49,
                1.51, 1.48, 1.56, 1.57, 1.59)

# Used for matrices larger than the table
RANDOM_INDEX_FALLBACK = 1.6

# CR below this value is acceptable
CONSISTENCY_THRESHOLD = 0.1

# Allowed drift of the criteria weight sum from 1.0
WEIGHT_SUM_TOLERANCE = 0.01

# Saaty's fundamental scale as offered to the person making judgments
PAIRWISE_SCALE = (
    {'value': 9, 'label': '9'},
    {'value': 7, 'label': '7'},
    {'value': 5, 'label': '5'},
    {'value': 3, 'label': '3'},
    {'value': 2, 'label': '2'},
    {'value': 1, 'label': '1'},
    {'value': 1/2, 'label': '1/2'},
    {'value': 1/3, 'label': '1/3'},
    {'value': 1/5, 'label': '1/5'},
    {'value': 1/7, 'label': '1/7'},
    {'value': 1/9, 'label': '1/9'},
)
