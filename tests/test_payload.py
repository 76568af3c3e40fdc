import pytest

from methods.errors import DimensionMismatchError, MalformedMatrixError, StructuralError
from methods.models import ClassicHierarchy, MultiLevelHierarchy
from utils.payload import analyze_payload, parse_hierarchy, parse_matrix_assignment, synthesize_payload

ONES_2 = [[1, 1], [1, 1]]


def test_parse_classic_hierarchy():
    hierarchy = parse_hierarchy({
        'goal': 'Pick a corn variety',
        'criteria': ['Yield', {'name': 'Cost'}],
        'alternatives': ['A', 'B', 'A'],
    })
    assert isinstance(hierarchy, ClassicHierarchy)
    assert hierarchy.criteria == ('Yield', 'Cost')
    assert hierarchy.alternatives == ('A', 'B', 'A')
    assert hierarchy.goal == 'Pick a corn variety'


def test_levels_take_precedence():
    hierarchy = parse_hierarchy({
        'criteria': ['ignored'],
        'alternatives': ['ignored'],
        'levels': [{'name': 'Criteria', 'items': ['a', 'b']}, {'items': ['x', 'y', 'z']}],
    })
    assert isinstance(hierarchy, MultiLevelHierarchy)
    assert [level.name for level in hierarchy.levels] == ['Criteria', 'Level 1']
    assert hierarchy.levels[1].items == ('x', 'y', 'z')


@pytest.mark.parametrize('payload', [
    None,
    {},
    {'criteria': ['a']},
    {'levels': [{'name': 'one', 'items': ['a']}]},
    {'levels': [{'name': 'one'}, {'name': 'two', 'items': ['a']}]},
    {'criteria': 'a, b', 'alternatives': ['x']},
])
def test_parse_hierarchy_rejects_bad_structure(payload):
    with pytest.raises(StructuralError):
        parse_hierarchy(payload)


def test_parse_matrix_assignment():
    assignment = parse_matrix_assignment({'level-0': ONES_2, 'level-1': [ONES_2], '2': []})
    assert sorted(assignment) == [0, 1, 2]
    assert assignment[0] == ONES_2
    assert parse_matrix_assignment([ONES_2, [ONES_2]]) == {0: ONES_2, 1: [ONES_2]}
    with pytest.raises(StructuralError):
        parse_matrix_assignment({'criteria': ONES_2})


def test_analyze_payload():
    data = analyze_payload({'matrix': [[1, 2], [0.5, 1]]})
    assert data['priorities'] == pytest.approx([2 / 3, 1 / 3])
    assert data['isApplicable'] is False
    assert data['isConsistent'] is True
    with pytest.raises(StructuralError):
        analyze_payload({})


def test_synthesize_classic_payload():
    data = synthesize_payload({
        'hierarchy': {'criteria': ['c1', 'c2'], 'alternatives': ['x', 'y']},
        'criteriaMatrix': [[1, 3], [1 / 3, 1]],
        'alternativeMatrices': [[[1, 3], [1 / 3, 1]], ONES_2],
    })
    assert [(e['name'], e['rank']) for e in data['globalPriorities']] == [('x', 1), ('y', 2)]
    assert data['globalPriorities'][0]['priority'] == pytest.approx(0.75 * 0.75 + 0.25 * 0.5)
    assert data['criteriaPriorities'] == pytest.approx([0.75, 0.25])
    assert len(data['alternativeConsistencies']) == 2


def test_synthesize_multi_level_payload():
    data = synthesize_payload({
        'hierarchy': {
            'goal': 'Harvest plan',
            'levels': [
                {'name': 'Criteria', 'items': ['Quality', 'Price']},
                {'name': 'Sub-criteria', 'items': ['q1', 'q2', 'p1', 'p2']},
                {'name': 'Alternatives', 'items': ['x', 'y']},
            ],
        },
        'criteriaMatrix': {
            'level-0': ONES_2,
            'level-1': [ONES_2, ONES_2],
            'level-2': [ONES_2] * 4,
        },
        'alternativeMatrices': {},
    })
    assert data['goal'] == 'Harvest plan'
    assert [e['priority'] for e in data['globalPriorities']] == pytest.approx([0.5, 0.5])
    assert [e['priority'] for e in data['levels'][1]['globalPriorities']] == pytest.approx([0.25] * 4)


def test_synthesize_payload_size_error():
    with pytest.raises(DimensionMismatchError) as excinfo:
        synthesize_payload({
            'hierarchy': {'criteria': ['a', 'b', 'c'], 'alternatives': ['x', 'y']},
            'criteriaMatrix': ONES_2,
            'alternativeMatrices': [ONES_2] * 3,
        })
    assert (excinfo.value.expected, excinfo.value.actual) == (3, 2)


def test_synthesize_payload_level_matrices_not_a_list():
    with pytest.raises(MalformedMatrixError):
        synthesize_payload({
            'hierarchy': {'levels': [{'items': ['a', 'b']}, {'items': ['x', 'y']}]},
            'criteriaMatrix': {'level-0': ONES_2, 'level-1': 5},
        })


def test_synthesize_payload_split_leaves():
    data = synthesize_payload({
        'hierarchy': {'levels': [{'items': ['a', 'b']}, {'items': ['a1', 'a2', 'b1', 'b2']}]},
        'criteriaMatrix': {'level-0': ONES_2, 'level-1': [ONES_2, ONES_2]},
    })
    assert [e['priority'] for e in data['globalPriorities']] == pytest.approx([0.25] * 4)
    assert data['levels'][1]['partition'] == [2, 2]


def test_synthesize_payload_missing_parts():
    with pytest.raises(StructuralError):
        synthesize_payload({'criteriaMatrix': ONES_2})
    with pytest.raises(StructuralError):
        synthesize_payload({'hierarchy': {'criteria': ['a'], 'alternatives': ['x']}, 'criteriaMatrix': [[1]]})
