from conftest import is_permutation, random_matrices
from qap_search.cost import CostModel
from qap_search.heuristics import constructive_permutation


def test_ties_resolve_to_lowest_index(golden_model):
    # Row sums of the flows are all 4; column sums of the distances are 6, 8, 8, 6.
    assert constructive_permutation(golden_model).tolist() == [0, 3, 1, 2]


def test_heaviest_facility_gets_most_central_location():
    flows = [[0, 5, 1], [5, 0, 2], [1, 2, 0]]  # row sums 6, 7, 3
    distances = [[0, 4, 1], [4, 0, 2], [1, 2, 0]]  # column sums 5, 6, 3
    model = CostModel(flows, distances)
    assert constructive_permutation(model).tolist() == [0, 2, 1]


def test_constructive_permutation_is_deterministic():
    facilities, locations = random_matrices(15, seed=11)
    model = CostModel(facilities, locations)
    first = constructive_permutation(model)
    second = constructive_permutation(model)
    assert first.tolist() == second.tolist()
    assert is_permutation(first, 15)


def test_row_sums_beyond_float_precision_are_compared_exactly():
    # 2**53 + 1 is not representable as a float and would tie with 2**53.
    flows = [[2**53, 0], [0, 2**53 + 1]]
    distances = [[0, 1], [2, 0]]  # column sums 2, 1
    model = CostModel(flows, distances)
    assert constructive_permutation(model).tolist() == [0, 1]
