import math
import random

import numpy as np
import pytest

from conftest import random_matrices
from qap_search.cost import CostModel
from qap_search.sampling import PermutationSampler
from qap_search.temperature import estimate_initial_temperature


def test_temperature_from_truncated_mean_delta():
    facilities, locations = random_matrices(6, seed=5)
    model = CostModel(facilities, locations)
    trials = 200

    replay = PermutationSampler(rng=random.Random(17))
    diff_sum = 0
    for _ in range(trials):
        perm = replay.random_permutation(6)
        i, j = replay.random_move(6)
        neighbour = perm.copy()
        neighbour[i], neighbour[j] = neighbour[j], neighbour[i]
        diff_sum += abs(model.full_cost(perm) - model.full_cost(neighbour))
    expected = -(diff_sum // trials) / math.log(0.9)

    temperature = estimate_initial_temperature(model, PermutationSampler(rng=random.Random(17)), trials=trials)
    assert temperature == pytest.approx(expected)
    assert temperature > 0


def test_flat_instance_gives_zero_temperature(sampler):
    model = CostModel(np.zeros((4, 4), dtype=int), np.ones((4, 4), dtype=int))
    assert estimate_initial_temperature(model, sampler, trials=50) == 0.0


@pytest.mark.parametrize("kwargs", [{"trials": 0}, {"acceptance": 1.0}, {"acceptance": 0.0}])
def test_invalid_calibration_settings(golden_model, sampler, kwargs):
    with pytest.raises(ValueError):
        estimate_initial_temperature(golden_model, sampler, **kwargs)
