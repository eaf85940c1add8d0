"""
Tests for the Monte Carlo orbital sampler.

Verifies:
1. Exact sample counts for every orbital, including zero
2. Weights stay in [0, 1]
3. Ground-state determinism and radius scaling with Z
4. Zero-weight padding when rejection sampling falls short
5. Vertex packing for the renderer
"""

import logging

import numpy as np
import pytest

from orbital_cloud.generators import monte_carlo_sampler
from orbital_cloud.generators.cloud_vertices import (
    CLOUD_VERTEX_DTYPE,
    pack_cloud_vertices,
    vertex_buffer_bytes,
)
from orbital_cloud.generators.monte_carlo_sampler import (
    BoundingBox,
    CloudSample,
    CloudSamples,
    MonteCarloSampler,
    SampleConfig,
    create_density,
    random_unit_vectors,
)
from orbital_cloud.quantum.elements import all_elements, by_atomic_number, helium, hydrogen
from orbital_cloud.quantum.orbitals import ApproximateDensity, Orbital
from orbital_cloud.quantum.quantum_constants import BOHR_RADIUS_ANGSTROM


def all_orbitals(max_n):
    for n in range(1, max_n + 1):
        for l in range(n):
            for m in range(-l, l + 1):
                yield Orbital(n, l, m)


class ForcedMaxDensity(ApproximateDensity):
    """Density whose max estimate is far too high, so almost nothing is accepted."""

    def max_density(self):
        return np.float32(1e12)

# ============================================================================
# Counts and Weights
# ============================================================================

@pytest.mark.parametrize("count", [0, 1, 17, 250])
def test_exact_sample_count_for_all_orbitals(count):
    """sample_orbital returns exactly the requested number of points."""
    sampler = MonteCarloSampler(seed=11)
    for orbital in all_orbitals(3):
        samples = sampler.sample_orbital(hydrogen(), orbital, SampleConfig(count))
        assert len(samples) == count
        assert samples.positions.shape == (count, 3)
        assert samples.weights.shape == (count,)


def test_zero_samples_is_empty():
    sampler = MonteCarloSampler()
    for orbital in (Orbital(1, 0, 0), Orbital(2, 1, -1), Orbital(4, 3, 2)):
        samples = sampler.sample_orbital(helium(), orbital, SampleConfig(0))
        assert len(samples) == 0
        assert list(samples) == []
    assert sampler.last_report.path == 'empty'


@pytest.mark.parametrize("state", [(1, 0, 0), (2, 0, 0), (2, 1, 0), (3, 2, -2)])
def test_weights_in_unit_interval(state):
    sampler = MonteCarloSampler(seed=5)
    samples = sampler.sample_orbital(hydrogen(), Orbital(*state), SampleConfig(2000))

    assert samples.weights.dtype == np.float32
    assert np.all(samples.weights >= 0.0)
    assert np.all(samples.weights <= 1.0)
    assert np.all(np.isfinite(samples.positions))


def test_negative_sample_count_rejected():
    with pytest.raises(ValueError):
        SampleConfig(-1)
    with pytest.raises(ValueError):
        SampleConfig(2.5)

# ============================================================================
# Ground State
# ============================================================================

def test_ground_state_is_deterministic():
    """Same seed and inputs give identical clouds."""
    config = SampleConfig(1000)
    first = MonteCarloSampler(seed=7).sample_orbital(hydrogen(), Orbital.ground_state(), config)
    second = MonteCarloSampler(seed=7).sample_orbital(hydrogen(), Orbital.ground_state(), config)

    assert np.array_equal(first.positions, second.positions)
    assert np.array_equal(first.weights, second.weights)


def test_reseed_restarts_sequence():
    sampler = MonteCarloSampler(seed=3)
    config = SampleConfig(200)
    first = sampler.sample_orbital(hydrogen(), Orbital.ground_state(), config)
    advanced = sampler.sample_orbital(hydrogen(), Orbital.ground_state(), config)
    sampler.reseed(3)
    again = sampler.sample_orbital(hydrogen(), Orbital.ground_state(), config)

    assert not np.array_equal(first.positions, advanced.positions)
    assert np.array_equal(first.positions, again.positions)


def test_ground_state_uses_direct_sampling():
    sampler = MonteCarloSampler()
    sampler.sample_orbital(hydrogen(), Orbital.ground_state(), SampleConfig(100))
    report = sampler.last_report
    assert report.path == 'direct'
    assert report.accepted == 100
    assert not report.shortfall


def test_ground_state_mean_radius():
    """Mean 1s radius is 1.5 a."""
    samples = MonteCarloSampler(seed=1).sample_orbital(
        hydrogen(), Orbital.ground_state(), SampleConfig(20000)
    )
    mean_radius = samples.mean_radius()
    assert np.isfinite(mean_radius)
    assert mean_radius == pytest.approx(1.5 * BOHR_RADIUS_ANGSTROM, rel=0.03)


def test_ground_state_radius_scales_inversely_with_z():
    """Doubling Z roughly halves the mean radius."""
    config = SampleConfig(20000)
    sampler = MonteCarloSampler(seed=2)
    hydrogen_radius = sampler.sample_orbital(hydrogen(), Orbital.ground_state(), config).mean_radius()
    helium_radius = sampler.sample_orbital(helium(), Orbital.ground_state(), config).mean_radius()

    assert hydrogen_radius > 0.0 and helium_radius > 0.0
    assert hydrogen_radius / helium_radius == pytest.approx(2.0, rel=0.05)


def test_ground_state_directions_are_isotropic():
    samples = MonteCarloSampler(seed=9).sample_orbital(
        hydrogen(), Orbital.ground_state(), SampleConfig(20000)
    )
    centroid = samples.positions.mean(axis=0)
    assert np.all(np.abs(centroid) < 0.05)


def test_unusable_gamma_scale_falls_back_to_rejection(monkeypatch):
    """A non-positive Gamma scale switches the ground state to rejection sampling."""

    class NegativeScaleDensity(ApproximateDensity):
        def __init__(self, element, orbital):
            super().__init__(element, orbital)
            self._model = ApproximateDensity(element, orbital)
            self.a = np.float32(-1.0)

        def probability_density(self, position):
            return self._model.probability_density(position)

        def max_density(self):
            return self._model.max_density()

        def bounding_radius(self):
            return self._model.bounding_radius()

    monkeypatch.setitem(monte_carlo_sampler.DENSITY_MODELS, 'approximate', NegativeScaleDensity)

    sampler = MonteCarloSampler()
    samples = sampler.sample_orbital(hydrogen(), Orbital.ground_state(), SampleConfig(200))
    assert len(samples) == 200
    assert sampler.last_report.path == 'rejection'

# ============================================================================
# Rejection Sampling
# ============================================================================

def test_rejection_fills_shortfall_with_zero_weight(caplog):
    """Near-zero acceptance still yields the full count, padded with weight 0."""
    sampler = MonteCarloSampler(seed=4)
    density = ForcedMaxDensity(hydrogen(), Orbital(2, 1, 0))

    with caplog.at_level(logging.WARNING, logger="orbital_cloud"):
        samples = sampler.sample_density(density, SampleConfig(500))

    report = sampler.last_report
    assert len(samples) == 500
    assert report.shortfall
    assert report.accepted + report.filler == 500
    assert report.expansions == 4
    assert np.all(samples.weights[report.accepted:] == 0.0)
    assert "filling remainder" in caplog.text


def test_low_acceptance_orbital_keeps_count():
    """(2,1,0) with the placeholder max density accepts few points but still returns all."""
    sampler = MonteCarloSampler(seed=8)
    samples = sampler.sample_orbital(hydrogen(), Orbital(2, 1, 0), SampleConfig(1000))
    report = sampler.last_report

    assert len(samples) == 1000
    assert report.path == 'rejection'
    assert report.filler > 0
    assert np.all(samples.weights[report.accepted:] == 0.0)


def test_filler_stays_inside_expanded_box():
    sampler = MonteCarloSampler(seed=4)
    density = ForcedMaxDensity(hydrogen(), Orbital(2, 1, 0))
    samples = sampler.sample_density(density, SampleConfig(300))

    limit = float(density.bounding_radius()) * 1.5 ** 4
    assert np.all(np.abs(samples.positions) <= limit * (1 + 1e-5))


def test_rejection_without_shortfall():
    """2s has an exact max density and fills its quota without padding."""
    sampler = MonteCarloSampler(seed=6)
    samples = sampler.sample_orbital(hydrogen(), Orbital(2, 0, 0), SampleConfig(100))
    report = sampler.last_report

    assert len(samples) == 100
    assert report.path == 'rejection'
    assert report.filler == 0
    assert report.expansions == 0


def test_rejection_is_deterministic():
    config = SampleConfig(300)
    first = MonteCarloSampler(seed=12).sample_orbital(helium(), Orbital(2, 0, 0), config)
    second = MonteCarloSampler(seed=12).sample_orbital(helium(), Orbital(2, 0, 0), config)
    assert np.array_equal(first.positions, second.positions)
    assert np.array_equal(first.weights, second.weights)

# ============================================================================
# Hydrogenic Model
# ============================================================================

def test_hydrogenic_2pz_aligns_with_z():
    """Exact 2pz samples concentrate along the z axis."""
    sampler = MonteCarloSampler(seed=21, density_model='hydrogenic')
    samples = sampler.sample_orbital(hydrogen(), Orbital(2, 1, 0), SampleConfig(2000))

    assert len(samples) == 2000
    assert sampler.last_report.filler == 0
    mean_abs = np.abs(samples.positions).mean(axis=0)
    assert mean_abs[2] > 1.3 * mean_abs[0]
    assert mean_abs[2] > 1.3 * mean_abs[1]
    assert np.all((samples.weights >= 0.0) & (samples.weights <= 1.0))


def test_unknown_density_model_rejected():
    with pytest.raises(ValueError):
        MonteCarloSampler(density_model='dirac')
    with pytest.raises(ValueError):
        create_density(hydrogen(), Orbital(1, 0, 0), 'dirac')

# ============================================================================
# Records and Helpers
# ============================================================================

def test_samples_behave_as_sequence():
    samples = MonteCarloSampler().sample_orbital(hydrogen(), Orbital.ground_state(), SampleConfig(10))

    record = samples[3]
    assert isinstance(record, CloudSample)
    assert record.position.shape == (3,)
    assert record.weight == pytest.approx(float(samples.weights[3]))
    assert len(samples[2:5]) == 3
    assert len(list(samples)) == 10

    with pytest.raises(ValueError):
        samples.positions[0, 0] = 1.0


def test_random_unit_vectors_have_unit_length():
    vectors = random_unit_vectors(np.random.default_rng(0), 1000)
    assert np.allclose(np.linalg.norm(vectors, axis=1), 1.0, atol=1e-5)


def test_bounding_box_scaling():
    box = BoundingBox.cube(2.0).scaled(1.5)
    assert box.half_width == pytest.approx(3.0)
    points = box.random_points(np.random.default_rng(0), 1000)
    assert np.all(np.abs(points) <= 3.0)


def test_pack_cloud_vertices():
    samples = MonteCarloSampler().sample_orbital(helium(), Orbital(2, 0, 0), SampleConfig(64))
    vertices = pack_cloud_vertices(samples)

    assert CLOUD_VERTEX_DTYPE.itemsize == 16
    assert vertices.dtype == CLOUD_VERTEX_DTYPE
    assert np.array_equal(vertices['position'], samples.positions)
    assert np.array_equal(vertices['weight'], samples.weights)
    assert len(vertex_buffer_bytes(vertices)) == 64 * 16


def test_pack_empty_cloud():
    vertices = pack_cloud_vertices(CloudSamples.empty())
    assert len(vertices) == 0
    assert vertex_buffer_bytes(vertices) == b""


def test_every_cataloged_element_samples():
    sampler = MonteCarloSampler()
    for element in all_elements():
        assert len(sampler.sample_orbital(element, Orbital(2, 1, 1), SampleConfig(20))) == 20
    assert by_atomic_number(3).symbol == "Li"


def test_samples_accept_array_indices():
    samples = MonteCarloSampler().sample_orbital(hydrogen(), Orbital.ground_state(), SampleConfig(10))

    picked = samples[np.array([0, 4, 7])]
    assert isinstance(picked, CloudSamples)
    assert np.array_equal(picked.weights, samples.weights[[0, 4, 7]])

    heavy = samples[samples.weights > 0.5]
    assert len(heavy) == int(np.count_nonzero(samples.weights > 0.5))

    assert isinstance(samples[np.int64(2)], CloudSample)
