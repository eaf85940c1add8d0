"""
Monte Carlo Orbital Sampler

Turns an orbital probability density into a weighted point cloud.

Two strategies:
- Direct sampling for the 1s ground state. The 1s radial distribution
  r² exp(-2r/a) is a Gamma(3, a/2) density, so radii are drawn exactly and
  paired with uniform directions.
- Rejection sampling for everything else, inside a cube that grows when
  acceptance is too low. Any shortfall left after the last round is padded
  with zero-weight points, so callers always get the count they asked for.

Weights are sqrt(density / max_density), clamped to [0, 1].
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Integral
from typing import Optional

import numpy as np

from ..quantum.hydrogen_wavefunctions import HydrogenicDensity
from ..quantum.orbitals import ApproximateDensity
from ..quantum.quantum_constants import (
    ATTEMPTS_PER_SAMPLE,
    DEFAULT_SAMPLE_COUNT,
    DEFAULT_SEED,
    EXPANSION_FACTOR,
    GROUND_STATE_GAMMA_SHAPE,
    MAX_EXPANSIONS,
    MIN_ATTEMPTS_PER_ROUND,
    MIN_MAX_DENSITY,
    REJECTION_BATCH_SIZE,
)

logger = logging.getLogger(__name__)

DENSITY_MODELS = {
    'approximate': ApproximateDensity,
    'hydrogenic': HydrogenicDensity,
}


def create_density(element, orbital, model='approximate'):
    """Instantiate the named density model for an element and orbital."""
    try:
        density_cls = DENSITY_MODELS[model]
    except KeyError:
        raise ValueError(
            f"Unknown density model {model!r}, expected one of {sorted(DENSITY_MODELS)}"
        ) from None
    return density_cls(element, orbital)

# ============================================================================
# Sample Records
# ============================================================================

@dataclass(frozen=True)
class CloudSample:
    """One point of the cloud: position (Angstroms) and weight in [0, 1]."""

    position: np.ndarray
    weight: float


@dataclass(frozen=True)
class SampleConfig:
    """How many samples to request."""

    samples: int = DEFAULT_SAMPLE_COUNT

    def __post_init__(self):
        if not isinstance(self.samples, Integral) or isinstance(self.samples, bool):
            raise ValueError(f"Sample count must be an integer, got {self.samples!r}")
        if self.samples < 0:
            raise ValueError(f"Sample count must be non-negative, got {self.samples}")


class CloudSamples(Sequence):
    """
    Sequence of CloudSample records backed by two arrays.

    Attributes:
        positions (np.ndarray): (N, 3) float32, read-only
        weights (np.ndarray): (N,) float32, read-only
    """

    def __init__(self, positions, weights):
        positions = np.ascontiguousarray(positions, dtype=np.float32).reshape(-1, 3)
        weights = np.ascontiguousarray(weights, dtype=np.float32).reshape(-1)
        if len(positions) != len(weights):
            raise ValueError(
                f"Positions and weights differ in length: {len(positions)} != {len(weights)}"
            )
        positions.flags.writeable = False
        weights.flags.writeable = False
        self.positions = positions
        self.weights = weights

    @classmethod
    def empty(cls):
        return cls(np.zeros((0, 3), dtype=np.float32), np.zeros(0, dtype=np.float32))

    def __len__(self):
        return len(self.weights)

    def __getitem__(self, index):
        if isinstance(index, Integral):
            return CloudSample(self.positions[index].copy(), float(self.weights[index]))
        return CloudSamples(self.positions[index], self.weights[index])

    def radii(self):
        """Distance of every sample from the nucleus."""
        return np.linalg.norm(self.positions, axis=1)

    def mean_radius(self):
        if not len(self):
            return 0.0
        return float(np.mean(self.radii(), dtype=np.float64))

    def __repr__(self):
        return f"CloudSamples(count={len(self)})"


@dataclass
class SamplingReport:
    """Diagnostics for the most recent sampling call."""

    path: str
    requested: int
    accepted: int
    filler: int = 0
    attempts: int = 0
    expansions: int = 0

    @property
    def shortfall(self):
        return self.filler > 0

# ============================================================================
# Geometry Helpers
# ============================================================================

class BoundingBox:
    """Axis-aligned box that candidate positions are drawn from."""

    def __init__(self, minimum, maximum):
        self.min = np.asarray(minimum, dtype=np.float32).reshape(3)
        self.max = np.asarray(maximum, dtype=np.float32).reshape(3)

    @classmethod
    def cube(cls, radius):
        half = abs(float(radius))
        return cls([-half] * 3, [half] * 3)

    def random_points(self, rng, count):
        return rng.uniform(self.min, self.max, size=(count, 3)).astype(np.float32)

    def scaled(self, factor):
        return BoundingBox(self.min * np.float32(factor), self.max * np.float32(factor))

    @property
    def half_width(self):
        return float(np.max(np.abs(self.max)))

    def __repr__(self):
        return f"BoundingBox(half_width={self.half_width:.4f})"


def random_unit_vectors(rng, count):
    """
    Uniform directions on the unit sphere: z ~ U(-1, 1), azimuth ~ U(0, 2π).
    """
    z = rng.uniform(-1.0, 1.0, size=count)
    azimuth = rng.uniform(0.0, 2.0 * np.pi, size=count)
    radial = np.sqrt(np.maximum(1.0 - z * z, 0.0))
    return np.column_stack([radial * np.cos(azimuth), radial * np.sin(azimuth), z]).astype(np.float32)


def density_weights(densities, max_density):
    """Visualization weight sqrt(clamp(density / max_density, 0, 1))."""
    ratio = np.asarray(densities, dtype=np.float32) / np.float32(max_density)
    return np.sqrt(np.clip(ratio, 0.0, 1.0)).astype(np.float32)

# ============================================================================
# Sampler
# ============================================================================

class MonteCarloSampler:
    """
    Stateful point-cloud generator.

    Owns a seeded numpy Generator, which is the only mutable state. Repeated
    calls with the same seed and inputs yield the same clouds. Not safe to
    share between threads.

    Args:
        seed: Generator seed (default: DEFAULT_SEED)
        density_model: 'approximate' (default) or 'hydrogenic'
    """

    def __init__(self, seed=DEFAULT_SEED, density_model='approximate'):
        if density_model not in DENSITY_MODELS:
            raise ValueError(
                f"Unknown density model {density_model!r}, expected one of {sorted(DENSITY_MODELS)}"
            )
        self.density_model = density_model
        self.last_report: Optional[SamplingReport] = None
        self.reseed(seed)

    @property
    def seed(self):
        return self._seed

    def reseed(self, seed):
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    # ========================================================================
    # Public API
    # ========================================================================

    def sample_orbital(self, element, orbital, config):
        """
        Sample ``config.samples`` points from the orbital's density.

        Args:
            element: Element whose atomic number sets the length scale
            orbital: Validated Orbital
            config: SampleConfig

        Returns:
            CloudSamples: exactly config.samples records
        """
        if config.samples == 0:
            self.last_report = SamplingReport('empty', 0, 0)
            return CloudSamples.empty()

        density = create_density(element, orbital, self.density_model)

        if orbital.is_ground_state:
            samples = self._sample_ground_state(density, config)
            if samples is not None:
                return samples

        return self._sample_rejection(density, config)

    def sample_density(self, density, config):
        """
        Rejection-sample any density model.

        ``density`` needs probability_density(positions), max_density()
        and bounding_radius().
        """
        if config.samples == 0:
            self.last_report = SamplingReport('empty', 0, 0)
            return CloudSamples.empty()
        return self._sample_rejection(density, config)

    # ========================================================================
    # Strategies
    # ========================================================================

    def _sample_ground_state(self, density, config):
        scale = float(density.a) / 2.0
        if not np.isfinite(scale) or scale <= 0.0:
            logger.debug("Gamma scale %r unusable for %r; using rejection sampling", scale, density)
            return None

        count = config.samples
        max_density = max(float(density.max_density()), MIN_MAX_DENSITY)

        radii = self._rng.gamma(GROUND_STATE_GAMMA_SHAPE, scale, size=count).astype(np.float32)
        directions = random_unit_vectors(self._rng, count)
        positions = directions * radii[:, np.newaxis]

        weights = density_weights(density.probability_density(positions), max_density)

        self.last_report = SamplingReport('direct', count, count, attempts=count)
        return CloudSamples(positions, weights)

    def _sample_rejection(self, density, config):
        target = config.samples
        bounds = BoundingBox.cube(density.bounding_radius())
        max_density = max(float(density.max_density()), MIN_MAX_DENSITY)
        max_attempts = max(target * ATTEMPTS_PER_SAMPLE, MIN_ATTEMPTS_PER_ROUND)

        positions, weights = [], []
        accepted = 0
        total_attempts = 0
        expansions = 0

        for round_index in range(MAX_EXPANSIONS + 1):
            if round_index:
                bounds = bounds.scaled(EXPANSION_FACTOR)
                expansions += 1

            attempts = 0
            while accepted < target and attempts < max_attempts:
                batch = min(REJECTION_BATCH_SIZE, max_attempts - attempts)
                candidates = bounds.random_points(self._rng, batch)
                densities = density.probability_density(candidates)
                thresholds = self._rng.uniform(0.0, max_density, size=batch)

                hits = np.flatnonzero(thresholds <= densities)
                needed = target - accepted
                if hits.size >= needed:
                    hits = hits[:needed]
                    attempts += int(hits[-1]) + 1
                else:
                    attempts += batch

                positions.append(candidates[hits])
                weights.append(density_weights(densities[hits], max_density))
                accepted += hits.size

            total_attempts += attempts
            if accepted >= target:
                break

        filler = target - accepted
        if filler:
            logger.warning(
                "Monte Carlo sampling accepted %d / %d points for %r; "
                "filling remainder with zero-weight samples",
                accepted, target, density,
            )
            positions.append(bounds.random_points(self._rng, filler))
            weights.append(np.zeros(filler, dtype=np.float32))

        self.last_report = SamplingReport(
            'rejection', target, accepted,
            filler=filler,
            attempts=total_attempts,
            expansions=expansions,
        )
        return CloudSamples(np.concatenate(positions), np.concatenate(weights))
