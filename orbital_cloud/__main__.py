"""
Command-line entry point.

Samples one orbital cloud and prints a summary:

    $ python -m orbital_cloud --element 2 --n 2 --l 1 --m 0 --samples 5000
"""

import argparse
import logging

import numpy as np

from .logging_config import setup_logging
from .generators.monte_carlo_sampler import DENSITY_MODELS
from .quantum.elements import all_elements, by_atomic_number
from .quantum.quantum_constants import (
    DEFAULT_SAMPLE_COUNT,
    DEFAULT_SEED,
    MAX_PRINCIPAL_QUANTUM_NUMBER,
    validate_quantum_numbers,
)
from .simulation import Simulation


def build_parser():
    parser = argparse.ArgumentParser(
        prog="orbital_cloud",
        description="Sample a hydrogen-like orbital into a weighted point cloud.",
    )
    parser.add_argument("--element", type=int, default=1, help="Atomic number Z")
    parser.add_argument("--n", type=int, default=1, help="Principal quantum number")
    parser.add_argument("--l", type=int, default=0, help="Azimuthal quantum number")
    parser.add_argument("--m", type=int, default=0, help="Magnetic quantum number")
    parser.add_argument("--samples", type=int, default=DEFAULT_SAMPLE_COUNT)
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--model", choices=sorted(DENSITY_MODELS), default="approximate")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--list-elements", action="store_true",
                        help="Print the element catalog and exit")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level))

    if args.list_elements:
        for element in all_elements():
            print(f"{element.atomic_number:3d}  {element.symbol:2s}  {element.name}")
        return 0

    if by_atomic_number(args.element) is None:
        parser.error(f"unknown atomic number {args.element}")
    if args.n > MAX_PRINCIPAL_QUANTUM_NUMBER:
        parser.error(f"--n must be at most {MAX_PRINCIPAL_QUANTUM_NUMBER}")
    if args.samples < 0:
        parser.error("--samples must be non-negative")
    try:
        validate_quantum_numbers(args.n, args.l, args.m)
    except ValueError as e:
        parser.error(str(e))

    simulation = Simulation(
        atomic_number=args.element,
        sample_count=0,
        seed=args.seed,
        density_model=args.model,
    )
    simulation.controls.principal_n = args.n
    simulation.controls.angular_l = args.l
    simulation.controls.magnetic_m = args.m
    simulation.controls.sample_count = args.samples
    simulation.controls.request_resample()
    simulation.apply_controls()

    samples = simulation.samples
    report = simulation.sampler.last_report
    atom = simulation.atom

    print(f"Element:      {atom.element.label}")
    print(f"Orbital:      {atom.active_orbital.name} (n={atom.active_orbital.n}, "
          f"l={atom.active_orbital.l}, m={atom.active_orbital.m})")
    print(f"Nucleus:      {atom.nucleus.proton_count} p, {atom.nucleus.neutron_count} n")
    print(f"Samples:      {len(samples)} ({report.path})")
    print(f"Accepted:     {report.accepted}")
    print(f"Filler:       {report.filler}")
    if len(samples):
        print(f"Mean radius:  {samples.mean_radius():.4f} Å")
        print(f"Mean weight:  {float(np.mean(samples.weights)):.4f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
