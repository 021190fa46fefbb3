"""
Command-line interface for neoimpact.

Usage:
    # Impact effects of a 100 m stony asteroid at 20 km/s
    python -m neoimpact impact --diameter 100 --density 3000 --velocity 20 --angle 45

    # Heliocentric position of a planet at a date
    python -m neoimpact locate --planet mars --date 2026-10-19

    # Sampled orbit path, optionally plotted
    python -m neoimpact path --planet earth mars --num-points 100 --plot orbits.png --highlight mars
"""

import argparse
import logging
import sys
from datetime import datetime

import numpy as np
from pydantic import ValidationError

from neoimpact.astrodynamics import datetime_to_julian, generate_orbit_path, position_at_time
from neoimpact.bodies import load_planets, planet_elements
from neoimpact.constants import J2000, KMPAU
from neoimpact.impact import AtmosphereModel, ImpactorProfile, TargetProperties, simulate_impact
from neoimpact.tracking import SimulationContext

logger = logging.getLogger("neoimpact")


def _julian_date(args) -> float:
    if args.jd is not None:
        return args.jd
    if args.date is not None:
        return datetime_to_julian(datetime.fromisoformat(args.date))
    return J2000


def _add_time_arguments(parser):
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        '--date',
        type=str,
        default=None,
        help='ISO date/time (UTC if no offset is given), e.g. 2026-10-19T12:00'
    )
    group.add_argument(
        '--jd',
        type=float,
        default=None,
        help='Julian date (default: J2000)'
    )


def _setup_impact_parser(subparsers):
    """
    Set up the impact subcommand parser.

    Parameters
    ----------
    subparsers : argparse._SubParsersAction
        The subparsers object from the main parser

    Returns
    -------
    argparse.ArgumentParser
        The configured impact parser
    """
    impact_parser = subparsers.add_parser(
        'impact',
        help='Compute atmospheric entry, energy and crater for an impactor',
    )
    impact_parser.add_argument('--diameter', '-d', type=float, required=True, help='Projectile diameter (m)')
    impact_parser.add_argument('--density', '-r', type=float, default=3000.0, help='Projectile density (kg/m^3, default: 3000)')
    impact_parser.add_argument('--velocity', '-v', type=float, required=True, help='Entry velocity (km/s)')
    impact_parser.add_argument('--angle', '-a', type=float, default=45.0, help='Impact angle from horizontal (deg, default: 45)')
    impact_parser.add_argument('--depth', type=float, default=0.0, help='Water depth over the target (m, default: 0)')
    impact_parser.add_argument(
        '--target', '-t',
        choices=['water', 'sedimentary', 'igneous'],
        default='igneous',
        help='Target material (default: igneous)'
    )
    impact_parser.add_argument('--rho-surface', type=float, default=None, help='Surface air density (kg/m^3)')
    impact_parser.add_argument('--target-density', type=float, default=None, help='Target density (kg/m^3)')
    return impact_parser


def _setup_locate_parser(subparsers):
    locate_parser = subparsers.add_parser(
        'locate',
        help='Heliocentric position of planets at a date',
    )
    locate_parser.add_argument('--planet', '-p', nargs='+', required=True, help='Planet names')
    _add_time_arguments(locate_parser)
    return locate_parser


def _setup_path_parser(subparsers):
    path_parser = subparsers.add_parser(
        'path',
        help='Sample the orbit path of planets',
    )
    path_parser.add_argument('--planet', '-p', nargs='+', required=True, help='Planet names')
    path_parser.add_argument('--num-points', '-n', type=int, default=80, help='Points per orbit (default: 80)')
    path_parser.add_argument('--plot', type=str, default=None, help='Write a 3D plot of the orbits to this file')
    path_parser.add_argument('--highlight', type=str, default=None, help='Planet to emphasize in the plot')
    _add_time_arguments(path_parser)
    return path_parser


def run_impact(args) -> int:
    try:
        profile = ImpactorProfile(
            diameter=args.diameter,
            density=args.density,
            velocity=args.velocity,
            angle=args.angle,
            target_depth=args.depth,
            target_type=args.target,
        )
    except ValidationError as e:
        print(f"Invalid impactor: {e}", file=sys.stderr)
        return 2

    atmosphere = AtmosphereModel() if args.rho_surface is None else AtmosphereModel(rho_surface=args.rho_surface)
    target = TargetProperties() if args.target_density is None else TargetProperties(density=args.target_density)
    report = simulate_impact(profile, atmosphere, target)

    rows = [
        ("Breakup altitude (m)", report.entry.breakup_altitude),
        ("Burst altitude (m)", report.entry.burst_altitude),
        ("Surface velocity (km/s)", report.entry.surface_velocity),
        ("Mass (kg)", report.energy.mass),
        ("Kinetic energy (J)", report.energy.kinetic_energy),
        ("Kinetic energy (Mt)", report.energy.energy_megatons),
        ("Impact energy (J)", report.energy.impact_energy),
        ("Impact energy (Mt)", report.energy.impact_megatons),
        ("Linear momentum (kg m/s)", report.energy.linear_momentum),
        ("Angular momentum (kg m^2/s)", report.energy.angular_momentum),
        ("Seafloor velocity (km/s)", report.energy.seafloor_velocity),
        ("Seafloor energy (J)", report.energy.seafloor_energy),
        ("Impact frequency (years)", report.energy.impact_frequency),
        ("Transient diameter (m)", report.crater.transient_diameter),
        ("Transient depth (m)", report.crater.transient_depth),
        ("Final diameter (m)", report.crater.final_diameter),
        ("Final depth (m)", report.crater.final_depth),
        ("Volume", report.crater.volume),
        ("Melt volume (m^3)", report.crater.melt_volume),
        ("Ground radius (km)", report.ground_radius_km),
    ]
    width = max(len(label) for label, _ in rows)
    for label, value in rows:
        text = "-" if value is None else f"{value:.6g}"
        print(f"{label:<{width}}  {text}")
    return 0


def run_locate(args) -> int:
    jd = _julian_date(args)
    print(f"# JD {jd:.5f}")
    print(f"# {'planet':<10} {'x (AU)':>12} {'y (AU)':>12} {'z (AU)':>12} {'r (AU)':>10}")
    for name in args.planet:
        try:
            elements = planet_elements(name)
        except ValueError as e:
            print(e, file=sys.stderr)
            return 2
        result = position_at_time(elements, jd)
        x, y, z = np.asarray(result.position) / KMPAU
        print(f"  {name:<10} {x:12.6f} {y:12.6f} {z:12.6f} {float(result.radius) / KMPAU:10.6f}")
    return 0


def run_path(args) -> int:
    try:
        bodies = {name: planet_elements(name) for name in args.planet}
    except ValueError as e:
        print(e, file=sys.stderr)
        return 2

    if args.plot:
        from neoimpact.plotting import plot_context
        planets = load_planets()
        context = SimulationContext(julian_date=_julian_date(args))
        for name in args.planet:
            context.track(planets[name.lower()], path_points=args.num_points)
        if args.highlight is not None:
            try:
                context.highlight(planets[args.highlight.lower()].name)
            except (KeyError, ValueError):
                print(f"Cannot highlight '{args.highlight}': not one of the plotted planets", file=sys.stderr)
                return 2
        fig = plot_context(context, n_orbit_points=args.num_points)
        fig.savefig(args.plot)
        print(f"Orbit plot saved to {args.plot}")
        return 0

    for name, elements in bodies.items():
        print(f"# {name}: x y z (AU)")
        for x, y, z in np.asarray(generate_orbit_path(elements, args.num_points)) / KMPAU:
            print(f"{x:.8f} {y:.8f} {z:.8f}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog='neoimpact',
        description='Orbit propagation and asteroid impact effects',
    )
    parser.add_argument('--verbose', '-V', action='count', default=0,
                        help='Increase logging verbosity (-V info, -VV debug)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    _setup_impact_parser(subparsers)
    _setup_locate_parser(subparsers)
    _setup_path_parser(subparsers)

    args = parser.parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

    commands = {
        'impact': run_impact,
        'locate': run_locate,
        'path': run_path,
    }
    return commands[args.command](args)


if __name__ == '__main__':
    sys.exit(main())
