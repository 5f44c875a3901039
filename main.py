#!/usr/bin/env python3
"""
Orrery - Solar System Simulator

Command-line entry point for the orrery, either as an interactive viewer or
as a headless run that reports positions, Lagrange points and transfer
progress.

Usage:
    python main.py                                  # Interactive viewer
    python main.py --slow --lagrange Earth Mars     # Start in slow time
    python main.py --headless --duration 2          # Headless run
    python main.py --headless --transfer 0.5        # Headless with a transfer
    python main.py --help                           # Show all options
"""

import argparse
import logging
import sys


logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Orrery Solar System Simulator and Viewer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                      # Viewer with defaults
  %(prog)s --departure Earth --arrival Jupiter  # Different transfer pair
  %(prog)s --headless --duration 3 --timestep 0.05
  %(prog)s --headless --transfer 0.0            # Depart at t=0

Controls (viewer mode):
  Arrow keys  : Pan
  +/-         : Zoom in/out
  Mouse wheel : Zoom at cursor
  F           : Follow transfer
  L           : Toggle Lagrange points
  T           : Start transfer
  R           : Reset transfer
  G           : Toggle gravity grid
  S           : Toggle slow time
  SPACE       : Pause/Resume
  ESC         : Quit
        """,
    )

    # -------------------------------------------------------------------------
    # Body selection
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--lagrange",
        nargs=2,
        metavar=("PRIMARY", "SECONDARY"),
        default=["Earth", "Mars"],
        help="Body pair for Lagrange points (default: Earth Mars)",
    )
    parser.add_argument(
        "--departure",
        type=str,
        default="Earth",
        help="Transfer departure body (default: Earth)",
    )
    parser.add_argument(
        "--arrival",
        type=str,
        default="Mars",
        help="Transfer arrival body (default: Mars)",
    )

    # -------------------------------------------------------------------------
    # Scene and transfer parameters
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--au-scale",
        type=float,
        default=50.0,
        help="Scene units per AU (default: 50)",
    )
    parser.add_argument(
        "--transfer-duration",
        type=float,
        default=1.0,
        help="Simulation time a transfer takes (default: 1)",
    )

    # -------------------------------------------------------------------------
    # Simulation control
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--time-scale",
        type=float,
        default=0.2,
        help="Simulation time per real second (default: 0.2)",
    )
    parser.add_argument(
        "--slow",
        action="store_true",
        help="Start in slow time mode",
    )
    parser.add_argument(
        "--paused",
        action="store_true",
        help="Start with simulation paused",
    )

    # -------------------------------------------------------------------------
    # Headless mode
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without visualization",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=2.0,
        help="Simulation duration for headless mode (default: 2)",
    )
    parser.add_argument(
        "--timestep",
        type=float,
        default=0.01,
        help="Simulation timestep for headless mode (default: 0.01)",
    )
    parser.add_argument(
        "--transfer",
        type=float,
        default=None,
        metavar="T0",
        help="Headless mode: start a transfer at simulation time T0",
    )

    # -------------------------------------------------------------------------
    # Window settings
    # -------------------------------------------------------------------------
    parser.add_argument(
        "--width",
        type=int,
        default=1200,
        help="Window width in pixels (default: 1200)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=900,
        help="Window height in pixels (default: 900)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    # -------------------------------------------------------------------------
    # Create system configuration
    # -------------------------------------------------------------------------
    from orrery import SolarSystem, SystemConfig, UnknownBodyError

    try:
        config = SystemConfig(
            au_scale=args.au_scale,
            transfer_duration=args.transfer_duration,
            lagrange_primary=args.lagrange[0],
            lagrange_secondary=args.lagrange[1],
            transfer_departure=args.departure,
            transfer_arrival=args.arrival,
            time_scale=args.time_scale,
        )
        system = SolarSystem(config)
        for name in args.lagrange:
            system.body(name)
        system.plan_transfer(args.departure, args.arrival)
    except (UnknownBodyError, ValueError) as e:
        logger.error(str(e))
        sys.exit(2)

    # -------------------------------------------------------------------------
    # Print configuration summary
    # -------------------------------------------------------------------------
    summary = system.get_summary()
    print("=" * 60)
    print("Orrery - Solar System Simulator")
    print("=" * 60)
    print(f"\nBodies: {summary['num_bodies']} ({', '.join(summary['bodies'])})")
    print(f"AU Scale: {config.au_scale} units")
    print(f"Lagrange Pair: {config.lagrange_primary} / {config.lagrange_secondary}")
    print(f"Transfer: {config.transfer_departure} -> {config.transfer_arrival}")
    print(f"Transfer Duration: {config.transfer_duration}")

    # -------------------------------------------------------------------------
    # Run
    # -------------------------------------------------------------------------
    if args.headless:
        run_headless(system, args)
    else:
        try:
            from orrery_view import run_visualizer
        except ImportError as e:
            print(f"\nError: Could not import viewer module: {e}")
            print("Try running with --headless flag for a run without graphics.")
            sys.exit(1)

        print(f"\n{'=' * 60}")
        print("Starting Viewer")
        print(f"{'=' * 60}")
        print("\nPath color: Red (poor rendezvous) -> Green (on target)")
        print()

        run_visualizer(
            config,
            width=args.width,
            height=args.height,
            paused=args.paused,
            slow=args.slow,
        )


def run_headless(system, args) -> None:
    """Step simulation time and print periodic reports."""
    if args.timestep <= 0:
        logger.error("Timestep must be positive")
        sys.exit(2)
    if args.duration < 0:
        logger.error("Duration must not be negative")
        sys.exit(2)

    config = system.config

    print(f"\n{'=' * 60}")
    print(f"Running headless for {args.duration:g} time units...")
    print(f"Timestep: {args.timestep:g}")
    print(f"{'=' * 60}")

    t = 0.0
    steps = 0
    report_interval = max(args.timestep, args.duration / 10)
    next_report = 0.0
    transfer_pending = args.transfer is not None

    while t <= args.duration + 1e-12:
        if transfer_pending and t >= args.transfer:
            system.start_transfer(config.transfer_departure, config.transfer_arrival, t)
            transfer_pending = False

        if t >= next_report - 1e-12:
            print_report(system, t)
            next_report += report_interval

        t = (steps + 1) * args.timestep
        steps += 1

    print(f"\n{'=' * 60}")
    print("Run Complete!")
    print(f"{'=' * 60}")
    print(f"Final simulation time: {(steps - 1) * args.timestep:g}")
    print(f"Steps executed: {steps}")

    final_t = (steps - 1) * args.timestep
    if system.transfer is not None and system.transfer.is_departed:
        error = system.rendezvous_error(final_t)
        print(f"\nTransfer {config.transfer_departure} -> {config.transfer_arrival}:")
        print(f"  Rendezvous error: {error:.2f} units")
        print(f"  Optimality: {system.optimality(final_t):.2f}")


def print_report(system, t: float) -> None:
    state = system.snapshot(t)

    print(f"\nTime: {t:.3f}")
    for name, pos in list(state.body_positions.items())[:5]:
        print(f"  {name}: ({pos[0]:+9.2f}, {pos[1]:+9.2f})")
    if len(state.body_positions) > 5:
        print(f"  ... and {len(state.body_positions) - 5} more bodies")

    for name, point in state.lagrange or ():
        print(f"  {name}: ({point[0]:+9.2f}, {point[1]:+9.2f})")

    if state.transfer is not None:
        transfer = state.transfer
        print(
            f"  Probe: {transfer.progress * 100:.0f}% "
            f"error={transfer.rendezvous_error:.2f} "
            f"optimality={transfer.optimality:.2f}"
        )


if __name__ == "__main__":
    main()
