import argparse
import logging
from importlib import metadata

from py_puttcalc import (logger, loadImperialUnits, loadMetricUnits, Calculator, Green, Putt,
                         AimFindingError, PuttParametersError, PuttResult, Angular, Distance)
from py_puttcalc.interface import SWEEP_STEPS

version = metadata.metadata("py_puttcalc")['Version']


def add_putt_group(parser):
    putt = parser.add_argument_group('Putt', 'Putt parameters, bare numbers in preferred units')
    putt.add_argument("-D", "--distance", type=float, default=3.0, help="Distance to the cup")
    putt.add_argument("-t", "--slope", type=float, default=2.0, help="Slope of the green")
    putt.add_argument("-f", "--fall-line", type=float, default=0.0,
                      help="Direction the green falls, from the launch->cup line toward +x")
    putt.add_argument("-S", "--stimp", type=float, default=9.0, help="Stimpmeter reading")
    putt.add_argument("-a", "--angle", type=float, default=0.0, help="Launch angle")
    putt.add_argument("-o", "--overrun", type=float, default=0.5, help="Overrun past the cup")


def add_sweep_group(parser):
    sweep = parser.add_argument_group('Sweep', 'Simulate the center value and two steps either side')
    sweep.add_argument("--sweep", choices=tuple(SWEEP_STEPS), help="Parameter to sweep")
    sweep.add_argument("--step", type=float, default=None, help="Sweep step")
    sweep.add_argument("--no-minus", action="store_true", help="Skip the steps below the center")
    sweep.add_argument("--no-plus", action="store_true", help="Skip the steps above the center")


def add_solver_group(parser):
    solver = parser.add_argument_group('Solvers')
    solver.add_argument("--solve-speed", action="store_true",
                        help="Find the launch speed for the overrun with the cup removed")
    solver.add_argument("--solve-angle", action="store_true",
                        help="Find the launch angle through the cup center")


def get_arg_parser():
    parser = argparse.ArgumentParser(
        prog=f'pypc v{version}',
        description="Tool for golf putt trajectory calculations"
    )
    parser.add_argument("-v", "--version", action='version',
                        version=f'pypc v{version}', help="Show version")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug messages")
    parser.add_argument("-u", "--units", choices=('metric', 'imperial'), default=None,
                        help="Preferred units profile")
    parser.add_argument("-e", "--engine", default=None, help="Engine entry point name")

    add_putt_group(parser)
    add_sweep_group(parser)
    add_solver_group(parser)
    return parser


def format_stops(results):
    """One line per run: stop point and whether the cup captured the ball."""
    lines = []
    for i, result in enumerate(results, start=1):
        stop = result.stop_position
        tag = "IN" if result.captured else "-"
        lines.append(f"[{i:02d}] stop x={stop.x:.3f}m, y={stop.y:.3f}m ({tag})")
    return "\n".join(lines)


def format_single(putt: Putt, result: PuttResult) -> str:
    props = result.props
    return (
        f"Input: D={putt.distance >> Distance.Meter:.2f}m, "
        f"slope={putt.green.slope >> Angular.Degree:.2f}deg, "
        f"stimp={putt.green.stimp >> Distance.Foot:.1f}ft, "
        f"angle={putt.launch_angle >> Angular.Degree:.2f}deg, "
        f"overrun={putt.overrun >> Distance.Meter:.2f}m\n"
        f"Result: holed={str(result.captured).lower()}\n"
        f"stop: x={result.stop_position.x:.3f}m, y={result.stop_position.y:.3f}m\n"
        f"v0={result.launch_speed:.2f} m/s\n"
        f"aRoll={props.a_roll:.2f} m/s^2\n"
        f"aSlope=({props.slope_vector.x:.2f}, {props.slope_vector.y:.2f}) m/s^2"
    )


def main(args=None):
    parser = get_arg_parser()
    argv = parser.parse_args(args)

    if argv.debug:
        logger.setLevel(logging.DEBUG)
        logger.info("Debug messages enabled")

    if argv.units == 'metric':
        loadMetricUnits()
    elif argv.units == 'imperial':
        loadImperialUnits()

    try:
        putt = Putt(argv.distance, Green(argv.stimp, argv.slope, argv.fall_line), argv.angle, argv.overrun)
        calc = Calculator(engine=argv.engine)

        if argv.sweep:
            runs = calc.sweep(putt, argv.sweep, argv.step, minus=not argv.no_minus, plus=not argv.no_plus)
            print(f"{argv.sweep} sweep: {', '.join(str(run.value) for run in runs)}")
            print(format_stops([run.result for run in runs]))
        else:
            print(format_single(putt, calc.simulate(putt)))

        if argv.solve_speed:
            solution = calc.launch_speed_for_overrun(putt)
            status = "converged" if solution.converged else f"not converged ({solution.reason})"
            print(f"launch speed: {solution.speed:.3f} m/s, {status} after {solution.iterations} iterations")
        if argv.solve_angle:
            try:
                angle = calc.find_launch_angle(putt)
                print(f"launch angle: {angle >> Angular.Degree:.3f} deg")
            except AimFindingError as exc:
                print(f"launch angle: not found ({exc})")
    except PuttParametersError as exc:
        logger.error(f"Invalid putt: {exc}")
        return 2
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
