"""Command line helpers for generating RF mapping trial schedules."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

from psychopy import logging

from .config import MappingConfig
from .eye_positions import EYE_MODELS
from .export import save_trials_csv, trial_rows
from .generator import get_generator
from .trial import RFMappingTrial

DEFAULT_DEVIATION = MappingConfig.__dataclass_fields__["deviation_deg"].default
DEFAULT_DIFFICULTY = MappingConfig.__dataclass_fields__["difficulty_level"].default
DEFAULT_EYE_MODEL = MappingConfig.__dataclass_fields__["eye_model"].default
DEFAULT_H_SEPARATION = MappingConfig.__dataclass_fields__[
    "fixation_h_separation_deg"
].default
DEFAULT_V_SEPARATION = MappingConfig.__dataclass_fields__[
    "fixation_v_separation_deg"
].default
DEFAULT_ANGLE_STEP = MappingConfig.__dataclass_fields__[
    "peripheral_angle_step_deg"
].default
DEFAULT_RADII = list(MappingConfig().peripheral_radii_deg)
DEFAULT_OUTPUT = Path("data") / "rf_mapping_schedule.csv"


def build_arg_parser() -> argparse.ArgumentParser:
    """Create an argument parser exposing the session settings."""

    parser = argparse.ArgumentParser(
        description=(
            "Generate a balanced, shuffled binocular RF mapping trial schedule. "
            "Crossover trials repeat DIFFICULTY times; standard trials repeat a "
            "fixed number of times."
        )
    )
    parser.add_argument(
        "--deviation",
        type=float,
        default=DEFAULT_DEVIATION,
        help="Ocular deviation between the eyes, in degrees (default: %(default)s).",
    )
    parser.add_argument(
        "--difficulty",
        type=int,
        default=DEFAULT_DIFFICULTY,
        help=(
            "Repeat count for crossover trials (default: %(default)s). "
            "Zero or negative disables crossover trials."
        ),
    )
    parser.add_argument(
        "--right-eye-only",
        action="store_true",
        help="Only stimulate the right eye.",
    )
    parser.add_argument(
        "--no-approx",
        action="store_true",
        help=(
            "Leave peripheral targets as raw vectors instead of adding the "
            "approximated eye position (for real-time tracking sessions)."
        ),
    )
    parser.add_argument(
        "--eye-model",
        choices=[model for model in EYE_MODELS if model != "tracked"],
        default=DEFAULT_EYE_MODEL,
        help="Eye-position approximation (default: %(default)s).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible coin flips and shuffling.",
    )
    parser.add_argument(
        "--fixation-columns",
        type=int,
        default=1,
        help="Number of fixation grid columns (default: %(default)s).",
    )
    parser.add_argument(
        "--fixation-rows",
        type=int,
        default=1,
        help="Number of fixation grid rows (default: %(default)s).",
    )
    parser.add_argument(
        "--h-separation",
        type=float,
        default=DEFAULT_H_SEPARATION,
        help="Horizontal fixation spacing in degrees (default: %(default)s).",
    )
    parser.add_argument(
        "--v-separation",
        type=float,
        default=DEFAULT_V_SEPARATION,
        help="Vertical fixation spacing in degrees (default: %(default)s).",
    )
    parser.add_argument(
        "--radii",
        type=float,
        nargs="+",
        default=DEFAULT_RADII,
        help="Peripheral target radii in degrees (default: %(default)s).",
    )
    parser.add_argument(
        "--angle-step",
        type=float,
        default=DEFAULT_ANGLE_STEP,
        help="Angular spacing of peripheral targets (default: %(default)s).",
    )
    parser.add_argument(
        "--angle-offset",
        type=float,
        default=0.0,
        help="Angle of the first peripheral target (default: %(default)s).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help="CSV file for the generated schedule (default: %(default)s).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the settings and trials without writing a CSV file.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show informational log messages on the console.",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> MappingConfig:
    """Translate parsed arguments into a :class:`MappingConfig`."""

    return MappingConfig(
        deviation_deg=args.deviation,
        difficulty_level=args.difficulty,
        stim_right_eye_only=args.right_eye_only,
        use_approx=not args.no_approx,
        eye_model=args.eye_model,
        seed=args.seed,
        fixation_columns=args.fixation_columns,
        fixation_rows=args.fixation_rows,
        fixation_h_separation_deg=args.h_separation,
        fixation_v_separation_deg=args.v_separation,
        peripheral_radii_deg=tuple(args.radii),
        peripheral_angle_step_deg=args.angle_step,
        peripheral_angle_offset_deg=args.angle_offset,
        output_path=str(args.output),
    )


def main(argv: list[str] | None = None) -> None:
    """Parse command line options and generate the schedule."""

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.console.setLevel(logging.INFO if args.verbose else logging.WARNING)

    config = config_from_args(args)
    try:
        trials = get_generator(config).generate_trials()
        if args.dry_run:
            perform_dry_run(config, trials)
            return
        assert config.output_path is not None
        output = save_trials_csv(
            trials,
            config.output_path,
            config.deviation_deg,
            angle_offset_deg=config.peripheral_angle_offset_deg,
        )
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    print(f"Wrote {len(trials)} trials to '{output}'.")


def perform_dry_run(config: MappingConfig, trials: List[RFMappingTrial]) -> None:
    """Print the session settings and every generated trial."""

    print(config.summary_text())
    if not trials:
        print("No trials generated; nothing to report.")
        return

    rows = trial_rows(
        trials,
        config.deviation_deg,
        angle_offset_deg=config.peripheral_angle_offset_deg,
    )
    print(f"Dry-run: {len(trials)} trials.")
    for trial, row in zip(trials, rows):
        flags = []
        if row["crossover"]:
            flags.append("crossover")
        if row["over_midline"]:
            flags.append("midline")
        print(
            f"[{row['trial_index']:04}] {row['stim_eye']:<5} {trial}"
            f"  {' '.join(flags)}".rstrip()
        )
    print("Dry-run complete.")


if __name__ == "__main__":  # pragma: no cover - module level CLI hook
    main(sys.argv[1:])
