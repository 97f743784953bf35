"""Balanced, shuffled trial lists for binocular RF mapping.

:class:`TrialGenerator` sweeps every fixation point against every peripheral
target, for each stimulated eye and each plain red/blue color code.  Crossover
trials are repeated ``difficulty_level`` times and standard trials
``NUM_DIFFICULTY_LEVELS - 1`` times, then the whole list is shuffled.
"""
from __future__ import annotations

import dataclasses
import random
from typing import List, Optional, Tuple

from psychopy import logging

from .codes import PLAIN_CODES, Eye
from .config import MappingConfig
from .eye_positions import EyePositions, GazeSource, make_eye_positions
from .grid import FixationGrid, RadialGrid, make_fixation_grid, make_radial_grid
from .trial import RFMappingTrial, is_crossover, new_trial


class TrialGenerator:
    """Generate trials with reciprocal coverage for each eye."""

    def __init__(
        self,
        config: MappingConfig,
        fixation_grid: FixationGrid,
        peripheral_grid: RadialGrid,
        eye_positions: EyePositions,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.fixation_grid = fixation_grid
        self.peripheral_grid = peripheral_grid
        self.eye_positions = eye_positions
        self.rng = rng or random.Random(config.seed)

    def _eyes(self) -> Tuple[Eye, ...]:
        if self.config.stim_right_eye_only:
            return (Eye.RIGHT,)
        return (Eye.RIGHT, Eye.LEFT)

    def generate_trials(self) -> List[RFMappingTrial]:
        """Return the full shuffled trial list for this session."""

        num_repeats_standard = self.config.num_repeats_standard
        num_repeats_crossover = self.config.num_repeats_crossover
        if num_repeats_crossover <= 0:
            logging.warning(
                f"Crossover repeat count is {num_repeats_crossover}; "
                "no crossover trials will be generated"
            )
        if num_repeats_standard <= 0:
            logging.warning("Standard repeat count is not positive; no standard trials")

        trials: List[RFMappingTrial] = []
        num_crossover = 0
        eyes = self._eyes()

        for fixation in self.fixation_grid:
            self.eye_positions.set_point(fixation.x_deg, fixation.y_deg)
            logging.debug(
                f"Fixation point ({fixation.x_deg:g}, {fixation.y_deg:g})"
            )
            for vector in self.peripheral_grid:
                for eye in eyes:
                    for code in PLAIN_CODES:
                        template = new_trial(
                            eye,
                            code,
                            self.eye_positions,
                            vector,
                            use_approx=self.config.use_approx,
                            rng=self.rng,
                        )
                        if is_crossover(template):
                            num_repeats = num_repeats_crossover
                            num_crossover += max(0, num_repeats)
                        else:
                            num_repeats = num_repeats_standard
                        trials.extend(
                            dataclasses.replace(template) for _ in range(num_repeats)
                        )

        if not trials:
            logging.warning(
                f"No trials generated ({len(self.fixation_grid)} fixation points, "
                f"{len(self.peripheral_grid)} peripheral targets)"
            )

        self.rng.shuffle(trials)
        logging.info(
            f"Generated {len(trials)} trials "
            f"({num_crossover} crossover, {len(trials) - num_crossover} standard)"
        )
        return trials


def build_grids(config: MappingConfig) -> Tuple[FixationGrid, RadialGrid]:
    """Create the fixation and peripheral grids described by ``config``."""

    fixation_grid = make_fixation_grid(
        columns=config.fixation_columns,
        rows=config.fixation_rows,
        h_separation_deg=config.fixation_h_separation_deg,
        v_separation_deg=config.fixation_v_separation_deg,
    )
    peripheral_grid = make_radial_grid(
        config.peripheral_radii_deg,
        angle_step_deg=config.peripheral_angle_step_deg,
        angle_offset_deg=config.peripheral_angle_offset_deg,
    )
    return fixation_grid, peripheral_grid


def get_generator(
    config: MappingConfig,
    fixation_grid: Optional[FixationGrid] = None,
    peripheral_grid: Optional[RadialGrid] = None,
    *,
    eye_positions: Optional[EyePositions] = None,
    gaze_source: Optional[GazeSource] = None,
    rng: random.Random | None = None,
) -> TrialGenerator:
    """Make a generator for ``config``.

    Grids not supplied are built from the config's spacing parameters and the
    eye model is chosen by ``config.eye_model`` unless one is passed in.
    """

    if fixation_grid is None or peripheral_grid is None:
        default_fixation, default_peripheral = build_grids(config)
        fixation_grid = fixation_grid if fixation_grid is not None else default_fixation
        peripheral_grid = (
            peripheral_grid if peripheral_grid is not None else default_peripheral
        )
    if eye_positions is None:
        eye_positions = make_eye_positions(
            config.eye_model, config.deviation_deg, gaze_source=gaze_source
        )
    return TrialGenerator(config, fixation_grid, peripheral_grid, eye_positions, rng=rng)


__all__ = ["TrialGenerator", "build_grids", "get_generator"]
