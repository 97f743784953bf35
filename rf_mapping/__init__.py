"""Trial generation for binocular receptive-field / saccade mapping.

This package turns a grid of fixation points and a grid of peripheral target
vectors into a balanced, shuffled list of trials.  The module layout keeps the
geometry (grids, eye positions), the trial record and its classifiers, and the
generator separate so each part can be reused by other experiment runners.
"""

from .codes import PLAIN_CODES, ColorCode, Eye, StimColor, stim_code_to_string
from .config import NUM_DIFFICULTY_LEVELS, MappingConfig
from .eye_positions import (
    CyclopeanEyePositions,
    EyePositions,
    RandomEyePositions,
    TrackedEyePositions,
    make_eye_positions,
)
from .grid import (
    FixationGrid,
    PeripheralVector,
    Point,
    RadialGrid,
    make_fixation_grid,
    make_radial_grid,
)
from .trial import (
    RFMappingTrial,
    TrialCodeError,
    angle_to_code,
    is_crossover,
    is_over_midline,
    new_trial,
    radius_to_code,
)
from .generator import TrialGenerator, get_generator
from .export import save_trials_csv, trial_row
from .cli import main as run_generator

__all__ = [
    "MappingConfig",
    "NUM_DIFFICULTY_LEVELS",
    "StimColor",
    "ColorCode",
    "Eye",
    "PLAIN_CODES",
    "stim_code_to_string",
    "Point",
    "PeripheralVector",
    "FixationGrid",
    "RadialGrid",
    "make_fixation_grid",
    "make_radial_grid",
    "EyePositions",
    "CyclopeanEyePositions",
    "RandomEyePositions",
    "TrackedEyePositions",
    "make_eye_positions",
    "RFMappingTrial",
    "TrialCodeError",
    "new_trial",
    "is_crossover",
    "is_over_midline",
    "angle_to_code",
    "radius_to_code",
    "TrialGenerator",
    "get_generator",
    "trial_row",
    "save_trials_csv",
    "run_generator",
]
