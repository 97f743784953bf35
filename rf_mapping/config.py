"""Configuration helpers for receptive-field mapping trial generation.

The :class:`MappingConfig` dataclass gathers the session settings that the
generator reads: ocular deviation, difficulty level, eye restriction and the
approximation flag, plus the spacing parameters used to build the fixation and
peripheral grids.  Passing one explicit object around keeps the generator free
of global experiment state.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .grid import (
    DEFAULT_ANGLE_STEP,
    DEFAULT_SEPARATION_HORIZONTAL,
    DEFAULT_SEPARATION_VERTICAL,
)

NUM_DIFFICULTY_LEVELS: int = 4


@dataclass
class MappingConfig:
    """Container for generation parameters and runtime options."""

    deviation_deg: float = 0.0
    difficulty_level: int = NUM_DIFFICULTY_LEVELS - 1
    stim_right_eye_only: bool = False
    use_approx: bool = True
    eye_model: str = "cyclopean"
    seed: Optional[int] = None
    fixation_columns: int = 1
    fixation_rows: int = 1
    fixation_h_separation_deg: float = DEFAULT_SEPARATION_HORIZONTAL
    fixation_v_separation_deg: float = DEFAULT_SEPARATION_VERTICAL
    peripheral_radii_deg: Tuple[float, ...] = field(
        default_factory=lambda: (5.0, 10.0)
    )
    peripheral_angle_step_deg: float = DEFAULT_ANGLE_STEP
    peripheral_angle_offset_deg: float = 0.0
    output_path: Optional[str] = None

    @property
    def num_repeats_standard(self) -> int:
        return NUM_DIFFICULTY_LEVELS - 1

    @property
    def num_repeats_crossover(self) -> int:
        return self.difficulty_level

    def summary_text(self) -> str:
        """Return a short description of the session settings."""

        eyes = "right eye only" if self.stim_right_eye_only else "both eyes"
        mode = "approximation" if self.use_approx else "real-time tracking"
        radii = ", ".join(f"{radius:g}" for radius in self.peripheral_radii_deg)
        return (
            "Binocular RF Mapping\n\n"
            f"Eye model: {self.eye_model} ({mode})\n"
            f"Deviation: {self.deviation_deg:g} deg\n"
            f"Stimulated: {eyes}\n"
            f"Repeats: standard={self.num_repeats_standard}, "
            f"crossover={self.num_repeats_crossover} "
            f"(difficulty {self.difficulty_level})\n"
            f"Fixation grid: {self.fixation_columns} x {self.fixation_rows} "
            f"({self.fixation_h_separation_deg:g} / "
            f"{self.fixation_v_separation_deg:g} deg)\n"
            f"Peripheral grid: radii [{radii}] deg, every "
            f"{self.peripheral_angle_step_deg:g} deg "
            f"from {self.peripheral_angle_offset_deg:g} deg"
        )


__all__ = ["MappingConfig", "NUM_DIFFICULTY_LEVELS"]
