"""Schedule export for the experiment runner.

Rows carry the trial geometry together with the labels used by the analysis
scripts (code label, crossover, over-midline) and the single-byte angle and
radius event codes.
"""
from __future__ import annotations

import csv
import os
from pathlib import Path
from typing import Dict, Iterable, List

from .codes import stim_code_to_string
from .trial import (
    RFMappingTrial,
    angle_to_code,
    is_crossover,
    is_over_midline,
    radius_to_code,
)

SCHEDULE_FIELDS: List[str] = [
    "trial_index",
    "color_code",
    "code_label",
    "stim_eye",
    "ctr_x_deg",
    "ctr_y_deg",
    "per_x_deg",
    "per_y_deg",
    "per_a_deg",
    "per_r_deg",
    "crossover",
    "over_midline",
    "angle_code",
    "radius_code",
]


def trial_row(
    trial: RFMappingTrial,
    deviation_deg: float,
    trial_index: int,
    *,
    angle_offset_deg: float = 0.0,
    radius_offset_deg: float = 0.0,
) -> Dict[str, object]:
    """Return one schedule row for ``trial``.

    Raises :class:`~rf_mapping.trial.TrialCodeError` for codes that cannot be
    classified against the midline.
    """

    return {
        "trial_index": trial_index,
        "color_code": int(trial.color_code),
        "code_label": stim_code_to_string(trial.color_code),
        "stim_eye": trial.stim_eye.name.lower(),
        "ctr_x_deg": trial.ctr_x_deg,
        "ctr_y_deg": trial.ctr_y_deg,
        "per_x_deg": trial.per_x_deg,
        "per_y_deg": trial.per_y_deg,
        "per_a_deg": trial.per_a_deg,
        "per_r_deg": trial.per_r_deg,
        "crossover": is_crossover(trial),
        "over_midline": is_over_midline(trial, deviation_deg),
        "angle_code": angle_to_code(trial.per_a_deg, angle_offset_deg),
        "radius_code": radius_to_code(trial.per_r_deg, radius_offset_deg),
    }


def trial_rows(
    trials: Iterable[RFMappingTrial],
    deviation_deg: float,
    *,
    angle_offset_deg: float = 0.0,
) -> List[Dict[str, object]]:
    """Return rows for every trial, numbered from 1."""

    return [
        trial_row(trial, deviation_deg, index, angle_offset_deg=angle_offset_deg)
        for index, trial in enumerate(trials, start=1)
    ]


def save_trials_csv(
    trials: Iterable[RFMappingTrial],
    path: str | os.PathLike[str],
    deviation_deg: float,
    *,
    angle_offset_deg: float = 0.0,
) -> Path:
    """Write the schedule to ``path`` and return it.

    Rows are built before the file is opened so a bad code leaves no partial
    file behind.
    """

    rows = trial_rows(trials, deviation_deg, angle_offset_deg=angle_offset_deg)
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", newline="", encoding="utf-8") as csv_file:
        writer = csv.DictWriter(csv_file, fieldnames=SCHEDULE_FIELDS)
        writer.writeheader()
        writer.writerows(rows)
    return output


__all__ = ["SCHEDULE_FIELDS", "trial_row", "trial_rows", "save_trials_csv"]
