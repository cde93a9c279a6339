"""CSV export of the session's workouts."""

from __future__ import annotations

import os
from datetime import datetime
from typing import Iterable

import pandas as pd

from core.persistence import workout_to_dict
from core.workouts import Workout

EXPORT_COLUMNS = [
    'date',
    'type',
    'description',
    'lat',
    'lng',
    'distance',
    'duration',
    'pace',
    'speed',
    'cadence',
    'elevation',
]


def workouts_dataframe(records: Iterable[Workout]) -> pd.DataFrame:
    """One row per workout, columns in EXPORT_COLUMNS order."""
    rows = []
    for record in records:
        row = workout_to_dict(record)
        row['lat'], row['lng'] = row.pop('coords')
        rows.append(row)

    df = pd.DataFrame(rows)
    for col in EXPORT_COLUMNS:
        if col not in df.columns:
            df[col] = None
    return df[EXPORT_COLUMNS]


def export_csv(records: Iterable[Workout], destination_dir=None) -> str:
    """Write a timestamped CSV and return the saved file path."""
    df = workouts_dataframe(records)
    if df.empty:
        raise ValueError("No data to export")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"workouts_{timestamp}.csv"
    output_dir = destination_dir or os.path.expanduser("~/Downloads")
    os.makedirs(output_dir, exist_ok=True)
    file_path = os.path.join(output_dir, filename)

    df.to_csv(file_path, index=False)
    return file_path
