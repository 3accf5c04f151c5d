"""CSV readers and writers for constraints and outlier scores."""

import csv
from pathlib import Path
from typing import List, Union

from ..clustering.constraints import Constraint
from ..clustering.outliers import OutlierScore
from ..errors import InvalidParameterError
from ..utils.validation import validate_file_exists


def load_constraints(filepath: Union[str, Path]) -> List[Constraint]:
    """
    Load constraints from CSV.

    Expected format, one constraint per row:
        pointA,pointB,ml
        pointA,pointB,cl

    Args:
        filepath: Path to constraints CSV

    Returns:
        List of Constraint objects
    """
    path = validate_file_exists(filepath)
    constraints = []

    with open(path, 'r', newline='', encoding='utf-8') as f:
        for line_number, row in enumerate(csv.reader(f), start=1):
            if not row or not ''.join(row).strip():
                continue
            if len(row) != 3:
                raise InvalidParameterError(
                    f"{path}:{line_number}: expected 'pointA,pointB,type', got {row}"
                )
            try:
                constraints.append(Constraint.from_tokens(*row))
            except ValueError as e:
                raise InvalidParameterError(f"{path}:{line_number}: {e}") from e

    return constraints


def write_outlier_scores_csv(outlier_scores: List[OutlierScore],
                             filepath: Union[str, Path],
                             delimiter: str = ',') -> None:
    """
    Write outlier scores to CSV in their sorted order.

    Args:
        outlier_scores: Sorted outlier scores
        filepath: Path to output CSV file
        delimiter: CSV delimiter
    """
    fieldnames = ['point_index', 'score', 'core_distance']

    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, delimiter=delimiter)
        writer.writeheader()

        for outlier_score in outlier_scores:
            writer.writerow({
                'point_index': outlier_score.point_index,
                'score': f"{outlier_score.score:.6f}",
                'core_distance': f"{outlier_score.core_distance:.6f}"
            })
