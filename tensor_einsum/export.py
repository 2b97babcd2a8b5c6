"""Text and CSV views of tensors."""

import csv
import logging
import math
from pathlib import Path

import numpy as np

logger = logging.getLogger(__name__)

TOLERANCE = 1e-9


def formatValue(value, precision=2, tolerance=TOLERANCE):
    """Print integer-like values without decimals, everything else with ``precision``.

    Infinities and NaN print as ``inf``, ``-inf`` and ``nan``.
    """
    if math.isfinite(value) and abs(value - round(value)) < tolerance:
        return f"{value:.0f}"
    return f"{value:.{precision}f}"


def toCsvRows(tensor, precision=2):
    """Serialize a 1-D or 2-D tensor as comma-separated rows.

    Args:
        tensor (Tensor): Vector (one row) or matrix (one row per matrix row)
        precision (int): Decimals kept for non-integer values

    Returns:
        list: One string per row, without line terminators

    Raises:
        ValueError: If the tensor's rank is neither 1 nor 2
    """
    if tensor.rank not in (1, 2):
        raise ValueError(f"CSV rows need a 1-D or 2-D tensor, got shape {tensor.shape}")
    rows = tensor.tolist() if tensor.rank == 2 else [tensor.tolist()]
    return [",".join(formatValue(value, precision) for value in row) for row in rows]


def writeCsv(tensor, path, precision=2):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = toCsvRows(tensor, precision)
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    logger.info("Exported %s", path)
    return path


def exportRelationCsv(tensor, path, header, dimLabels, tolerance=TOLERANCE):
    """Write the non-zero elements of a tensor as a relation table.

    Each row holds one label per dimension followed by the value. Index
    ``k`` of dimension ``d`` is written as ``dimLabels[d][k]``, or
    ``"Unknown"`` when the label list is too short.

    Args:
        tensor (Tensor): Tensor of any rank
        path (str or Path): Destination file, parent directories are created
        header (list): Column names, one per dimension plus the value column
        dimLabels (list): Label list for every dimension
        tolerance (float): Magnitudes at or below this are treated as zero

    Returns:
        Path: The written file

    Raises:
        ValueError: If ``dimLabels`` or ``header`` do not fit the rank

    Example:
        >>> exportRelationCsv(r, "out/rel.csv", ["LHS", "RHS", "Value"],
        ...                   [["1", "2", "3"], ["1", "2", "3"]])
    """
    if len(dimLabels) != tensor.rank:
        raise ValueError(
            f"Got {len(dimLabels)} label lists for a rank-{tensor.rank} tensor"
        )
    if len(header) != tensor.rank + 1:
        raise ValueError(
            f"Header has {len(header)} columns, expected {tensor.rank + 1} (dims + value)"
        )

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(header)
        for indices, value in tensor.nonzero(tolerance):
            row = [
                dimLabels[dim][index] if index < len(dimLabels[dim]) else "Unknown"
                for dim, index in enumerate(indices)
            ]
            row.append(formatValue(value))
            writer.writerow(row)
    logger.info("Exported %s", path)
    return path


def formatNonzero(tensor, tolerance=TOLERANCE):
    lines = [f"Non-zero elements (shape: {list(tensor.shape)}):"]
    for indices, value in tensor.nonzero(tolerance):
        lines.append(f"  {list(indices)} -> {value:.2f}")
    return "\n".join(lines)


def formatSlices(tensor, tolerance=TOLERANCE):
    """Render a tensor as a sequence of matrix slices over its leading dimensions.

    Tensors of rank below two are shown as shape and flat data. Zeros print
    as ``.``.
    """
    if tensor.rank < 2:
        return f"Tensor {list(tensor.shape)}: {tensor.data.tolist()}"

    array = tensor.toArray()
    outer = tensor.shape[:-2]
    lines = []
    for counters in np.ndindex(*outer):
        lines.append(f"Slice {list(counters)}:" if outer else "Matrix:")
        for row in array[counters]:
            cells = [
                "  .  " if abs(value) < tolerance else f"{value:^5.2f}"
                for value in row.tolist()
            ]
            lines.append("[ " + "".join(cells) + " ]")
        lines.append("")
    return "\n".join(lines)
