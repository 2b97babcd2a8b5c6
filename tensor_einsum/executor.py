"""Brute-force contraction over every assignment of every label."""

import logging

import numpy as np

from .errors import ShapeMismatch
from .tensor import Tensor, asTensor, rowMajorStrides

logger = logging.getLogger(__name__)


def _checkInputs(plan, inputs):
    if len(inputs) != len(plan.inputLabels):
        raise ShapeMismatch(
            f"Plan {plan.notation!r} expects {len(plan.inputLabels)} tensors, got {len(inputs)}"
        )
    for position, tensor in enumerate(inputs):
        expected = plan.inputShape(position)
        if tensor.shape != expected:
            raise ShapeMismatch(
                f"Tensor {position} has shape {tensor.shape}, plan "
                f"{plan.notation!r} expects {expected}"
            )


def _addressing(labels, strides, labelOrder):
    """Pair each dimension's stride with the slot of its label in the iteration tuple.

    A label repeated inside one term (``"ii"``) simply yields two pairs that
    read the same slot, which is what selects the diagonal.
    """
    return [(labelOrder.index(label), stride) for label, stride in zip(labels, strides)]


def _offset(addressing, values):
    offset = 0
    for slot, stride in addressing:
        offset += values[slot] * stride
    return offset


def execute(plan, inputs):
    """Run a contraction plan over its input tensors.

    Every assignment of values to ``plan.labelOrder`` is visited once, in
    row-major order of that label sequence. For each assignment the selected
    element of every input is multiplied in, and the product is added to the
    output cell named by the output labels.

    Args:
        plan (ContractionPlan): Plan built from tensors of these shapes
        inputs (list): Input tensors in notation order

    Returns:
        Tensor: Fresh tensor of shape ``plan.outputShape``

    Raises:
        ShapeMismatch: If the tensors do not have the shapes the plan was
            built for
    """
    inputs = [asTensor(t) for t in inputs]
    _checkInputs(plan, inputs)

    labelOrder = list(plan.labelOrder)
    extents = [plan.labelExtent[label] for label in labelOrder]
    outputShape = plan.outputShape
    outStrides = rowMajorStrides(outputShape)
    outAddressing = _addressing(plan.outputLabels, outStrides, labelOrder)

    operands = []
    for labels, tensor in zip(plan.inputLabels, inputs):
        operands.append((tensor.data.tolist(), _addressing(labels, tensor.strides, labelOrder)))

    result = np.zeros(int(np.prod(outputShape, dtype=np.int64)))
    visited = 0
    for values in np.ndindex(*extents):
        product = 1.0
        for data, addressing in operands:
            product *= data[_offset(addressing, values)]
        result[_offset(outAddressing, values)] += product
        visited += 1

    logger.debug(
        "Executed %r: %d assignments over labels %s, output shape %s",
        plan.notation,
        visited,
        "".join(labelOrder),
        outputShape,
    )
    return Tensor(outputShape, result)
