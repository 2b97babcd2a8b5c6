import logging

from .errors import (
    EinsumError,
    InconsistentDimension,
    MalformedNotation,
    ShapeMismatch,
    UnboundOutputLabel,
)
from .executor import execute
from .notation import ContractionPlan, implicitOutput, parse
from .tensor import Tensor, asTensor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ContractionPlan",
    "Einsum",
    "EinsumError",
    "InconsistentDimension",
    "MalformedNotation",
    "ShapeMismatch",
    "Tensor",
    "UnboundOutputLabel",
    "asTensor",
    "einsum",
    "execute",
    "implicitOutput",
    "parse",
]


class Einsum:
    """Crunch tensors with einsum notation, easy to inspect."""

    def __init__(self, notation, *tensors):
        """Plan an einsum over the given tensors.

        The notation is parsed and validated against the tensor shapes right
        away; the contraction itself runs on :meth:`execute`.

        Args:
            notation (str): Einsum notation string (e.g., 'ij,jk->ik' or 'ii')
            *tensors: Input tensors; anything :func:`asTensor` accepts

        Raises:
            MalformedNotation: If the notation does not fit the tensors
            InconsistentDimension: If one label gets two extents
            UnboundOutputLabel: If the output names an unknown label

        Example:
            >>> a = Tensor.fromNested([[1, 2], [3, 4]])
            >>> b = Tensor.fromNested([[0, 1], [1, 0]])
            >>> Einsum('ij,jk->ik', a, b).execute().tolist()
            [[2.0, 1.0], [4.0, 3.0]]
        """
        self.notation = notation
        self.tensors = [asTensor(t) for t in tensors]
        self.plan = parse(notation, [t.shape for t in self.tensors])
        self.result = None

    @property
    def notationList(self):
        return ["".join(labels) for labels in self.plan.inputLabels]

    @property
    def finalNotation(self):
        return "".join(self.plan.outputLabels)

    @property
    def indexToSize(self):
        return dict(self.plan.labelExtent)

    def __str__(self):
        """Return a multi-line summary of notation, shapes, index sizes and result."""
        lines = [f"Einsum: {self.notation}"]
        lines.append(f"Inputs: {self.notationList}")
        lines.append(f"Output: {self.finalNotation}")
        lines.append(f"Tensor Shapes: {[t.shape for t in self.tensors]}")
        lines.append(f"Index Sizes: {self.indexToSize}")
        if self.plan.contractedLabels:
            lines.append(f"Summed: {list(self.plan.contractedLabels)}")
        if self.result is not None:
            lines.append(f"Result Shape: {self.result.shape}")
        return "\n".join(lines)

    def getShapes(self):
        """Get the shapes of input tensors and expected output.

        Returns:
            tuple: (input_shapes, output_shape) where:
                - input_shapes (list): List of input tensor shapes
                - output_shape (tuple): Expected output tensor shape
        """
        return [t.shape for t in self.tensors], self.plan.outputShape

    def execute(self):
        """Execute the einsum operation and return the result.

        Results are cached for subsequent calls.

        Returns:
            Tensor: The computed einsum result
        """
        if self.result is not None:
            return self.result
        self.result = execute(self.plan, self.tensors)
        return self.result


def einsum(notation, tensors):
    """Evaluate ``notation`` over an ordered sequence of tensors.

    Args:
        notation (str): Einsum notation, e.g. ``"ij,jk->ik"``
        tensors (list): Input tensors (or arrays, nested lists, numbers)

    Returns:
        Tensor: Freshly allocated result
    """
    return Einsum(notation, *tensors).execute()
