"""Einsum notation parsing.

Turns ``"ij,jk->ik"`` plus the shapes of the operands into a
:class:`ContractionPlan`, the read-only description the executor runs.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from types import MappingProxyType

from .errors import InconsistentDimension, MalformedNotation, UnboundOutputLabel

logger = logging.getLogger(__name__)

ARROW = "->"
RESERVED = frozenset(",->.")


@dataclass(frozen=True)
class ContractionPlan:
    """Validated contraction: labels per input, extents, output and summed labels."""

    notation: str
    inputLabels: tuple
    labelExtent: MappingProxyType
    outputLabels: tuple
    contractedLabels: tuple

    def __post_init__(self):
        object.__setattr__(self, "labelExtent", MappingProxyType(dict(self.labelExtent)))

    def __hash__(self):
        return hash(
            (self.notation, self.inputLabels, frozenset(self.labelExtent.items()), self.outputLabels)
        )

    @property
    def outputShape(self):
        return tuple(self.labelExtent[label] for label in self.outputLabels)

    @property
    def labelOrder(self):
        """Enumeration order used by the executor: output labels, then summed ones."""
        return self.outputLabels + self.contractedLabels

    def inputShape(self, position):
        return tuple(self.labelExtent[label] for label in self.inputLabels[position])

    def __str__(self):
        inputs = ",".join("".join(labels) for labels in self.inputLabels)
        return (
            f"{inputs}->{''.join(self.outputLabels)} "
            f"extents={dict(self.labelExtent)} summed={list(self.contractedLabels)}"
        )


def _splitArrow(notation):
    if notation.count(ARROW) > 1:
        raise MalformedNotation(f"More than one '->' in {notation!r}")
    if ARROW in notation:
        left, right = notation.split(ARROW)
        return left, right
    return notation, None


def _checkTerm(term, notation):
    for char in term:
        if char in RESERVED:
            raise MalformedNotation(f"Unexpected {char!r} in term {term!r} of {notation!r}")


def implicitOutput(terms):
    """Labels that occur exactly once across all input terms, in first-seen order.

    Args:
        terms (list): Input terms, one string per operand

    Returns:
        str: The implied output term

    Example:
        >>> implicitOutput(["ij", "jk"])
        'ik'
        >>> implicitOutput(["ii"])
        ''
    """
    counts = Counter("".join(terms))
    return "".join(label for label in counts if counts[label] == 1)


def parse(notation, inputShapes):
    """Parse an einsum notation string against the shapes of its operands.

    Whitespace is ignored. Without ``->`` the output is every label used
    exactly once, kept in the order it was first seen.

    Args:
        notation (str): Notation such as ``"ij,jk->ik"`` or ``"ii"``
        inputShapes (list): Shape of every input tensor; the rank of input
            ``i`` is ``len(inputShapes[i])``

    Returns:
        ContractionPlan: The validated plan

    Raises:
        MalformedNotation: Broken separator, wrong number of terms, a term
            whose length differs from its tensor's rank, a reserved character
            inside a term or a repeated output label
        InconsistentDimension: A label is bound to two different extents
        UnboundOutputLabel: The output names a label absent from every input
    """
    compact = "".join(notation.split())
    left, right = _splitArrow(compact)
    terms = left.split(",")
    inputShapes = [tuple(shape) for shape in inputShapes]

    if len(terms) != len(inputShapes):
        raise MalformedNotation(
            f"Input count mismatch: {len(terms)} terms in {notation!r}, "
            f"{len(inputShapes)} tensors"
        )

    labelExtent = {}
    inputLabels = []
    for position, (term, shape) in enumerate(zip(terms, inputShapes)):
        _checkTerm(term, notation)
        if len(term) != len(shape):
            raise MalformedNotation(
                f"Rank mismatch: term {term!r} (input {position}) has {len(term)} "
                f"labels but the tensor has rank {len(shape)} {shape}"
            )
        for label, extent in zip(term, shape):
            if label in labelExtent and labelExtent[label] != extent:
                raise InconsistentDimension(label, labelExtent[label], extent)
            labelExtent.setdefault(label, extent)
        inputLabels.append(tuple(term))

    if right is None:
        right = implicitOutput(terms)
    _checkTerm(right, notation)
    repeated = [label for label, count in Counter(right).items() if count > 1]
    if repeated:
        raise MalformedNotation(f"Output label {repeated[0]!r} repeated in {notation!r}")
    for label in right:
        if label not in labelExtent:
            raise UnboundOutputLabel(label, notation)

    outputLabels = tuple(right)
    contractedLabels = tuple(label for label in labelExtent if label not in outputLabels)
    plan = ContractionPlan(
        notation=notation,
        inputLabels=tuple(inputLabels),
        labelExtent=labelExtent,
        outputLabels=outputLabels,
        contractedLabels=contractedLabels,
    )
    logger.debug("Parsed %r into %s", notation, plan)
    return plan
