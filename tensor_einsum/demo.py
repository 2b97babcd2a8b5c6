"""Logic-as-tensor walkthroughs: relation composition with einsum.

Each case prints its inputs and the derived relation, and writes both as
relation CSV tables under ``outDir``.
"""

from pathlib import Path

from . import einsum
from .export import exportRelationCsv, formatNonzero
from .tensor import Tensor


def _show(title, tensor, write):
    write(title)
    write(formatNonzero(tensor))


def transitivity(outDir=".", write=print):
    """Compose the partial order 1<=2, 2<=3 with itself to derive 1<=3."""
    write("\n=== Case 1: Transitivity ===")
    write("Goal: R x R represents logical transitivity A->B->C.")

    data = [[0.0] * 3 for _ in range(3)]
    data[0][1] = 1.0
    data[1][2] = 1.0
    relation = Tensor.fromNested(data)
    _show("Input: Relation Matrix R (1<=2, 2<=3)", relation, write)

    labels = ["1", "2", "3"]
    outDir = Path(outDir)
    exportRelationCsv(relation, outDir / "tensor_case1_input.csv", ["LHS", "RHS", "Value"], [labels, labels])

    derived = einsum("ij,jk->ik", [relation, relation])
    _show("Output: Derived Relation (1<=3 is derived)", derived, write)
    exportRelationCsv(derived, outDir / "tensor_case1_output.csv", ["LHS", "RHS", "Value"], [labels, labels])
    return derived


def syllogism(outDir=".", write=print):
    """Contract away the middle concept: Socrates is Human, Human implies Mortal."""
    write("\n=== Case 2: Syllogism and Cut Elimination ===")
    write("Premise: 'Socrates is Human', 'Human implies Mortal' => 'Socrates is Mortal'")

    subjects = ["Socrates", "Zeus"]
    concepts = ["Human", "God"]
    qualities = ["Mortal", "Immortal"]

    facts = Tensor.fromNested([[1.0, 0.0], [0.0, 1.0]])
    rules = Tensor.fromNested([[1.0, 0.0], [0.0, 1.0]])
    _show("Input: Facts", facts, write)
    _show("Input: Rules", rules, write)

    outDir = Path(outDir)
    exportRelationCsv(facts, outDir / "tensor_case2_facts.csv", ["Subject", "Concept", "Value"], [subjects, concepts])
    exportRelationCsv(rules, outDir / "tensor_case2_rules.csv", ["Concept", "Quality", "Value"], [concepts, qualities])

    # the concept index is cut
    conclusion = einsum("sc,cq->sq", [facts, rules])
    _show("Output: Conclusion (intermediate concept eliminated)", conclusion, write)
    exportRelationCsv(
        conclusion, outDir / "tensor_case2_conclusion.csv", ["Subject", "Quality", "Value"], [subjects, qualities]
    )
    return conclusion


def contextual(outDir=".", write=print):
    """Compose a relation per context, keeping the context as a batch label."""
    write("\n=== Case 3: Contextual Inference ===")
    write("Goal: Representing context as a tensor dimension.")

    people = ["Alice", "Bob", "Charlie"]
    contexts = ["Official", "Private"]

    # R[x, y, c]
    data = [[[0.0] * len(contexts) for _ in people] for _ in people]
    data[0][1][0] = 1.0  # Alice manages Bob
    data[1][2][0] = 1.0  # Bob manages Charlie
    data[1][2][1] = 1.0  # Bob and Charlie are friends
    relation = Tensor.fromNested(data)
    _show("Input: Relation Tensor", relation, write)

    header = ["Subject", "Object", "Context", "Value"]
    outDir = Path(outDir)
    exportRelationCsv(relation, outDir / "tensor_case3_input.csv", header, [people, people, contexts])

    derived = einsum("xyc,yzc->xzc", [relation, relation])
    _show("Output: Inference Result (transitivity holds only in the Official context)", derived, write)
    exportRelationCsv(derived, outDir / "tensor_case3_output.csv", header, [people, people, contexts])
    return derived


CASES = (transitivity, syllogism, contextual)


def runAll(outDir=".", write=print):
    return [case(outDir, write) for case in CASES]
