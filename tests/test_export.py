import csv
import shutil
import tempfile
import unittest
from pathlib import Path

from tensor_einsum import Tensor, einsum
from tensor_einsum.export import (
    exportRelationCsv,
    formatNonzero,
    formatSlices,
    formatValue,
    toCsvRows,
    writeCsv,
)


class TestFormatting(unittest.TestCase):
    def testFormatValue(self):
        self.assertEqual(formatValue(1.0), "1")
        self.assertEqual(formatValue(-2.0), "-2")
        self.assertEqual(formatValue(0.5), "0.50")
        self.assertEqual(formatValue(1.23456, precision=3), "1.235")

    def testFormatValueNonFinite(self):
        self.assertEqual(formatValue(float("inf")), "inf")
        self.assertEqual(formatValue(float("-inf")), "-inf")
        self.assertEqual(formatValue(float("nan")), "nan")

    def testCsvRowsWithNonFiniteValues(self):
        t = Tensor.fromNested([[float("nan"), 1], [float("inf"), 0.5]])
        self.assertEqual(toCsvRows(t), ["nan,1", "inf,0.50"])

    def testCsvRowsMatrix(self):
        t = Tensor.fromNested([[1, 0.5], [0, 2]])
        self.assertEqual(toCsvRows(t), ["1,0.50", "0,2"])

    def testCsvRowsVector(self):
        self.assertEqual(toCsvRows(Tensor.fromNested([1, 2, 3])), ["1,2,3"])

    def testCsvRowsRejectsOtherRanks(self):
        with self.assertRaises(ValueError):
            toCsvRows(Tensor.zeros((2, 2, 2)))
        with self.assertRaises(ValueError):
            toCsvRows(Tensor.scalar(1))

    def testFormatNonzero(self):
        t = Tensor.fromNested([[0, 1], [0, 0]])
        self.assertEqual(formatNonzero(t), "Non-zero elements (shape: [2, 2]):\n  [0, 1] -> 1.00")

    def testFormatSlicesMatrix(self):
        text = formatSlices(Tensor.fromNested([[0, 1], [2, 0]]))
        lines = text.splitlines()
        self.assertEqual(lines[0], "Matrix:")
        self.assertEqual(lines[1], "[   .  1.00  ]")
        self.assertEqual(lines[2], "[ 2.00   .   ]")

    def testFormatSlicesRank3(self):
        text = formatSlices(Tensor.zeros((2, 1, 1)))
        self.assertIn("Slice [0]:", text)
        self.assertIn("Slice [1]:", text)

    def testFormatSlicesLowRank(self):
        self.assertEqual(formatSlices(Tensor.fromNested([1, 2])), "Tensor [2]: [1.0, 2.0]")


class TestCsvFiles(unittest.TestCase):
    def setUp(self):
        self.tmp = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def testWriteCsv(self):
        path = writeCsv(Tensor.fromNested([[1, 2], [3, 4]]), self.tmp / "m.csv")
        self.assertEqual(path.read_text(encoding="utf-8"), "1,2\n3,4\n")

    def testRelationCsv(self):
        t = Tensor.fromNested([[0, 1], [0.25, 0]])
        path = exportRelationCsv(
            t, self.tmp / "nested" / "rel.csv", ["LHS", "RHS", "Value"], [["a", "b"], ["x"]]
        )
        with path.open(newline="", encoding="utf-8") as handle:
            rows = list(csv.reader(handle))
        self.assertEqual(
            rows,
            [["LHS", "RHS", "Value"], ["a", "Unknown", "1"], ["b", "x", "0.25"]],
        )

    def testRelationCsvWithInfiniteContraction(self):
        derived = einsum("i,i->i", [[float("inf"), 1], [1, 1]])
        path = exportRelationCsv(derived, self.tmp / "inf.csv", ["I", "Value"], [["a", "b"]])
        self.assertEqual(path.read_text(encoding="utf-8"), "I,Value\na,inf\nb,1\n")

    def testRelationCsvValidatesLabels(self):
        t = Tensor.zeros((2, 2))
        with self.assertRaisesRegex(ValueError, "label lists"):
            exportRelationCsv(t, self.tmp / "r.csv", ["A", "B", "V"], [["a", "b"]])
        with self.assertRaisesRegex(ValueError, "Header"):
            exportRelationCsv(t, self.tmp / "r.csv", ["A", "V"], [["a"], ["b"]])


if __name__ == "__main__":
    unittest.main()
