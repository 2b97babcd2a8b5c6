import unittest

import numpy as np

from tensor_einsum import Tensor, asTensor


class TestTensor(unittest.TestCase):
    def testFlatConstruction(self):
        t = Tensor((2, 3), range(6))
        self.assertEqual(t.shape, (2, 3))
        self.assertEqual(t.rank, 2)
        self.assertEqual(t.size, 6)
        self.assertEqual(t.strides, (3, 1))
        self.assertEqual(t.get((1, 0)), 3.0)

    def testDataLengthMustMatchShape(self):
        with self.assertRaisesRegex(ValueError, "does not match shape"):
            Tensor((2, 3), [1, 2, 3])

    def testNegativeExtentRejected(self):
        with self.assertRaises(ValueError):
            Tensor((-1,), [])

    def testScalar(self):
        t = Tensor.scalar(7)
        self.assertEqual(t.shape, ())
        self.assertEqual(t.size, 1)
        self.assertEqual(t.get(()), 7.0)

    def testZeros(self):
        t = Tensor.zeros((2, 2, 2))
        self.assertEqual(t.data.tolist(), [0.0] * 8)

    def testFromNestedRank3(self):
        t = Tensor.fromNested([[[1, 2], [3, 4]], [[5, 6], [7, 8]]])
        self.assertEqual(t.shape, (2, 2, 2))
        self.assertEqual(t.strides, (4, 2, 1))
        self.assertEqual(t.get((1, 0, 1)), 6.0)

    def testFromNestedRejectsRaggedRows(self):
        with self.assertRaisesRegex(ValueError, "Ragged"):
            Tensor.fromNested([[1, 2], [3]])

    def testFromNestedRejectsMixedDepth(self):
        with self.assertRaises(ValueError):
            Tensor.fromNested([[1, 2], [3, [4]]])

    def testFromNestedRejectsNonNumericLeaves(self):
        with self.assertRaisesRegex(ValueError, r"Non-numeric value at \[1\]"):
            Tensor.fromNested([1, None])
        with self.assertRaises(ValueError):
            Tensor.fromNested({"a": 1})

    def testFromArrayCopies(self):
        array = np.arange(4.0).reshape(2, 2)
        t = Tensor.fromArray(array)
        array[0, 0] = 99.0
        self.assertEqual(t.get((0, 0)), 0.0)

    def testDataIsReadOnly(self):
        t = Tensor.fromNested([1, 2])
        with self.assertRaises(ValueError):
            t.data[0] = 5.0

    def testToArrayIsWritableCopy(self):
        t = Tensor.fromNested([[1, 2], [3, 4]])
        array = t.toArray()
        array[0, 0] = 10.0
        self.assertEqual(t.get((0, 0)), 1.0)

    def testIndexRoundTrip(self):
        t = Tensor.zeros((2, 3, 4))
        self.assertEqual(t.flatIndex((1, 2, 3)), 23)
        self.assertEqual(t.multiIndex(23), (1, 2, 3))

    def testIndexErrors(self):
        t = Tensor.zeros((2, 3))
        with self.assertRaises(IndexError):
            t.get((2, 0))
        with self.assertRaises(IndexError):
            t.get((0,))
        with self.assertRaises(IndexError):
            t.multiIndex(6)

    def testNonzero(self):
        t = Tensor.fromNested([[0, 1], [2e-10, 3]])
        self.assertEqual(list(t.nonzero()), [((0, 1), 1.0), ((1, 1), 3.0)])

    def testEquality(self):
        self.assertEqual(Tensor.fromNested([1, 2]), Tensor((2,), [1.0, 2.0]))
        self.assertNotEqual(Tensor.fromNested([1, 2]), Tensor.fromNested([[1, 2]]))


class TestAsTensor(unittest.TestCase):
    def testPassThrough(self):
        t = Tensor.scalar(1)
        self.assertIs(asTensor(t), t)

    def testCoercions(self):
        self.assertEqual(asTensor(np.ones((2,))).shape, (2,))
        self.assertEqual(asTensor([[1], [2]]).shape, (2, 1))
        self.assertEqual(asTensor(3).shape, ())
        self.assertEqual(asTensor(np.float64(3)).shape, ())

    def testRejectsStrings(self):
        with self.assertRaises(TypeError):
            asTensor("ij")


if __name__ == "__main__":
    unittest.main()
