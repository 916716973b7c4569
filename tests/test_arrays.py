import unittest
from fractions import Fraction

import numpy as np

from rationals import Rational, as_rational_array, zeros, zeros_like


class RationalArrayTests(unittest.TestCase):
    def test_numpy_array_operations_with_scalar(self):
        vector = np.array([1, 2, 3])
        result = Rational(1, 4) + vector
        self.assertEqual(result.dtype, object)
        self.assertTrue(all(isinstance(item, Rational) for item in result))
        self.assertEqual(list(result), [Rational(5, 4), Rational(9, 4), Rational(13, 4)])

    def test_numpy_array_operations_with_object_array(self):
        vector = as_rational_array([Rational(1, 2), Rational(1, 3)])
        result = vector + Rational(1, 6)
        self.assertEqual(list(result), [Rational(2, 3), Rational(1, 2)])

        shifted = Rational(1, 1) - vector
        self.assertEqual(list(shifted), [Rational(1, 2), Rational(2, 3)])

    def test_numpy_ufunc_support(self):
        vector = as_rational_array([Rational(1, 2), Rational(3, 4)])
        self.assertEqual(list(np.add(vector, Rational(1, 4))), [Rational(3, 4), 1])
        self.assertEqual(list(np.multiply(vector, 2)), [1, Rational(3, 2)])
        self.assertEqual(list(np.negative(vector)), [Rational(-1, 2), Rational(-3, 4)])
        self.assertEqual(list(np.divide(vector, Rational(1, 2))), [1, Rational(3, 2)])

    def test_numpy_power(self):
        vector = as_rational_array([Rational(2, 3), Rational(4, 5)])
        result = np.power(vector, 2)
        self.assertEqual(list(result), [Rational(4, 9), Rational(16, 25)])

    def test_numpy_comparisons(self):
        vector = as_rational_array([Rational(1, 2), Rational(2, 4), Rational(1, 3)])
        self.assertEqual((vector == Rational(1, 2)).tolist(), [True, True, False])
        self.assertEqual((vector < Rational(1, 2)).tolist(), [False, False, True])

    def test_as_rational_array_from_mixed_list(self):
        arr = as_rational_array([Rational(1, 2), 3, "1/4", Fraction(1, 5)])
        self.assertEqual(arr.shape, (4,))
        self.assertTrue(all(isinstance(item, Rational) for item in arr))
        self.assertEqual(arr[2], Rational(1, 4))

    def test_as_rational_array_from_numpy(self):
        arr = as_rational_array(np.array([1, 2, 3]))
        self.assertEqual(arr.dtype, object)
        self.assertEqual(list(arr), [1, 2, 3])
        self.assertTrue(all(isinstance(item, Rational) for item in arr))

    def test_as_rational_array_without_copy(self):
        arr = as_rational_array([Rational(1, 2)])
        self.assertIs(as_rational_array(arr, copy=False), arr)
        self.assertIsNot(as_rational_array(arr), arr)

    def test_as_rational_array_from_iterable(self):
        arr = as_rational_array(value for value in (1, 2))
        self.assertEqual(arr.shape, (2,))

    def test_as_rational_array_rejects_floats(self):
        with self.assertRaises(TypeError):
            as_rational_array(np.array([0.5, 0.25]))

    def test_rational_array_helpers(self):
        arr = zeros(4)
        self.assertEqual(arr.shape, (4,))
        self.assertTrue(all(isinstance(item, Rational) and item == 0 for item in arr))
        self.assertEqual(zeros(0).shape, (0,))
        with self.assertRaises(ValueError):
            zeros(-1)

        arr_like = zeros_like(np.arange(6).reshape(2, 3))
        self.assertEqual(arr_like.shape, (2, 3))
        self.assertTrue(all(item == 0 for item in arr_like.flat))


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
