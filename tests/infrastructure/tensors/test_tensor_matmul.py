from unittest import TestCase
import unittest

import numpy as np

from src.deltaml.infrastructure.tensor._tensor import Tensor
from src.deltaml.domain._errors import TensorError, TensorErrorKind


def _t(values):
    arr = np.asarray(values, dtype=np.float32)
    return Tensor(arr.ravel(), arr.shape)


class TestTensorMatmul(TestCase):
    def test_matmul_2x2(self):
        out = _t([[1, 2], [3, 4]]).matmul(_t([[5, 6], [7, 8]]))
        self.assertEqual(out, _t([[19, 22], [43, 50]]))

    def test_matmul_operator(self):
        a = _t([[1, 2, 3]])
        b = _t([[1], [1], [1]])
        out = a @ b
        self.assertEqual(out.shape, (1, 1))
        self.assertEqual(out.to_vec(), [6.0])

    def test_identity(self):
        a = Tensor.random((3, 4), rng=np.random.default_rng(1))
        eye = Tensor.from_numpy(np.eye(4))
        self.assertEqual(a.matmul(eye), a)

    def test_matches_numpy(self):
        rng = np.random.default_rng(2)
        a = Tensor.random((5, 3), rng=rng)
        b = Tensor.random((3, 7), rng=rng)
        out = a.matmul(b)
        self.assertEqual(out.shape, (5, 7))
        self.assertTrue(np.allclose(out.to_numpy(), a.to_numpy() @ b.to_numpy(), atol=1e-5))

    def test_empty_inner_dimension_gives_zeros(self):
        out = Tensor.zeros((2, 0)).matmul(Tensor.zeros((0, 3)))
        self.assertEqual(out, Tensor.zeros((2, 3)))

    def test_inner_dimension_mismatch(self):
        with self.assertRaises(TensorError) as cm:
            Tensor.zeros((2, 3)).matmul(Tensor.zeros((2, 3)))
        self.assertIs(cm.exception.kind, TensorErrorKind.SHAPE_MISMATCH)

    def test_requires_rank_two(self):
        cases = [
            (Tensor.zeros((3,)), Tensor.zeros((3, 1))),
            (Tensor.zeros((2, 3)), Tensor.zeros((3,))),
            (Tensor.zeros((1, 2, 3)), Tensor.zeros((3, 1))),
        ]
        for a, b in cases:
            with self.assertRaises(TensorError) as cm:
                a.matmul(b)
            self.assertIs(cm.exception.kind, TensorErrorKind.RANK_MISMATCH)

    def test_rejects_non_tensor(self):
        with self.assertRaises(TypeError):
            Tensor.zeros((2, 2)).matmul(np.eye(2))


if __name__ == "__main__":
    unittest.main()
