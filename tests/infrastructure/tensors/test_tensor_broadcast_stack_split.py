from unittest import TestCase
import unittest

import numpy as np

from src.deltaml.infrastructure.tensor._tensor import Tensor
from src.deltaml.domain._errors import (
    StackError,
    TensorError,
    TensorErrorKind,
    TensorInputError,
)


def _t(values):
    arr = np.asarray(values, dtype=np.float32)
    return Tensor(arr.ravel(), arr.shape)


class TestTensorBroadcast(TestCase):
    def test_broadcast_row_to_matrix(self):
        out = _t([[1, 2, 3]]).broadcast((4, 3))
        self.assertEqual(out.shape, (4, 3))
        self.assertEqual(out.to_vec(), [1.0, 2.0, 3.0] * 4)

    def test_broadcast_adds_leading_axes(self):
        out = _t([1, 2, 3]).broadcast((2, 2, 3))
        self.assertEqual(out.shape, (2, 2, 3))
        self.assertEqual(out.to_vec(), [1.0, 2.0, 3.0] * 4)

    def test_broadcast_column(self):
        out = _t([[1], [2]]).broadcast((2, 3))
        self.assertEqual(out, _t([[1, 1, 1], [2, 2, 2]]))

    def test_broadcast_to_same_shape_is_copy(self):
        t = _t([[1, 2], [3, 4]])
        out = t.broadcast((2, 2))
        self.assertEqual(out, t)
        out.sub_assign(t)
        self.assertEqual(t.to_vec(), [1.0, 2.0, 3.0, 4.0])

    def test_broadcast_result_is_writable_and_independent(self):
        t = _t([[1, 2]])
        out = t.broadcast((3, 2))
        out.sub_assign(_t([[1, 1], [0, 0], [0, 0]]))
        self.assertEqual(out.to_vec(), [0.0, 1.0, 1.0, 2.0, 1.0, 2.0])
        self.assertEqual(t.to_vec(), [1.0, 2.0])

    def test_broadcast_incompatible(self):
        with self.assertRaises(TensorError) as cm:
            _t([[1, 2, 3], [4, 5, 6]]).broadcast((2, 4))
        self.assertIs(cm.exception.kind, TensorErrorKind.BROADCAST_INCOMPATIBLE)
        self.assertIn("(2, 3)", str(cm.exception))
        self.assertIn("(2, 4)", str(cm.exception))

    def test_broadcast_to_lower_rank_fails(self):
        with self.assertRaises(TensorError) as cm:
            _t([[1, 2, 3]]).broadcast((3,))
        self.assertIs(cm.exception.kind, TensorErrorKind.BROADCAST_INCOMPATIBLE)


class TestTensorStack(TestCase):
    def test_stack_adds_leading_axis(self):
        out = Tensor.stack([_t([1, 2]), _t([3, 4]), _t([5, 6])])
        self.assertEqual(out.shape, (3, 2))
        self.assertEqual(out.to_vec(), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])

    def test_stack_copies_inputs(self):
        a = _t([1, 2])
        out = Tensor.stack([a, a])
        a.sub_assign(_t([1, 1]))
        self.assertEqual(out.to_vec(), [1.0, 2.0, 1.0, 2.0])

    def test_stack_single(self):
        out = Tensor.stack([_t([[1, 2], [3, 4]])])
        self.assertEqual(out.shape, (1, 2, 2))

    def test_stack_empty(self):
        with self.assertRaises(StackError) as cm:
            Tensor.stack([])
        self.assertEqual(str(cm.exception), "Cannot stack an empty list of tensors.")

    def test_stack_shape_mismatch_is_recoverable(self):
        with self.assertRaises(TensorInputError) as cm:
            Tensor.stack([_t([1, 2]), _t([1, 2, 3])])
        self.assertIsInstance(cm.exception, StackError)
        self.assertEqual(
            str(cm.exception),
            "All tensors must have the same shape. Expected (2,), got (3,)",
        )

    def test_stack_rejects_non_tensor(self):
        with self.assertRaises(TypeError):
            Tensor.stack([_t([1, 2]), [1.0, 2.0]])


class TestTensorSplitAt(TestCase):
    def test_split_at(self):
        t = Tensor.from_numpy(np.arange(8).reshape(4, 2))
        head, tail = t.split_at(1)
        self.assertEqual(head, _t([[0, 1]]))
        self.assertEqual(tail, _t([[2, 3], [4, 5], [6, 7]]))

    def test_split_at_edges(self):
        t = Tensor.zeros((3, 2))
        head, tail = t.split_at(0)
        self.assertEqual((head.shape, tail.shape), ((0, 2), (3, 2)))
        head, tail = t.split_at(3)
        self.assertEqual((head.shape, tail.shape), ((3, 2), (0, 2)))

    def test_split_at_out_of_bounds(self):
        with self.assertRaises(TensorError) as cm:
            Tensor.zeros((3, 2)).split_at(4)
        self.assertIs(cm.exception.kind, TensorErrorKind.INDEX_OUT_OF_BOUNDS)

    def test_split_at_rank_too_low(self):
        with self.assertRaises(TensorError) as cm:
            _t([1, 2, 3]).split_at(1)
        self.assertIs(cm.exception.kind, TensorErrorKind.RANK_TOO_LOW)

    def test_split_results_do_not_alias(self):
        t = Tensor.zeros((2, 2))
        head, _ = t.split_at(1)
        head.sub_assign(_t([[1, 1]]))
        self.assertEqual(t.to_vec(), [0.0] * 4)

    def test_stack_then_split_recovers_inputs(self):
        rng = np.random.default_rng(5)
        parts = [Tensor.random((2, 3), rng=rng) for _ in range(4)]
        rest = Tensor.stack(parts)

        for expected in parts:
            head, rest = rest.split_at(1)
            self.assertEqual(head.reshape((2, 3)), expected)
        self.assertEqual(rest.shape, (0, 2, 3))


if __name__ == "__main__":
    unittest.main()
