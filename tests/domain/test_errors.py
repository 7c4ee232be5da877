from unittest import TestCase
import unittest

from src.deltaml.domain._errors import (
    ImageDecodeError,
    StackError,
    TensorError,
    TensorErrorKind,
    TensorInputError,
)
from src.deltaml.domain._tensor import ITensor
from src.deltaml.infrastructure.tensor._tensor import Tensor


class TestTensorErrors(TestCase):
    def test_tensor_error_carries_kind_and_op(self):
        err = TensorError(TensorErrorKind.RANK_TOO_LOW, "transpose", "need 2 axes")
        self.assertIs(err.kind, TensorErrorKind.RANK_TOO_LOW)
        self.assertEqual(err.op, "transpose")
        self.assertEqual(str(err), "transpose: need 2 axes")

    def test_hierarchy(self):
        self.assertTrue(issubclass(TensorError, ValueError))
        self.assertTrue(issubclass(TensorInputError, ValueError))
        self.assertTrue(issubclass(ImageDecodeError, TensorInputError))
        self.assertTrue(issubclass(StackError, TensorInputError))
        self.assertFalse(issubclass(TensorError, TensorInputError))

    def test_kinds_are_distinct(self):
        values = [k.value for k in TensorErrorKind]
        self.assertEqual(len(values), len(set(values)))

    def test_axis_error_message_names_shape(self):
        with self.assertRaises(TensorError) as cm:
            Tensor.zeros((2, 3)).sum_along_axis(5)
        self.assertIn("axis 5", str(cm.exception))
        self.assertIn("(2, 3)", str(cm.exception))
        self.assertEqual(cm.exception.op, "sum_along_axis")


class TestTensorInterfaceCompatibility(TestCase):
    def test_tensor_satisfies_itensor(self):
        self.assertIsInstance(Tensor.zeros((1,)), ITensor)

    def test_results_are_tensors(self):
        t = Tensor.zeros((2, 2))
        results = [
            t.add(t),
            t.mul_scalar(2.0),
            t.reshape((4,)),
            t.transpose(),
            t.sum_along_axis(0),
            t.matmul(t),
            t.broadcast((3, 2, 2)),
            Tensor.stack([t, t]),
        ]
        for r in results:
            self.assertIsInstance(r, Tensor)


class TestPackageExports(TestCase):
    def test_top_level_exports(self):
        import src.deltaml as deltaml

        self.assertIs(deltaml.Tensor, Tensor)
        self.assertIs(deltaml.TensorError, TensorError)
        for name in deltaml.__all__:
            self.assertTrue(hasattr(deltaml, name), name)


if __name__ == "__main__":
    unittest.main()
