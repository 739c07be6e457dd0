import pytest
import torch

from tensor_ext import DtypeMismatch, InvalidShape, allclose, equal, eye, outer


def test_equal():
    torch.manual_seed(0)
    x = torch.randn(3, 4)
    assert equal(x, x)
    assert equal(x, x.clone())

    y = x.clone()
    y[1, 2] += 1
    assert not equal(x, y)
    assert not equal(x, x.reshape(4, 3))
    assert not equal(x, x[:2])


def test_equal_nan_is_not_equal():
    x = torch.tensor([1.0, float("nan")])
    assert not equal(x, x)


def test_allclose_defaults():
    torch.manual_seed(0)
    x = torch.randn(5, 5)
    assert allclose(x, x)
    assert allclose(x, x + 1e-9)
    assert not allclose(x, x + 1e-3)
    assert not allclose(x, torch.randn(5, 5))


def test_allclose_shape_mismatch_is_false():
    assert not allclose(torch.zeros(2, 3), torch.zeros(3, 2))
    assert not allclose(torch.zeros(2), torch.zeros(2, 1))


def test_allclose_custom_tolerances():
    a = torch.tensor([1.0, 2.0])
    b = torch.tensor([1.05, 2.0])
    assert not allclose(a, b)
    assert allclose(a, b, atol=0.1)
    assert allclose(a, b, rtol=0.1, atol=0.0)
    assert not allclose(a, b, rtol=0.01, atol=0.0)


def test_allclose_special_values():
    inf = float("inf")
    assert allclose(torch.tensor([inf, -inf]), torch.tensor([inf, -inf]))
    assert not allclose(torch.tensor([inf]), torch.tensor([-inf]))
    assert not allclose(torch.tensor([float("nan")]), torch.tensor([float("nan")]))


def test_allclose_integers_and_mixed_dtypes():
    assert allclose(torch.tensor([1, 2, 3]), torch.tensor([1, 2, 3]))
    assert not allclose(torch.tensor([1, 2, 3]), torch.tensor([1, 2, 4]))
    assert allclose(torch.tensor([1, 2]), torch.tensor([1.0, 2.0], dtype=torch.float64))


@pytest.mark.parametrize("n", [0, 1, 4])
def test_eye_matches_torch(n):
    assert torch.equal(eye(n), torch.eye(n))
    assert torch.equal(eye((n, n), dtype=torch.int64), torch.eye(n, dtype=torch.int64))


def test_eye_dtype_and_device():
    device = "cuda" if torch.cuda.is_available() else "cpu"
    I = eye(3, dtype=torch.bool, device=device)
    assert I.dtype == torch.bool
    assert I.device.type == device
    assert eye(2).dtype == torch.get_default_dtype()


@pytest.mark.parametrize("shape", [(2, 3), (3,), (2, 2, 2)])
def test_eye_rejects_non_square(shape):
    with pytest.raises(InvalidShape):
        eye(shape)


def test_outer():
    a = torch.tensor([1.0, 2.0, 3.0])
    b = torch.tensor([4.0, 5.0])
    out = outer(a, b)
    assert out.shape == (3, 2)
    assert torch.equal(out, torch.outer(a, b))


def test_outer_errors():
    with pytest.raises(InvalidShape):
        outer(torch.ones(2, 2), torch.ones(2))
    with pytest.raises(DtypeMismatch):
        outer(torch.ones(2), torch.ones(2, dtype=torch.float64))


@pytest.mark.parametrize("a,b", [(1.0, float("inf")), (-5.0, float("-inf")), (float("inf"), 1e30)])
def test_allclose_finite_vs_infinity(a, b):
    assert not allclose(torch.tensor([a]), torch.tensor([b]))
    assert not allclose(torch.tensor([b]), torch.tensor([a]))


def test_equal_requires_same_dtype():
    assert not equal(torch.tensor([1]), torch.tensor([1.0]))
    assert equal(torch.tensor([1.0]), torch.tensor([1.0]))
