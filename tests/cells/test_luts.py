"""Tests for the combinational primitives: LUTs, inverter, constants."""

import numpy as np
import pytest

from gp4synth.cells import create_cell
from gp4synth.cells.logic import Constant, Inverter, Lut, all_input_vectors, lut_outputs

pytestmark = [pytest.mark.unit, pytest.mark.cells]


@pytest.mark.parametrize("width", [2, 3, 4])
def test_every_truth_table_reproduces_its_init(width):
    """For all 2**(2**N) INIT values, output at selector k is bit k of INIT."""
    n_bits = 1 << width
    inits = np.arange(1 << n_bits, dtype=np.int64)
    vectors = all_input_vectors(width)

    outputs = lut_outputs(width, inits, vectors)

    assert outputs.shape == (inits.size, n_bits)
    weights = np.int64(1) << np.arange(n_bits, dtype=np.int64)
    np.testing.assert_array_equal(outputs.astype(np.int64) @ weights, inits)


def test_input_vectors_ordering():
    """Row k drives the selector value k, IN0 least significant."""
    vectors = all_input_vectors(3)
    assert vectors.shape == (8, 3)
    np.testing.assert_array_equal(vectors[5], [1, 0, 1])
    np.testing.assert_array_equal(vectors[6], [0, 1, 1])


@pytest.mark.parametrize("width", [2, 3, 4])
def test_scalar_evaluate_matches_vectorized(width):
    rng = np.random.default_rng(width)
    for init in rng.integers(0, 1 << (1 << width), size=16):
        lut = Lut(width, int(init))
        expected = lut.truth_table()
        for k, vector in enumerate(all_input_vectors(width)):
            assert lut.evaluate(*(int(b) for b in vector)) == expected[k]


def test_and_or_xor_gates():
    and2, or2, xor2 = Lut(2, 0b1000), Lut(2, 0b1110), Lut(2, 0b0110)
    assert [and2.evaluate(a, b) for a, b in [(0, 0), (1, 0), (0, 1), (1, 1)]] == [0, 0, 0, 1]
    assert [or2.evaluate(a, b) for a, b in [(0, 0), (1, 0), (0, 1), (1, 1)]] == [0, 1, 1, 1]
    assert [xor2.evaluate(a, b) for a, b in [(0, 0), (1, 0), (0, 1), (1, 1)]] == [0, 1, 1, 0]


def test_unknown_input_propagates():
    and2 = Lut(2, 0b1000)
    assert and2.evaluate(0, None) == 0
    assert and2.evaluate(1, None) is None
    assert Lut(3, 0xFF).evaluate(None, None, None) == 1


def test_lut_rejects_bad_configuration():
    with pytest.raises(ValueError):
        Lut(5)
    with pytest.raises(ValueError):
        Lut(2, init=16)
    with pytest.raises(ValueError):
        Lut(2).evaluate(1)
    with pytest.raises(ValueError):
        Lut(2).evaluate(1, 2)


@pytest.mark.parametrize("init", [None, "0x6", 1.0, True])
def test_lut_rejects_non_integer_init(init):
    with pytest.raises(ValueError, match="INIT"):
        Lut(2, init=init)


def test_create_cell_lut_with_unknown_init():
    with pytest.raises(ValueError, match="INIT"):
        create_cell("GP_2LUT", init=None)


def test_lut_kind():
    assert Lut(3).kind == "GP_3LUT"


def test_inverter():
    inv = Inverter()
    assert inv.evaluate(0) == 1
    assert inv.evaluate(1) == 0
    assert inv.evaluate(None) is None


def test_constants():
    assert Constant(1).evaluate() == 1 and Constant(1).kind == "GP_VDD"
    assert Constant(0).evaluate() == 0 and Constant(0).kind == "GP_VSS"
    with pytest.raises(ValueError):
        Constant(None)
