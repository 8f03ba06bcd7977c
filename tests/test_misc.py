"""
Unit tests for vetocore/misc.py.
"""

import pytest
import numpy as np
from vetocore import misc


@pytest.mark.parametrize(
    "num_alt, num_voters, expected",
    [
        (4, 2, (3, 2)),
        (3, 3, (2, 3)),
        (3, 2, (1, 1)),
        (5, 2, (2, 1)),
        (7, 4, (3, 2)),
        (1, 5, (0, 1)),
        (2, 1, (1, 1)),
        (10, 6, (3, 2)),
    ],
)
def test_veto_power_fraction(num_alt, num_voters, expected):
    assert misc.veto_power_fraction(num_alt, num_voters) == expected


@pytest.mark.parametrize("num_alt, num_voters", [(0, 3), (3, 0), (-1, 2), (0, 0)])
def test_veto_power_fraction_invalid(num_alt, num_voters):
    with pytest.raises(ValueError):
        misc.veto_power_fraction(num_alt, num_voters)


def test_coalition_masks():
    assert list(misc.coalition_masks(0)) == []
    assert list(misc.coalition_masks(3)) == list(range(1, 8))
    assert list(misc.coalition_masks(3, descending=True)) == list(range(7, 0, -1))
    assert len(misc.coalition_masks(10)) == 2**10 - 1


@pytest.mark.parametrize(
    "mask, coalition",
    [(1, [0]), (2, [1]), (3, [0, 1]), (0b10110, [1, 2, 4]), (0, [])],
)
def test_coalition_from_mask(mask, coalition):
    assert misc.coalition_from_mask(mask) == coalition
    assert misc.mask_from_coalition(coalition) == mask


def test_mask_from_coalition_numpy():
    assert misc.mask_from_coalition(np.array([0, 3])) == 9


def test_alternative_set():
    altset = misc.AlternativeSet(["b", "a"], universe="abc")
    assert altset == {"a", "b"}
    assert str(altset) == "{a, b}"
    assert altset.str_with_order(["b", "c", "a"]) == "{b, a}"
    with pytest.raises(ValueError):
        misc.AlternativeSet(["a", "a"])
    with pytest.raises(ValueError):
        misc.AlternativeSet(["a", "x"], universe="abc")


def test_coalition_set():
    coalition = misc.CoalitionSet([2, 0], num_voters=3)
    assert coalition == {0, 2}
    assert str(coalition) == "{voter 0, voter 2}"
    misc.CoalitionSet(np.array([0, 1]))
    with pytest.raises(ValueError):
        misc.CoalitionSet([-1])
    with pytest.raises(ValueError):
        misc.CoalitionSet([3], num_voters=3)
    with pytest.raises(ValueError):
        misc.CoalitionSet([1, 1])
    with pytest.raises(TypeError):
        misc.CoalitionSet([0.5])


def test_str_set_of_alternatives():
    assert misc.str_set_of_alternatives({"c", "a"}) == "{a, c}"
    assert misc.str_set_of_alternatives(set()) == "{}"
    assert misc.str_set_of_alternatives({"x", "z"}, order=["z", "y", "x"]) == "{z, x}"


def test_str_alternatives_with_header():
    assert misc.str_alternatives_with_header({"a"}, "PVC") == "PVC (1 alternative):\n {a}\n"
    assert (
        misc.str_alternatives_with_header({"c", "a"}, "PVC", order="cba")
        == "PVC (2 alternatives):\n {c, a}\n"
    )
    assert misc.str_alternatives_with_header(set(), "PVC") == "PVC (0 alternatives):\n {}\n"


def test_header():
    assert misc.header("PVC") == "---\nPVC\n---\n"
    assert misc.header("PVC", symbol="=") == "===\nPVC\n===\n"


def test_geq():
    assert misc.geq(1.0, 1.0)
    assert misc.geq(0.7 * 3, 2.1)
    assert misc.geq(2.0, 1.0)
    assert not misc.geq(1.0, 2.0)
    assert not misc.geq(1.0, 1.0 + 1e-9)


def test_verify_expected_pvc_equals_actual_pvc():
    misc.verify_expected_pvc_equals_actual_pvc({"a", "b"}, ["b", "a"])
    misc.verify_expected_pvc_equals_actual_pvc(None, None)
    with pytest.raises(ValueError):
        misc.verify_expected_pvc_equals_actual_pvc({"a"}, ["a", "b"])
    with pytest.raises(ValueError):
        misc.verify_expected_pvc_equals_actual_pvc(None, ["a"])
    with pytest.raises(ValueError):
        misc.verify_expected_pvc_equals_actual_pvc({"a"}, None)
