"""
Miscellaneous functions for alternatives, coalitions and veto arithmetic.
"""

import math
import numpy as np

FLOAT_ISCLOSE_REL_TOL = 1e-12
"""
The relative tolerance when comparing floats.

See also: `math.isclose() <https://docs.python.org/3/library/math.html#math.isclose>`_.
"""

FLOAT_ISCLOSE_ABS_TOL = 1e-12
"""
The absolute tolerance when comparing floats.

See also: `math.isclose() <https://docs.python.org/3/library/math.html#math.isclose>`_.
"""


class AlternativeSet(set):
    """
    A set of alternatives, for example the proportional veto core.

    Alternatives are arbitrary hashable tokens (usually strings such as `"a"`).

    Parameters
    ----------
        alternatives : iterable
            An iterable of alternatives.

        universe : iterable, optional
            All alternatives of a profile. Used only for checks.

            If `universe` is provided, it is verified that every element of `alternatives`
            is contained in it.
    """

    def __init__(self, alternatives=(), universe=None):
        alternatives = list(alternatives)
        super().__init__(alternatives)
        if len(alternatives) != len(self):
            raise ValueError(
                f"AlternativeSet initialized with duplicate elements ({alternatives})."
            )
        if universe is not None:
            universe = set(universe)
            unknown = [alt for alt in alternatives if alt not in universe]
            if unknown:
                raise ValueError(
                    f"AlternativeSet initialized with alternatives not contained in "
                    f"the universe ({unknown})."
                )

    def __str__(self):
        return self.str_with_order()

    def str_with_order(self, order=None):
        """
        Format an AlternativeSet, listing alternatives in the given order.

        Parameters
        ----------
            order : list, optional
                Ordered list of all alternatives (e.g., `profile.alternatives`).

        Returns
        -------
            str
        """
        return str_set_of_alternatives(self, order)


class CoalitionSet(set):
    """
    A set of voters, that is, a set of non-negative integers.

    Parameters
    ----------
        voters : iterable
            An iterable of voter indices.

        num_voters : int, optional
            The number of voters in the profile. Used only for checks.

            If `num_voters` is provided, it is verified that `voters` does not contain
            numbers `>= num_voters`.
    """

    def __init__(self, voters=(), num_voters=None):
        voters = list(voters)
        super().__init__(voters)
        if len(voters) != len(self):
            raise ValueError(f"CoalitionSet initialized with duplicate elements ({voters}).")

        for voter in voters:
            if not isinstance(voter, (int, np.integer)):
                raise TypeError(
                    f"Object of type {str(type(voter))} not suitable as voter, "
                    f"only non-negative integers allowed."
                )

        if not all(voter >= 0 for voter in voters):
            raise ValueError(
                f"CoalitionSet initialized with elements that are not non-negative "
                f"integers ({voters})."
            )

        if num_voters is not None and any(voter >= num_voters for voter in voters):
            raise ValueError(
                f"CoalitionSet initialized with elements that are >= num_voters "
                f"({num_voters}), the number of voters ({voters})."
            )

    def __str__(self):
        return str_coalition(self)


def str_set_of_alternatives(altset, order=None):
    """
    Nicely format a set of alternatives.

    .. doctest::

        >>> print(str_set_of_alternatives({"c", "a", "b"}))
        {a, b, c}
        >>> print(str_set_of_alternatives({"b", "x", "a"}, order=["x", "b", "a"]))
        {x, b, a}

    Parameters
    ----------
        altset : iterable
            An iterable of alternatives.

        order : list, optional
            Ordered list of all alternatives. Without it, alternatives are sorted by
            their string representation.

    Returns
    -------
        str
    """
    if order is None:
        named = sorted(str(alt) for alt in altset)
    else:
        position = {alt: i for i, alt in enumerate(order)}
        named = [str(alt) for alt in sorted(altset, key=lambda alt: position[alt])]
    return "{" + ", ".join(named) + "}"


def str_coalition(coalition):
    """
    Nicely format a coalition of voters.

    .. doctest::

        >>> print(str_coalition({2, 0}))
        {voter 0, voter 2}
        >>> print(str_coalition([]))
        {}

    Parameters
    ----------
        coalition : iterable of int
            Voter indices.

    Returns
    -------
        str
    """
    return "{" + ", ".join(f"voter {voter}" for voter in sorted(coalition)) + "}"


def str_alternatives_with_header(alternatives, label, order=None):
    """
    Nicely format a set of alternatives including a header (stating the number of alternatives).

    .. doctest::

        >>> print(str_alternatives_with_header({"b", "a"}, "PVC"))
        PVC (2 alternatives):
         {a, b}
        <BLANKLINE>
        >>> print(str_alternatives_with_header({"c"}, "PVC", order="abc"))
        PVC (1 alternative):
         {c}
        <BLANKLINE>

    Parameters
    ----------
        alternatives : iterable
            A set of alternatives.

        label : str
            Name of the set.

        order : list, optional
            Ordered list of all alternatives.

    Returns
    -------
        str
    """
    if len(alternatives) == 1:
        output = f"{label} (1 alternative):\n"
    else:
        output = f"{label} ({len(alternatives)} alternatives):\n"
    output += " " + str_set_of_alternatives(alternatives, order) + "\n"
    return output


def header(text, symbol="-"):
    """
    Format a header for `text`.

    Parameters
    ----------
        text : str
            Header text.

        symbol : str
            Symbol to be used for the box around the header text; should be exactly 1 character.

    Returns
    -------
        str
    """
    border = symbol[0] * len(text) + "\n"
    return border + text + "\n" + border


def veto_power_fraction(num_alt, num_voters):
    """
    Compute the veto power of a single voter, (m-1)/n, as a reduced fraction.

    .. doctest::

        >>> veto_power_fraction(4, 2)
        (3, 2)
        >>> veto_power_fraction(3, 3)
        (2, 3)
        >>> veto_power_fraction(5, 2)
        (2, 1)
        >>> veto_power_fraction(1, 7)
        (0, 1)

    Parameters
    ----------
        num_alt : int
            Number of alternatives (m), at least 1.

        num_voters : int
            Number of voters (n), at least 1.

    Returns
    -------
        tuple of int
            Numerator and denominator (coprime, denominator positive).
    """
    if num_alt < 1:
        raise ValueError(f"Veto power requires at least one alternative (num_alt={num_alt}).")
    if num_voters < 1:
        raise ValueError(f"Veto power requires at least one voter (num_voters={num_voters}).")
    divisor = math.gcd(num_alt - 1, num_voters)
    return (num_alt - 1) // divisor, num_voters // divisor


def coalition_masks(num_voters, descending=False):
    """
    Yield all non-empty coalitions of `num_voters` voters as bitmasks.

    Voter `v` is contained in a coalition if bit `v` is set in its mask.

    .. doctest::

        >>> list(coalition_masks(2))
        [1, 2, 3]
        >>> list(coalition_masks(2, descending=True))
        [3, 2, 1]

    Parameters
    ----------
        num_voters : int
            Number of voters.

        descending : bool, default=False
            Enumerate masks in decreasing instead of increasing order.

    Returns
    -------
        iterable of int
    """
    if descending:
        return range(2**num_voters - 1, 0, -1)
    return range(1, 2**num_voters)


def coalition_from_mask(mask):
    """
    Convert a bitmask into a sorted list of voters.

    .. doctest::

        >>> coalition_from_mask(0b1011)
        [0, 1, 3]

    Parameters
    ----------
        mask : int
            A non-negative integer.

    Returns
    -------
        list of int
    """
    voters = []
    voter = 0
    while mask:
        if mask & 1:
            voters.append(voter)
        mask >>= 1
        voter += 1
    return voters


def mask_from_coalition(coalition):
    """
    Convert a coalition (iterable of voters) into a bitmask.

    Parameters
    ----------
        coalition : iterable of int
            Voter indices.

    Returns
    -------
        int
    """
    mask = 0
    for voter in coalition:
        mask |= 1 << int(voter)
    return mask


def isclose(x, y):
    """
    Compare two floats using the vetocore default values for absolute and relative tolerance.

    Parameters
    ----------
        x, y : float
            Two floats.

    Returns
    -------
        bool
    """
    return math.isclose(x, y, rel_tol=FLOAT_ISCLOSE_REL_TOL, abs_tol=FLOAT_ISCLOSE_ABS_TOL)


def geq(x, y):
    """
    Test `x >= y` for floats, treating nearly equal numbers as equal.

    .. doctest::

        >>> 0.1 * 3 >= 0.3
        True
        >>> 0.7 * 3 >= 2.1
        False
        >>> geq(0.7 * 3, 2.1)
        True

    Parameters
    ----------
        x, y : float
            Two floats.

    Returns
    -------
        bool
    """
    return x > y or isclose(x, y)


def verify_expected_pvc_equals_actual_pvc(actual_pvc, expected_pvc, shortname="Rule"):
    """
    Verify whether a rule returned the expected set of alternatives. Raises exceptions if not.

    Parameters
    ----------
        actual_pvc : set or None
            Output of a rule.

        expected_pvc : iterable or None
            Expected output of this rule. `None` means that the profile is expected to be
            refused.

        shortname : str, optional
            Name of rule used for Exception messages.

    Returns
    -------
        None
    """
    if expected_pvc is None or actual_pvc is None:
        if expected_pvc is not actual_pvc:
            raise ValueError(f"{shortname} returns {actual_pvc}, expected {expected_pvc}")
        return
    if set(actual_pvc) != set(expected_pvc):
        raise ValueError(
            f"{shortname} returns {str_set_of_alternatives(actual_pvc)}, "
            f"expected {str_set_of_alternatives(expected_pvc)}"
        )
