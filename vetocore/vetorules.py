"""Proportional veto core (PVC) and veto coalitions.

An alternative `x` is vetoed by a coalition `T` of voters if there is a non-empty set `B`
of alternatives that every member of `T` prefers to `x` and

    |T| * (m - 1) / n  >=  m - |B|,

where `m` is the number of alternatives and `n` the number of voters. The left-hand side is
the voting power of `T`, the right-hand side the veto size. The proportional veto core
contains all alternatives that cannot be vetoed.

Module Attributes
-----------------
MAIN_RULE_IDS : list of str
    List of rule identifiers (`rule_id`) available in vetocore.

ALGORITHM_NAMES : dict of str to str
    A dictionary mapping valid algorithm identifiers to their descriptions.

MAX_NUM_VOTERS_DEFAULT : None or int
    The maximum number of voters for which veto coalitions are searched.
    The search is exponential in the number of voters; larger profiles raise
    `TooManyVotersError`. If set to `None`, there is no limit.
    This value can be overridden via the `max_num_voters` parameter.
"""

import functools
import operator
from fractions import Fraction
from vetocore.output import output
from vetocore import misc, vetorules_ortools
from vetocore.misc import header, str_set_of_alternatives, str_coalition
from vetocore.misc import str_alternatives_with_header, AlternativeSet, CoalitionSet

try:
    from gmpy2 import mpq
except ImportError:
    mpq = None


# List of rule identifiers (`rule_id`)
MAIN_RULE_IDS = [
    "veto-coalitions",
    "successive-elimination",
]

# A dictionary containing mapping all valid algorithm identifiers
# to full names (i.e., descriptions).
ALGORITHM_NAMES = {
    "standard-fractions": "Brute-force coalition search (using standard Python fractions)",
    "gmpy2-fractions": "Brute-force coalition search (using gmpy2 fractions)",
    "float-fractions": "Brute-force coalition search (using floats instead of fractions)",
    "ortools-cp": "OR-Tools CP-SAT solver",
    "standard": "Standard algorithm",
}

# The maximum number of voters for an exhaustive coalition search.
MAX_NUM_VOTERS_DEFAULT = 16


class Rule:
    """
    A class that contains the main information about a rule.

    Parameters
    ----------
        rule_id : str
            The rule identifier.
    """

    _VETO_ALGORITHMS = (
        # exact arithmetic first
        "standard-fractions",
        "gmpy2-fractions",
        "float-fractions",
        "ortools-cp",
    )

    def __init__(
        self,
        rule_id,
    ):
        self.rule_id = rule_id
        if rule_id == "veto-coalitions":
            self.shortname = "PVC"
            self.longname = "Proportional Veto Core (PVC)"
            self.compute_fct = compute_pvc
            self.algorithms = self._VETO_ALGORITHMS
        elif rule_id == "successive-elimination":
            self.shortname = "Successive Elimination"
            self.longname = "Successive Elimination (sequential veto procedure)"
            self.compute_fct = compute_pvc_successive
            self.algorithms = ("standard",)
        else:
            raise UnknownRuleIDError(rule_id)

        # find all *available* algorithms for this rule
        self.available_algorithms = []
        for algorithm in self.algorithms:
            if algorithm in available_algorithms:
                self.available_algorithms.append(algorithm)

    def fastest_available_algorithm(self):
        """
        Return the preferred algorithm for this rule that is available on this system.

        An algorithm may not be available because its requirements are not satisfied. For example,
        "gmpy2-fractions" requires gmpy2, which is not a requirement for vetocore.

        Returns
        -------
            str
        """
        if self.available_algorithms:
            # This rests on the assumption that ``self.algorithms`` are sorted by preference.
            return self.available_algorithms[0]
        raise NoAvailableAlgorithm(self.rule_id, self.algorithms)

    def compute(self, profile, **kwargs):
        """
        Compute rule using self.compute_fct.

        Parameters
        ----------
            profile : vetocore.preferences.Profile
                A profile.

            **kwargs : dict
                Optional arguments for computing the rule (e.g., `algorithm`).

        Returns
        -------
            AlternativeSet or None
                The resulting set of alternatives, `None` if the profile is invalid.
        """
        return self.compute_fct(profile, **kwargs)

    def verify_compute_parameters(self, profile, algorithm, max_num_voters=None):
        """
        Basic checks for parameter values when computing a rule.

        Parameters
        ----------
            profile : vetocore.preferences.Profile
                A profile.

            algorithm : str
                The algorithm to be used.

            max_num_voters : int, optional
                Refuse profiles with more than `max_num_voters` voters.

                If `max_num_voters=None`, the number of voters is not restricted.

        Returns
        -------
            None
        """
        if algorithm not in self.algorithms:
            raise UnknownAlgorithm(self.rule_id, algorithm)

        if algorithm not in self.available_algorithms:
            raise ImportError(
                f'Algorithm "{algorithm}" for {self.shortname} is not available '
                f"(required module not installed)."
            )

        if max_num_voters is not None and (
            not isinstance(max_num_voters, int) or max_num_voters < 1
        ):
            raise ValueError("Parameter `max_num_voters` must be None or a positive integer.")

        if max_num_voters is not None and len(profile) > max_num_voters:
            raise TooManyVotersError(len(profile), max_num_voters)


class UnknownRuleIDError(ValueError):
    """
    Error: unknown rule id.

    Parameters
    ----------
        rule_id : str
            The unknown rule identifier.
    """

    def __init__(self, rule_id):
        message = f'Rule ID "{rule_id}" is not known.'
        super().__init__(message)


class UnknownAlgorithm(ValueError):
    """
    Error: unknown algorithm for a given rule.

    Parameters
    ----------
        rule_id : str
            The rule for which the algorithm is not known.

        algorithm : str
            The unknown algorithm.
    """

    def __init__(self, rule_id, algorithm):
        message = f"Algorithm {algorithm} not specified for rule {rule_id}."
        super().__init__(message)


class NoAvailableAlgorithm(ValueError):
    """
    Exception: none of the implemented algorithms are available.

    Parameters
    ----------
        rule_id : str
            The rule for which no algorithm are available.

        algorithms : tuple of str
            List of algorithms for this rule (none of which are available).
    """

    def __init__(self, rule_id, algorithms):
        message = (
            f"None of the implemented algorithms are available for rule {rule_id}\n"
            f"(because the modules for the following algorithms are not installed: "
            f"{algorithms}) "
        )
        super().__init__(message)


class TooManyVotersError(ValueError):
    """
    Error: the profile has too many voters for an exhaustive coalition search.

    Parameters
    ----------
        num_voters : int
            Number of voters in the profile.

        max_num_voters : int
            The maximum number of voters.
    """

    def __init__(self, num_voters, max_num_voters):
        self.num_voters = num_voters
        self.max_num_voters = max_num_voters
        message = (
            f"The profile has {num_voters} voters, but veto coalitions are only searched "
            f"for at most {max_num_voters} voters (2^n coalitions). "
            f"Use the parameter `max_num_voters` to raise this limit."
        )
        super().__init__(message)


class UnknownAlternativeError(ValueError):
    """
    Error: the queried alternative is not an alternative of the profile.

    Parameters
    ----------
        alternative
            The unknown alternative.

        alternatives : list
            All alternatives of the profile.
    """

    def __init__(self, alternative, alternatives):
        message = (
            f"Alternative {alternative!r} is not one of the profile's alternatives "
            f"{str_set_of_alternatives(alternatives, alternatives)}."
        )
        super().__init__(message)


def _available_algorithms():
    """Verify which algorithms are supported on the current machine.

    This is done by verifying that the required modules are available.
    """
    available = []

    for algorithm in ALGORITHM_NAMES:
        if algorithm == "gmpy2-fractions" and not mpq:
            continue
        if algorithm == "ortools-cp" and not vetorules_ortools.cp_model:
            continue
        available.append(algorithm)

    return available


available_algorithms = _available_algorithms()


class VetoResult:
    """
    The outcome of a veto coalition search for one alternative.

    A `VetoResult` is truthy if and only if a veto coalition was found.

    Parameters
    ----------
        alternative
            The queried alternative.

        coalition : iterable of int
            The veto coalition `T`; empty if no veto coalition exists.

        preferred : iterable
            The set `B` of alternatives that all members of `T` prefer to `alternative`.

        num_alt : int
            Number of alternatives in the profile.

        num_voters : int
            Number of voters in the profile.

    Attributes
    ----------
        voting_power : Fraction
            `|T| / n`, the share of voters in the coalition.

        veto_size : Fraction
            `1 - |B| / m`, the share of alternatives not in `B`.

        coalition_power : Fraction
            `|T| * (m - 1) / n`, the number of alternatives the coalition can veto.
    """

    def __init__(self, alternative, coalition, preferred, num_alt, num_voters):
        self.alternative = alternative
        self.coalition = CoalitionSet(coalition, num_voters=num_voters)
        self.preferred = AlternativeSet(preferred)
        self.num_alt = num_alt
        self.num_voters = num_voters

    def __bool__(self):
        return len(self.coalition) > 0

    @property
    def vetoed(self):
        """Whether a veto coalition was found."""
        return bool(self)

    @property
    def voting_power(self):
        if self.num_voters == 0:
            return Fraction(0)
        return Fraction(len(self.coalition), self.num_voters)

    @property
    def veto_size(self):
        if self.num_alt == 0:
            return Fraction(1)
        return 1 - Fraction(len(self.preferred), self.num_alt)

    @property
    def coalition_power(self):
        if self.num_voters == 0 or self.num_alt == 0:
            return Fraction(0)
        return Fraction(len(self.coalition) * (self.num_alt - 1), self.num_voters)

    def __str__(self):
        return self.str_with_order()

    def str_with_order(self, order=None):
        """
        Format the result, listing alternatives in the given order.

        Parameters
        ----------
            order : list, optional
                Ordered list of all alternatives (e.g., `profile.alternatives`).

        Returns
        -------
            str
        """
        if not self:
            return f"no veto coalition for {self.alternative}\n"
        return (
            f"veto coalition for {self.alternative}: {str_coalition(self.coalition)}\n"
            f" preferred alternatives B: {str_set_of_alternatives(self.preferred, order)}\n"
            f" voting power |T|/n = {self.voting_power}\n"
            f" veto size 1-|B|/m = {self.veto_size}\n"
        )


def compute(rule_id, profile, result=None, **kwargs):
    """
    Compute a set of alternatives with a rule given by `rule_id`.

    Parameters
    ----------
        rule_id : str
            The rule identifier.

        profile : vetocore.preferences.Profile
            A profile.

        result : iterable, optional
            Expected set of alternatives.

            This is used in unit tests to verify correctness. Raises `ValueError` if
            `result` is different from the actual output.

        **kwargs : dict
            Optional arguments for computing the rule (e.g., `algorithm`).

    Returns
    -------
        AlternativeSet or None
            `None` if the profile contains invalid rankings.
    """
    rule = Rule(rule_id)
    alternatives = rule.compute(profile=profile, **kwargs)
    if result is not None:
        # verify that the parameter `result` is indeed the result of computing the rule
        misc.verify_expected_pvc_equals_actual_pvc(
            actual_pvc=alternatives,
            expected_pvc=result,
            shortname=rule.shortname,
        )
    return alternatives


def _refuse_invalid_profile(profile, rule):
    """Print a warning and return True if `profile` contains invalid rankings."""
    invalid_voters = profile.invalid_voters()
    if not invalid_voters:
        return False
    output.warning(
        f"{rule.shortname} is not computable, the profile contains invalid rankings:"
    )
    for voter, diagnosis in invalid_voters.items():
        output.warning(f"voter {voter}: {diagnosis}", indent=" ")
    return True


def _veto_inequality_fct(num_alt, num_voters, algorithm):
    """
    Return a function that decides the veto inequality for fixed `num_alt` and `num_voters`.

    The returned function takes `|T|` and `|B|` as arguments.
    """
    if algorithm == "float-fractions":
        division = lambda x, y: x / y  # standard float division
    elif algorithm == "standard-fractions":
        division = Fraction  # using Python built-in fractions
    elif algorithm == "gmpy2-fractions":
        if not mpq:
            raise ImportError(
                'Module gmpy2 not available, required for algorithm "gmpy2-fractions"'
            )
        division = mpq  # using gmpy2 fractions
    else:
        raise UnknownAlgorithm("veto-coalitions", algorithm)

    numerator, denominator = misc.veto_power_fraction(num_alt, num_voters)

    def holds(coalition_size, num_preferred):
        power = division(coalition_size * numerator, denominator)
        veto_size = num_alt - num_preferred
        if algorithm == "float-fractions":
            return misc.geq(power, veto_size)
        return power >= veto_size

    return holds


def veto_inequality(
    coalition_size, num_preferred, num_alt, num_voters, algorithm="standard-fractions"
):
    """
    Decide whether `|T| * (m-1) / n >= m - |B|`.

    .. doctest::

        >>> veto_inequality(1, 3, num_alt=4, num_voters=2)
        True
        >>> veto_inequality(1, 1, num_alt=4, num_voters=2)
        False

    Parameters
    ----------
        coalition_size : int
            Size of the coalition `T`.

        num_preferred : int
            Size of the set `B`.

        num_alt : int
            Number of alternatives `m`.

        num_voters : int
            Number of voters `n`.

        algorithm : str, optional
            The arithmetic to be used: "standard-fractions", "gmpy2-fractions" or
            "float-fractions". Floats are compared with a tolerance (see `misc.geq`).

    Returns
    -------
        bool
    """
    return _veto_inequality_fct(num_alt, num_voters, algorithm)(coalition_size, num_preferred)


def _veto_coalition(alternative, profile, algorithm):
    """Dispatch the veto coalition search to the chosen algorithm."""
    if algorithm == "ortools-cp":
        return vetorules_ortools._ortools_veto_coalition(alternative, profile)
    return _veto_coalition_bruteforce(alternative, profile, algorithm)


def _veto_coalition_bruteforce(alternative, profile, algorithm):
    """
    Brute-force search over all non-empty coalitions, encoded as bitmasks.

    Among all veto coalitions, the one with the largest bitmask is returned. This is the
    coalition that a complete scan in increasing mask order would find last.
    """
    num_alt = profile.num_alt
    num_voters = len(profile)
    holds = _veto_inequality_fct(num_alt, num_voters, algorithm)
    index = {alt: i for i, alt in enumerate(profile.alternatives)}

    # alternatives preferred to `alternative`, as bitmask over alternatives
    preferred_masks = []
    for ranking in profile:
        try:
            above = ranking.preferred_to(alternative)
        except ValueError:
            preferred_masks.append(None)  # voter does not rank `alternative`
            continue
        preferred_masks.append(sum(1 << index[alt] for alt in above))

    for mask in misc.coalition_masks(num_voters, descending=True):
        coalition = misc.coalition_from_mask(mask)
        if any(preferred_masks[voter] is None for voter in coalition):
            continue
        common = functools.reduce(operator.and_, (preferred_masks[voter] for voter in coalition))
        num_preferred = bin(common).count("1")
        if num_preferred == 0:
            continue
        if holds(len(coalition), num_preferred):
            preferred = {alt for alt in profile.alternatives if common >> index[alt] & 1}
            return coalition, preferred

    return [], set()


def find_veto_coalition(
    alternative,
    profile,
    algorithm="fastest",
    max_num_voters=MAX_NUM_VOTERS_DEFAULT,
):
    """
    Find a coalition of voters that vetoes `alternative`.

    The result is deterministic: among all veto coalitions, the one with the largest bitmask
    (voter `v` corresponds to bit `v`) is returned.

    Parameters
    ----------
        alternative
            The alternative to be vetoed.

        profile : vetocore.preferences.Profile
            A profile.

        algorithm : str, optional
            The algorithm to be used.

            The following algorithms are available for veto coalitions:

            .. doctest::

                >>> Rule("veto-coalitions").algorithms
                ('standard-fractions', 'gmpy2-fractions', 'float-fractions', 'ortools-cp')

        max_num_voters : int, optional
            Raise `TooManyVotersError` for profiles with more voters.

            If `max_num_voters=None`, the number of voters is not restricted.
            The default value can be modified via the constant `MAX_NUM_VOTERS_DEFAULT`.

    Returns
    -------
        VetoResult or None
            The coalition, the set `B`, and derived values.
            The result is falsy if no veto coalition exists.
            `None` if the profile contains invalid rankings.
    """
    rule = Rule("veto-coalitions")
    if algorithm == "fastest":
        algorithm = rule.fastest_available_algorithm()
    rule.verify_compute_parameters(
        profile=profile,
        algorithm=algorithm,
        max_num_voters=max_num_voters,
    )

    if profile.num_alt == 0 or len(profile) == 0:
        return VetoResult(alternative, [], set(), profile.num_alt, len(profile))

    if alternative not in profile.alternatives:
        raise UnknownAlternativeError(alternative, profile.alternatives)

    if _refuse_invalid_profile(profile, rule):
        return None

    coalition, preferred = _veto_coalition(alternative, profile, algorithm)
    result = VetoResult(alternative, coalition, preferred, profile.num_alt, len(profile))

    # optional output
    output.info(header(f"Veto coalition for {alternative}"), wrap=False)
    output.details(f"Algorithm: {ALGORITHM_NAMES[algorithm]}\n")
    output.info(result.str_with_order(profile.alternatives), wrap=False)
    if result:
        output.details(
            f"coalition power |T|*(m-1)/n = {result.coalition_power} "
            f">= veto size m-|B| = {profile.num_alt - len(result.preferred)}\n"
        )
    # end of optional output

    return result


def compute_pvc(
    profile,
    algorithm="fastest",
    max_num_voters=MAX_NUM_VOTERS_DEFAULT,
):
    """
    Compute the proportional veto core (PVC).

    An alternative is in the PVC if and only if no veto coalition exists for it.

    Parameters
    ----------
        profile : vetocore.preferences.Profile
            A profile.

        algorithm : str, optional
            The algorithm to be used.

            The following algorithms are available for the PVC:

            .. doctest::

                >>> Rule("veto-coalitions").algorithms
                ('standard-fractions', 'gmpy2-fractions', 'float-fractions', 'ortools-cp')

        max_num_voters : int, optional
            Raise `TooManyVotersError` for profiles with more voters.

            If `max_num_voters=None`, the number of voters is not restricted.
            The default value can be modified via the constant `MAX_NUM_VOTERS_DEFAULT`.

    Returns
    -------
        AlternativeSet or None
            The PVC. `None` if the profile contains invalid rankings.
    """
    rule = Rule("veto-coalitions")
    if algorithm == "fastest":
        algorithm = rule.fastest_available_algorithm()
    rule.verify_compute_parameters(
        profile=profile,
        algorithm=algorithm,
        max_num_voters=max_num_voters,
    )

    if profile.num_alt == 0 or len(profile) == 0:
        return AlternativeSet()

    if _refuse_invalid_profile(profile, rule):
        return None

    veto_coalitions = {
        alternative: _veto_coalition(alternative, profile, algorithm)
        for alternative in profile.alternatives
    }
    pvc = AlternativeSet(
        alternative for alternative, (coalition, _) in veto_coalitions.items() if not coalition
    )

    # optional output
    output.info(header(rule.longname), wrap=False)
    output.details(f"Algorithm: {ALGORITHM_NAMES[algorithm]}\n")
    numerator, denominator = misc.veto_power_fraction(profile.num_alt, len(profile))
    output.details(f"veto power per voter (m-1)/n = {Fraction(numerator, denominator)}\n")
    for alternative, (coalition, preferred) in veto_coalitions.items():
        if coalition:
            output.details(
                f"{alternative} is vetoed by {str_coalition(coalition)} "
                f"(B = {str_set_of_alternatives(preferred, profile.alternatives)})"
            )
    output.details("")
    output.info(
        str_alternatives_with_header(pvc, rule.shortname, order=profile.alternatives),
        wrap=False,
    )
    # end of optional output

    return pvc


def _successive_elimination_algorithm(profile):
    """
    Algorithm for successive elimination on duplicated alternatives.

    Every alternative is duplicated `denominator` times, so that each voter eliminates
    exactly `numerator` copies.
    """
    numerator, denominator = misc.veto_power_fraction(profile.num_alt, len(profile))
    copies = {alternative: denominator for alternative in profile.alternatives}

    detailed_info = {"eliminated": [], "copies": []}

    for voter, ranking in enumerate(profile):
        if numerator > 0 and sum(copies.values()) < 2:
            raise RuntimeError(
                "Critical bug. Fewer than two copies remain before the elimination "
                f"of voter {voter}."
            )
        to_eliminate = numerator
        eliminated = []
        for alternative in reversed(ranking.order):
            if to_eliminate == 0:
                break
            num_removed = min(copies[alternative], to_eliminate)
            if num_removed > 0:
                copies[alternative] -= num_removed
                to_eliminate -= num_removed
                eliminated.append((alternative, num_removed))
        detailed_info["eliminated"].append(eliminated)
        detailed_info["copies"].append(dict(copies))

    if sum(copies.values()) != denominator:
        raise RuntimeError(
            f"Critical bug. {sum(copies.values())} copies remain, expected {denominator}."
        )

    remaining = AlternativeSet(
        alternative for alternative in profile.alternatives if copies[alternative] > 0
    )
    detailed_info["numerator"] = numerator
    detailed_info["denominator"] = denominator
    return remaining, detailed_info


def compute_pvc_successive(profile, algorithm="fastest"):
    """
    Compute the set of alternatives surviving successive elimination.

    Each alternative is duplicated `q` times, where `p/q = (m-1)/n` in lowest terms.
    Then voters `0, ..., n-1` in turn eliminate their `p` least preferred remaining copies.
    The result consists of all alternatives with at least one remaining copy.

    .. important::

        This set is an overlay for comparison. The PVC is computed by `compute_pvc()`; both
        sets need not coincide.

    Parameters
    ----------
        profile : vetocore.preferences.Profile
            A profile.

        algorithm : str, optional
            The algorithm to be used.

            The following algorithms are available for successive elimination:

            .. doctest::

                >>> Rule("successive-elimination").algorithms
                ('standard',)

    Returns
    -------
        AlternativeSet or None
            The surviving alternatives. `None` if the profile contains invalid rankings.
    """
    rule = Rule("successive-elimination")
    if algorithm == "fastest":
        algorithm = rule.fastest_available_algorithm()
    rule.verify_compute_parameters(profile=profile, algorithm=algorithm)

    if profile.num_alt == 0 or len(profile) == 0:
        return AlternativeSet()

    if _refuse_invalid_profile(profile, rule):
        return None

    remaining, detailed_info = _successive_elimination_algorithm(profile)

    # optional output
    output.info(header(rule.longname), wrap=False)
    output.details(f"Algorithm: {ALGORITHM_NAMES[algorithm]}\n")
    output.details(
        f"each alternative is duplicated {detailed_info['denominator']} times, "
        f"each voter eliminates {detailed_info['numerator']} copies\n"
    )
    for voter, eliminated in enumerate(detailed_info["eliminated"]):
        msg = ", ".join(f"{num} x {alternative}" for alternative, num in eliminated)
        output.details(f"voter {voter} eliminates {msg if msg else 'nothing'}")
        copies = detailed_info["copies"][voter]
        output.details(
            "remaining: "
            + ", ".join(f"{copies[alt]} x {alt}" for alt in profile.alternatives if copies[alt]),
            indent=" ",
        )
    output.details("")
    output.info(
        str_alternatives_with_header(remaining, rule.shortname, order=profile.alternatives),
        wrap=False,
    )
    # end of optional output

    return remaining
