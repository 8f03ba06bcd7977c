"""
Random generation of ordinal preference profiles.

Rankings are sampled with the package
`prefsampling <https://github.com/COMSOC-Community/prefsampling>`_.
"""

import prefsampling.ordinal as ord_samplers
from numpy.random import default_rng
from vetocore.preferences import Profile


def prefsampling_wrapper(sampler, sampler_params, alt_names=None):
    """
    Wrapper for prefsampling functions to map the outcome of the samplers to a vetocore profile.

    The sampler is seeded from the module-level generator `rng`.

    Parameters
    ----------
        sampler : Callable
            The prefsampling function.
        sampler_params : dict
            The arguments passed to the sampler, all are passed as kwargs.
        alt_names : sequence, optional
            The alternatives of the profile.

    Returns
    -------
        vetocore.preferences.Profile
    """
    samples = sampler(**sampler_params, seed=int(rng.integers(2**31)))
    num_alt = sampler_params["num_candidates"]
    profile = Profile(num_alt, alt_names=alt_names)
    for sample in samples:
        profile.add_voter([profile.alternatives[int(alt)] for alt in sample])
    return profile


def random_profile(num_voters, num_alt, prob_distribution):
    """
    Generate a random profile using the probability distribution `prob_distribution`.

    The following probability distributions are supported:

    .. doctest::

        >>> PROBABILITY_DISTRIBUTION_IDS
        ('IC', 'Mallows', 'Urn', 'Single-Peaked')

    Parameters
    ----------
        num_voters : int
            The desired number of voters in the profile.

        num_alt : int
            The desired number of alternatives in the profile.

        prob_distribution : dict
            Specification of the probability distribution.

    Returns
    -------
        vetocore.preferences.Profile

    Examples
    --------
    Generate a profile via the Mallows distribution with dispersion `0.5`.

    .. testsetup::

        generate.rng = np.random.default_rng(24121838)

    .. doctest::

        >>> prob_distribution = {"id": "Mallows", "dispersion": 0.5}
        >>> profile = random_profile(num_voters=5, num_alt=4, prob_distribution=prob_distribution)
        >>> print(len(profile))
        5
    """
    if "id" not in prob_distribution:
        raise KeyError('Probability distribution requires key "id".')
    if prob_distribution["id"] not in PROBABILITY_DISTRIBUTION_IDS:
        raise ValueError(f"Probability distribution id {prob_distribution} unknown.")
    kwargs = {key: value for key, value in prob_distribution.items() if key != "id"}
    return PROBABILITY_DISTRIBUTIONS[prob_distribution["id"]](num_voters, num_alt, **kwargs)


# Impartial Culture
def random_ic_profile(num_voters, num_alt, alt_names=None):
    """
    Generate a random profile using the *Impartial Culture (IC)* probability distribution.

    Every ranking is drawn uniformly at random.

    Parameters
    ----------
        num_voters : int
            The desired number of voters in the profile.

        num_alt : int
            The desired number of alternatives in the profile.

        alt_names : sequence, optional
            The alternatives of the profile.

    Returns
    -------
        vetocore.preferences.Profile
    """
    return prefsampling_wrapper(
        ord_samplers.impartial,
        {"num_voters": num_voters, "num_candidates": num_alt},
        alt_names=alt_names,
    )


def random_mallows_profile(num_voters, num_alt, dispersion, alt_names=None):
    """
    Generate a random profile using the *Mallows* probability distribution.

    Rankings are perturbations of the central ranking `a > b > c > ...`.

    Parameters
    ----------
        num_voters : int
            The desired number of voters in the profile.

        num_alt : int
            The desired number of alternatives in the profile.

        dispersion : float in [0, 1]
            Dispersion parameter of the Mallows model.

            A dispersion of `0` yields identical rankings, `1` is equivalent to IC.

        alt_names : sequence, optional
            The alternatives of the profile.

    Returns
    -------
        vetocore.preferences.Profile
    """
    return prefsampling_wrapper(
        ord_samplers.mallows,
        {
            "num_voters": num_voters,
            "num_candidates": num_alt,
            "phi": dispersion,
        },
        alt_names=alt_names,
    )


def random_urn_profile(num_voters, num_alt, replace, alt_names=None):
    """
    Generate a random profile using the *Polya Urn* probability distribution.

    Parameters
    ----------
        num_voters : int
            The desired number of voters in the profile.

        num_alt : int
            The desired number of alternatives in the profile.

        replace : float
            New balls added to the urn in each iteration, relative to the original number.

            The urn starts with `num_alt` factorial balls, each representing a ranking.
            This quantity is normalized to `1.0`. A value of `0.0` is equivalent to IC.

        alt_names : sequence, optional
            The alternatives of the profile.

    Returns
    -------
        vetocore.preferences.Profile
    """
    return prefsampling_wrapper(
        ord_samplers.urn,
        {"num_voters": num_voters, "num_candidates": num_alt, "alpha": replace},
        alt_names=alt_names,
    )


def random_single_peaked_profile(num_voters, num_alt, alt_names=None):
    """
    Generate a random profile that is single-peaked on the axis `a, b, c, ...`.

    Rankings are drawn uniformly among all single-peaked rankings (Walsh's sampler).

    Parameters
    ----------
        num_voters : int
            The desired number of voters in the profile.

        num_alt : int
            The desired number of alternatives in the profile.

        alt_names : sequence, optional
            The alternatives of the profile.

    Returns
    -------
        vetocore.preferences.Profile
    """
    return prefsampling_wrapper(
        ord_samplers.single_peaked_walsh,
        {"num_voters": num_voters, "num_candidates": num_alt},
        alt_names=alt_names,
    )


PROBABILITY_DISTRIBUTIONS = {
    "IC": random_ic_profile,
    "Mallows": random_mallows_profile,
    "Urn": random_urn_profile,
    "Single-Peaked": random_single_peaked_profile,
}
PROBABILITY_DISTRIBUTION_IDS = tuple(PROBABILITY_DISTRIBUTIONS.keys())

rng = default_rng()  # random number generator
