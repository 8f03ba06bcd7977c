"""
Veto coalitions computed as constraint satisfaction programs with OR-Tools.
"""

from ortools.sat.python import cp_model
from vetocore import misc

# CP-SAT coefficients are 64-bit integers; the objective weighs voter `v` with 2^v
MAX_NUM_VOTERS_ORTOOLS = 62


def _ortools_veto_coalition(alternative, profile):
    """Find the veto coalition with the largest bitmask using the OR-Tools CP-SAT Solver.

    Parameters
    ----------
    alternative
        the alternative to be vetoed
    profile : vetocore.preferences.Profile
        a profile with valid rankings only

    Returns
    -------
    coalition : list of int
        the veto coalition (sorted), empty if there is none
    preferred : set
        alternatives preferred to `alternative` by all members of the coalition

    """
    num_voters = len(profile)
    num_alt = profile.num_alt
    if num_voters > MAX_NUM_VOTERS_ORTOOLS:
        raise ValueError(
            f"_ortools_veto_coalition supports at most {MAX_NUM_VOTERS_ORTOOLS} voters "
            f"(profile has {num_voters} voters)."
        )

    numerator, denominator = misc.veto_power_fraction(num_alt, num_voters)
    if numerator == 0:
        # a single alternative cannot be vetoed
        return [], set()

    others = [alt for alt in profile.alternatives if alt != alternative]
    preferred_sets = [ranking.preferred_to(alternative) for ranking in profile]

    model = cp_model.CpModel()

    # `in_coalition` is a binary variable indicating whether `voter` is in the coalition T
    in_coalition = [model.NewBoolVar(f"voter{voter}_in_coalition") for voter in range(num_voters)]
    # `in_preferred` is a binary variable indicating whether `alt` is in B
    in_preferred = {alt: model.NewBoolVar(f"alt{i}_in_preferred") for i, alt in enumerate(others)}

    for voter in range(num_voters):
        for alt in others:
            if alt not in preferred_sets[voter]:
                # `voter` does not prefer `alt` to `alternative`
                model.Add(in_coalition[voter] + in_preferred[alt] <= 1)

    model.Add(sum(in_coalition) >= 1)
    model.Add(sum(in_preferred.values()) >= 1)
    # |T| * (m-1)/n >= m - |B|, multiplied by the denominator of (m-1)/n
    model.Add(
        numerator * sum(in_coalition) + denominator * sum(in_preferred.values())
        >= denominator * num_alt
    )

    model.Maximize(sum((1 << voter) * in_coalition[voter] for voter in range(num_voters)))

    solver = cp_model.CpSolver()
    status = solver.Solve(model)

    if status not in [cp_model.OPTIMAL, cp_model.INFEASIBLE]:
        raise RuntimeError(
            f"OR-Tools returned an unexpected status code: {status}"
            f"Warning: solutions may be incomplete or not optimal (veto coalition "
            f"for {alternative})."
        )
    elif status == cp_model.INFEASIBLE:
        return [], set()

    coalition = [voter for voter in range(num_voters) if solver.Value(in_coalition[voter]) >= 1]

    # B is reported in full, the model only needs a sufficiently large subset of it
    preferred = set(others)
    for voter in coalition:
        preferred &= preferred_sets[voter]

    if not preferred:
        raise RuntimeError(
            f"OR-Tools returned an inconsistent solution for the veto coalition "
            f"of {alternative} (coalition {misc.str_coalition(coalition)})."
        )
    return coalition, preferred
