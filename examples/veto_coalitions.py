"""
Find a veto coalition for every alternative outside the PVC.
"""

from vetocore.preferences import Profile
from vetocore import vetorules
from vetocore.misc import str_coalition, str_set_of_alternatives

# a Condorcet cycle extended by a fourth alternative that everybody ranks last
profile = Profile(4, alt_names=["x1", "x2", "x3", "x4"])
profile.add_voters(
    [
        ["x1", "x2", "x3", "x4"],
        ["x2", "x3", "x1", "x4"],
        ["x3", "x1", "x2", "x4"],
    ]
)
print(profile.str_compact())

pvc = vetorules.compute_pvc(profile)
print(f"PVC: {str_set_of_alternatives(pvc, profile.alternatives)}\n")

for alternative in profile.alternatives:
    result = vetorules.find_veto_coalition(alternative, profile)
    if result:
        print(
            f"{alternative} is vetoed by {str_coalition(result.coalition)}, "
            f"who prefer {str_set_of_alternatives(result.preferred, profile.alternatives)}"
        )
        print(f"  voting power |T|/n = {result.voting_power}, veto size = {result.veto_size}")
    else:
        print(f"{alternative} cannot be vetoed")
