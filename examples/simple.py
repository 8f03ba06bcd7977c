"""
Very simple example (compute the proportional veto core)
"""

from vetocore.preferences import Profile
from vetocore import vetorules
from vetocore.output import output, INFO

output.set_verbosity(INFO)

profile = Profile(num_alt=4)
profile.add_voters(["abcd", "badc", "cdab"])
print(
    f"Computing the Proportional Veto Core (PVC)\n"
    f"given the following {profile}\n"
)
pvc = vetorules.compute_pvc(profile)

print("For comparison, successive elimination yields:\n")
successive = vetorules.compute_pvc_successive(profile)
