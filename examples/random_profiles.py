"""Compare the PVC with successive elimination on random profiles."""

from vetocore import generate, vetorules
import numpy as np


generate.rng = np.random.default_rng(24121838)  # seed for random number generator (optional)

# specify dimensions of generated profiles
num_alt = 5
num_voters = 6
num_profiles = 20

prob_distributions = [
    {"id": "IC"},
    {"id": "Mallows", "dispersion": 0.5},
    {"id": "Urn", "replace": 0.5},
    {"id": "Single-Peaked"},
]

for prob_distribution in prob_distributions:
    same = 0
    pvc_sizes = []
    for _ in range(num_profiles):
        profile = generate.random_profile(num_voters, num_alt, prob_distribution)
        pvc = vetorules.compute_pvc(profile)
        successive = vetorules.compute_pvc_successive(profile)
        pvc_sizes.append(len(pvc))
        if pvc == successive:
            same += 1
    print(
        f"{prob_distribution['id']:>13}: average PVC size {np.mean(pvc_sizes):.2f}, "
        f"successive elimination coincides in {same} of {num_profiles} profiles"
    )
