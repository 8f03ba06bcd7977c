"""
Example for reading and writing Preflib files.
"""

import os
from vetocore import fileio
from vetocore import vetorules
from vetocore.misc import str_set_of_alternatives
from vetocore.preferences import Profile


currdir = os.path.dirname(os.path.abspath(__file__))


# Write a profile to a soc file
profile = Profile(4, "ABCD")
profile.add_voters(["ABCD", "ABCD", "DCBA", "BDCA", "CBAD"])
fileio.write_profile_to_preflib_soc_file(currdir + "/soc-files/new_example.soc", profile)


# Read a directory of Preflib files and compute the PVC for each profile
profiles = fileio.read_preflib_files_from_dir(currdir + "/soc-files/", complete_orders=True)
for filename, profile in profiles.items():
    print(f"Computing the PVC of {filename}")
    print("given a", profile)
    print("Output:")
    pvc = vetorules.compute_pvc(profile)
    print(str_set_of_alternatives(pvc, profile.alternatives))
    print("****************************************")


# Read a Preflib file with incomplete orders, unranked alternatives are appended
profile = fileio.read_preflib_file(currdir + "/soc-files/incomplete.soi", complete_orders=True)
print("Computing the PVC")
print("given a", profile)
print("Output:")
pvc = vetorules.compute_pvc(profile)
print(str_set_of_alternatives(pvc, profile.alternatives))
print("****************************************")
