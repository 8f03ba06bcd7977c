"""
Read and write data to files.

Two data formats are supported:
1. the Preflib format for strict orders (soi or soc), and
2. .pvc.yaml files (profiles together with expected results).
"""

import os
import ruamel.yaml
import preflibtools.instances as preflib

from vetocore.preferences import Profile, generate_alternatives
from vetocore import misc


#: Valid keys for .pvc.yaml files.
PVC_YAML_VALID_KEYS = [
    "description",
    "alternatives",
    "profile",
    "compute",
    "veto",
]


class MalformattedFileException(Exception):
    """Malformatted file (Preflib or .pvc.yaml)."""


def get_file_names(dir_name, filename_extensions=None):
    """
    List all file names in a directory that fit the specified filename extensions.

    .. important::

        Not recursive, i.e., does not look into sub-directories!

    Parameters
    ----------
        dir_name : str
            Path of directory to be searched for files.

        filename_extensions : list of str, optional
            File names must have one of these extensions.

    Returns
    -------
        list of str
            List of file names contained in the directory.
    """
    files = []
    for _, _, filenames in os.walk(dir_name):
        files = filenames
        break  # do not consider sub-directories
    if len(files) == 0:
        raise FileNotFoundError(f"No files found in {dir_name}")
    if filename_extensions:
        files = [
            f for f in files if any(f.endswith(extension) for extension in filename_extensions)
        ]
    return sorted(files)


def read_preflib_file(filename, complete_orders=False):
    """
    Read a Preflib file with strict orders (soi or soc).

    Each vote count in the Preflib file becomes the corresponding number of identical voters.

    Parameters
    ----------
        filename : str
            Name of the Preflib file.

        complete_orders : bool, default=False
            Append unranked alternatives to incomplete orders (soi files).

            Unranked alternatives are appended in the order of the file's alternatives.
            If False, incomplete orders are kept as they are; the resulting rankings
            are invalid and rules refuse the profile.

    Returns
    -------
        vetocore.preferences.Profile
            Preference profile extracted from Preflib file.
    """
    try:
        preflib_inst = preflib.get_parsed_instance(filename)
    except Exception as e:
        raise MalformattedFileException(
            "The preflib parser returned the following error: " + str(e)
        )

    if not isinstance(preflib_inst, preflib.OrdinalInstance):
        raise ValueError("Only ordinal preferences can be converted from PrefLib")

    alt_ids = sorted(preflib_inst.alternatives_name.keys())
    alt_names = [preflib_inst.alternatives_name[alt_id] for alt_id in alt_ids]
    name_of = dict(zip(alt_ids, alt_names))
    profile = Profile(len(alt_names), alt_names=alt_names)

    for order, count in preflib_inst.multiplicity.items():
        if any(len(indifference_class) != 1 for indifference_class in order):
            raise MalformattedFileException(
                f"{filename} contains an order with ties ({order}), "
                f"only strict orders are supported."
            )
        ranking = [name_of[indifference_class[0]] for indifference_class in order]
        if complete_orders:
            ranking.extend(alt for alt in alt_names if alt not in ranking)
        profile.add_voters([ranking] * count)

    return profile


def read_preflib_files_from_dir(dir_name, complete_orders=False):
    """
    Read all Preflib files (soi or soc) in a given directory.

    Parameters
    ----------
        dir_name : str
            Path of the directory to be searched for Preflib files.

        complete_orders : bool, default=False
            Append unranked alternatives to incomplete orders (see `read_preflib_file()`).

    Returns
    -------
        dict
            Dictionary with file names as keys and profiles (class vetocore.preferences.Profile)
            as values.
    """
    files = get_file_names(dir_name, filename_extensions=[".soi", ".soc"])

    profiles = {}
    for f in files:
        profile = read_preflib_file(os.path.join(dir_name, f), complete_orders=complete_orders)
        profiles[f] = profile
    return profiles


def write_profile_to_preflib_soc_file(filepath, profile):
    """
    Write a profile to a Preflib file with strict complete orders (.soc).

    Parameters
    ----------
        filepath : str
            File path of the Preflib file.

        profile : vetocore.preferences.Profile
            Profile to be written; all rankings have to be valid.

    Returns
    -------
        None
    """
    if not profile.is_valid():
        raise ValueError("Only profiles with valid rankings can be written to a .soc file.")

    preflib_inst = preflib.OrdinalInstance()
    preflib_inst.data_type = "soc"
    preflib_inst.file_name = os.path.basename(filepath)
    preflib_inst.num_alternatives = profile.num_alt
    alt_ids = {}
    for i, alt in enumerate(profile.alternatives):
        alt_ids[alt] = i + 1
        preflib_inst.alternatives_name[i + 1] = str(alt)

    for ranking in profile:
        order = tuple((alt_ids[alt],) for alt in ranking)
        if order not in preflib_inst.orders:
            preflib_inst.orders.append(order)
            preflib_inst.multiplicity[order] = 1
        else:
            preflib_inst.multiplicity[order] += 1
    preflib_inst.recompute_cardinality_param()
    preflib_inst.write(filepath)


def _yaml_flow_style_list(x):
    yamllist = ruamel.yaml.comments.CommentedSeq(x)
    yamllist.fa.set_flow_style()
    return yamllist


def read_vetocore_yaml_file(filename):
    """
    Read contents of a vetocore yaml file (ending with .pvc.yaml).

    Parameters
    ----------
        filename : str
            File name of the .pvc.yaml file.

    Returns
    -------
        profile : vetocore.preferences.Profile
            A profile.

        compute_instances : list of dict
            A list of compute instances, which are dictionaries.

            Compute instances can be passed to `vetorules.compute`.

        veto_instances : list of dict
            A list of expected veto coalitions, which are dictionaries with keys
            `"alternative"`, `"coalition"` and `"preferred"`.

        data : dict
            The YAML data from `filename`.
    """
    yaml = ruamel.yaml.YAML(typ="safe", pure=True)
    with open(filename) as inputfile:
        data = yaml.load(inputfile)
    if "profile" not in data.keys():
        raise MalformattedFileException(f"{filename} does not contain a profile.")
    for key in data.keys():
        if key not in PVC_YAML_VALID_KEYS:
            raise MalformattedFileException(f'Key "{key}" is not valid (undefined).')

    rankings = data["profile"]
    if "alternatives" in data.keys():
        alternatives = data["alternatives"]
    elif rankings:
        alternatives = generate_alternatives(len(rankings[0]))
    else:
        alternatives = []
    profile = Profile(len(alternatives), alt_names=alternatives)
    profile.add_voters(rankings)

    if "compute" in data.keys():
        compute_instances = data["compute"]
    else:
        compute_instances = []
    for compute_instance in compute_instances:
        if "rule_id" not in compute_instance.keys():
            raise MalformattedFileException('Each rule instance (dict) requires key "rule_id".')
        compute_instance["profile"] = profile
        if "result" in compute_instance.keys():
            if compute_instance["result"] is not None:
                compute_instance["result"] = misc.AlternativeSet(compute_instance["result"])

    if "veto" in data.keys():
        veto_instances = data["veto"]
    else:
        veto_instances = []
    for veto_instance in veto_instances:
        if "alternative" not in veto_instance.keys():
            raise MalformattedFileException(
                'Each veto instance (dict) requires key "alternative".'
            )
        veto_instance["coalition"] = misc.CoalitionSet(
            veto_instance.get("coalition") or [], num_voters=len(profile)
        )
        veto_instance["preferred"] = misc.AlternativeSet(
            veto_instance.get("preferred") or [], universe=profile.alternatives
        )

    return profile, compute_instances, veto_instances, data


def write_vetocore_instance_to_yaml_file(
    filename, profile, compute_instances=None, veto_instances=None, description=None
):
    """
    Write vetocore instance to a vetocore yaml file.

    Parameters
    ----------
        filename : str
            File name of the .pvc.yaml file.

        profile : vetocore.preferences.Profile
            A profile.

        compute_instances : list of dict, optional
            A list of compute instances, which are dictionaries.

            Compute instances can be passed to `vetorules.compute`.

        veto_instances : list of dict or list of vetorules.VetoResult, optional
            Expected veto coalitions.

        description : str, optional
            An optional description of the data.
    """
    data = {}
    if description is not None:
        data["description"] = description
    data["alternatives"] = _yaml_flow_style_list(list(profile.alternatives))
    data["profile"] = [_yaml_flow_style_list(list(ranking)) for ranking in profile]
    position = {alt: i for i, alt in enumerate(profile.alternatives)}

    if compute_instances is not None:
        modified_compute_instances = []
        for compute_instance in compute_instances:
            if "rule_id" not in compute_instance.keys():
                raise ValueError('Each compute instance (dict) requires key "rule_id".')
            mod_compute_instance = {"rule_id": compute_instance["rule_id"]}
            if "result" in compute_instance.keys():
                if compute_instance["result"] is None:
                    mod_compute_instance["result"] = None
                else:
                    mod_compute_instance["result"] = _yaml_flow_style_list(
                        sorted(compute_instance["result"], key=lambda alt: position[alt])
                    )
            if "profile" in compute_instance.keys():  # this is superfluous information
                # check that the profile is the same as the main profile
                if str(compute_instance["profile"]) != str(profile):
                    raise ValueError(
                        "Compute instance contained a profile different from "
                        "the main profile passed to write_vetocore_instance_to_yaml_file()."
                    )
            for key in compute_instance.keys():
                # add other parameters to dictionary
                if key in ["rule_id", "result", "profile"]:
                    continue
                mod_compute_instance[key] = compute_instance[key]
            modified_compute_instances.append(mod_compute_instance)
        data["compute"] = modified_compute_instances

    if veto_instances is not None:
        modified_veto_instances = []
        for veto_instance in veto_instances:
            if not isinstance(veto_instance, dict):
                # a VetoResult
                veto_instance = {
                    "alternative": veto_instance.alternative,
                    "coalition": veto_instance.coalition,
                    "preferred": veto_instance.preferred,
                }
            modified_veto_instances.append(
                {
                    "alternative": veto_instance["alternative"],
                    "coalition": _yaml_flow_style_list(sorted(veto_instance["coalition"])),
                    "preferred": _yaml_flow_style_list(
                        sorted(veto_instance["preferred"], key=lambda alt: position[alt])
                    ),
                }
            )
        data["veto"] = modified_veto_instances

    yaml = ruamel.yaml.YAML()
    yaml.width = 120
    with open(filename, "w") as outfile:
        yaml.dump(data, outfile)
