"""
Unit tests for vetocore/fileio.py.
"""

import pytest
import os
from vetocore import fileio, vetorules
from vetocore.preferences import Profile, Ranking

DATADIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")


def test_read_soc_file():
    profile = fileio.read_preflib_file(os.path.join(DATADIR, "test1.soc"))
    assert profile.alternatives == ["a", "b", "c"]
    assert len(profile) == 5
    assert [str(ranking) for ranking in profile] == ["a > b > c"] * 3 + ["c > b > a"] * 2
    assert profile.is_valid()
    assert vetorules.compute_pvc(profile) == {"a", "b"}
    assert vetorules.find_veto_coalition("c", profile).coalition == {0, 1, 2}
    assert vetorules.compute_pvc_successive(profile) == {"a", "b"}


def test_read_soi_file():
    profile = fileio.read_preflib_file(os.path.join(DATADIR, "test2.soi"))
    assert len(profile) == 4
    assert profile[2] == Ranking(["b", "a"])
    assert profile[3] == Ranking(["c"])
    assert sorted(profile.invalid_voters().keys()) == [2, 3]
    assert vetorules.compute_pvc(profile) is None


def test_read_soi_file_complete_orders():
    profile = fileio.read_preflib_file(os.path.join(DATADIR, "test2.soi"), complete_orders=True)
    assert len(profile) == 4
    assert profile[2] == Ranking(["b", "a", "c"])
    assert profile[3] == Ranking(["c", "a", "b"])
    assert profile.is_valid()


def test_read_file_with_ties():
    with pytest.raises(fileio.MalformattedFileException):
        fileio.read_preflib_file(os.path.join(DATADIR, "test3.toc"))


def test_readfromdir():
    profiles = fileio.read_preflib_files_from_dir(DATADIR)
    assert sorted(profiles.keys()) == ["test1.soc", "test2.soi"]
    for filename, profile in profiles.items():
        assert isinstance(filename, str)
        assert isinstance(profile, Profile)
        assert profile.num_alt == 3


def test_read_nonexisting_file():
    with pytest.raises(fileio.MalformattedFileException):
        fileio.read_preflib_file(os.path.join(DATADIR, "doesnotexist.soc"))


def test_get_file_names(tmp_path):
    with pytest.raises(FileNotFoundError):
        fileio.get_file_names(str(tmp_path))
    assert fileio.get_file_names(DATADIR, filename_extensions=[".toc"]) == ["test3.toc"]


def test_write_and_read_soc_file(tmp_path):
    profile = Profile(4)
    profile.add_voters(["abcd", "abcd", "dcba", "badc"])
    filename = str(tmp_path / "written.soc")
    fileio.write_profile_to_preflib_soc_file(filename, profile)
    profile2 = fileio.read_preflib_file(filename)
    assert profile2.alternatives == profile.alternatives
    assert sorted(str(ranking) for ranking in profile2) == sorted(
        str(ranking) for ranking in profile
    )


def test_write_invalid_profile_to_soc_file(tmp_path):
    profile = Profile(3)
    profile.add_voter("aab")
    with pytest.raises(ValueError):
        fileio.write_profile_to_preflib_soc_file(str(tmp_path / "invalid.soc"), profile)


def test_read_pvc_yaml_file():
    currdir = os.path.dirname(os.path.abspath(__file__))
    profile, compute_instances, veto_instances, data = fileio.read_vetocore_yaml_file(
        currdir + "/test_instances/instance-boundary.pvc.yaml"
    )
    assert profile.alternatives == ["a", "b", "c"]
    assert [str(ranking) for ranking in profile] == ["a > b > c", "c > b > a"]
    assert [instance["rule_id"] for instance in compute_instances] == [
        "veto-coalitions",
        "successive-elimination",
    ]
    for compute_instance in compute_instances:
        assert compute_instance["profile"] is profile
        assert compute_instance["result"] == {"b"}
    assert veto_instances[0]["alternative"] == "a"
    assert veto_instances[0]["coalition"] == {1}
    assert veto_instances[0]["preferred"] == {"b", "c"}
    assert "description" in data


def test_write_and_read_pvc_yaml_file(tmp_path):
    profile = Profile(4, alt_names=["w", "x", "z", "v"])
    profile.add_voters([["w", "x", "z", "v"], ["v", "z", "x", "w"], ["x", "w", "v", "z"]])
    pvc = vetorules.compute_pvc(profile)
    veto_instances = [
        vetorules.find_veto_coalition(alternative, profile)
        for alternative in profile.alternatives
    ]
    filename = str(tmp_path / "instance.pvc.yaml")
    fileio.write_vetocore_instance_to_yaml_file(
        filename,
        profile,
        compute_instances=[
            {"rule_id": "veto-coalitions", "result": pvc, "algorithm": "standard-fractions"}
        ],
        veto_instances=veto_instances,
        description="written by a unit test",
    )

    profile2, compute_instances, veto_instances2, data = fileio.read_vetocore_yaml_file(
        filename
    )
    assert profile2.alternatives == profile.alternatives
    assert list(profile2) == list(profile)
    assert data["description"] == "written by a unit test"
    assert compute_instances[0]["result"] == pvc
    assert compute_instances[0]["algorithm"] == "standard-fractions"
    vetorules.compute(**compute_instances[0])
    for veto_result, veto_instance in zip(veto_instances, veto_instances2):
        assert veto_instance["alternative"] == veto_result.alternative
        assert veto_instance["coalition"] == veto_result.coalition
        assert veto_instance["preferred"] == veto_result.preferred


def test_write_yaml_file_with_other_profile(tmp_path):
    profile = Profile.from_default_grid(3, 2)
    with pytest.raises(ValueError):
        fileio.write_vetocore_instance_to_yaml_file(
            str(tmp_path / "instance.pvc.yaml"),
            profile,
            compute_instances=[
                {"rule_id": "veto-coalitions", "profile": Profile.from_default_grid(3, 3)}
            ],
        )
    with pytest.raises(ValueError):
        fileio.write_vetocore_instance_to_yaml_file(
            str(tmp_path / "instance.pvc.yaml"), profile, compute_instances=[{"result": None}]
        )


def test_read_yaml_file_with_invalid_key(tmp_path):
    filename = tmp_path / "invalid.pvc.yaml"
    filename.write_text("profile:\n- [a, b]\n- [b, a]\nnum_seats: 2\n")
    with pytest.raises(fileio.MalformattedFileException):
        fileio.read_vetocore_yaml_file(str(filename))


def test_read_yaml_file_without_profile(tmp_path):
    filename = tmp_path / "invalid.pvc.yaml"
    filename.write_text("alternatives: [a, b]\n")
    with pytest.raises(fileio.MalformattedFileException):
        fileio.read_vetocore_yaml_file(str(filename))


def test_read_yaml_file_default_alternatives(tmp_path):
    filename = tmp_path / "default.pvc.yaml"
    filename.write_text("profile:\n- [c, b, a]\n- [a, b, c]\ncompute:\n- rule_id: veto-coalitions\n")
    profile, compute_instances, veto_instances, _ = fileio.read_vetocore_yaml_file(str(filename))
    assert profile.alternatives == ["a", "b", "c"]
    assert len(profile) == 2
    assert veto_instances == []
    assert vetorules.compute(**compute_instances[0]) == {"b"}
