from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from qingcloud_csi_disk.core.exceptions import (
    MalformedOptionError,
    OptionError,
    UnsupportedFilesystemError,
    UnsupportedReplicaError,
    UnsupportedVolumeTypeError,
)
from qingcloud_csi_disk.core.resolver import default_storage_class, resolve_storage_class
from qingcloud_csi_disk.models.resources import Topology
from qingcloud_csi_disk.models.results import StorageClassConfig
from qingcloud_csi_disk.registry.instance_types import InstanceType
from qingcloud_csi_disk.registry.volume_types import DEFAULT_VOLUME_TYPE, VolumeType


def test_empty_options_use_defaults():
    sc = resolve_storage_class({})
    assert sc.volume_type == DEFAULT_VOLUME_TYPE
    assert sc.fs_type == "ext4"
    assert sc.replica == 2
    assert sc.tags == ()


def test_all_options():
    sc = resolve_storage_class(
        {"type": "100", "fsType": "ext4", "replica": "1", "tags": "a, b ,c"}
    )
    assert sc.volume_type == VolumeType.STANDARD
    assert sc.volume_type_name == "Standard"
    assert sc.fs_type == "ext4"
    assert sc.replica == 1
    assert sc.tags == ("a", "b", "c")


def test_keys_are_case_insensitive_values_are_not():
    sc = resolve_storage_class({"TYPE": "5", "FsType": "xfs", "Replica": "2", "TAGS": "Prod"})
    assert sc.volume_type == VolumeType.NEONSAN
    assert sc.fs_type == "xfs"
    assert sc.tags == ("Prod",)
    with pytest.raises(UnsupportedFilesystemError):
        resolve_storage_class({"fstype": "XFS"})


def test_unknown_keys_are_ignored():
    sc = resolve_storage_class({"maxSize": "100", "csi.storage.k8s.io/fstype": "btrfs", "type": "200"})
    assert sc.volume_type == VolumeType.SSD_ENTERPRISE


def test_unsupported_volume_type():
    with pytest.raises(UnsupportedVolumeTypeError) as exc:
        resolve_storage_class({"type": "9999"})
    assert exc.value.field == "type"
    assert exc.value.value == 9999
    with pytest.raises(UnsupportedVolumeTypeError):
        resolve_storage_class({"type": "-1"})


@pytest.mark.parametrize("raw", ["", "abc", "1.5", " 100", "1_00", "100\n"])
def test_malformed_volume_type(raw):
    with pytest.raises(MalformedOptionError) as exc:
        resolve_storage_class({"type": raw})
    assert exc.value.field == "type"
    assert exc.value.value == raw


def test_unsupported_filesystem():
    with pytest.raises(UnsupportedFilesystemError) as exc:
        resolve_storage_class({"fsType": "ntfs"})
    assert exc.value.field == "fsType"
    assert exc.value.value == "ntfs"


def test_empty_filesystem_means_default():
    assert resolve_storage_class({"fsType": ""}).fs_type == "ext4"


@pytest.mark.parametrize("raw", ["0", "3", "-2"])
def test_unsupported_replica(raw):
    with pytest.raises(UnsupportedReplicaError) as exc:
        resolve_storage_class({"replica": raw})
    assert exc.value.field == "replica"
    assert exc.value.value == int(raw)


def test_malformed_replica():
    with pytest.raises(MalformedOptionError):
        resolve_storage_class({"replica": "two"})


def test_tags_keep_order_and_duplicates():
    sc = resolve_storage_class({"tags": "b,a,\tb , c\n"})
    assert sc.tags == ("b", "a", "b", "c")
    assert resolve_storage_class({"tags": ""}).tags == ()
    assert resolve_storage_class({"tags": "   "}).tags == ()
    assert resolve_storage_class({"tags": "a,,b"}).tags == ("a", "", "b")


def test_topology_preferred_volume_type():
    topo = Topology(instance_type=InstanceType.HIGH_PERFORMANCE)
    sc = resolve_storage_class({}, topo)
    assert sc.volume_type == VolumeType.HIGH_PERFORMANCE

    topo = Topology(instance_type=InstanceType.ENTERPRISE2)
    assert resolve_storage_class({}, topo).volume_type == VolumeType.SSD_ENTERPRISE


def test_explicit_type_wins_over_topology():
    topo = Topology(instance_type=InstanceType.HIGH_PERFORMANCE)
    sc = resolve_storage_class({"type": "2"}, topo)
    assert sc.volume_type == VolumeType.HIGH_CAPACITY


def test_unregistered_instance_type_falls_back(caplog):
    topo = Topology(instance_type=4242)
    with caplog.at_level(logging.INFO, logger="qingcloud_csi_disk.core.resolver"):
        sc = resolve_storage_class({}, topo)
    assert sc.volume_type == DEFAULT_VOLUME_TYPE
    assert any("4242" in r.getMessage() and "Standard" in r.getMessage() for r in caplog.records)


def test_conflicting_duplicate_keys_rejected():
    with pytest.raises(MalformedOptionError):
        resolve_storage_class({"type": "100", "TYPE": "5"})
    sc = resolve_storage_class({"type": "5", "TYPE": "5"})
    assert sc.volume_type == VolumeType.NEONSAN


def test_conflicting_keys_error_does_not_depend_on_order():
    a = {"tags": "x", "TAGS": "y"}
    b = {"TAGS": "y", "tags": "x"}
    with pytest.raises(MalformedOptionError) as exc_a:
        resolve_storage_class(a)
    with pytest.raises(MalformedOptionError) as exc_b:
        resolve_storage_class(b)
    assert str(exc_a.value) == str(exc_b.value)
    assert exc_a.value.value == exc_b.value.value == ("x", "y")
    assert exc_a.value.field == "tags"
    assert "TAGS, tags" in str(exc_a.value)


def test_out_of_range_volume_type_is_malformed():
    with pytest.raises(MalformedOptionError):
        resolve_storage_class({"type": "99999999999999999999"})


def test_key_order_does_not_matter():
    items = [("tags", "x,y"), ("replica", "1"), ("fsType", "xfs"), ("type", "3")]
    a = resolve_storage_class(dict(items))
    b = resolve_storage_class(dict(reversed(items)))
    assert a == b


def test_first_failing_field_is_reported_deterministically():
    opts = {"replica": "7", "fsType": "zfs", "type": "9999"}
    with pytest.raises(UnsupportedVolumeTypeError):
        resolve_storage_class(opts)
    with pytest.raises(UnsupportedFilesystemError):
        resolve_storage_class({"replica": "7", "fsType": "zfs"})


def test_errors_share_option_error_base():
    with pytest.raises(OptionError):
        resolve_storage_class({"replica": "9"})


def test_resolution_is_idempotent():
    opts = {"type": "6", "fsType": "ext3", "replica": "1", "tags": "a,b,a"}
    first = resolve_storage_class(opts)
    second = resolve_storage_class(opts)
    assert first == second
    again = resolve_storage_class(first.to_parameters())
    assert again == first


def test_config_is_immutable():
    sc = resolve_storage_class({})
    with pytest.raises(ValidationError):
        sc.replica = 1  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"fs_type": "ntfs"},
        {"replica": 7},
        {"tags": ["a b"]},
        {"tags": ["a,b"]},
    ],
)
def test_config_rejects_invalid_direct_construction(kwargs):
    fields = {"volume_type": 100, "fs_type": "ext4", "replica": 2, "tags": ()}
    fields.update(kwargs)
    with pytest.raises(ValidationError):
        StorageClassConfig(**fields)


def test_config_accepts_empty_fs_type_and_empty_tag():
    sc = StorageClassConfig(volume_type=100, fs_type="", replica=1, tags=["a", ""])
    assert sc.fs_type == ""
    assert sc.tags == ("a", "")


def test_default_storage_class():
    sc = default_storage_class(VolumeType.NEONSAN_HDD)
    assert sc.volume_type == VolumeType.NEONSAN_HDD
    assert sc.fs_type == "ext4"
    assert sc.replica == 2
    assert sc.tags == ()
    with pytest.raises(UnsupportedVolumeTypeError):
        default_storage_class(1)
