# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for RegistryKey / RegistryItem."""
from __future__ import annotations

import dataclasses
import unittest

import pytest

from winregcli.core.exceptions import InvalidArchitecture, InvalidHive, InvalidKeyPath
from winregcli.registry.constants import HIVES, HKCU, HKLM, REG_SZ
from winregcli.registry.models import RegistryItem, RegistryKey


class TestRegistryKeyPath(unittest.TestCase):
    def test_local_path(self):
        ref = RegistryKey(hive=HKCU, key="\\Software\\X")
        self.assertEqual(ref.path, "HKCU\\Software\\X")

    def test_remote_path(self):
        ref = RegistryKey(host="fileserver", hive=HKLM, key="\\SOFTWARE")
        self.assertEqual(ref.path, "\\\\fileserver\\HKLM\\SOFTWARE")

    def test_root_path(self):
        for hive in HIVES:
            self.assertEqual(RegistryKey(hive=hive).path, hive)

    def test_defaults(self):
        ref = RegistryKey()
        self.assertEqual((ref.host, ref.hive, ref.key, ref.arch), ("", HKLM, "", None))

    def test_immutable(self):
        ref = RegistryKey(hive=HKCU)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            ref.key = "\\Other"  # type: ignore[misc]


class TestRegistryKeyNavigation(unittest.TestCase):
    def test_parent_of_nested(self):
        ref = RegistryKey(hive=HKCU, key="\\A\\B")
        self.assertEqual(ref.parent.key, "\\A")

    def test_parent_of_single_segment_is_root(self):
        self.assertEqual(RegistryKey(hive=HKCU, key="\\A").parent.key, "")

    def test_parent_of_root_is_root(self):
        self.assertEqual(RegistryKey(hive=HKCU).parent.key, "")

    def test_parent_keeps_host_hive_arch(self):
        ref = RegistryKey(host="h", hive=HKCU, key="\\A\\B", arch="x86")
        p = ref.parent
        self.assertEqual((p.host, p.hive, p.arch), ("h", HKCU, "x86"))

    def test_child(self):
        ref = RegistryKey(hive=HKCU, key="\\A").child("B")
        self.assertEqual(ref.key, "\\A\\B")


@pytest.mark.unit
class TestRegistryKeyValidation:
    def test_bad_hive(self):
        with pytest.raises(InvalidHive):
            RegistryKey(hive="HKEY_NOPE")

    @pytest.mark.parametrize("key", ["Software", "\\Software\\", "\\", "\\A\\\\B"])
    def test_bad_key(self, key):
        with pytest.raises(InvalidKeyPath):
            RegistryKey(hive=HKCU, key=key)

    @pytest.mark.parametrize("key", ["", "\\Software", "\\Software\\Microsoft\\Windows NT\\CurrentVersion", "\\SOFTWARE\\Classes\\.txt"])
    def test_good_key(self, key):
        assert RegistryKey(hive=HKLM, key=key).key == key

    def test_bad_arch(self):
        with pytest.raises(InvalidArchitecture):
            RegistryKey(hive=HKLM, arch="ia64")

    def test_empty_arch_means_none(self):
        assert RegistryKey(hive=HKLM, arch="").arch is None

    def test_validation_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            RegistryKey(hive="nope")


@pytest.mark.unit
class TestRegistryKeyParse:
    def test_short_hive(self):
        assert RegistryKey.parse("HKCU\\Software\\X") == RegistryKey(hive=HKCU, key="\\Software\\X")

    def test_long_hive(self):
        assert RegistryKey.parse("HKEY_LOCAL_MACHINE\\SOFTWARE").hive == HKLM

    def test_case_insensitive_hive(self):
        assert RegistryKey.parse("hkcu\\Software").hive == HKCU

    def test_remote(self):
        ref = RegistryKey.parse("\\\\srv\\HKLM\\SOFTWARE", arch="x64")
        assert (ref.host, ref.hive, ref.key, ref.arch) == ("srv", HKLM, "\\SOFTWARE", "x64")

    def test_trailing_separator_tolerated(self):
        assert RegistryKey.parse("HKCU\\Software\\").key == "\\Software"

    def test_hive_only(self):
        assert RegistryKey.parse("HKU").key == ""

    def test_malformed_remote(self):
        with pytest.raises(InvalidKeyPath):
            RegistryKey.parse("\\\\srv")


@pytest.mark.unit
def test_item_to_dict():
    item = RegistryItem(host="", hive=HKCU, key="\\X", name="n", type=REG_SZ, value="v")
    assert item.to_dict() == {
        "host": "",
        "hive": HKCU,
        "key": "\\X",
        "name": "n",
        "type": REG_SZ,
        "value": "v",
        "arch": None,
    }
