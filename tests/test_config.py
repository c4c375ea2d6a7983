"""Tests for configuration loading and the breakdown policy."""
from __future__ import annotations

from pathlib import Path

import pytest

from breakdown.category import BUILTIN_CATEGORIES, BreakdownConfigError
from common.config_loader import load_all, load_yaml, save_yaml
from policy.breakdown_policy import BreakdownPolicy

ROOT = Path(__file__).resolve().parents[1]


class TestConfigLoader:
    """YAML loading."""

    def test_shipped_policy_loads(self):
        cfg = load_all(str(ROOT / "config" / "breakdown_policy.yaml"))
        pol = BreakdownPolicy(cfg.policy)

        assert pol.categories["traffic"] == BUILTIN_CATEGORIES["traffic"]
        assert pol.categories["revenue"] == BUILTIN_CATEGORIES["revenue"]

    def test_empty_file_is_empty_dict(self, tmp_path):
        p = tmp_path / "empty.yaml"
        p.write_text("", encoding="utf-8")
        assert load_yaml(p) == {}

    def test_save_round_trip_keeps_order(self, tmp_path):
        p = tmp_path / "listing.yaml"
        save_yaml(p, {"b": 1, "a": {"c": 2.5}})
        assert list(load_yaml(p)) == ["b", "a"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_all(str(tmp_path / "nope.yaml"))


class TestBreakdownPolicy:
    """Category declarations."""

    def test_builtins_without_config(self):
        pol = BreakdownPolicy({})
        assert list(pol.categories) == ["traffic", "revenue"]
        assert pol.default_value == 0.0

    def test_custom_category(self):
        pol = BreakdownPolicy({
            "categories": {
                "customers": {
                    "label": "Customer segments",
                    "path": "digitalAssetDetails.customers",
                    "slots": ["smb", "enterprise"],
                },
            },
        })

        cat = pol.categories["customers"]

        assert cat.slots == ("smb", "enterprise")
        assert cat.error_path == "digitalAssetDetails.customers.totalPercentageError"
        assert cat.success_message == "Customer segments adjusted to total 100%"

    def test_duplicate_slots_rejected(self):
        pol = BreakdownPolicy({
            "categories": {"x": {"path": "a.b", "slots": ["one", "one"]}},
        })
        with pytest.raises(BreakdownConfigError):
            pol.categories

    def test_missing_path_rejected(self):
        pol = BreakdownPolicy({"categories": {"x": {"slots": ["one"]}}})
        with pytest.raises(BreakdownConfigError):
            pol.categories

    def test_select_unknown(self):
        with pytest.raises(KeyError):
            BreakdownPolicy({}).select(["equity"])

    def test_select_all_by_default(self):
        assert len(BreakdownPolicy({}).select(None)) == 2

    def test_unset_default_value(self):
        assert BreakdownPolicy({"form": {"default_value": None}}).default_value is None
