"""Tests for shopify_source_shared.output_manager."""

import json
import os
from datetime import datetime, timedelta

import pytest

from shopify_source_shared.output_manager import OutputManager


def test_folder_name_format():
    manager = OutputManager("/tmp/out", "Shopify Storefront/acme", now=datetime(2026, 10, 19, 14, 30))
    assert manager.folder_name == "20261019_1430_Shopify_Storefront_acme"


def test_create_timestamped_dir(tmp_path):
    manager = OutputManager(str(tmp_path), "Shopify_Storefront", now=datetime(2026, 10, 19, 9, 5))
    path = manager.create_timestamped_dir()
    assert os.path.isdir(path)
    assert path == os.path.join(str(tmp_path), "20261019_0905_Shopify_Storefront")
    assert manager.current_dir == path


def test_get_output_path_requires_dir():
    manager = OutputManager("/tmp/out", "Shopify_Storefront")
    with pytest.raises(RuntimeError):
        manager.get_output_path("nodes.json")


def test_write_json(tmp_path):
    manager = OutputManager(str(tmp_path), "Shopify_Storefront")
    manager.create_timestamped_dir()
    path = manager.write_json("sourcing_results.json", {"success": True})
    with open(path) as f:
        assert json.load(f) == {"success": True}


def _make_run_folder(base, when, label="Shopify_Storefront"):
    path = os.path.join(str(base), f"{when.strftime('%Y%m%d_%H%M')}_{label}")
    os.makedirs(path)
    return path


def test_cleanup_removes_only_expired_run_folders(tmp_path):
    old = _make_run_folder(tmp_path, datetime.now() - timedelta(days=45))
    recent = _make_run_folder(tmp_path, datetime.now() - timedelta(days=2))
    unrelated = os.path.join(str(tmp_path), "keep-me")
    os.makedirs(unrelated)

    manager = OutputManager(str(tmp_path), "Shopify_Storefront", retention_days=30)
    assert manager.cleanup_old_folders() == 1

    assert not os.path.exists(old)
    assert os.path.isdir(recent)
    assert os.path.isdir(unrelated)


def test_cleanup_disabled_with_zero_retention(tmp_path):
    old = _make_run_folder(tmp_path, datetime.now() - timedelta(days=400))
    manager = OutputManager(str(tmp_path), "Shopify_Storefront", retention_days=0)
    assert manager.cleanup_old_folders() == 0
    assert os.path.isdir(old)


def test_cleanup_missing_base_dir(tmp_path):
    manager = OutputManager(str(tmp_path / "absent"), "Shopify_Storefront")
    assert manager.cleanup_old_folders() == 0
