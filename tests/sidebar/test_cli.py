"""Tests for the step-sidebar command line."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from step_sidebar.__main__ import main
from step_sidebar.models import InMemoryFormStore

BASE = "/workflows/edit/tpl-1"


@pytest.fixture
def form_file(tmp_path: Path, store: InMemoryFormStore) -> Path:
    path = tmp_path / "form.yaml"
    path.write_text(store.to_yaml(), encoding="utf-8")
    return path


@pytest.mark.usefixtures("restore_logging")
class TestMain:
    """Tests for main()."""

    def test_prints_snapshot(
        self,
        form_file: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.chdir(tmp_path)

        exit_code = main([str(form_file), f"{BASE}/email/step-email/variants", "--base-path", BASE])

        assert exit_code == 0
        snapshot = yaml.safe_load(capsys.readouterr().out)
        assert snapshot["context"] == "variants_list"
        assert snapshot["step_id"] == "step-email"
        assert snapshot["display_name"] == "Welcome email"
        assert [a["key"] for a in snapshot["actions"]] == ["add-variant", "edit-conditions", "delete"]

    def test_draft_path(
        self,
        form_file: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.chdir(tmp_path)

        exit_code = main(
            [str(form_file), f"{BASE}/sms/step-sms/variants/create", "--base-path", BASE, "--readonly"]
        )

        assert exit_code == 0
        snapshot = yaml.safe_load(capsys.readouterr().out)
        assert snapshot["context"] == "new_variant_draft"
        assert snapshot["display_name"] == "V1 SMS reminder"
        assert snapshot["conditions_panel_open"] is True

    def test_missing_form_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        assert main([str(tmp_path / "absent.yaml"), BASE]) == 1

    def test_undecodable_form_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        form_path = tmp_path / "form.yaml"
        form_path.write_bytes(b"\xff\xfe steps: []\n")

        assert main([str(form_path), f"{BASE}/email/s1", "--base-path", BASE]) == 1

    def test_malformed_settings_do_not_stop_the_cli(
        self,
        form_file: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".step-sidebar.yaml").write_text("sidebar:\n  - readonly\n", encoding="utf-8")

        exit_code = main([str(form_file), f"{BASE}/email/step-email", "--base-path", BASE])

        assert exit_code == 0
        assert yaml.safe_load(capsys.readouterr().out)["context"] == "step"
