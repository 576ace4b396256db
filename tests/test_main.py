"""Tests for livewire_docs.__main__ — CLI dispatcher and subcommands."""

import json
import sys
from unittest.mock import patch

import pytest

from livewire_docs.config import settings
from livewire_docs.errors import UpdateError
from livewire_docs.models import Directive, UpdateReport


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "data_dir", str(tmp_path))
    return tmp_path


class TestCli:
    """CLI dispatcher routes subcommands correctly."""

    @patch("livewire_docs.server.main")
    def test_default_runs_server(self, mock_main):
        from livewire_docs.__main__ import _cli

        with patch.object(sys, "argv", ["livewire-docs"]):
            _cli()
        mock_main.assert_called_once()

    @patch("livewire_docs.server.main")
    def test_unknown_arg_runs_server(self, mock_main):
        from livewire_docs.__main__ import _cli

        with patch.object(sys, "argv", ["livewire-docs", "--help"]):
            _cli()
        mock_main.assert_called_once()

    def test_update_subcommand(self):
        with patch("livewire_docs.__main__._update", return_value=0) as mock_update:
            from livewire_docs.__main__ import _cli

            with patch.object(sys, "argv", ["livewire-docs", "update", "forms", "--dry-run"]):
                with pytest.raises(SystemExit) as exc:
                    _cli()
        assert exc.value.code == 0
        mock_update.assert_called_once_with(["forms", "--dry-run"])

    def test_reindex_subcommand(self):
        with patch("livewire_docs.__main__._reindex", return_value=0) as mock_reindex:
            from livewire_docs.__main__ import _cli

            with patch.object(sys, "argv", ["livewire-docs", "reindex"]):
                with pytest.raises(SystemExit):
                    _cli()
        mock_reindex.assert_called_once()

    def test_directives_subcommand(self):
        with patch("livewire_docs.__main__._directives", return_value=0) as mock_directives:
            from livewire_docs.__main__ import _cli

            with patch.object(sys, "argv", ["livewire-docs", "directives"]):
                with pytest.raises(SystemExit):
                    _cli()
        mock_directives.assert_called_once()


class TestUpdate:
    def test_full_update(self, data_dir, capsys):
        from livewire_docs.__main__ import _update

        report = UpdateReport(discovered=2, succeeded=2, data_dir=str(data_dir))
        with (
            patch("livewire_docs.sources.fetcher.DocsClient"),
            patch("livewire_docs.updater.update_all", return_value=report),
        ):
            assert _update([]) == 0

        out = capsys.readouterr().out
        assert "Update complete: 2 succeeded, 0 failed" in out
        assert f"Data saved to: {data_dir}" in out

    def test_single_dry_run_prints_document(self, data_dir, capsys, document_factory):
        from livewire_docs.__main__ import _update

        doc = document_factory("forms")
        with (
            patch("livewire_docs.sources.fetcher.DocsClient"),
            patch("livewire_docs.updater.update_single", return_value=doc) as mock_single,
        ):
            assert _update(["forms", "--dry-run"]) == 0

        assert mock_single.call_args.kwargs == {"dry_run": True}
        assert json.loads(capsys.readouterr().out)["slug"] == "forms"

    def test_failure_exit_code(self, data_dir, capsys):
        from livewire_docs.__main__ import _update

        with (
            patch("livewire_docs.sources.fetcher.DocsClient"),
            patch("livewire_docs.updater.update_single", side_effect=UpdateError("Failed to scrape: x")),
        ):
            assert _update(["x"]) == 1

        assert "Error: Failed to scrape: x" in capsys.readouterr().err


def test_reindex_command(data_dir, capsys, document_factory):
    from livewire_docs.__main__ import _reindex
    from livewire_docs.store import DocStore

    DocStore(data_dir).save("essentials", "forms", document_factory("forms"))

    assert _reindex() == 0
    assert "Index rebuilt: 1 topics, 0 directives, 0 back-links added" in capsys.readouterr().out
    assert (data_dir / "index.json").is_file()


def test_directives_command(data_dir, capsys):
    from livewire_docs.__main__ import _directives

    with patch(
        "livewire_docs.updater.update_directives",
        return_value=[Directive(name="wire:model"), Directive(name="wire:click")],
    ):
        assert _directives() == 0
    assert "Generated 2 directive files." in capsys.readouterr().out
