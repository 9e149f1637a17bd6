"""CLI のテスト"""

from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from notion_chirpy.cli import cli
from notion_chirpy.errors import ConfigError
from notion_chirpy.models import SyncReport


class TestSyncCommand:
    @patch("notion_chirpy.cli.run_sync")
    @patch("notion_chirpy.cli.create_client")
    @patch("notion_chirpy.cli.load_config")
    def test_success(self, mock_load, mock_client, mock_run, mock_config, tmp_path):
        mock_load.return_value = mock_config
        mock_run.return_value = SyncReport()

        result = CliRunner().invoke(cli, ["sync", "--posts-dir", str(tmp_path / "out"), "--math"])

        assert result.exit_code == 0
        config = mock_run.call_args.args[0]
        assert config.posts_dir == tmp_path / "out"
        assert config.math is True

    @patch("notion_chirpy.cli.run_sync")
    @patch("notion_chirpy.cli.create_client")
    @patch("notion_chirpy.cli.load_config")
    def test_failure_exits_1(self, mock_load, mock_client, mock_run, mock_config):
        """同期中の例外は終了コード 1 になること"""
        mock_load.return_value = mock_config
        mock_run.side_effect = RuntimeError("network down")

        result = CliRunner().invoke(cli, ["sync"])

        assert result.exit_code == 1

    @patch("notion_chirpy.cli.run_sync")
    @patch("notion_chirpy.cli.create_client")
    @patch("notion_chirpy.cli.load_config")
    def test_config_error_exits_1(self, mock_load, mock_client, mock_run, mock_config):
        mock_load.return_value = mock_config
        mock_run.side_effect = ConfigError("no data source")

        result = CliRunner().invoke(cli, ["sync"])

        assert result.exit_code == 1

    def test_missing_env_exits_1(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("NOTION_API_KEY", raising=False)
        monkeypatch.delenv("NOTION_DATABASE_ID", raising=False)

        result = CliRunner().invoke(cli, ["sync"])

        assert result.exit_code == 1


class TestCheckCommand:
    @patch("notion_chirpy.cli.PostSource")
    @patch("notion_chirpy.cli.create_client")
    @patch("notion_chirpy.cli.load_config")
    def test_all_ok(self, mock_load, mock_client, mock_source, mock_config):
        mock_load.return_value = mock_config
        source = MagicMock()
        source.check_access.return_value = True
        source.resolve_data_source_id.return_value = "ds-1"
        mock_source.return_value = source

        result = CliRunner().invoke(cli, ["check"])

        assert result.exit_code == 0

    @patch("notion_chirpy.cli.PostSource")
    @patch("notion_chirpy.cli.create_client")
    @patch("notion_chirpy.cli.load_config")
    def test_no_access(self, mock_load, mock_client, mock_source, mock_config):
        mock_load.return_value = mock_config
        source = MagicMock()
        source.check_access.return_value = False
        mock_source.return_value = source

        result = CliRunner().invoke(cli, ["check"])

        assert result.exit_code == 1
        source.resolve_data_source_id.assert_not_called()
