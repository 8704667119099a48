from unittest.mock import MagicMock, patch

from billrecon.cli.app import main_menu


class TestMainMenu:
    @patch("billrecon.cli.app._build_service")
    @patch("billrecon.cli.app.questionary")
    def test_exit(self, mock_q, mock_build):
        mock_build.return_value = MagicMock()
        mock_q.select.return_value.ask.return_value = "Exit"
        main_menu()

    @patch("billrecon.cli.app._build_service")
    @patch("billrecon.cli.app.questionary")
    def test_none_exits(self, mock_q, mock_build):
        mock_build.return_value = MagicMock()
        mock_q.select.return_value.ask.return_value = None
        main_menu()

    @patch("billrecon.cli.app.summary_menu")
    @patch("billrecon.cli.app.export_csv_menu")
    @patch("billrecon.cli.app.list_bills_menu")
    @patch("billrecon.cli.app._build_service")
    @patch("billrecon.cli.app.questionary")
    def test_dispatch(self, mock_q, mock_build, mock_list, mock_export, mock_summary):
        service = MagicMock()
        mock_build.return_value = service
        mock_q.select.return_value.ask.side_effect = ["List Bills", "Export CSV", "Summary", "Exit"]

        main_menu()

        mock_list.assert_called_once()
        assert mock_list.call_args[0][0] is service
        mock_export.assert_called_once_with(service)
        mock_summary.assert_called_once_with(service)
