"""Unit tests for the main entry point.

Tests main() end to end with a mocked SMTP client:
- Exit codes for success and each failure stage
- Verbose body output
- Config errors abort before the template is touched
- Addressing errors abort before delivery
- Log file output
"""

from unittest.mock import patch

import pytest

from nagios_notify import __version__
from nagios_notify.main import build_parser, main
from nagios_notify.notifications.models import DeliveryError
from tests.helpers import write_config, write_template


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "NAGIOS_NOTIFY_CONFIG",
        "NAGIOS_NOTIFY_TEMPLATE_DIR",
        "NAGIOS_NOTIFY_LOG_DIR",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def workdir(tmp_path):
    write_config(tmp_path)
    write_template(tmp_path)
    return tmp_path


@pytest.fixture
def mock_smtp_client():
    with patch("nagios_notify.notifications.service.SMTPClient") as mock_class:
        yield mock_class.return_value


@pytest.fixture(autouse=True)
def fixed_monitor():
    with patch("nagios_notify.main.monitor_name", return_value="mon1") as mock_monitor:
        yield mock_monitor


def make_argv(workdir, *extra):
    return [
        "-H", "web01",
        "-a", "ops@example.com",
        "-t", "host",
        "-n", "problem",
        "-d", "Mon Jan 02 15:04:05 JST 2006",
        "-c", str(workdir / "config.yml"),
        "--template-dir", str(workdir),
        "--log-dir", str(workdir / "log"),
        *extra,
    ]


def sent_message(mock_smtp_client):
    mock_smtp_client.send.assert_called_once()
    message, smtp_config = mock_smtp_client.send.call_args[0]
    return message, smtp_config


class TestMainSuccess:
    def test_host_problem_is_sent(self, workdir, mock_smtp_client, restore_root_logger):
        assert main(make_argv(workdir)) == 0

        message, smtp_config = sent_message(mock_smtp_client)
        assert message["Subject"] == "[PROBLEM] DOWN: web01    by mon1"
        assert message["To"] == "ops@example.com"
        assert message["From"] == "Nagios <nagios@example.com>"
        assert message["Reply-To"] == "Nagios <nagios@example.com>"
        assert "ホストに問題が発生" in message.get_content()
        assert smtp_config.host == "smtp.example.com"

    def test_service_recovery_is_sent(self, workdir, mock_smtp_client, restore_root_logger):
        argv = make_argv(workdir, "-s", "nginx", "-S", "ok")
        argv[argv.index("host")] = "service"
        argv[argv.index("problem")] = "RECOVERY"

        assert main(argv) == 0

        message, _ = sent_message(mock_smtp_client)
        assert message["Subject"] == "[RECOVERY] OK: web01/nginx    by mon1"

    def test_monitor_is_resolved_once(
        self, workdir, mock_smtp_client, fixed_monitor, restore_root_logger
    ):
        assert main(make_argv(workdir)) == 0
        fixed_monitor.assert_called_once()

    def test_verbose_prints_body(self, workdir, mock_smtp_client, capsys, restore_root_logger):
        assert main(make_argv(workdir, "-v")) == 0

        out = capsys.readouterr().out
        assert out.startswith("ホストに問題が発生\n")
        assert "01月02日 15時04分 web01 (?)" in out

    def test_quiet_by_default(self, workdir, mock_smtp_client, capsys, restore_root_logger):
        assert main(make_argv(workdir)) == 0
        assert capsys.readouterr().out == ""

    def test_log_file_records_subject(self, workdir, mock_smtp_client, restore_root_logger):
        assert main(make_argv(workdir)) == 0
        for handler in restore_root_logger.handlers:
            handler.flush()

        content = (workdir / "log" / "notify.log").read_text(encoding="utf-8")
        assert "subject: [PROBLEM] DOWN: web01    by mon1" in content
        assert "Email sent successfully" in content

    def test_config_path_from_environment(
        self, workdir, mock_smtp_client, monkeypatch, restore_root_logger
    ):
        argv = make_argv(workdir)
        index = argv.index("-c")
        del argv[index:index + 2]
        monkeypatch.setenv("NAGIOS_NOTIFY_CONFIG", str(workdir / "config.yml"))

        assert main(argv) == 0


class TestMainFailures:
    def test_missing_config_aborts_before_template(
        self, workdir, mock_smtp_client, capsys, restore_root_logger
    ):
        (workdir / "config.yml").unlink()

        with patch("nagios_notify.main.TemplateRenderer") as mock_renderer:
            assert main(make_argv(workdir)) == 1

        mock_renderer.assert_not_called()
        mock_smtp_client.send.assert_not_called()
        assert "Configuration error" in capsys.readouterr().err

    def test_corrupt_config_aborts(self, workdir, mock_smtp_client, restore_root_logger):
        write_config(workdir, "smtp: [\n")

        assert main(make_argv(workdir)) == 1
        mock_smtp_client.send.assert_not_called()

    def test_unknown_enum_value_aborts(self, workdir, mock_smtp_client, capsys, restore_root_logger):
        argv = make_argv(workdir)
        argv[argv.index("problem")] = "flapping"

        assert main(argv) == 1
        mock_smtp_client.send.assert_not_called()
        assert "Invalid event" in capsys.readouterr().err

    def test_invalid_recipients_abort_before_delivery(
        self, workdir, mock_smtp_client, restore_root_logger
    ):
        argv = make_argv(workdir)
        argv[argv.index("ops@example.com")] = "ops@example.com, not-an-email"

        assert main(argv) == 1
        mock_smtp_client.send.assert_not_called()

    def test_invalid_sender_aborts(self, workdir, mock_smtp_client, restore_root_logger):
        write_config(
            workdir,
            "smtp:\n  host: h\n  user_name: u\n  password: p\n  from: nagios\n",
        )

        assert main(make_argv(workdir)) == 1
        mock_smtp_client.send.assert_not_called()

    def test_missing_template_aborts(self, workdir, mock_smtp_client, restore_root_logger):
        (workdir / "template.txt").unlink()

        assert main(make_argv(workdir)) == 1
        mock_smtp_client.send.assert_not_called()

    def test_delivery_error_exits_non_zero(self, workdir, mock_smtp_client, restore_root_logger):
        mock_smtp_client.send.side_effect = DeliveryError("Network error during SMTP connection")

        assert main(make_argv(workdir)) == 1
        mock_smtp_client.send.assert_called_once()

    def test_invalid_log_level_from_environment(self, workdir, monkeypatch, capsys):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        assert main(make_argv(workdir)) == 1
        assert "Configuration Error" in capsys.readouterr().err


class TestParser:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert f"Nagios Notify {__version__}" in capsys.readouterr().out

    def test_missing_required_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["-H", "web01"])

        assert exc_info.value.code == 2

    def test_long_flags(self):
        args = build_parser().parse_args(
            [
                "--host", "web01",
                "--addresses", "ops@example.com",
                "--type", "service",
                "--datetime", "now",
                "--notification-type", "recovery",
                "--host-address", "10.0.0.1",
                "--service", "nginx",
                "--status", "ok",
                "--output", "fine",
                "--log-level", "debug",
            ]
        )

        assert args.event_type == "service"
        assert args.notification_type == "recovery"
        assert args.host_address == "10.0.0.1"
        assert args.log_level == "DEBUG"
        assert args.verbose is False
