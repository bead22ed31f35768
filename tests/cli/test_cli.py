#!/usr/bin/env python3
"""
ArpSweep - Tests for the command-line interface.
"""

import ipaddress
import json
import logging
from unittest.mock import patch

import pytest

from arpsweep import cli
from arpsweep.core.models import DiscoveredHost, Interface, MacAddress, ScanOutcome
from arpsweep.utils.constants import ERROR_CHANNEL_OPEN


@pytest.fixture
def cli_env(monkeypatch):
    """Isolate the CLI from logging setup, persisted defaults and privileges."""
    monkeypatch.setattr(cli, "setup_logging", lambda verbose=False: logging.getLogger("arpsweep"))
    monkeypatch.setattr(cli, "_load_defaults", lambda: {})
    monkeypatch.setattr(cli, "is_privileged", lambda: True)
    monkeypatch.delenv("ARPSWEEP_LISTEN_WINDOW", raising=False)
    monkeypatch.delenv("ARPSWEEP_OUI_PATH", raising=False)
    monkeypatch.setenv("LC_ALL", "en_US.UTF-8")


def _host(ip, mac, vendor):
    return DiscoveredHost(ipaddress.IPv4Address(ip), MacAddress.parse(mac), vendor)


def test_parse_arguments_defaults():
    args = cli.parse_arguments([])
    assert args.target is None
    assert args.timeout is None
    assert not args.list_interfaces
    assert not args.json


def test_parse_arguments_short_flags():
    args = cli.parse_arguments(["-t", "10.0.0.0/24", "-i", "eth1", "-w", "2.5", "-v"])
    assert args.target == "10.0.0.0/24"
    assert args.interface == "eth1"
    assert args.timeout == 2.5
    assert args.verbose


@pytest.mark.parametrize("value", ["300", "0.1", "nan", "soon"])
def test_out_of_range_timeout_rejected(cli_env, capsys, value):
    with patch.object(cli, "scan_network") as mock_scan:
        with pytest.raises(SystemExit) as exc_info:
            cli.run_cli(["-t", "10.0.0.0/24", "--timeout", value])
    assert exc_info.value.code == cli.EXIT_BAD_INPUT
    mock_scan.assert_not_called()
    assert "--timeout" in capsys.readouterr().err


@pytest.mark.parametrize("value,expected", [("0.5", 0.5), ("120", 120.0), ("7.5", 7.5)])
def test_timeout_bounds_accepted(value, expected):
    assert cli.parse_arguments(["--timeout", value]).timeout == expected


def test_successful_scan_prints_table(cli_env, capsys):
    outcome = ScanOutcome(
        success=True,
        hosts=[_host("10.0.0.2", "aa:bb:cc:00:00:02", "ACME Corp International")],
        state="done",
        elapsed=5.2,
    )
    with patch.object(cli, "scan_network", return_value=outcome) as mock_scan:
        code = cli.run_cli(["--target", "10.0.0.0/24", "--oui", "/tmp/oui.txt", "-w", "2"])

    assert code == cli.EXIT_OK
    subnet = mock_scan.call_args[0][0]
    assert str(subnet) == "10.0.0.0/24"
    kwargs = mock_scan.call_args[1]
    assert kwargs["oui_path"] == "/tmp/oui.txt"
    assert kwargs["listen_window"] == 2.0
    assert kwargs["interface"] is None

    out = capsys.readouterr().out
    assert "ACME Corp International" in out
    assert "1 host(s) found in 5.2s" in out
    assert "Scan completed successfully" in out


def test_no_hosts_message(cli_env, capsys):
    with patch.object(cli, "scan_network", return_value=ScanOutcome(success=True)):
        assert cli.run_cli(["-t", "10.0.0.0/30"]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "No hosts replied" in out
    assert "Scan completed successfully" in out


def test_unprobed_hosts_are_reported(cli_env, capsys):
    unprobed = [ipaddress.IPv4Address("10.0.0.1") + i for i in range(25)]
    outcome = ScanOutcome(success=True, unprobed=unprobed, receive_errors=2)
    with patch.object(cli, "scan_network", return_value=outcome):
        cli.run_cli(["-t", "10.0.0.0/24"])
    out = capsys.readouterr().out
    assert "25 host(s) could not be probed" in out
    assert "10.0.0.20, ..." in out
    assert "10.0.0.21" not in out
    assert "2 receive error(s)" in out


def test_scan_failure_exit_code(cli_env, capsys):
    outcome = ScanOutcome.failure(ERROR_CHANNEL_OPEN, "Failed to create channel on eth0")
    with patch.object(cli, "scan_network", return_value=outcome):
        code = cli.run_cli(["-t", "10.0.0.0/24"])
    assert code == cli.EXIT_SCAN_FAILED
    assert "Error: Failed to create channel on eth0" in capsys.readouterr().out


def test_invalid_target_exits_with_bad_input(cli_env, capsys):
    with patch.object(cli, "scan_network") as mock_scan:
        code = cli.run_cli(["-t", "10.0.0.0/99"])
    assert code == cli.EXIT_BAD_INPUT
    mock_scan.assert_not_called()
    assert "Invalid CIDR" in capsys.readouterr().out


def test_overlong_target_rejected(cli_env):
    with patch.object(cli, "scan_network") as mock_scan:
        code = cli.run_cli(["-t", "1" * 60 + "/24"])
    assert code == cli.EXIT_BAD_INPUT
    mock_scan.assert_not_called()


def test_prompt_reasks_until_valid(cli_env, capsys):
    answers = iter(["nonsense", "192.168.1.0/24"])
    with patch("builtins.input", lambda _prompt: next(answers)), patch.object(
        cli, "scan_network", return_value=ScanOutcome(success=True)
    ) as mock_scan:
        assert cli.run_cli([]) == cli.EXIT_OK
    assert str(mock_scan.call_args[0][0]) == "192.168.1.0/24"
    assert "Invalid CIDR" in capsys.readouterr().out


def test_prompt_uses_saved_default(cli_env, monkeypatch):
    monkeypatch.setattr(cli, "_load_defaults", lambda: {"target_network": "172.16.0.0/28"})
    with patch("builtins.input", lambda _prompt: ""), patch.object(
        cli, "scan_network", return_value=ScanOutcome(success=True)
    ) as mock_scan:
        cli.run_cli([])
    assert str(mock_scan.call_args[0][0]) == "172.16.0.0/28"


def test_prompt_eof_is_interrupt(cli_env):
    def _eof(_prompt):
        raise EOFError

    with patch("builtins.input", _eof):
        assert cli.run_cli([]) == cli.EXIT_INTERRUPTED


def test_keyboard_interrupt_during_scan(cli_env):
    with patch.object(cli, "scan_network", side_effect=KeyboardInterrupt):
        assert cli.run_cli(["-t", "10.0.0.0/24"]) == cli.EXIT_INTERRUPTED


def test_json_output(cli_env, capsys):
    outcome = ScanOutcome(
        success=True,
        hosts=[_host("10.0.0.2", "aa:bb:cc:00:00:02", "ACME")],
        probes_sent=254,
        state="done",
    )
    with patch.object(cli, "scan_network", return_value=outcome):
        assert cli.run_cli(["-t", "10.0.0.0/24", "--json"]) == cli.EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["success"] is True
    assert data["hosts"] == [{"ip": "10.0.0.2", "mac": "aa:bb:cc:00:00:02", "vendor": "ACME"}]
    assert data["probes_sent"] == 254


def test_json_failure_exit_code(cli_env, capsys):
    outcome = ScanOutcome.failure(ERROR_CHANNEL_OPEN, "denied")
    with patch.object(cli, "scan_network", return_value=outcome):
        assert cli.run_cli(["-t", "10.0.0.0/24", "--json"]) == cli.EXIT_SCAN_FAILED
    assert json.loads(capsys.readouterr().out)["error_kind"] == ERROR_CHANNEL_OPEN


def test_list_interfaces(cli_env, capsys):
    iface = Interface(
        name="eth0",
        ip=ipaddress.IPv4Address("192.168.1.10"),
        mac=MacAddress.parse("aa:bb:cc:00:00:01"),
        is_up=True,
        ips=(ipaddress.IPv4Address("192.168.1.10"),),
    )
    with patch.object(cli, "list_interfaces", return_value=[iface]), patch.object(
        cli, "scan_network"
    ) as mock_scan:
        assert cli.run_cli(["--list-interfaces"]) == cli.EXIT_OK
    mock_scan.assert_not_called()
    assert "eth0" in capsys.readouterr().out


def test_save_defaults(cli_env, capsys):
    with patch.object(cli, "scan_network", return_value=ScanOutcome(success=True)), patch.object(
        cli, "update_persistent_defaults", return_value=True
    ) as mock_update, patch.object(cli, "get_config_paths", return_value=("/d", "/d/config.json")):
        cli.run_cli(["-t", "10.0.0.0/24", "-i", "eth1", "-w", "3", "--lang", "en", "--save-defaults"])
    mock_update.assert_called_once_with(
        target_network="10.0.0.0/24",
        interface="eth1",
        listen_window=3.0,
        oui_path=None,
        lang="en",
    )
    assert "Defaults saved to /d/config.json" in capsys.readouterr().out


def test_privilege_note_when_unprivileged(cli_env, monkeypatch, capsys):
    monkeypatch.setattr(cli, "is_privileged", lambda: False)
    monkeypatch.setattr(cli.os, "name", "posix")
    with patch.object(cli, "scan_network", return_value=ScanOutcome(success=True)):
        cli.run_cli(["-t", "10.0.0.0/30"])
    assert "requires elevated privileges" in capsys.readouterr().out


def test_spanish_output(cli_env, capsys):
    with patch.object(cli, "scan_network", return_value=ScanOutcome(success=True)):
        cli.run_cli(["-t", "10.0.0.0/30", "--lang", "es"])
    assert "Escaneo completado correctamente" in capsys.readouterr().out


def test_main_exits_with_code(cli_env):
    with patch.object(cli, "run_cli", return_value=cli.EXIT_BAD_INPUT):
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
    assert exc_info.value.code == cli.EXIT_BAD_INPUT
