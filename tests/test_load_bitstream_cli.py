#!/usr/bin/env python3
"""Tests for the load-bitstream command line."""

import os

import pytest

import bitstream_loader.load_bitstream_cli as cli
from bitstream_loader.cli.hot_reset import PciHotReset
from bitstream_loader.exceptions import LoaderError, PrivilegeError, UsageError


@pytest.fixture
def as_root(monkeypatch):
    monkeypatch.setattr(os, "geteuid", lambda: 0, raising=False)


@pytest.fixture
def loader_config(tmp_path, write_config, make_vivado_stub, vivado_banner):
    """A config pointing at a working Vivado stub."""
    stub = make_vivado_stub(vivado_banner)
    work = tmp_path / "work"
    work.mkdir()

    def _write(pci_device="10ee:903f"):
        return write_config(
            f"""
            tmp_dir = {work}
            vivado = {stub}
            pci_device = {pci_device}
            programming_script
            {{
                open_hw_manager
                set_property PROGRAM.FILE {{%file%}} [current_hw_device]
                program_hw_devices [current_hw_device]
            }}
            """
        )

    return _write


class TestParseArgs:
    def test_defaults(self):
        args = cli.parse_args(["top.bit"])
        assert args.bitstream == "top.bit"
        assert args.hot_reset is False
        assert args.config == "load_bitstream.conf"
        assert args.verbose is False

    def test_all_switches(self):
        args = cli.parse_args(["-hot_reset", "-config", "x.conf", "top.bit", "-verbose"])
        assert args.bitstream == "top.bit"
        assert args.hot_reset is True
        assert args.config == "x.conf"
        assert args.verbose is True

    def test_unknown_switch(self):
        with pytest.raises(UsageError, match="invalid command-line switch: -bogus"):
            cli.parse_args(["top.bit", "-bogus"])

    def test_second_filename(self):
        with pytest.raises(UsageError, match="other.bit"):
            cli.parse_args(["top.bit", "other.bit"])

    def test_missing_bitstream(self):
        with pytest.raises(UsageError):
            cli.parse_args([])

    def test_config_without_value(self):
        with pytest.raises(UsageError):
            cli.parse_args(["top.bit", "-config"])

    def test_no_abbreviations(self):
        with pytest.raises(UsageError):
            cli.parse_args(["top.bit", "-hot"])


class TestMain:
    def test_usage_error_exits_1(self, capsys):
        assert cli.main([]) == 1
        err = capsys.readouterr().err
        assert "usage:" in err
        assert "load_bitstream <filename> [-hot_reset] [-config <filename>]" in err

    def test_not_root_fails_before_reading_config(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setattr(os, "geteuid", lambda: 1000, raising=False)
        code = cli.main(["top.bit", "-config", str(tmp_path / "missing.conf")])
        err = capsys.readouterr().err
        assert code == 1
        assert "Must be root to run.  Use sudo." in err
        assert "Cant read file" not in err

    def test_check_root_raises_permission_error(self, monkeypatch):
        monkeypatch.setattr(os, "geteuid", lambda: 1000, raising=False)
        with pytest.raises(PermissionError) as ei:
            cli.check_root()
        assert isinstance(ei.value, LoaderError)
        assert ei.value.kind == "privilege"
        assert str(ei.value) == "Must be root to run.  Use sudo."

    def test_privilege_error_is_permission_error(self):
        assert issubclass(PrivilegeError, PermissionError)
        assert issubclass(PrivilegeError, LoaderError)

    def test_missing_config(self, as_root, tmp_path, capsys):
        missing = tmp_path / "missing.conf"
        assert cli.main(["top.bit", "-config", str(missing)]) == 1
        assert f"Cant read file {missing}" in capsys.readouterr().err

    def test_success_is_silent(self, as_root, tmp_path, loader_config, capsys):
        config = loader_config()
        assert cli.main(["/data/top.bit", "-config", str(config)]) == 0

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

        work = tmp_path / "work"
        script = (work / "load_bitstream.tcl").read_text().splitlines()
        assert "set_property PROGRAM.FILE {/data/top.bit} [current_hw_device]" in script
        assert (work / "load_bitstream.result").exists()

    def test_toolchain_error_single_line(
        self, as_root, write_config, tmp_path, make_vivado_stub, capsys
    ):
        stub = make_vivado_stub(["banner", "INFO: start", "ERROR: [Labtools 27-3165] LOW"])
        config = write_config(
            f"tmp_dir = {tmp_path}\nvivado = {stub}\nprogramming_script\n{{\nputs %file%\n}}\n"
        )
        assert cli.main(["top.bit", "-config", str(config)]) == 1

        err_lines = [line for line in capsys.readouterr().err.splitlines() if line]
        assert err_lines == ["Vivado reports 'ERROR: [Labtools 27-3165] LOW'"]

    def test_hot_reset(self, as_root, monkeypatch, loader_config, fake_sysfs):
        monkeypatch.setattr(cli, "PciHotReset", lambda: PciHotReset(fake_sysfs))

        config = loader_config()
        assert cli.main(["/data/top.bit", "-hot_reset", "-config", str(config)]) == 0

        fpga = (fake_sysfs / "devices" / "0000:01:00.0").resolve()
        assert (fpga / "remove").read_text() == "1\n"

    def test_hot_reset_device_not_found(
        self, as_root, monkeypatch, tmp_path, loader_config, fake_sysfs, capsys
    ):
        monkeypatch.setattr(cli, "PciHotReset", lambda: PciHotReset(fake_sysfs))

        config = loader_config(pci_device="1234:5678")
        assert cli.main(["/data/top.bit", "-hot_reset", "-config", str(config)]) == 1

        assert "No PCI device matching 1234:5678 found" in capsys.readouterr().err
        # Programming itself went through
        assert (tmp_path / "work" / "load_bitstream.result").exists()

    def test_hot_reset_not_attempted_after_failed_programming(
        self, as_root, monkeypatch, write_config, tmp_path
    ):
        def unexpected():
            raise AssertionError("hot reset must not run")

        monkeypatch.setattr(cli, "PciHotReset", unexpected)
        config = write_config(
            f"tmp_dir = {tmp_path}\nvivado = {tmp_path / 'missing'}\n"
            "pci_device = 10ee:903f\nprogramming_script\n{\nputs %file%\n}\n"
        )
        assert cli.main(["top.bit", "-hot_reset", "-config", str(config)]) == 1
