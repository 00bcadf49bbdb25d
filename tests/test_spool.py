"""Tests for spooler interaction."""

import subprocess
from pathlib import Path

import pytest

from ptouchprinter.errors import SpoolError
from ptouchprinter.spool import (
    Destination,
    default_destination,
    list_destinations,
    spool_job,
    write_stream,
)


def completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess([], returncode, stdout=stdout, stderr=stderr)


class TestDestinations:
    """Test destination enumeration."""

    def test_default_destination(self, mocker):
        """Parses lpstat -d output."""
        mocker.patch(
            "ptouchprinter.spool.subprocess.run",
            return_value=completed("system default destination: PT2430\n"),
        )
        assert default_destination() == "PT2430"

    def test_no_default_destination(self, mocker):
        """No default when lpstat reports none."""
        mocker.patch(
            "ptouchprinter.spool.subprocess.run",
            return_value=completed("no system default destination\n"),
        )
        assert default_destination() is None

    def test_list_destinations_marks_default(self, mocker):
        """The system default is flagged."""
        run = mocker.patch(
            "ptouchprinter.spool.subprocess.run",
            side_effect=[
                completed(
                    "PT2430 accepting requests since Mon Oct 19 10:00:00 2026\n"
                    "Office accepting requests since Mon Oct 19 10:00:00 2026\n"
                ),
                completed("system default destination: Office\n"),
            ],
        )

        found = list_destinations()

        assert found == [Destination("PT2430", False), Destination("Office", True)]
        assert run.call_args_list[0].args[0] == ["lpstat", "-a"]
        assert str(found[1]) == "Office (default)"

    def test_list_destinations_none(self, mocker):
        """lpstat's 'No destinations' error means an empty list."""
        mocker.patch(
            "ptouchprinter.spool.subprocess.run",
            return_value=completed(stderr="lpstat: No destinations added.\n", returncode=1),
        )
        assert list_destinations() == []

    def test_list_destinations_failure(self, mocker):
        """Other lpstat failures raise SpoolError."""
        mocker.patch(
            "ptouchprinter.spool.subprocess.run",
            return_value=completed(stderr="lpstat: scheduler not responding\n", returncode=1),
        )
        with pytest.raises(SpoolError, match="scheduler not responding"):
            list_destinations()

    def test_missing_cups(self, mocker):
        """A missing lpstat binary raises SpoolError."""
        mocker.patch(
            "ptouchprinter.spool.subprocess.run",
            side_effect=FileNotFoundError("lpstat"),
        )
        with pytest.raises(SpoolError, match="lpstat not found"):
            list_destinations()


class TestSpoolJob:
    """Test job submission."""

    def test_submits_raw_file(self, mocker):
        """The job file holds the exact stream and is sent raw."""
        seen = {}

        def fake_run(args, **kwargs):
            seen["args"] = args
            seen["data"] = Path(args[-1]).read_bytes()
            return completed("request id is PT2430-7 (1 file(s))\n")

        mocker.patch("ptouchprinter.spool.subprocess.run", side_effect=fake_run)
        data = b"\x00\x0a\x0d\x1a"

        job_id = spool_job(data, "PT2430", title="label", copies=2)

        assert job_id == "PT2430-7"
        assert seen["data"] == data
        assert seen["args"][:9] == ["lp", "-d", "PT2430", "-o", "raw", "-n", "2", "-t", "label"]

    def test_temp_file_removed(self, mocker):
        """The temporary job file is deleted after submission."""
        seen = {}

        def fake_run(args, **kwargs):
            seen["path"] = Path(args[-1])
            return completed("request id is PT2430-8 (1 file(s))\n")

        mocker.patch("ptouchprinter.spool.subprocess.run", side_effect=fake_run)
        spool_job(b"data", "PT2430")
        assert not seen["path"].exists()

    def test_temp_file_removed_on_error(self, mocker):
        """The job file is deleted even when lp is missing."""
        seen = {}

        def fake_run(args, **kwargs):
            seen["path"] = Path(args[-1])
            raise FileNotFoundError("lp")

        mocker.patch("ptouchprinter.spool.subprocess.run", side_effect=fake_run)
        with pytest.raises(SpoolError):
            spool_job(b"data", "PT2430")
        assert not seen["path"].exists()

    def test_rejected_job(self, mocker):
        """lp failures raise SpoolError."""
        mocker.patch(
            "ptouchprinter.spool.subprocess.run",
            return_value=completed(stderr="lp: The printer or class does not exist.\n",
                                   returncode=1),
        )
        with pytest.raises(SpoolError, match="does not exist"):
            spool_job(b"data", "Nope")

    def test_no_job_id(self, mocker):
        """A missing request id is not an error."""
        mocker.patch("ptouchprinter.spool.subprocess.run", return_value=completed(""))
        assert spool_job(b"data", "PT2430") is None


class TestWriteStream:
    """Test writing streams to files."""

    def test_write_file(self, tmp_path):
        """Bytes are written verbatim."""
        out = tmp_path / "job.bin"
        data = bytes(range(256))
        write_stream(data, out)
        assert out.read_bytes() == data
