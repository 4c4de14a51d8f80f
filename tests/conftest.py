"""Pytest configuration and fixtures."""

import os
import stat
import sys
from pathlib import Path

import pytest

from cargoci.dsl import cmd
from cargoci.ui.console import Console, set_console


def stub_step(name, log_path, exit_code=0, record_env=None):
    """
    Step that appends its name to log_path and exits with exit_code.

    If record_env is given, the step also appends "NAME=value" lines for
    each of those variables as it sees them.
    """
    code = [
        "import os, sys",
        f"log = open({str(log_path)!r}, 'a')",
        f"log.write({name!r} + '\\n')",
    ]
    for var in record_env or ():
        code.append(f"log.write({var!r} + '=' + os.environ.get({var!r}, '<unset>') + '\\n')")
    code.append("log.close()")
    code.append(f"sys.exit({exit_code})")
    return cmd(name, sys.executable, "-c", "; ".join(code))


def read_log(log_path):
    path = Path(log_path)
    if not path.exists():
        return []
    return path.read_text().splitlines()


@pytest.fixture(autouse=True)
def fresh_console():
    """Each test starts with a non-debug console."""
    set_console(Console())
    yield


@pytest.fixture
def log_file(tmp_path):
    return tmp_path / "steps.log"


@pytest.fixture
def fake_cargo(tmp_path):
    """
    Executable named `cargo` that records its arguments and the warning
    flags it was launched with, then exits with $FAKE_CARGO_EXIT (default 0)
    when its subcommand matches $FAKE_CARGO_FAIL_ON.
    """
    if os.name == "nt":
        pytest.skip("fake cargo script needs a POSIX shebang")

    log = tmp_path / "cargo.log"
    script = tmp_path / "bin" / "cargo"
    script.parent.mkdir()
    script.write_text(
        f"#!{sys.executable}\n"
        "import os, sys\n"
        f"with open({str(log)!r}, 'a') as fh:\n"
        "    fh.write(' '.join(sys.argv[1:]) + '\\n')\n"
        "    fh.write('RUSTFLAGS=' + os.environ.get('RUSTFLAGS', '<unset>') + '\\n')\n"
        "    fh.write('RUSTDOCFLAGS=' + os.environ.get('RUSTDOCFLAGS', '<unset>') + '\\n')\n"
        "if sys.argv[1] == os.environ.get('FAKE_CARGO_FAIL_ON'):\n"
        "    sys.exit(int(os.environ.get('FAKE_CARGO_EXIT', '1')))\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script, log
