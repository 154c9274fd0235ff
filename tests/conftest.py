"""Shared fixtures: a local home holding keys and a fake ssh client."""

import os
import shutil
import stat

import pytest


ED25519_KEY = ("ssh-ed25519 "
               "AAAAC3NzaC1lZDI1NTE5AAAAIMkGoTfVoNpsJrNxzq9WpRhlCp0qsPwsOHopWxNbIM8Z"
               " alice@laptop")

FAKE_SSH = """#!/bin/sh
# Run the last argument as a shell script, with HOME set to the fake
# remote account.
for arg in "$@"; do script="$arg"; done
HOME="$FAKE_REMOTE_HOME"
export HOME
exec sh -c "$script"
"""

requires_sh = pytest.mark.skipif(
    shutil.which("sh") is None, reason="needs a POSIX sh")


@pytest.fixture
def local_home(tmp_path, monkeypatch):
    """A local home directory with ~/.ssh/id_ed25519.pub."""
    home = tmp_path / "local"
    ssh_dir = home / ".ssh"
    ssh_dir.mkdir(parents=True)
    (ssh_dir / "id_ed25519.pub").write_text(ED25519_KEY + "\n")
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def remote_home(tmp_path, monkeypatch):
    home = tmp_path / "remote"
    home.mkdir()
    monkeypatch.setenv("FAKE_REMOTE_HOME", str(home))
    return home


@pytest.fixture
def fake_ssh(tmp_path, remote_home):
    """Path of an executable standing in for the ssh client."""
    path = tmp_path / "fake-ssh"
    path.write_text(FAKE_SSH)
    path.chmod(path.stat().st_mode | stat.S_IXUSR)
    return str(path)


@pytest.fixture
def no_ssh(monkeypatch):
    """Fail the test if anything tries to start a subprocess."""
    def forbidden(*args, **kwargs):
        raise AssertionError("ssh must not run: %r" % (args,))
    monkeypatch.setattr("ssh_copy_id.remote.subprocess.run", forbidden)


def read_lines(path):
    with open(os.fspath(path)) as fp:
        return fp.read().splitlines()
