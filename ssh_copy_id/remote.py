# This file is part of ssh-copy-id. See LICENSE file for more info.

import logging
import subprocess

from .errors import TransportError


DEFAULT_SSH = "ssh"

SSH_DIR = "~/.ssh"
AUTHORIZED_KEYS = SSH_DIR + "/authorized_keys"
AUTHORIZED_KEYS_BACKUP = AUTHORIZED_KEYS + ".bak"

KEY_ADDED_MSG = "Key added."
KEY_EXISTS_MSG = "Key already exists. Skipping."

# Outcomes of an install
ADDED = "added"
EXISTS = "exists"
DRY_RUN = "dry-run"
UNKNOWN = "unknown"


def escape_single_quotes(key):
    """
    Replace each ' with '"'"' (close quote, quoted quote, reopen quote)
    """
    return key.replace("'", "'\"'\"'")


def shell_quote(value):
    return "'%s'" % escape_single_quotes(value)


def build_remote_script(key):
    """
    Build the POSIX shell script installing 'key' in the remote
    authorized_keys file.  Each step is one line; 'set -e' makes any
    failing step fail the whole ssh command.
    """
    quoted = shell_quote(key)
    steps = [
        "set -e",
        "mkdir -p %s" % SSH_DIR,
        "if [ -f %s ]; then cp %s %s; fi" % (
            AUTHORIZED_KEYS, AUTHORIZED_KEYS, AUTHORIZED_KEYS_BACKUP),
        "if grep -qxF -- %s %s 2>/dev/null; then" % (quoted, AUTHORIZED_KEYS),
        "  echo %s" % shell_quote(KEY_EXISTS_MSG),
        "else",
        # keep a last line without newline from swallowing the new key
        '  if [ -s %s ] && [ -n "$(tail -c 1 %s)" ]; then echo >> %s; fi' % (
            AUTHORIZED_KEYS, AUTHORIZED_KEYS, AUTHORIZED_KEYS),
        "  printf '%%s\\n' %s >> %s" % (quoted, AUTHORIZED_KEYS),
        "  echo %s" % shell_quote(KEY_ADDED_MSG),
        "fi",
        "chmod 700 %s" % SSH_DIR,
        "chmod 600 %s" % AUTHORIZED_KEYS,
    ]
    return "\n".join(steps) + "\n"


def build_ssh_command(target, script, port=None, options=(),
                      ssh_binary=DEFAULT_SSH):
    """Return the argv running 'script' on 'target' through ssh."""
    argv = [ssh_binary]
    if port is not None:
        argv.extend(["-p", str(port)])
    for option in options:
        argv.extend(["-o", option])
    argv.extend([target, script])
    return argv


def run_remote(argv, target):
    """
    Run the ssh command, stdin and stderr left on the terminal so ssh can
    prompt for a password.  Return the captured stdout.
    """
    logging.debug("Running %s", argv[:-1])
    try:
        proc = subprocess.run(argv, stdout=subprocess.PIPE,
                              universal_newlines=True)
    except OSError as e:
        raise TransportError(target, reason="cannot run %s: %s" % (argv[0], e))
    for line in proc.stdout.splitlines():
        logging.info("[%s] %s", target, line)
    if proc.returncode != 0:
        raise TransportError(target, returncode=proc.returncode)
    return proc.stdout


def parse_outcome(output):
    lines = [line.strip() for line in output.splitlines()]
    if KEY_ADDED_MSG in lines:
        return ADDED
    if KEY_EXISTS_MSG in lines:
        return EXISTS
    return UNKNOWN
