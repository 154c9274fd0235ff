#!/usr/bin/env python3
#
# ssh-copy-id - Install a local SSH public key on a remote host
#
# Copyright (c) 2013 Casey Marshall <casey.marshall@gmail.com>
# Copyright (c) 2013 Dustin Kirkland <dustin.kirkland@gmail.com>
#
# ssh-copy-id is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, version 3.
#
# ssh-copy-id is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with ssh-copy-id.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import logging
import os
import re
import shlex
import sys

import distro

from .errors import (
    EmptyKeyError,
    InvalidTargetError,
    KeyInstallError,
    MissingKeyError,
    TransportError,
    UnreadableKeyError,
    ValidationError,
)
from .keys import DEFAULT_KEY_TYPE, describe_key, locate_keyfile, \
    read_public_key
from .remote import DEFAULT_SSH, DRY_RUN, ADDED, EXISTS, \
    build_remote_script, build_ssh_command, parse_outcome, run_remote
from .version import VERSION


__all__ = [
    'install_key', 'validate_target', 'main',
    'KeyInstallError', 'ValidationError', 'InvalidTargetError',
    'EmptyKeyError', 'MissingKeyError', 'TransportError',
    'UnreadableKeyError',
]

CONF_FILE = "/etc/ssh/ssh_copy_id"
TARGET_RE = re.compile(r'^[A-Za-z0-9._-]+@(\d{1,3}\.){3}\d{1,3}$', re.ASCII)

logging.basicConfig(format='%(asctime)s %(levelname)s %(message)s',
                    level=logging.INFO)
parser = argparse.ArgumentParser(
    description='Install a local SSH public key on a remote host.',
    prog="ssh-copy-id")
parser.add_argument(
    '-i', '--key-type', metavar='KEYTYPE', default=None,
    help='Public key file name in ~/.ssh (default %s)' % DEFAULT_KEY_TYPE)
parser.add_argument(
    '-p', '--port', type=int, default=None,
    help='Connect to this port on the remote host')
parser.add_argument(
    '-o', '--option', dest='options', action='append', default=[],
    metavar='SSH_OPTION', help='Pass an -o option to ssh (repeatable)')
parser.add_argument(
    '-n', '--dry-run', action="store_true", default=False,
    help='Show what would be run on the remote host, then exit')
parser.add_argument(
    '-v', '--verbose', action="store_true", default=False,
    help='Log debugging messages')
parser.add_argument(
    '--version', action="store_true", default=False,
    help='Print version information and exit')
parser.add_argument(
    'target', nargs='?', metavar="TARGET",
    help='Remote account, as user@ipv4')
parser.options = None


def die(msg):
    """
    The only thing in Perl worth keeping
    """
    logging.error(msg)
    sys.exit(1)


def client_id():
    """
    Identify this client: tool, python, linux distribution, kernel
    """
    ssh_copy_id = "ssh-copy-id/%s" % VERSION
    python = "python/%d.%d.%d" % (
        sys.version_info.major, sys.version_info.minor, sys.version_info.micro)
    linux_dist = "%s/%s" % (distro.id() or "unknown", distro.version())
    uname = "%s/%s/%s" % (os.uname()[0], os.uname()[2], os.uname()[4])
    return "%s %s %s %s" % (ssh_copy_id, python, linux_dist, uname)


def load_config(conf_file=CONF_FILE):
    """
    Read the optional JSON configuration file; a missing file is an empty
    configuration
    """
    if not os.path.exists(conf_file):
        return {}
    try:
        with open(conf_file) as fp:
            contents = fp.read()
    except OSError:
        raise Exception("Failed to read %s" % conf_file)
    try:
        conf = json.loads(contents)
    except ValueError:
        raise Exception("File %s did not have valid JSON." % conf_file)
    if not isinstance(conf, dict):
        raise Exception("File %s must hold a JSON object." % conf_file)
    return conf


def resolve_settings(options, conf):
    """
    Merge command line, environment and configuration file, in that order
    of precedence
    """
    key_type = (options.key_type or os.getenv("SSH_COPY_ID_KEY") or
                conf.get("key_type") or DEFAULT_KEY_TYPE)
    ssh_binary = (os.getenv("SSH_COPY_ID_SSH") or conf.get("ssh") or
                  DEFAULT_SSH)
    ssh_options = list(conf.get("options", [])) + list(options.options)
    return key_type, ssh_binary, ssh_options


def validate_target(target):
    """Return 'target' if it reads user@ipv4, else raise."""
    if not isinstance(target, str) or not TARGET_RE.fullmatch(target):
        raise InvalidTargetError(target)
    return target


def install_key(target, key_type=DEFAULT_KEY_TYPE, port=None, ssh_options=(),
                dry_run=False, ssh_binary=DEFAULT_SSH, home=None):
    """
    Append the local public key 'key_type' to ~/.ssh/authorized_keys on
    'target', unless it is already there.

    The target is checked and the key located before ssh runs; failures
    raise a KeyInstallError subclass.  Returns ADDED, EXISTS, DRY_RUN or
    UNKNOWN (ssh succeeded but printed neither message).
    """
    validate_target(target)
    keyfile = locate_keyfile(key_type, home)
    key = read_public_key(keyfile)

    fingerprint = describe_key(key)
    if fingerprint:
        logging.info("Installing key %s from [%s]", fingerprint, keyfile)
    else:
        logging.warning("[%s] does not look like an SSH public key", keyfile)

    script = build_remote_script(key)
    argv = build_ssh_command(target, script, port=port, options=ssh_options,
                             ssh_binary=ssh_binary)
    if dry_run:
        logging.info("Would run: %s",
                     ' '.join(shlex.quote(arg) for arg in argv[:-1]))
        for line in script.splitlines():
            logging.info("  %s", line)
        return DRY_RUN

    return parse_outcome(run_remote(argv, target))


def main(argv=None):
    try:
        parser.options = parser.parse_args(argv)
        if parser.options.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        if parser.options.version:
            print(client_id())
            sys.exit(0)
        if not parser.options.target:
            parser.error("the following arguments are required: TARGET")
        key_type, ssh_binary, ssh_options = resolve_settings(
            parser.options, load_config(CONF_FILE))
        target = parser.options.target
        outcome = install_key(
            target, key_type=key_type, port=parser.options.port,
            ssh_options=ssh_options, dry_run=parser.options.dry_run,
            ssh_binary=ssh_binary)
    except KeyInstallError as e:
        die("%s: %s" % (type(e).__name__, e))
    # pylint: disable=broad-except
    except Exception as e:
        die(str(e))
    if outcome == ADDED:
        logging.info("Installed key on [%s]", target)
    elif outcome == EXISTS:
        logging.info("Key already present on [%s]", target)
    elif outcome != DRY_RUN:
        logging.warning("ssh succeeded but [%s] did not confirm the key",
                        target)
    sys.exit(0)
