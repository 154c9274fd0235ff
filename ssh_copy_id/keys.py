# This file is part of ssh-copy-id. See LICENSE file for more info.

import base64
import binascii
import getpass
import glob
import hashlib
import logging
import os
import struct

from .errors import EmptyKeyError, MissingKeyError, UnreadableKeyError


DEFAULT_KEY_TYPE = "id_rsa.pub"

# Name to printable type and bit length, for the fixed-size key algorithms
KEY_TYPES = {
    "ssh-ed25519": ("256", "ED25519"),
    "ecdsa-sha2-nistp256": ("256", "ECDSA"),
    "ecdsa-sha2-nistp384": ("384", "ECDSA"),
    "ecdsa-sha2-nistp521": ("521", "ECDSA"),
    "sk-ecdsa-sha2-nistp256@openssh.com": ("256", "ECDSA-SK"),
    "sk-ssh-ed25519@openssh.com": ("256", "ED25519-SK"),
}


def get_home():
    """Return $HOME, or the home directory of the current user."""
    if os.environ.get("HOME"):
        return os.environ["HOME"]
    return os.path.expanduser("~" + getpass.getuser())


def get_ssh_dir(home=None):
    return os.path.join(home or get_home(), ".ssh")


def get_keyfile(key_type=DEFAULT_KEY_TYPE, home=None):
    """Return the path of public key 'key_type' in the user's ssh dir."""
    return os.path.join(get_ssh_dir(home), key_type)


def list_candidates(ssh_dir):
    """
    Return the sorted names of the *.pub files in 'ssh_dir', empty if the
    directory does not exist
    """
    pattern = os.path.join(glob.escape(ssh_dir), "*.pub")
    return sorted(os.path.basename(p) for p in glob.glob(pattern))


def locate_keyfile(key_type=DEFAULT_KEY_TYPE, home=None):
    """
    Resolve the public key file, raising MissingKeyError with the available
    candidates when it is not there
    """
    keyfile = get_keyfile(key_type, home)
    if os.path.isfile(keyfile):
        return keyfile
    candidates = list_candidates(os.path.dirname(keyfile))
    logging.info("Public key [%s] not found", keyfile)
    for name in candidates:
        logging.info("  candidate: %s", name)
    raise MissingKeyError(keyfile, candidates)


def read_public_key(keyfile):
    """
    Read a public key file and drop every CR and LF, so the key is one
    line.  Several keys in one file end up concatenated.
    """
    try:
        with open(keyfile, "r", encoding="utf-8") as fp:
            key = fp.read()
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableKeyError(keyfile, e)
    key = key.replace("\r", "").replace("\n", "")
    if not key.strip():
        raise EmptyKeyError(keyfile)
    return key


def blob_strings(buf):
    """Split an SSH key blob into its length-prefixed strings."""
    off = 0
    while off < len(buf):
        if off + 4 > len(buf):
            raise ValueError("truncated key blob")
        (slen,) = struct.unpack(">I", buf[off:off + 4])
        off += 4
        if off + slen > len(buf):
            raise ValueError("truncated key blob")
        yield buf[off:off + slen]
        off += slen


def key_bits(key_type, blob):
    """
    Bit length of an ssh-rsa (modulus) or ssh-dss (p) key blob
    """
    # position of the integer holding the size, after the algorithm name
    position = {"ssh-rsa": 2, "ssh-dss": 1}[key_type]
    parts = list(blob_strings(blob))
    if len(parts) <= position or parts[0] != key_type.encode("ascii"):
        raise ValueError("not an %s key blob" % key_type)
    return int.from_bytes(parts[position], 'big').bit_length()


# printable names of the variable-size algorithms
SIZED_TYPES = {"ssh-rsa": "RSA", "ssh-dss": "DSA"}


def key_fingerprint(fields):
    """
    Fingerprint the split fields of a public key line the way
    'ssh-keygen -l' does: [bits, 'SHA256:...', comment, '(TYPE)'].
    Returns None when the fields are not a usable public key.
    """
    if not fields or len(fields) < 2:
        return None
    key_type, encoded = fields[0], fields[1]
    comment = ' '.join(fields[2:]) or "no comment"

    try:
        blob = base64.b64decode(encoded.encode("ascii"), validate=True)
        if key_type in SIZED_TYPES:
            bits, ptype = str(key_bits(key_type, blob)), SIZED_TYPES[key_type]
        else:
            bits, ptype = KEY_TYPES.get(key_type, ("?", key_type))
    except (UnicodeEncodeError, binascii.Error, ValueError):
        return None

    digest = base64.b64encode(hashlib.sha256(blob).digest())
    return [bits, "SHA256:" + digest.decode("ascii").rstrip("="), comment,
            "(%s)" % ptype]


def describe_key(key):
    """Short form of a key for log lines."""
    ssh_fp = key_fingerprint(key.split())
    if ssh_fp is None:
        return None
    return ' '.join(ssh_fp[:2] + ssh_fp[-1:])
