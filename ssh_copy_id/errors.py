# This file is part of ssh-copy-id. See LICENSE file for more info.


class KeyInstallError(Exception):
    """Base class for every failure of a key installation."""


class ValidationError(KeyInstallError):
    """Bad input, detected before anything touches the network."""


class InvalidTargetError(ValidationError):

    def __init__(self, target):
        self.target = target
        super().__init__(
            "Invalid target [%s], expected user@ipv4 (e.g. alice@192.168.0.101)"
            % target)


class EmptyKeyError(ValidationError):

    def __init__(self, keyfile):
        self.keyfile = keyfile
        super().__init__("Public key file [%s] is empty" % keyfile)


class UnreadableKeyError(KeyInstallError):

    def __init__(self, keyfile, reason):
        self.keyfile = keyfile
        self.reason = reason
        super().__init__(
            "Could not read public key file [%s]: %s" % (keyfile, reason))


class MissingKeyError(KeyInstallError):
    """
    The requested public key file does not exist; 'candidates' holds the
    *.pub files that do.
    """

    def __init__(self, keyfile, candidates):
        self.keyfile = keyfile
        self.candidates = list(candidates)
        if self.candidates:
            hint = "available keys: %s" % ', '.join(self.candidates)
        else:
            hint = "no public keys found"
        super().__init__(
            "Public key file not found [%s], %s" % (keyfile, hint))


class TransportError(KeyInstallError):
    """
    The ssh client could not be started or exited non-zero.  Connection,
    authentication and remote command failures are not told apart.
    """

    def __init__(self, target, returncode=None, reason=None):
        self.target = target
        self.returncode = returncode
        if reason is None:
            reason = "ssh exited with status %s" % returncode
        super().__init__(
            "Failed to install key on [%s]: %s" % (target, reason))
