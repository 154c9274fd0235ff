# This file is part of ssh-copy-id. See LICENSE file for more info.

_LAST_RELEASE = "1.2"
_PACKAGED_VERSION = '@@PACKAGED_VERSION@@'

VERSION = _LAST_RELEASE

if not _PACKAGED_VERSION.startswith("@@"):
    VERSION = _PACKAGED_VERSION
