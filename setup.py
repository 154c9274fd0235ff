#!/usr/bin/env python3
#
# ssh-copy-id - Install a local SSH public key on a remote host
# Copyright (c) 2013 Casey Marshall <casey.marshall@gmail.com>
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

import os
from setuptools import setup
import sys


def read_version():
    # shove 'version' into the path so we can import it without going through
    # ssh_copy_id, which imports distro and may not be importable at
    # setup.py time.
    verdir = os.path.abspath(
        os.path.join(os.path.dirname(__file__), "ssh_copy_id"))
    sys.path.insert(0, verdir)
    import version
    return version.VERSION


try:
    readme = open(os.path.join(os.path.dirname(__file__), "README.md")).read()
except OSError:
    readme = "Install a local SSH public key on a remote host"

setup(
    name='ssh-copy-id',
    description='Install a local SSH public key on a remote host',
    long_description=readme,
    long_description_content_type='text/markdown',
    version=read_version(),
    author='Dustin Kirkland, Casey Marshall',
    author_email='dustin.kirkland@gmail.com, casey.marshall@gmail.com',
    license="GPLv3",
    keywords="ssh public key authorized_keys",
    platforms=['any'],
    packages=['ssh_copy_id'],
    python_requires='>=3.7',
    install_requires=["distro>=1.6.0"],
    extras_require={
        'test': ['pytest>=7'],
    },
    entry_points={
        'console_scripts': [
            'ssh-copy-id = ssh_copy_id:main'
        ],
    }
)

# vi: ts=4 expandtab syntax=python
