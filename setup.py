#!/usr/bin/env python3
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
#
# See LICENSE for more details.

import os
import shutil
from pathlib import Path

from setuptools import Command, find_packages, setup

BASE_PATH = os.path.dirname(__file__)
with open(os.path.join(BASE_PATH, "VERSION"), "r", encoding="utf-8") as f:
    VERSION = f.read().strip()


class Clean(Command):
    """Our custom command to get rid of junk files after build."""

    description = "Get rid of scratch, byte files and build stuff."
    user_options = []

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    def run(self):
        cleaning_list = ["./build", "./dist"]
        cleaning_list += list(Path(".").rglob("*.egg-info"))
        cleaning_list += list(Path(".").rglob("*.pyc"))
        cleaning_list += list(Path(".").rglob("__pycache__"))

        for e in cleaning_list:
            try:
                if not os.path.exists(e):
                    continue
                if os.path.isfile(e):
                    os.remove(e)
                if os.path.isdir(e):
                    shutil.rmtree(e)
            except FileNotFoundError:
                print(f"File not found: {e}, unable to delete.")
            except PermissionError:
                print(f"Permission denied for {e}, unable to delete.")


setup(
    name="fatalcheck",
    version=VERSION,
    description="Expect fatal error calls in tests without ending the process",
    packages=find_packages(exclude=("selftests*",)),
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Testing",
    ],
    cmdclass={
        "clean": Clean,
    },
)
