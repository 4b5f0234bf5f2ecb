# Copyright 2020 goggler authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found in the LICENSE file.

from setuptools import setup, find_packages
from goggler import __version__

setup(
    name="goggler",
    version=__version__,
    packages=find_packages(exclude=["tests"]),
    description="RFC5424 syslog client that reconnects once on write failure.",
    author="goggler authors",
    include_package_data=True,
    python_requires=">=3.6",
    install_requires=["PyYAML"],
    extras_require={
        "tests": ["mock", "pytest"],
    },
)
