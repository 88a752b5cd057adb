# ugcache - main setup code

import os
import re

from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))


def read_version():
    # do not import ugcache here, its dependencies might not be installed yet.
    with open(os.path.join(here, "src", "ugcache", "_version.py")) as fd:
        m = re.search(r'^version = "([^"]+)"', fd.read(), re.MULTILINE)
    if m is None:
        raise RuntimeError("Unable to find version string in src/ugcache/_version.py")
    return m.group(1)


with open(os.path.join(here, "README.rst")) as fd:
    long_description = fd.read()

install_requires = [
    "packaging",
    "jsonargparse",
]

extras_require = {
    "test": [
        "pytest",
    ],
}

setup(
    name="ugcache",
    version=read_version(),
    description="Memoizing cache for OS user and group lookups",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    license="BSD-3-Clause",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "ugcache = ugcache.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Systems Administration",
    ],
)
