# Copyright 2013-2014 MongoDB, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


from setuptools import setup

classifiers = """\
Development Status :: 4 - Beta
Intended Audience :: Developers
License :: OSI Approved :: Apache Software License
Programming Language :: Python :: 3
Topic :: Database
Topic :: Software Development :: Libraries :: Python Modules
Operating System :: Unix
Operating System :: MacOS :: MacOS X
Operating System :: Microsoft :: Windows
Operating System :: POSIX
"""

setup(
    name="docdb-client",
    version="1.0.0.dev0",
    description="TLS session manager and sample client for DocumentDB and MongoDB",
    keywords=["docdb", "documentdb", "mongo", "mongodb", "tls"],
    platforms=["any"],
    classifiers=list(filter(None, classifiers.split("\n"))),
    install_requires=[
        "pymongo >= 4.2",
        "importlib_metadata>=0.6",
        "autocommand",
        "importlib_resources>=1.1",
    ],
    packages=["docdb_client"],
    package_data={"docdb_client": ["route.json"]},
    entry_points={
        "console_scripts": [
            "docdb-client-sample = docdb_client.cli:main",
            "docdb-ping = docdb_client.ping:run",
        ]
    },
    extras_require={"test": ["pytest"]},
    python_requires=">=3.7",
)
