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

"""
Check that a cluster answers a ping with the settings of a JSON config file
"""

import logging

import autocommand

from docdb_client import config, errors
from docdb_client.cli import get_config_options
from docdb_client.session import Session


def check(config_file):
    """Connect with the settings in config_file and close again.

    Returns None on success, or the error message.
    """
    conf = config.Config(get_config_options())
    try:
        conf.parse_args(["--config-file", config_file])
        with Session.from_config(conf):
            pass
    except errors.DocDBClientError as exc:
        return str(exc)
    return None


@autocommand.autocommand(__name__)
def run(
    config_file: "JSON configuration file",
    verbose: "log connection details" = False,
):
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)
    failure = check(config_file)
    if failure is not None:
        print("Ping failed: %s" % failure)
        raise SystemExit(1)
    print("Ping OK")
