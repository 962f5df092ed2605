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

import json
import logging
import numbers
import optparse
import re
import sys

from collections import namedtuple

from docdb_client import constants, errors
from docdb_client.constants import __version__

LOG = logging.getLogger(__name__)


def default_apply_function(option, cli_values):
    first_value = list(cli_values.values())[0]
    if first_value is not None:
        option.value = first_value


class Option(object):
    """A config file option which can be overwritten on the command line.

    config_key is the corresponding field in the JSON config file.

    apply_function has the following signature:
    def apply_function(option, cli_values):
        # modify option.value ...

    When apply_function is invoked, option.value will be set to the
    value given in the config file (or the default value).

    apply_function reads the cli_values and modifies option.value accordingly
    """

    def __init__(
        self,
        config_key=None,
        default=None,
        type=None,
        apply_function=default_apply_function,
    ):
        self.config_key = config_key
        self.value = default
        self.type = type
        self.apply_function = apply_function

        self.cli_names = []
        self.cli_options = []

    def validate_type(self):
        if self.type is None:
            return True
        if self.type == float:
            # JSON has no separate integer type for timeouts
            return isinstance(self.value, numbers.Real) and not isinstance(
                self.value, bool
            )
        return isinstance(self.value, self.type)

    def add_cli(self, *args, **kwargs):
        """Add a command line argument.

        All of the given arguments will be passed directly to
        optparse.OptionParser().add_option
        """
        self.cli_options.append((args, kwargs))


class Config(object):
    """Manages command line application configuration.

    conf = Config(options)
    conf.parse_args()
    value = conf['key']
    value2 = conf['key1.key2'] # same as conf['key1']['key2']
    """

    def __init__(self, options):
        self.options = options

        self.config_key_to_option = dict(
            [(option.config_key, option) for option in self.options]
        )

    def parse_args(self, argv=None):
        """Parses command line arguments from stdin (or given argv).

        Does the following:
        1. Parses command line arguments
        2. Loads config file into options (if config file specified)
        3. calls option.apply_function with the parsed cli_values
        """

        # parse the command line options
        parser = optparse.OptionParser(version="%prog version: " + __version__)
        for option in self.options:
            for args, kwargs in option.cli_options:
                cli_option = parser.add_option(*args, **kwargs)
                option.cli_names.append(cli_option.dest)
        parsed_options, args = parser.parse_args(argv)
        if args:
            raise errors.InvalidConfiguration(
                "The following command line arguments are not recognized: "
                + ", ".join(args)
            )

        # load the config file
        if getattr(parsed_options, "config_file", None):
            self.load_file(parsed_options.config_file)

        # apply the command line arguments
        values = parsed_options.__dict__
        for option in self.options:
            option.apply_function(
                option, dict((k, values.get(k)) for k in option.cli_names)
            )

    def __getitem__(self, key):
        keys = key.split(".")
        cur = self.config_key_to_option[keys[0]].value
        for k in keys[1:]:
            if cur is not None:
                if isinstance(cur, dict):
                    cur = cur.get(k)
                else:
                    cur = None
        return cur

    def load_file(self, path):
        try:
            with open(path) as f:
                self.load_json(f.read())
        except (OSError, IOError, ValueError) as exc:
            tb = sys.exc_info()[2]
            raise errors.InvalidConfiguration(str(exc)).with_traceback(tb)

    def load_json(self, text):
        parsed_config = json.loads(text)
        for k in parsed_config:
            option = self.config_key_to_option.get(k)
            if option:
                # load into option.value
                if isinstance(parsed_config[k], dict) and isinstance(
                    option.value, dict
                ):
                    for k2 in parsed_config[k]:
                        option.value[k2] = parsed_config[k][k2]
                else:
                    option.value = parsed_config[k]

                # type check
                if not option.validate_type():
                    raise errors.InvalidConfiguration(
                        "%s should be a %r, %r was given!"
                        % (
                            option.config_key,
                            option.type.__name__,
                            type(option.value).__name__,
                        )
                    )
            else:
                if not k.startswith("__"):
                    LOG.warning("Unrecognized option: %s" % k)


_SessionConfigBase = namedtuple(
    "SessionConfig",
    [
        "username",
        "password",
        "endpoint",
        "tls",
        "tls_allow_invalid_hostnames",
        "direct_connection",
        "replica_set",
        "read_preference",
        "connect_timeout",
        "query_timeout",
        "ca_file",
        "tz_aware",
    ],
)


class SessionConfig(_SessionConfigBase):
    """Immutable settings for a single Session.

    Every field of the connection URI must be present, since the URI is
    built by filling in a fixed template.
    """

    __slots__ = ()

    def __new__(
        cls,
        username,
        password,
        endpoint=constants.DEFAULT_ENDPOINT,
        tls=True,
        tls_allow_invalid_hostnames=False,
        direct_connection=True,
        replica_set=constants.DEFAULT_REPLICA_SET,
        read_preference=constants.DEFAULT_READ_PREFERENCE,
        connect_timeout=constants.DEFAULT_CONNECT_TIMEOUT,
        query_timeout=constants.DEFAULT_QUERY_TIMEOUT,
        ca_file=None,
        tz_aware=False,
    ):
        self = super(SessionConfig, cls).__new__(
            cls,
            username,
            password,
            endpoint,
            bool(tls),
            bool(tls_allow_invalid_hostnames),
            bool(direct_connection),
            replica_set,
            read_preference,
            connect_timeout,
            query_timeout,
            ca_file,
            bool(tz_aware),
        )
        self.validate()
        return self

    def __repr__(self):
        return super(SessionConfig, self._replace(password="*****")).__repr__()

    def validate(self):
        for field in (
            "username",
            "password",
            "endpoint",
            "replica_set",
            "read_preference",
        ):
            value = getattr(self, field)
            if not isinstance(value, str) or not value:
                raise errors.ConfigError("%s must be a non-empty string" % field)

        if self.read_preference not in constants.READ_PREFERENCES:
            raise errors.ConfigError(
                'read preference must be one of %s, got "%s"'
                % (", ".join(constants.READ_PREFERENCES), self.read_preference)
            )

        for field in ("connect_timeout", "query_timeout"):
            value = getattr(self, field)
            if (
                isinstance(value, bool)
                or not isinstance(value, numbers.Real)
                or value <= 0
            ):
                raise errors.ConfigError(
                    "%s must be a positive number of seconds, got %r" % (field, value)
                )

        if self.ca_file is not None and not isinstance(self.ca_file, str):
            raise errors.ConfigError("ca_file must be a path")

    @classmethod
    def from_config(cls, config):
        """Create a new SessionConfig from a parsed Config object."""
        password = config["authentication.password"]
        password_file = config["authentication.passwordFile"]
        if password_file is not None:
            try:
                with open(password_file) as f:
                    password = re.sub(r"\s", "", f.read())
            except IOError as exc:
                tb = sys.exc_info()[2]
                raise errors.ConfigError(
                    "Could not load password file: %s" % exc
                ).with_traceback(tb)

        return cls(
            username=config["authentication.username"],
            password=password,
            endpoint=config["endpoint"],
            tls=config["tls.enabled"],
            tls_allow_invalid_hostnames=config["tls.allowInvalidHostnames"],
            direct_connection=config["directConnection"],
            replica_set=config["replicaSet"],
            read_preference=config["readPreference"],
            connect_timeout=config["connectTimeout"],
            query_timeout=config["queryTimeout"],
            ca_file=config["tls.caFile"],
            tz_aware=config["timezoneAware"],
        )
