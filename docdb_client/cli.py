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

"""Sample program: connects to the cluster, inserts the sample route,
reads it back and empties the collection.
"""

import logging
import logging.handlers
import os
import platform
import sys

import importlib_resources
import pymongo

from bson import json_util

from docdb_client import config, constants, errors
from docdb_client.config import default_apply_function
from docdb_client.constants import __version__
from docdb_client.session import Session
from docdb_client.util import log_fatal_exceptions

LOG = logging.getLogger(__name__)


def get_config_options():
    result = []

    def add_option(*args, **kwargs):
        opt = config.Option(*args, **kwargs)
        result.append(opt)
        return opt

    endpoint = add_option(
        config_key="endpoint", default=constants.DEFAULT_ENDPOINT, type=str
    )

    # -m is the cluster endpoint, a host:port pair.
    endpoint.add_cli(
        "-m",
        "--endpoint",
        dest="endpoint",
        help="Specify the cluster endpoint, which is a host:port pair."
        " For example, `-m localhost:27017`.",
    )

    def apply_authentication(option, cli_values):
        if cli_values["username"]:
            option.value["username"] = cli_values["username"]

        if cli_values["password"]:
            option.value["password"] = cli_values["password"]

        if cli_values["password_file"]:
            option.value["passwordFile"] = cli_values["password_file"]

        if option.value.get("password") and option.value.get("passwordFile"):
            raise errors.InvalidConfiguration(
                "Can't specify both password and password file."
            )

    default_authentication = {"username": None, "password": None, "passwordFile": None}

    authentication = add_option(
        config_key="authentication",
        default=default_authentication,
        type=dict,
        apply_function=apply_authentication,
    )

    authentication.add_cli(
        "-u", "--username", dest="username", help="The user to authenticate as."
    )

    authentication.add_cli(
        "-p",
        "--password",
        dest="password",
        help="The password of the user given with --username.",
    )

    # -f reads the password from a file, so it doesn't have to be typed in.
    authentication.add_cli(
        "-f",
        "--password-file",
        dest="password_file",
        help="A file holding the password for --username. Whitespace in the"
        " file is ignored.",
    )

    def apply_tls(option, cli_values):
        option.value = option.value or {}
        option.value.setdefault("enabled", True)
        option.value.setdefault("allowInvalidHostnames", False)
        option.value.setdefault("caFile", None)
        if cli_values["no_tls"]:
            option.value["enabled"] = False
        if cli_values["tls_allow_invalid_hostnames"]:
            option.value["allowInvalidHostnames"] = True
        if cli_values["tls_ca_file"]:
            option.value["caFile"] = cli_values["tls_ca_file"]
        if option.value["caFile"]:
            option.value["caFile"] = os.path.abspath(option.value["caFile"])

    default_tls = {"enabled": True, "allowInvalidHostnames": False, "caFile": None}

    tls = add_option(
        config_key="tls", default=default_tls, type=dict, apply_function=apply_tls
    )
    tls.add_cli(
        "--no-tls",
        action="store_true",
        dest="no_tls",
        help="Connect without TLS.",
    )
    tls.add_cli(
        "--tls-allow-invalid-hostnames",
        action="store_true",
        dest="tls_allow_invalid_hostnames",
        help="Accept server certificates whose hostname does not match the"
        " endpoint. This is insecure.",
    )
    tls.add_cli(
        "--tls-ca-file",
        dest="tls_ca_file",
        help="Path to a PEM bundle of certificate authority certificates"
        " used to validate the cluster's certificate.",
    )

    def apply_direct_connection(option, cli_values):
        if cli_values["no_direct_connection"]:
            option.value = False

    direct_connection = add_option(
        config_key="directConnection",
        default=True,
        type=bool,
        apply_function=apply_direct_connection,
    )
    direct_connection.add_cli(
        "--no-direct-connection",
        action="store_true",
        dest="no_direct_connection",
        help="Discover the replica set instead of talking to the endpoint only.",
    )

    replica_set = add_option(
        config_key="replicaSet", default=constants.DEFAULT_REPLICA_SET, type=str
    )
    replica_set.add_cli(
        "--replica-set", dest="replica_set", help="Name of the replica set."
    )

    def apply_read_preference(option, cli_values):
        default_apply_function(option, cli_values)
        if option.value not in constants.READ_PREFERENCES:
            raise errors.InvalidConfiguration(
                "readPreference (--read-preference) must be one of %s, got "
                '"%s"' % (", ".join(constants.READ_PREFERENCES), option.value)
            )

    read_preference = add_option(
        config_key="readPreference",
        default=constants.DEFAULT_READ_PREFERENCE,
        type=str,
        apply_function=apply_read_preference,
    )
    read_preference.add_cli(
        "--read-preference",
        dest="read_preference",
        choices=constants.READ_PREFERENCES,
        help="Which instances to read from.",
    )

    def apply_timeout(option, cli_values):
        default_apply_function(option, cli_values)
        if isinstance(option.value, bool) or option.value <= 0:
            raise errors.InvalidConfiguration(
                "%s must be a positive number of seconds." % option.config_key
            )

    connect_timeout = add_option(
        config_key="connectTimeout",
        default=constants.DEFAULT_CONNECT_TIMEOUT,
        type=float,
        apply_function=apply_timeout,
    )
    connect_timeout.add_cli(
        "--connect-timeout",
        type="float",
        dest="connect_timeout",
        help="Seconds allowed to connect to and ping the cluster. Defaults to 5.",
    )

    query_timeout = add_option(
        config_key="queryTimeout",
        default=constants.DEFAULT_QUERY_TIMEOUT,
        type=float,
        apply_function=apply_timeout,
    )
    query_timeout.add_cli(
        "--query-timeout",
        type="float",
        dest="query_timeout",
        help="Seconds allowed for each insert, find or delete. Defaults to 30.",
    )

    database = add_option(
        config_key="database", default=constants.DEFAULT_DATABASE, type=str
    )
    database.add_cli("-d", "--database", dest="database", help="Database to use.")

    collection = add_option(
        config_key="collection", default=constants.DEFAULT_COLLECTION, type=str
    )
    collection.add_cli(
        "--collection", dest="collection", help="Collection to use."
    )

    def apply_verbosity(option, cli_values):
        if cli_values["verbose"]:
            option.value = 3
        if option.value < 0 or option.value > 3:
            raise errors.InvalidConfiguration("verbosity must be in the range [0, 3].")

    # Default is warnings and above.
    verbosity = add_option(
        config_key="verbosity", default=1, type=int, apply_function=apply_verbosity
    )

    # -v enables verbose logging
    verbosity.add_cli(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="Enables verbose logging.",
    )

    def apply_logging(option, cli_values):
        log_mechs_enabled = [
            cli_values[m]
            for m in ("logfile", "enable_syslog", "stdout")
            if cli_values[m]
        ]
        if len(log_mechs_enabled) > 1:
            raise errors.InvalidConfiguration(
                "You cannot specify more than one logging method "
                "simultaneously. Please choose the logging method you "
                "prefer. "
            )
        if cli_values["log_format"]:
            option.value["format"] = cli_values["log_format"]

        if cli_values["logfile"]:
            when = cli_values["logfile_when"]
            interval = cli_values["logfile_interval"]
            if (
                when
                and when.startswith("W")
                and interval != constants.DEFAULT_LOGFILE_INTERVAL
            ):
                raise errors.InvalidConfiguration(
                    "You cannot specify a log rotation interval when rotating "
                    "based on a weekday (W0 - W6)."
                )

            option.value["type"] = "file"
            option.value["filename"] = cli_values["logfile"]
            if when:
                option.value["rotationWhen"] = when
            if interval:
                option.value["rotationInterval"] = interval
            if cli_values["logfile_backups"]:
                option.value["rotationBackups"] = cli_values["logfile_backups"]

        if cli_values["enable_syslog"]:
            option.value["type"] = "syslog"

        if cli_values["syslog_host"]:
            option.value["host"] = cli_values["syslog_host"]

        if cli_values["syslog_facility"]:
            option.value["facility"] = cli_values["syslog_facility"]

        if cli_values["stdout"]:
            option.value["type"] = "stream"

        # Expand the full path to log file
        option.value["filename"] = os.path.abspath(option.value["filename"])

    default_logging = {
        "type": "stream",
        "filename": "docdb-client.log",
        "format": constants.DEFAULT_LOG_FORMAT,
        "rotationInterval": constants.DEFAULT_LOGFILE_INTERVAL,
        "rotationBackups": constants.DEFAULT_LOGFILE_BACKUPCOUNT,
        "rotationWhen": constants.DEFAULT_LOGFILE_WHEN,
        "host": constants.DEFAULT_SYSLOG_HOST,
        "facility": constants.DEFAULT_SYSLOG_FACILITY,
    }

    logging_option = add_option(
        config_key="logging",
        default=default_logging,
        type=dict,
        apply_function=apply_logging,
    )

    # -w enables logging to a file
    logging_option.add_cli(
        "-w", "--logfile", dest="logfile", help="Log all output to the specified file."
    )

    logging_option.add_cli(
        "--stdout",
        dest="stdout",
        action="store_true",
        help="Log all output to STDOUT. This is the default.",
    )

    logging_option.add_cli(
        "--log-format",
        dest="log_format",
        help="Define a specific format for the log file. "
        "This is based on the python logging lib. "
        "Available parameters can be found at "
        "https://docs.python.org/3/library/logging.html#logrecord-attributes",
    )

    # -s is to enable syslog logging.
    logging_option.add_cli(
        "-s",
        "--enable-syslog",
        action="store_true",
        dest="enable_syslog",
        help="Log to the syslog host given with --syslog-host.",
    )

    logging_option.add_cli(
        "--syslog-host",
        dest="syslog_host",
        help="The syslog host, which may be an address like 'localhost:514' or, "
        "on Unix/Linux, the path to a Unix domain socket such as '/dev/log'. "
        "The default is 'localhost:514'",
    )

    logging_option.add_cli(
        "--syslog-facility",
        dest="syslog_facility",
        help="Used to specify the syslog facility." " The default is 'user'",
    )

    # --logfile-when specifies the type of interval of the rotating file
    # (seconds, minutes, hours)
    logging_option.add_cli(
        "--logfile-when",
        action="store",
        dest="logfile_when",
        type="string",
        help="The type of interval for rotating the log file. "
        "Should be one of "
        "'S' (seconds), 'M' (minutes), 'H' (hours), "
        "'D' (days), 'W0' - 'W6' (days of the week 0 - 6), "
        "or 'midnight' (the default).",
    )

    logging_option.add_cli(
        "--logfile-interval",
        action="store",
        dest="logfile_interval",
        type="int",
        help="How many units of --logfile-when pass before the log file "
        "is rotated. Defaults to 1. You may not use this option if "
        "--logfile-when is set to a weekday (W0 - W6).",
    )

    logging_option.add_cli(
        "--logfile-backups",
        action="store",
        dest="logfile_backups",
        type="int",
        help="How many log files will be kept after rotation. "
        "If set to zero, then no log files will be deleted. "
        "Defaults to 7.",
    )

    config_file = add_option()
    config_file.add_cli(
        "-c",
        "--config-file",
        dest="config_file",
        help="Specify a JSON file to load configurations from.",
    )

    tz_aware = add_option(config_key="timezoneAware", default=False, type=bool)
    tz_aware.add_cli(
        "--tz-aware",
        dest="tz_aware",
        action="store_true",
        help="Make all dates and times timezone-aware.",
    )

    return result


def setup_logging(conf):
    root_logger = logging.getLogger()
    formatter = logging.Formatter(conf["logging.format"])

    log_levels = [logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG]
    loglevel = log_levels[conf["verbosity"]]
    root_logger.setLevel(loglevel)

    if conf["logging.type"] == "file":
        log_out = logging.handlers.TimedRotatingFileHandler(
            conf["logging.filename"],
            when=conf["logging.rotationWhen"],
            interval=conf["logging.rotationInterval"],
            backupCount=conf["logging.rotationBackups"],
        )
        print("Logging to %s." % conf["logging.filename"])
    elif conf["logging.type"] == "syslog":
        syslog_info = conf["logging.host"]
        if ":" in syslog_info:
            log_host, log_port = syslog_info.split(":")
            syslog_info = (log_host, int(log_port))
        log_out = logging.handlers.SysLogHandler(
            address=syslog_info, facility=conf["logging.facility"]
        )
        print("Logging to system log at %s" % conf["logging.host"])
    elif conf["logging.type"] == "stream":
        log_out = logging.StreamHandler()
    else:
        print(
            "Logging type must be one of 'stream', 'syslog', or 'file', not "
            "'%s'." % conf["logging.type"]
        )
        sys.exit(1)

    log_out.setLevel(loglevel)
    log_out.setFormatter(formatter)
    root_logger.addHandler(log_out)
    return root_logger


def log_startup_info():
    """Log info about the current environment."""
    LOG.always("Starting docdb-client version: %s", __version__)
    if "dev" in __version__:
        LOG.warning("This is a development version (%s) of docdb-client", __version__)
    LOG.always("Python version: %s", sys.version)
    LOG.always("Platform: %s", platform.platform())
    LOG.always("pymongo version: %s", pymongo.__version__)
    if not pymongo.has_c():
        LOG.warning(
            "pymongo version %s was installed without the C extensions.",
            pymongo.__version__,
        )


def sample_route():
    """The sample route document shipped with the package."""
    resource = importlib_resources.files("docdb_client").joinpath("route.json")
    text = resource.read_text()
    route = json_util.loads(text)
    LOG.info("BSON data: %r", route)
    return route


def run_sample(session, collection):
    """Insert the sample route, find it by gateway, then empty collection.

    Returns the documents that were found.
    """
    inserted_id = session.insert_one(collection, sample_route())
    LOG.info("InsertedID: %s", inserted_id)

    results = session.find_many(collection, {"gateway": "0.0.0.0"})
    LOG.info("results: %s", json_util.dumps(results))

    session.delete_many(collection, {})
    return results


@log_fatal_exceptions
def main(argv=None):
    """ Runs the sample program (assuming CLI)
    """
    # Setup an initial logging handler that buffers log messages before
    # applying the final logging configuration.
    initial_handler = logging.handlers.MemoryHandler(100)
    root_logger = logging.getLogger()
    root_logger.addHandler(initial_handler)

    # Parse configuration and setup logging.
    conf = config.Config(get_config_options())
    conf.parse_args(argv)
    setup_logging(conf)

    # Flush the buffered log messages to the final logging handler.
    initial_handler.setTarget(root_logger.handlers[-1])
    initial_handler.flush()
    root_logger.removeHandler(initial_handler)

    log_startup_info()

    with Session.from_config(conf) as session:
        collection = session.collection(conf["database"], conf["collection"])
        results = run_sample(session, collection)
    print(json_util.dumps(results, indent=2))


if __name__ == "__main__":
    main()
