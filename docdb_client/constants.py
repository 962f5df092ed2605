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


import importlib_metadata


__version__ = importlib_metadata.version("docdb_client")


# Seconds allowed for the initial connection and ping of the cluster
DEFAULT_CONNECT_TIMEOUT = 5

# Seconds allowed for a single insert, find or delete
DEFAULT_QUERY_TIMEOUT = 30

DEFAULT_ENDPOINT = "127.0.0.1:27017"
DEFAULT_REPLICA_SET = "rs0"

# Which instances to read from
DEFAULT_READ_PREFERENCE = "secondaryPreferred"

READ_PREFERENCES = (
    "primary",
    "primaryPreferred",
    "secondary",
    "secondaryPreferred",
    "nearest",
)

# Database and collection used by the sample program
DEFAULT_DATABASE = "sample-database"
DEFAULT_COLLECTION = "collection"

# The connection URI layout. Booleans are rendered as "true"/"false".
CONNECTION_STRING_TEMPLATE = (
    "mongodb://%s:%s@%s/?tls=%s&replicaSet=%s&readpreference=%s&directConnection=%s"
)

# Default host and facility for logging to the syslog.
DEFAULT_SYSLOG_HOST = "localhost:514"
DEFAULT_SYSLOG_FACILITY = "user"

# ROTATING LOGFILE
# The type of interval
# (seconds, minutes, hours... c.f. logging.handlers.TimedRotatingFileHandler)
DEFAULT_LOGFILE_WHEN = "midnight"
# The rollover interval
DEFAULT_LOGFILE_INTERVAL = 1
# Number of log files to keep
DEFAULT_LOGFILE_BACKUPCOUNT = 7
# The log format
DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
