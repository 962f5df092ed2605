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

"""Session Manager for a MongoDB compatible document database.

A Session builds the connection URI from a SessionConfig, connects with
TLS and verifies the cluster with a ping. It then runs inserts, finds and
deletes against collection handles supplied by the caller, each bounded by
the configured query timeout.
"""

import logging
from urllib.parse import quote_plus

import bson.errors
import pymongo
import pymongo.errors

from pymongo import MongoClient

from docdb_client import constants, errors
from docdb_client.config import SessionConfig
from docdb_client.tls import tls_options
from docdb_client.util import exception_wrapper, redact_uri, uri_bool

LOG = logging.getLogger(__name__)

wrap_connect_errors = exception_wrapper(
    {
        pymongo.errors.ConfigurationError: errors.ConfigError,
        pymongo.errors.PyMongoError: errors.ConnectError,
    },
    "failed to connect to cluster",
)


def _write_errors(message):
    return exception_wrapper(
        {
            pymongo.errors.PyMongoError: errors.WriteError,
            bson.errors.BSONError: errors.WriteError,
        },
        message,
    )


def _query_errors(message):
    return exception_wrapper(
        {
            pymongo.errors.PyMongoError: errors.QueryError,
            bson.errors.BSONError: errors.QueryError,
        },
        message,
    )


def build_uri(config):
    """Fill the connection string template from a SessionConfig."""
    return constants.CONNECTION_STRING_TEMPLATE % (
        quote_plus(config.username),
        quote_plus(config.password),
        config.endpoint,
        uri_bool(config.tls),
        config.replica_set,
        config.read_preference,
        uri_bool(config.direct_connection),
    )


class Session(object):
    """A connected client to the cluster.

    The session owns its MongoClient. Use it as a context manager, or call
    close(), to release the client's connections.
    """

    def __init__(self, config):
        self.config = config
        self.client = None

        self.uri = build_uri(config)
        tls_kwargs = tls_options(config)

        client = self._create_client(tls_kwargs)
        try:
            self._ping(client)
        except BaseException:
            client.close()
            raise

        self.client = client
        LOG.info("Connected to cluster at %s", redact_uri(self.uri))

    @classmethod
    def from_config(cls, config):
        """Create a new Session from a parsed Config object."""
        return cls(SessionConfig.from_config(config))

    @wrap_connect_errors
    def _create_client(self, tls_kwargs):
        timeout_ms = int(self.config.connect_timeout * 1000)
        return MongoClient(
            self.uri,
            connectTimeoutMS=timeout_ms,
            serverSelectionTimeoutMS=timeout_ms,
            tz_aware=self.config.tz_aware,
            **tls_kwargs
        )

    @wrap_connect_errors
    def _ping(self, client):
        # Forces a round trip, which verifies the connection string
        # and the credentials.
        with pymongo.timeout(self.config.connect_timeout):
            client.admin.command("ping")

    @property
    def connected(self):
        return self.client is not None

    def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None
            LOG.info("Closed connection to %s", self.config.endpoint)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _check_connected(self):
        if self.client is None:
            raise errors.ConnectError("session is closed")

    def collection(self, database, name):
        """Return the handle of collection name in database."""
        self._check_connected()
        return self.client[database][name]

    @_write_errors("failed to insert document")
    def insert_one(self, collection, document):
        """Insert a single document and return its _id."""
        self._check_connected()
        with pymongo.timeout(self.config.query_timeout):
            res = collection.insert_one(document)
        return res.inserted_id

    @_write_errors("failed to insert documents")
    def insert_many(self, collection, documents):
        """Insert documents and return their ids, in input order.

        Documents inserted before a failure are not rolled back.
        """
        self._check_connected()
        documents = list(documents)
        if not documents:
            raise errors.EmptyDocsError("no documents to insert")
        with pymongo.timeout(self.config.query_timeout):
            res = collection.insert_many(documents)
        return list(res.inserted_ids)

    @_query_errors("failed to run find query")
    def find_many(self, collection, filter=None, projection=None):
        """Return every document matching filter.

        projection restricts the returned fields; when it is None full
        documents are returned. The cursor is drained before returning, so
        a failure while decoding any document fails the whole query.
        """
        self._check_connected()
        if filter is None:
            filter = {}
        results = []
        with pymongo.timeout(self.config.query_timeout):
            cursor = collection.find(filter, projection)
            try:
                for doc in cursor:
                    LOG.debug("Returned: %r", doc)
                    results.append(doc)
            finally:
                cursor.close()
        return results

    @_write_errors("failed to delete documents")
    def delete_many(self, collection, filter=None):
        """Delete every document matching filter and return the count."""
        self._check_connected()
        if filter is None:
            filter = {}
        with pymongo.timeout(self.config.query_timeout):
            res = collection.delete_many(filter)
        LOG.info(
            "Deleted %d documents from collection '%s'",
            res.deleted_count,
            collection.name,
        )
        return res.deleted_count
