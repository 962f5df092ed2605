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

"""Exceptions raised by the docdb_client package."""


class DocDBClientError(Exception):
    """Base class for all exceptions in the docdb_client package
    """


class ConfigError(DocDBClientError):
    """Raised for an invalid configuration or unusable TLS material
    """


# Name used by the command line configuration layer.
InvalidConfiguration = ConfigError


class ConnectError(DocDBClientError):
    """Raised when the cluster can't be reached, authenticated or pinged
    """


class WriteError(DocDBClientError):
    """Raised for failed inserts and deletes
    """


class EmptyDocsError(WriteError):
    """Raised on attempts to insert empty sequences of documents
    """


class QueryError(DocDBClientError):
    """Raised when a find cannot run or a result cannot be decoded
    """
