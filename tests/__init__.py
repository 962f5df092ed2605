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
import logging
import os
import sys
import unittest
from unittest.case import SkipTest

logging.basicConfig(stream=sys.stdout)

# Configurable cluster used by the live tests. They are skipped unless
# DOCDB_ENDPOINT is set.
docdb_endpoint = os.environ.get("DOCDB_ENDPOINT", "")
db_user = os.environ.get("DB_USER", "docdb")
db_password = os.environ.get("DB_PASSWORD", "")
docdb_ca_file = os.environ.get("DOCDB_CA_FILE") or None
docdb_tls = os.environ.get("DOCDB_TLS", "true").lower() == "true"
docdb_replica_set = os.environ.get("DOCDB_REPLICA_SET", "rs0")

# Database and collection the live tests write to
TEST_DATABASE = "sample-database"
TEST_COLLECTION = "collection"

