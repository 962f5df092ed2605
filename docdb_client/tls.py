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

"""Loads TLS trust material for connections to the cluster.
"""

import logging
import re
import ssl

from docdb_client import errors

LOG = logging.getLogger(__name__)

_PEM_CERTIFICATE_RE = re.compile(
    rb"-----BEGIN CERTIFICATE-----\r?\n.+?\r?\n-----END CERTIFICATE-----", re.DOTALL
)


def load_ca_bundle(path):
    """Read a PEM certificate bundle and return an SSLContext trusting it.

    The whole file is read into memory. Text outside the certificate blocks,
    such as comment lines in any encoding, is ignored. Raises ConfigError if
    the file cannot be read or does not hold any parsable certificate.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except (OSError, IOError) as exc:
        raise errors.ConfigError("failed reading CA file %s: %s" % (path, exc))

    blocks = _PEM_CERTIFICATE_RE.findall(data)
    if not blocks:
        raise errors.ConfigError("failed parsing pem file %s" % path)

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    try:
        cadata = b"\n".join(blocks).decode("ascii")
        context.load_verify_locations(cadata=cadata)
    except (ssl.SSLError, ValueError) as exc:
        raise errors.ConfigError("failed parsing pem file %s: %s" % (path, exc))
    return context


def tls_options(config):
    """Keyword arguments for MongoClient implementing the TLS settings
    of a SessionConfig.
    """
    if not config.tls:
        if config.ca_file is not None:
            LOG.warning("TLS is disabled, ignoring CA file %s", config.ca_file)
        return {}

    options = {}
    if config.ca_file is not None:
        load_ca_bundle(config.ca_file)
        options["tlsCAFile"] = config.ca_file
    if config.tls_allow_invalid_hostnames:
        LOG.warning(
            "Certificate hostname validation is disabled for %s", config.endpoint
        )
        options["tlsAllowInvalidHostnames"] = True
    return options
