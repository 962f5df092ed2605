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

"""A set of utilities used throughout docdb-client
"""

import logging
import re
import sys

LOG = logging.getLogger(__name__)


def exception_wrapper(mapping, message=None):
    """Translate exceptions raised by the wrapped function.

    mapping is an ordered dict of source exception type to the type that
    should be raised instead; the first matching entry wins. When message
    is given it prefixes the text of the translated exception.
    """

    def decorator(f):
        def wrapped(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except Exception:
                exc_type, exc_value, exc_tb = sys.exc_info()
                new_type = None
                for src_type in mapping:
                    if issubclass(exc_type, src_type):
                        new_type = mapping[src_type]
                        break

                if new_type is None:
                    raise
                text = str(exc_value)
                if message:
                    text = "%s: %s" % (message, text)
                raise new_type(text).with_traceback(exc_tb)

        wrapped.__name__ = f.__name__
        wrapped.__doc__ = f.__doc__
        return wrapped

    return decorator


def uri_bool(value):
    """Render a boolean the way connection string options expect it."""
    return "true" if value else "false"


_PASSWORD_RE = re.compile(r"^(mongodb(?:\+srv)?://[^:/@]*:)[^@]*@")


def redact_uri(uri):
    """Replace the password of a connection URI with asterisks.
    """
    return _PASSWORD_RE.sub(r"\1*****@", uri)


def log_fatal_exceptions(func):
    def wrapped(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception:
            LOG.exception("Fatal Exception")
            raise

    return wrapped
