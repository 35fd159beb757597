# Copyright 2026 gRPC authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Common resources used by the route guide server and client."""

import json
import logging
import os

from routeguide import _protos

_LOGGER = logging.getLogger(__name__)

DEFAULT_DATABASE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                                     'data', 'route_guide_db.json')


def read_route_guide_database(path=None):
    """Reads the route guide database.

    Args:
      path: The path of a JSON file holding a list of records of the form
        {"location": {"latitude": ..., "longitude": ...}, "name": ...}.
        Defaults to the database shipped with the package.

    Returns:
      The full contents of the route guide database as a list of
        Features, in file order.
    """
    if path is None:
        path = DEFAULT_DATABASE_PATH
    feature_list = []
    with open(path) as route_guide_db_file:
        for item in json.load(route_guide_db_file):
            feature = _protos.Feature(
                name=item['name'],
                location=_protos.Point(
                    latitude=item['location']['latitude'],
                    longitude=item['location']['longitude']))
            feature_list.append(feature)
    _LOGGER.debug('Read %d records from %s.', len(feature_list), path)
    return feature_list
