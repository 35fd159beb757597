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
"""The route guide: a gRPC service of point features and route notes."""

import logging

from routeguide._calls import CallState
from routeguide._client import Operation
from routeguide._client import OperationState
from routeguide._client import ResponseStream
from routeguide._client import RouteGuideClient
from routeguide._client import RouteGuideStub
from routeguide._common import Shape
from routeguide._common import Status
from routeguide._config import ClientConfig
from routeguide._config import ServerConfig
from routeguide._config import parse_client_args
from routeguide._config import parse_server_args
from routeguide._errors import CancelledError
from routeguide._errors import RouteGuideError
from routeguide._errors import StatusError
from routeguide._protos import Feature
from routeguide._protos import Point
from routeguide._protos import Rectangle
from routeguide._protos import RouteNote
from routeguide._protos import RouteSummary
from routeguide._resources import read_route_guide_database
from routeguide._server import RouteGuideServer
from routeguide._service import NoteLog
from routeguide._service import RouteGuideServicer
from routeguide._service import RouteGuideServicerBase
from routeguide._service import get_distance
from routeguide._store import FeatureStore
from routeguide._streams import HandoffQueue
from routeguide._streams import produce

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    'CallState',
    'CancelledError',
    'ClientConfig',
    'Feature',
    'FeatureStore',
    'HandoffQueue',
    'NoteLog',
    'Operation',
    'OperationState',
    'Point',
    'Rectangle',
    'ResponseStream',
    'RouteGuideClient',
    'RouteGuideError',
    'RouteGuideServer',
    'RouteGuideServicer',
    'RouteGuideServicerBase',
    'RouteGuideStub',
    'RouteNote',
    'RouteSummary',
    'ServerConfig',
    'Shape',
    'Status',
    'StatusError',
    'get_distance',
    'parse_client_args',
    'parse_server_args',
    'produce',
    'read_route_guide_database',
)
