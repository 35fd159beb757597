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
"""The Python implementation of the route guide service."""

import collections
import logging
import math
import threading
import time

import grpc

from routeguide import _common
from routeguide import _errors
from routeguide import _protos
from routeguide import _resources
from routeguide import _store

_LOGGER = logging.getLogger(__name__)

_COORD_FACTOR = 10000000.0
_EARTH_RADIUS_METRES = 6371000


def get_distance(start, end):
    """Great-circle distance in metres between two Points."""
    lat_1 = start.latitude / _COORD_FACTOR
    lat_2 = end.latitude / _COORD_FACTOR
    lon_1 = start.longitude / _COORD_FACTOR
    lon_2 = end.longitude / _COORD_FACTOR
    lat_rad_1 = math.radians(lat_1)
    lat_rad_2 = math.radians(lat_2)
    delta_lat_rad = math.radians(lat_2 - lat_1)
    delta_lon_rad = math.radians(lon_2 - lon_1)

    # Formula is based on http://mathforum.org/library/drmath/view/51879.html
    a = (pow(math.sin(delta_lat_rad / 2), 2) +
         (math.cos(lat_rad_1) * math.cos(lat_rad_2) *
          pow(math.sin(delta_lon_rad / 2), 2)))
    # Rounding can carry a past 1 for antipodal points.
    a = min(1.0, a)
    c =2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return _EARTH_RADIUS_METRES * c


class NoteLog(object):
    """The append-only log of route notes shared by all RouteChat calls."""

    def __init__(self):
        self._lock = threading.Lock()
        self._notes = []
        self._notes_by_point = collections.defaultdict(list)

    def append(self, note):
        """Logs a note.

        Snapshotting the notes already logged at the note's point and
        appending the note happen as one atomic step.

        Returns:
          A tuple of (sequence number, RouteNote) pairs, in log order, of the
            notes logged at the same point before this one.
        """
        logged = _protos.RouteNote()
        logged.CopyFrom(note)
        key = _common.point_key(logged.location)
        with self._lock:
            same_point = self._notes_by_point[key]
            prior = tuple(same_point)
            same_point.append((len(self._notes), logged))
            self._notes.append(logged)
        return prior

    def notes(self):
        with self._lock:
            return tuple(self._notes)

    def clear(self):
        with self._lock:
            self._notes = []
            self._notes_by_point.clear()

    def __len__(self):
        with self._lock:
            return len(self._notes)


class RouteGuideServicerBase(object):
    """Interface exported by the server."""

    def GetFeature(self, request, context):
        """A simple RPC.

        Obtains the feature at a given position.

        A feature with an empty name is returned if there's no feature at the
        given position.
        """
        raise _errors.StatusError(grpc.StatusCode.UNIMPLEMENTED,
                                  'Method not implemented!')

    def ListFeatures(self, request, context):
        """A server-to-client streaming RPC.

        Obtains the Features available within the given Rectangle.  Results
        are streamed rather than returned at once (e.g. in a response message
        with a repeated field), as the rectangle may cover a large area and
        contain a huge number of features.
        """
        raise _errors.StatusError(grpc.StatusCode.UNIMPLEMENTED,
                                  'Method not implemented!')

    def RecordRoute(self, request_iterator, context):
        """A client-to-server streaming RPC.

        Accepts a stream of Points on a route being traversed, returning a
        RouteSummary when traversal is completed.
        """
        raise _errors.StatusError(grpc.StatusCode.UNIMPLEMENTED,
                                  'Method not implemented!')

    def RouteChat(self, request_iterator, context):
        """A Bidirectional streaming RPC.

        Accepts a stream of RouteNotes sent while a route is being traversed,
        while receiving other RouteNotes (e.g. from other users).
        """
        raise _errors.StatusError(grpc.StatusCode.UNIMPLEMENTED,
                                  'Method not implemented!')


class RouteGuideServicer(RouteGuideServicerBase):
    """Provides methods that implement functionality of route guide server."""

    def __init__(self, store=None, note_log=None):
        if store is None:
            store = _store.FeatureStore(
                _resources.read_route_guide_database())
        self.store = store
        self.note_log = NoteLog() if note_log is None else note_log

    def GetFeature(self, request, unused_context):
        return self.store.lookup(request)

    def ListFeatures(self, request, unused_context):
        return self.store.query(request)

    def RecordRoute(self, request_iterator, unused_context):
        point_count = 0
        feature_count = 0
        distance = 0.0
        prev_point = None
        start_time = None

        for point in request_iterator:
            if start_time is None:
                start_time = time.time()
            point_count += 1
            if self.store.lookup(point).name:
                feature_count += 1
            if prev_point is not None:
                distance += get_distance(prev_point, point)
            prev_point = point

        elapsed_time = 0 if start_time is None else time.time() - start_time
        return _protos.RouteSummary(point_count=point_count,
                                    feature_count=feature_count,
                                    distance=int(distance),
                                    elapsed_time=int(elapsed_time))

    def RouteChat(self, request_iterator, unused_context):
        emitted = set()
        for new_note in request_iterator:
            for sequence, prev_note in self.note_log.append(new_note):
                if sequence not in emitted:
                    emitted.add(sequence)
                    yield prev_note
