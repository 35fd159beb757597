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
"""A read-only index of named point features."""

from routeguide import _common
from routeguide import _protos


class FeatureStore(object):
    """Named features indexed by exact point.

    The store is immutable once built and is safe to share between threads
    without locking.
    """

    def __init__(self, features):
        """Constructor.

        Args:
          features: An iterable of Features. Features with an empty name mark
            the absence of a feature and are not stored. When two features
            share a point the first one is the one found by lookup.
        """
        self._features = tuple(
            feature for feature in features if feature.name)
        self._index = {}
        for feature in self._features:
            self._index.setdefault(_common.point_key(feature.location),
                                   feature)

    def __len__(self):
        return len(self._features)

    def __iter__(self):
        return iter(self._features)

    def lookup(self, point):
        """Returns the Feature at the given point.

        A Feature with an empty name at the requested point is returned if no
        feature is stored there.
        """
        feature = self._index.get(_common.point_key(point))
        if feature is None:
            return _protos.Feature(name='', location=point)
        return feature

    def query(self, rectangle):
        """Returns a fresh iterator over the features inside a rectangle.

        The corners of the rectangle may be given in either order and all four
        edges are inclusive. Features are yielded in the order they were
        loaded.
        """
        left = min(rectangle.lo.longitude, rectangle.hi.longitude)
        right = max(rectangle.lo.longitude, rectangle.hi.longitude)
        top = max(rectangle.lo.latitude, rectangle.hi.latitude)
        bottom = min(rectangle.lo.latitude, rectangle.hi.latitude)
        for feature in self._features:
            if (feature.name and left <= feature.location.longitude <= right
                    and bottom <= feature.location.latitude <= top):
                yield feature
