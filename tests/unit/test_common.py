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
"""Common code used throughout tests of the route guide."""

import threading
import time

import routeguide

# Maximum duration in seconds that a test waits for something that should
# happen promptly.
TIME_ALLOWANCE = 10
# Duration in seconds of deadlines that are meant to expire.
SHORT_TIMEOUT = 0.5

MENDHAM = routeguide.Point(latitude=407838351, longitude=-746143763)
WHIPPANY = routeguide.Point(latitude=408122808, longitude=-743999179)
SHOHOLA = routeguide.Point(latitude=413628156, longitude=-749015468)
UNNAMED = routeguide.Point(latitude=407113723, longitude=-749746483)
NOWHERE = routeguide.Point(latitude=0, longitude=0)


def feature(name, point):
    return routeguide.Feature(name=name, location=point)


def test_features():
    return [
        feature('Patriots Path, Mendham, NJ 07945, USA', MENDHAM),
        feature('101 New Jersey 10, Whippany, NJ 07981, USA', WHIPPANY),
        feature('U.S. 6, Shohola, PA 18458, USA', SHOHOLA),
        feature('', UNNAMED),
    ]


def test_store():
    return routeguide.FeatureStore(test_features())


def rectangle(lo_latitude, lo_longitude, hi_latitude, hi_longitude):
    return routeguide.Rectangle(
        lo=routeguide.Point(latitude=lo_latitude, longitude=lo_longitude),
        hi=routeguide.Point(latitude=hi_latitude, longitude=hi_longitude))


def route_note(message, point):
    return routeguide.RouteNote(message=message, location=point)


def test_server(servicer, **config_overrides):
    """Starts a server on an unused port.

    Returns:
      The started RouteGuideServer and the port it is bound to.
    """
    config = routeguide.ServerConfig(address='localhost:0',
                                     max_workers=8,
                                     stream_buffer_size=4)
    config = config._replace(**config_overrides)
    server = routeguide.RouteGuideServer(servicer, config)
    port = server.start()
    return server, port


def test_client(port, **kwargs):
    return routeguide.RouteGuideClient('localhost:{}'.format(port), **kwargs)


def wait_until(predicate, timeout=TIME_ALLOWANCE):
    """Blocks until predicate returns a true value or the timeout elapses."""
    until = time.time() + timeout
    while not predicate():
        if time.time() > until:
            raise AssertionError(
                'Condition not met within {} seconds.'.format(timeout))
        time.sleep(0.01)


class BlockingServicer(routeguide.RouteGuideServicer):
    """A servicer whose GetFeature and ListFeatures block until released.

    GetFeature blocks before responding; ListFeatures blocks after its first
    feature. The entered event is set once either has reached its block.
    """

    def __init__(self, store=None):
        super(BlockingServicer, self).__init__(
            test_store() if store is None else store)
        self.entered = threading.Event()
        self.release = threading.Event()

    def GetFeature(self, request, context):
        self.entered.set()
        self.release.wait()
        return super(BlockingServicer, self).GetFeature(request, context)

    def ListFeatures(self, request, context):
        features = super(BlockingServicer, self).ListFeatures(request, context)
        for index, feature in enumerate(features):
            yield feature
            if index == 0:
                self.entered.set()
                self.release.wait()
