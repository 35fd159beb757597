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
"""Shared implementation."""

import collections
import enum

import grpc


@enum.unique
class Shape(enum.Enum):
    """The four RPC shapes.

    Each value names both the grpc.Channel multi-callable factory and the
    prefix of the grpc method handler factory for that shape.
    """

    UNARY_UNARY = 'unary_unary'
    UNARY_STREAM = 'unary_stream'
    STREAM_UNARY = 'stream_unary'
    STREAM_STREAM = 'stream_stream'

    @property
    def request_streaming(self):
        return self in (Shape.STREAM_UNARY, Shape.STREAM_STREAM)

    @property
    def response_streaming(self):
        return self in (Shape.UNARY_STREAM, Shape.STREAM_STREAM)


_SHAPES = {
    True: {
        True: Shape.STREAM_STREAM,
        False: Shape.STREAM_UNARY,
    },
    False: {
        True: Shape.UNARY_STREAM,
        False: Shape.UNARY_UNARY,
    }
}


def shape_of(request_streaming, response_streaming):
    return _SHAPES[bool(request_streaming)][bool(response_streaming)]


class Status(collections.namedtuple('Status', ('code', 'details'))):
    """The terminal status of a call.

    Attributes:
      code: A grpc.StatusCode.
      details: A possibly-empty string describing the status.
    """

    @property
    def ok(self):
        return self.code is grpc.StatusCode.OK


OK_STATUS = Status(grpc.StatusCode.OK, '')


def fully_qualified_method(service, method):
    return '/{}/{}'.format(service, method)


def point_key(point):
    return (point.latitude, point.longitude)


def format_point(point):
    # not delegating in point.__str__ because it is an empty string when its
    # values are zero. In addition, it puts a newline between the fields.
    return 'latitude: {}, longitude: {}'.format(point.latitude,
                                                 point.longitude)
