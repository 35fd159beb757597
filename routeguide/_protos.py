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
"""Message classes and service descriptor of the route guide interface.

Both are loaded from route_guide.proto at import time, so the package needs
no protoc step. The .proto file is found relative to sys.path, which holds
the directory containing the routeguide package wherever the package is
importable from.
"""

import collections

from google.protobuf import descriptor_pb2
import grpc

from routeguide import _common

PROTO_PATH = 'routeguide/route_guide.proto'

route_guide_pb2 = grpc.protos(PROTO_PATH)

DESCRIPTOR = route_guide_pb2.DESCRIPTOR
SERVICE_DESCRIPTOR = DESCRIPTOR.services_by_name['RouteGuide']

Point = route_guide_pb2.Point
Rectangle = route_guide_pb2.Rectangle
Feature = route_guide_pb2.Feature
RouteNote = route_guide_pb2.RouteNote
RouteSummary = route_guide_pb2.RouteSummary


class Method(
        collections.namedtuple('Method', (
            'name',
            'fully_qualified_name',
            'shape',
            'request_class',
            'response_class',
        ))):
    """The dispatch-relevant description of one service method."""


def _get_shape(method_descriptor):
    descriptor_proto = descriptor_pb2.MethodDescriptorProto()
    method_descriptor.CopyToProto(descriptor_proto)
    client_streaming = (descriptor_proto.client_streaming
                        if descriptor_proto.HasField('client_streaming') else
                        False)
    server_streaming = (descriptor_proto.server_streaming
                        if descriptor_proto.HasField('server_streaming') else
                        False)
    return _common.shape_of(client_streaming, server_streaming)


def _message_class(message_descriptor):
    return getattr(route_guide_pb2, message_descriptor.name)


def _methods():
    for method_descriptor in SERVICE_DESCRIPTOR.methods:
        yield Method(
            method_descriptor.name,
            _common.fully_qualified_method(SERVICE_DESCRIPTOR.full_name,
                                           method_descriptor.name),
            _get_shape(method_descriptor),
            _message_class(method_descriptor.input_type),
            _message_class(method_descriptor.output_type),
        )


METHODS = tuple(_methods())
METHODS_BY_NAME = {method.name: method for method in METHODS}
