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
"""Exceptions raised by the route guide."""

import grpc

from routeguide import _common


class RouteGuideError(Exception):
    """The base class of all route guide exceptions."""


class CancelledError(RouteGuideError):
    """Raised at a stream suspension point after the stream was cancelled."""


class StatusError(RouteGuideError):
    """A call terminated with a non-OK status.

    Servicers raise this to terminate a call with a specific status code;
    clients receive it when a call they made did not succeed.

    Attributes:
      code: The grpc.StatusCode of the call.
      details: The details string of the call.
    """

    def __init__(self, code, details=''):
        super(StatusError, self).__init__(code, details)
        self.code = code
        self.details = details

    @property
    def status(self):
        return _common.Status(self.code, self.details)

    @classmethod
    def from_rpc_error(cls, rpc_error):
        """Converts a grpc.RpcError raised by an invocation."""
        if isinstance(rpc_error, grpc.Call):
            return cls(rpc_error.code(), rpc_error.details() or '')
        return cls(grpc.StatusCode.UNKNOWN, str(rpc_error))

    def __str__(self):
        return '<StatusError of RPC that terminated with:\n\tstatus = {}\n\tdetails = "{}"\n>'.format(
            self.code, self.details)
