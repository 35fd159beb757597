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
"""Invocation of the route guide service."""

import enum
import logging
import threading
import time

import grpc

from routeguide import _common
from routeguide import _config
from routeguide import _errors
from routeguide import _protos

_LOGGER = logging.getLogger(__name__)

_CANCELLED_BEFORE_EXECUTION_DETAILS = 'Cancelled before execution.'
_LOCALLY_CANCELLED_DETAILS = 'Locally cancelled by application!'


class RouteGuideStub(object):
    """Multi-callables of the route guide methods."""

    def __init__(self, channel):
        """Constructor.

        Args:
          channel: A grpc.Channel.
        """
        for method in _protos.METHODS:
            multi_callable_factory = getattr(channel, method.shape.value)
            setattr(
                self, method.name,
                multi_callable_factory(
                    method.fully_qualified_name,
                    request_serializer=method.request_class.SerializeToString,
                    response_deserializer=method.response_class.FromString))


def _status_of(call):
    return _common.Status(call.code(), call.details() or '')


class ResponseStream(object):
    """The lazily received responses of a streaming call."""

    def __init__(self, call):
        self._call = call

    def __iter__(self):
        return self

    def __next__(self):
        try:
            return next(self._call)
        except grpc.RpcError as rpc_error:
            raise _errors.StatusError.from_rpc_error(rpc_error)

    def next(self):
        return self.__next__()

    def cancel(self):
        """Cancels the call; returns False if it had already terminated."""
        return self._call.cancel()

    @property
    def status(self):
        """The terminal Status of the call, or None while it is in progress."""
        if not self._call.done():
            return None
        return _status_of(self._call)


@enum.unique
class OperationState(enum.Enum):
    IDLE = 'idle'
    EXECUTING = 'executing'
    FINISHED = 'finished'


class Operation(object):
    """A call whose execution is triggered explicitly.

    Creating an Operation performs no I/O. The call is made by execute, which
    blocks the thread calling it; any other thread may meanwhile read status
    or request cancellation. Cancelling an operation that has not been
    executed finishes it at once with CANCELLED, and execute then makes no
    call. A cancellation requested while the call is in flight races with its
    natural completion, so the terminal status is not necessarily CANCELLED.
    """

    def __init__(self, multi_callable, request, response_streaming,
                 timeout=None, wait_for_ready=None):
        self._multi_callable = multi_callable
        self._request = request
        self._response_streaming = response_streaming
        self._timeout = timeout
        self._wait_for_ready = wait_for_ready

        self._condition = threading.Condition()
        self._state = OperationState.IDLE
        self._cancel_requested = False
        self._executed = False
        self._call = None
        self._status = None

    @property
    def state(self):
        with self._condition:
            return self._state

    @property
    def status(self):
        """The terminal Status of the operation.

        A call in flight has no status until the transport reports how it
        ended, so this is None while the operation is IDLE or EXECUTING. Use
        state to tell those two apart.
        """
        with self._condition:
            return self._status

    def cancelled(self):
        """Whether cancellation of the operation has been requested."""
        with self._condition:
            return self._cancel_requested

    def done(self):
        with self._condition:
            return self._state is OperationState.FINISHED

    def cancel(self):
        """Requests cancellation of the operation.

        Returns:
          True if the request was made before the operation finished, False
            otherwise. A True return does not mean an executing operation
            will finish CANCELLED.
        """
        with self._condition:
            self._cancel_requested = True
            if self._state is OperationState.FINISHED:
                return False
            elif self._state is OperationState.IDLE:
                self._status = _common.Status(
                    grpc.StatusCode.CANCELLED,
                    _CANCELLED_BEFORE_EXECUTION_DETAILS)
                self._state = OperationState.FINISHED
                self._condition.notify_all()
                return True
            call = self._call
        if call is not None:
            call.cancel()
        return True

    def wait(self, timeout=None):
        """Blocks until the operation is finished.

        Returns:
          True if the operation is finished, False if the timeout elapsed
            first.
        """
        until = None if timeout is None else time.time() + timeout
        with self._condition:
            while self._state is not OperationState.FINISHED:
                if until is None:
                    self._condition.wait()
                else:
                    remaining = until - time.time()
                    if remaining <= 0:
                        return False
                    self._condition.wait(timeout=remaining)
            return True

    def _finish(self, status):
        with self._condition:
            self._status = status
            self._state = OperationState.FINISHED
            self._call = None
            self._condition.notify_all()
        _LOGGER.debug('Operation finished with %s.', status.code)

    def _start(self):
        if self._response_streaming:
            return self._multi_callable(self._request,
                                        timeout=self._timeout,
                                        wait_for_ready=self._wait_for_ready)
        return self._multi_callable.future(self._request,
                                           timeout=self._timeout,
                                           wait_for_ready=self._wait_for_ready)

    def execute(self):
        """Makes the call and blocks until it has finished.

        Returns:
          The response of a unary-response call, or a list of all responses
            of a streaming-response call.

        Raises:
          routeguide.StatusError: If the call finished with a non-OK status.
          RuntimeError: If the operation was executed before.
        """
        with self._condition:
            if self._executed:
                raise RuntimeError('Operation already executed.')
            self._executed = True
            if self._state is OperationState.FINISHED:
                # Cancelled before execution.
                status = self._status
            else:
                self._state = OperationState.EXECUTING
                status = None
        if status is not None:
            raise _errors.StatusError(status.code, status.details)

        call = self._start()
        with self._condition:
            self._call = call
            cancel_requested = self._cancel_requested
        if cancel_requested:
            call.cancel()

        try:
            if self._response_streaming:
                result = list(call)
            else:
                result = call.result()
        except grpc.FutureCancelledError:
            status = _common.Status(grpc.StatusCode.CANCELLED,
                                    _LOCALLY_CANCELLED_DETAILS)
        except grpc.RpcError as rpc_error:
            status = _errors.StatusError.from_rpc_error(rpc_error).status
        else:
            self._finish(_status_of(call))
            return result
        self._finish(status)
        raise _errors.StatusError(status.code, status.details)


class RouteGuideClient(object):
    """Makes route guide calls, blocking or deferred.

    Each call method takes deferred=True to return an Operation instead of
    performing the call, and timeout= to override the default deadline.
    """

    def __init__(self, channel, timeout=None, wait_for_ready=None):
        """Constructor.

        Args:
          channel: A grpc.Channel, or a target string for which an insecure
            channel is created and owned by the client.
          timeout: The default deadline of calls in seconds, or None.
          wait_for_ready: The wait_for_ready flag passed with every call.
        """
        if isinstance(channel, str):
            self._channel = grpc.insecure_channel(channel)
            self._owns_channel = True
        else:
            self._channel = channel
            self._owns_channel = False
        self._stub = RouteGuideStub(self._channel)
        self._timeout = timeout
        self._wait_for_ready = wait_for_ready

    @classmethod
    def from_config(cls, config=None):
        if config is None:
            config = _config.ClientConfig()
        return cls(config.target,
                   timeout=config.timeout,
                   wait_for_ready=config.wait_for_ready)

    def _invoke(self, method_name, request, deferred, timeout):
        method = _protos.METHODS_BY_NAME[method_name]
        multi_callable = getattr(self._stub, method_name)
        if timeout is None:
            timeout = self._timeout
        if deferred:
            return Operation(multi_callable, request,
                             method.shape.response_streaming, timeout,
                             self._wait_for_ready)
        if method.shape.response_streaming:
            return ResponseStream(
                multi_callable(request,
                               timeout=timeout,
                               wait_for_ready=self._wait_for_ready))
        try:
            return multi_callable(request,
                                  timeout=timeout,
                                  wait_for_ready=self._wait_for_ready)
        except grpc.RpcError as rpc_error:
            raise _errors.StatusError.from_rpc_error(rpc_error)

    def get_feature(self, point, deferred=False, timeout=None):
        """Obtains the Feature at a Point."""
        return self._invoke('GetFeature', point, deferred, timeout)

    def list_features(self, rectangle, deferred=False, timeout=None):
        """Obtains the Features within a Rectangle as a ResponseStream."""
        return self._invoke('ListFeatures', rectangle, deferred, timeout)

    def record_route(self, points, deferred=False, timeout=None):
        """Sends an iterable of Points, returning their RouteSummary."""
        return self._invoke('RecordRoute', iter(points), deferred, timeout)

    def route_chat(self, notes, deferred=False, timeout=None):
        """Exchanges RouteNotes; returns a ResponseStream of received notes."""
        return self._invoke('RouteChat', iter(notes), deferred, timeout)

    def close(self):
        if self._owns_channel:
            self._channel.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
