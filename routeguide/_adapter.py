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
"""Adapts servicer behaviors to the four RPC shapes.

A behavior has the signature of a servicer method: it takes the request (or
an iterator of requests) and a grpc.ServicerContext and returns the response
(or an iterable of responses). The handlers built here own everything between
the behavior and the transport: call lifecycle bookkeeping, the producer
thread and handoff queue of streamed responses, and the mapping of handler
faults to call statuses.
"""

import logging

import grpc

from routeguide import _common
from routeguide import _errors
from routeguide import _streams

_LOGGER = logging.getLogger(__name__)

_SHUTTING_DOWN_DETAILS = 'Server is shutting down.'


def _begin(tracker, method, servicer_context):
    call = tracker.begin(method, servicer_context)
    if call is None:
        servicer_context.abort(grpc.StatusCode.UNAVAILABLE,
                               _SHUTTING_DOWN_DETAILS)
    call.activate()
    return call


def _explicit_code(servicer_context):
    code = getattr(servicer_context, 'code', None)
    if code is None:
        return None
    code = code()
    if code is None or code is grpc.StatusCode.OK:
        return None
    return code


def _terminate(call, servicer_context, exception):
    """Terminates a call whose handler raised.

    Must be called from within the except clause that caught the exception.
    """
    if not servicer_context.is_active():
        # Cancelled or past its deadline; the status is already decided.
        raise exception
    explicit_code = _explicit_code(servicer_context)
    if isinstance(exception, _errors.StatusError):
        code, details = exception.code, exception.details
    elif explicit_code is not None:
        # The behavior aborted the call itself.
        call.fail(explicit_code, '')
        raise exception
    else:
        _LOGGER.exception('Unexpected exception servicing %s.',
                          call.method.fully_qualified_name)
        code = grpc.StatusCode.INTERNAL
        details = str(exception) or type(exception).__name__
    call.fail(code, details)
    servicer_context.abort(code, details)


def _unary_response(method, behavior, tracker, unused_capacity):

    def _handle(request, servicer_context):
        call = _begin(tracker, method, servicer_context)
        try:
            response = behavior(request, servicer_context)
        except Exception as exception:  # pylint: disable=broad-except
            _terminate(call, servicer_context, exception)
        else:
            call.complete()
            return response
        finally:
            call.handler_returned()

    return _handle


def _stream_response(method, behavior, tracker, capacity):

    def _handle(request, servicer_context):
        call = _begin(tracker, method, servicer_context)
        try:
            responses = _streams.produce(behavior(request, servicer_context),
                                         capacity)
            if not servicer_context.add_callback(responses.cancel):
                responses.cancel()
            for response in responses:
                yield response
        except _errors.CancelledError:
            _LOGGER.debug('Response stream of %s cancelled.',
                          method.fully_qualified_name)
        except Exception as exception:  # pylint: disable=broad-except
            _terminate(call, servicer_context, exception)
        else:
            call.complete()
        finally:
            call.handler_returned()

    return _handle


_WRAPPERS = {
    _common.Shape.UNARY_UNARY: _unary_response,
    _common.Shape.UNARY_STREAM: _stream_response,
    _common.Shape.STREAM_UNARY: _unary_response,
    _common.Shape.STREAM_STREAM: _stream_response,
}


def method_handler(method, behavior, tracker, capacity=None):
    """Creates the grpc.RpcMethodHandler servicing one method.

    Args:
      method: The _protos.Method to service.
      behavior: The servicer method implementing it.
      tracker: The _calls.CallTracker recording the method's calls.
      capacity: The capacity of the handoff queue between the producer of a
        response stream and the transport, or None for no bound.

    Returns:
      A grpc.RpcMethodHandler of the method's shape.
    """
    handler_factory = getattr(grpc,
                              '{}_rpc_method_handler'.format(method.shape.value))
    return handler_factory(
        _WRAPPERS[method.shape](method, behavior, tracker, capacity),
        request_deserializer=method.request_class.FromString,
        response_serializer=method.response_class.SerializeToString)
