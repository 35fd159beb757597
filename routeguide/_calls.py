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
"""Server-side lifecycle bookkeeping of in-flight calls."""

import collections
import enum
import logging
import threading
import time

from routeguide import _common

_LOGGER = logging.getLogger(__name__)


@enum.unique
class CallState(enum.Enum):
    """The lifecycle states of a call being serviced."""

    RECEIVED = 'received'
    ACTIVE = 'active'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    FAILED = 'failed'

    @property
    def terminal(self):
        return self in (CallState.COMPLETED, CallState.CANCELLED,
                        CallState.FAILED)


class Call(object):
    """One call being serviced.

    A call becomes terminal once the RPC has terminated on the transport and
    the handler servicing it has returned. Its terminal state is FAILED if the
    handler failed, COMPLETED if the handler ran to completion and CANCELLED
    otherwise.
    """

    def __init__(self, tracker, method):
        self.method = method
        self._tracker = tracker
        self._state = CallState.RECEIVED
        self._outcome = None
        self._status = None
        self._rpc_terminated = False
        self._handler_returned = False

    @property
    def state(self):
        with self._tracker._condition:
            return self._state

    @property
    def status(self):
        """The Status the handler terminated the call with, if any."""
        with self._tracker._condition:
            return self._status

    def activate(self):
        with self._tracker._condition:
            if self._state is CallState.RECEIVED:
                self._state = CallState.ACTIVE

    def complete(self):
        with self._tracker._condition:
            if self._outcome is None:
                self._outcome = CallState.COMPLETED
                self._status = _common.OK_STATUS

    def fail(self, code, details):
        with self._tracker._condition:
            if self._outcome is None:
                self._outcome = CallState.FAILED
                self._status = _common.Status(code, details)

    def handler_returned(self):
        with self._tracker._condition:
            self._handler_returned = True
            self._tracker._settle(self)

    def rpc_terminated(self):
        with self._tracker._condition:
            self._rpc_terminated = True
            self._tracker._settle(self)


class CallTracker(object):
    """Tracks the calls in flight on one server."""

    def __init__(self):
        self._condition = threading.Condition()
        self._calls = set()
        self._accepting = True
        self._terminal_counts = collections.Counter()

    def begin(self, method, servicer_context):
        """Registers a newly received call.

        Args:
          method: The _protos.Method being invoked.
          servicer_context: The grpc.ServicerContext of the call.

        Returns:
          A Call, or None if the tracker no longer accepts calls.
        """
        with self._condition:
            if not self._accepting:
                return None
            call = Call(self, method)
            self._calls.add(call)
        if not servicer_context.add_callback(call.rpc_terminated):
            call.rpc_terminated()
        _LOGGER.debug('Received call to %s.', method.fully_qualified_name)
        return call

    def _settle(self, call):
        if (call._state.terminal or not call._rpc_terminated or
                not call._handler_returned):
            return
        call._state = call._outcome or CallState.CANCELLED
        self._calls.discard(call)
        self._terminal_counts[call._state] += 1
        self._condition.notify_all()
        _LOGGER.debug('Call to %s is %s.', call.method.fully_qualified_name,
                      call._state.value)

    def stop_accepting(self):
        with self._condition:
            self._accepting = False

    def accepting(self):
        with self._condition:
            return self._accepting

    def in_flight(self):
        with self._condition:
            return len(self._calls)

    def terminal_counts(self):
        """Returns a dict from terminal CallState to number of calls."""
        with self._condition:
            return dict(self._terminal_counts)

    def wait_for_idle(self, timeout=None):
        """Blocks until no call is in flight.

        Args:
          timeout: The maximum number of seconds to wait, or None to wait
            without bound.

        Returns:
          True if no call is in flight, False if the timeout elapsed first.
        """
        until = None if timeout is None else time.time() + timeout
        with self._condition:
            while self._calls:
                if until is None:
                    self._condition.wait()
                else:
                    remaining = until - time.time()
                    if remaining <= 0:
                        return False
                    self._condition.wait(timeout=remaining)
            return True
