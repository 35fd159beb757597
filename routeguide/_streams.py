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
"""Thread-safe handoff of stream values between a producer and a consumer."""

import collections
import logging
import threading

from routeguide import _errors

_LOGGER = logging.getLogger(__name__)


class HandoffQueue(object):
    """A bounded FIFO joining one producing thread to one consuming thread.

    The producer calls put, then close or abort. The consumer iterates. Both
    sides suspend: the consumer while no value is available and the stream is
    still open, the producer while the buffer is at capacity. Cancelling the
    queue wakes both sides, each of which then raises
    routeguide.CancelledError.
    """

    def __init__(self, capacity=None):
        """Constructor.

        Args:
          capacity: The maximum number of buffered values, or None for an
            unbounded buffer.
        """
        if capacity is not None and capacity < 1:
            raise ValueError('capacity must be positive, not {}'.format(capacity))
        self._condition = threading.Condition()
        self._capacity = capacity
        self._values = collections.deque()
        self._active = True
        self._exception = None
        self._cancelled = False

    def _full(self):
        return (self._capacity is not None and
                len(self._values) >= self._capacity)

    def put(self, value):
        """Hands a value to the consumer, blocking while the buffer is full.

        Raises:
          routeguide.CancelledError: If the queue is or becomes cancelled.
          ValueError: If the queue has already been closed or aborted.
        """
        with self._condition:
            while not self._cancelled and self._active and self._full():
                self._condition.wait()
            if self._cancelled:
                raise _errors.CancelledError()
            if not self._active:
                raise ValueError('put on a terminated stream')
            self._values.append(value)
            self._condition.notify_all()

    def close(self):
        """Signals end-of-stream; buffered values are still delivered."""
        with self._condition:
            self._active = False
            self._condition.notify_all()

    def abort(self, exception):
        """Terminates the stream with an exception.

        The consumer receives every value buffered before the abort and then
        has the exception raised to it.
        """
        with self._condition:
            if self._active and not self._cancelled:
                self._exception = exception
                self._active = False
                self._condition.notify_all()

    def cancel(self):
        """Discards buffered values and wakes every blocked thread.

        Returns:
          False if the stream had already been cancelled, True otherwise.
        """
        with self._condition:
            if self._cancelled:
                return False
            self._cancelled = True
            self._values.clear()
            self._condition.notify_all()
            return True

    def cancelled(self):
        with self._condition:
            return self._cancelled

    def __iter__(self):
        return self

    def __next__(self):
        return self.next()

    def next(self):
        with self._condition:
            while not self._cancelled and self._active and not self._values:
                self._condition.wait()
            if self._cancelled:
                raise _errors.CancelledError()
            elif self._values:
                value = self._values.popleft()
                self._condition.notify_all()
                return value
            elif self._exception is not None:
                raise self._exception
            else:
                raise StopIteration()


def _pump(iterator, handoff):
    try:
        for value in iterator:
            handoff.put(value)
    except _errors.CancelledError:
        _LOGGER.debug('Stream cancelled; abandoning its producer.')
    except Exception as exception:  # pylint: disable=broad-except
        _LOGGER.debug('Producer raised %r; aborting stream.', exception)
        handoff.abort(exception)
    else:
        handoff.close()
    finally:
        close = getattr(iterator, 'close', None)
        if close is not None:
            close()


def produce(iterable, capacity=None):
    """Drains a lazy producer into a HandoffQueue on a dedicated thread.

    Args:
      iterable: The producer of stream values. It is iterated exactly once,
        on a new thread.
      capacity: The capacity of the returned queue.

    Returns:
      A HandoffQueue from which the produced values may be consumed. An
        exception raised by the producer aborts the queue; cancelling the
        queue stops and closes the producer at its next value.
    """
    handoff = HandoffQueue(capacity)
    thread = threading.Thread(target=_pump,
                              args=(iter(iterable), handoff),
                              name='routeguide-producer')
    thread.daemon = True
    thread.start()
    return handoff
