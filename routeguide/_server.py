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
"""Dispatch of incoming calls to a route guide servicer."""

import logging
import signal
import threading

import grpc
from grpc.framework.foundation import logging_pool

from routeguide import _adapter
from routeguide import _calls
from routeguide import _config
from routeguide import _protos

_LOGGER = logging.getLogger(__name__)


class _GenericHandler(grpc.GenericRpcHandler):

    def __init__(self, method_handlers):
        self._method_handlers = method_handlers

    def service(self, handler_call_details):
        return self._method_handlers.get(handler_call_details.method)


class RouteGuideServer(object):
    """Serves a route guide servicer.

    Calls are routed by method name to the servicer method of the same name.
    Stopping the server is graceful: new calls are refused with UNAVAILABLE,
    calls in flight are given the configured grace period to finish, and only
    then is the listening port released.
    """

    def __init__(self, servicer, config=None):
        """Constructor.

        Args:
          servicer: An object with the GetFeature, ListFeatures, RecordRoute
            and RouteChat methods of RouteGuideServicerBase.
          config: A ServerConfig. Defaults to ServerConfig().
        """
        self._config = _config.ServerConfig() if config is None else config
        self._servicer = servicer
        self._tracker = _calls.CallTracker()
        self._pool = logging_pool.pool(self._config.max_workers)
        self._server = grpc.server(
            self._pool,
            maximum_concurrent_rpcs=self._config.maximum_concurrent_rpcs)
        method_handlers = {
            method.fully_qualified_name:
            _adapter.method_handler(method, getattr(servicer, method.name),
                                    self._tracker,
                                    self._config.stream_buffer_size)
            for method in _protos.METHODS
        }
        self._server.add_generic_rpc_handlers(
            (_GenericHandler(method_handlers),))

        self._lock = threading.Lock()
        self._port = None
        self._stopping = False
        self._terminated = threading.Event()

    @property
    def port(self):
        """The bound port, or None before start."""
        return self._port

    @property
    def config(self):
        return self._config

    def start(self):
        """Binds the configured address and starts servicing calls.

        Returns:
          The bound port.
        """
        with self._lock:
            if self._port is not None:
                raise RuntimeError('Server already started.')
            self._port = self._server.add_insecure_port(self._config.address)
            self._server.start()
        _LOGGER.info('Route guide server listening on port %d.', self._port)
        return self._port

    def accepting_calls(self):
        """Whether new calls are serviced rather than refused."""
        return self._tracker.accepting()

    def in_flight(self):
        """Returns the number of calls not yet in a terminal state."""
        return self._tracker.in_flight()

    def terminal_counts(self):
        """Returns a dict from terminal CallState to number of calls."""
        return self._tracker.terminal_counts()

    def stop(self, grace=None):
        """Stops the server.

        New calls are refused at once. Blocks until the calls in flight are
        terminal or the grace period elapses, then cancels whatever remains
        and releases the listening port. Calling stop again blocks until the
        first stop has finished.

        Args:
          grace: The number of seconds to wait for calls in flight, or None
            to wait without bound.
        """
        with self._lock:
            stopping = self._stopping
            self._stopping = True
        if stopping:
            self._terminated.wait()
            return

        self._tracker.stop_accepting()
        _LOGGER.info('Stopping route guide server with %d calls in flight.',
                     self._tracker.in_flight())
        if not self._tracker.wait_for_idle(grace):
            _LOGGER.warning(
                '%d calls still in flight after %s seconds; cancelling them.',
                self._tracker.in_flight(), grace)
        self._server.stop(None).wait()
        self._pool.shutdown(wait=False)
        note_log = getattr(self._servicer, 'note_log', None)
        if note_log is not None:
            note_log.clear()
        self._terminated.set()
        _LOGGER.info('Route guide server stopped.')

    def stop_on_signals(self, signals=None):
        """Installs handlers stopping the server on termination signals.

        Must be called from the main thread.

        Args:
          signals: The signal numbers to handle. Defaults to the configured
            termination signals.
        """
        if signals is None:
            signals = self._config.termination_signals
        for signum in signals:
            signal.signal(signum, self._handle_signal)

    def _handle_signal(self, signum, unused_frame):
        _LOGGER.info('Received %s; shutting down.',
                     signal.Signals(signum).name)
        # Stopping blocks, so it must not run on the signal handling frame.
        thread = threading.Thread(target=self.stop,
                                  args=(self._config.shutdown_grace,),
                                  name='routeguide-shutdown')
        thread.daemon = True
        thread.start()

    def wait_for_termination(self, timeout=None):
        """Blocks until the server has stopped.

        Returns:
          True if the server has stopped, False if the timeout elapsed first.
        """
        return self._terminated.wait(timeout)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop(self._config.shutdown_grace)
        return False
