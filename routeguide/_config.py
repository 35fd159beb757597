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
"""Configuration of the route guide server and client."""

import argparse
import collections
import signal

from routeguide import _resources

DEFAULT_SERVER_ADDRESS = '[::]:50051'
DEFAULT_TARGET = 'localhost:50051'
DEFAULT_MAX_WORKERS = 10
DEFAULT_STREAM_BUFFER_SIZE = 16
DEFAULT_TERMINATION_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ServerConfig(
        collections.namedtuple('ServerConfig', (
            'address',
            'database_path',
            'max_workers',
            'maximum_concurrent_rpcs',
            'stream_buffer_size',
            'shutdown_grace',
            'termination_signals',
        ))):
    """Configuration of a RouteGuideServer.

    Attributes:
      address: The address to listen on, e.g. '[::]:50051'. A port of 0
        binds an unused port.
      database_path: The JSON feature database loaded into the feature store.
      max_workers: The number of threads servicing calls.
      maximum_concurrent_rpcs: The number of concurrent calls beyond which
        new calls are rejected with RESOURCE_EXHAUSTED, or None for no limit.
      stream_buffer_size: The number of streamed responses buffered between
        a producer and the transport.
      shutdown_grace: The number of seconds a stopping server waits for calls
        in flight, or None to wait for them without bound.
      termination_signals: The signals that trigger a graceful shutdown.
    """


ServerConfig.__new__.__defaults__ = (
    DEFAULT_SERVER_ADDRESS,
    _resources.DEFAULT_DATABASE_PATH,
    DEFAULT_MAX_WORKERS,
    None,
    DEFAULT_STREAM_BUFFER_SIZE,
    None,
    DEFAULT_TERMINATION_SIGNALS,
)


class ClientConfig(
        collections.namedtuple('ClientConfig', (
            'target',
            'timeout',
            'wait_for_ready',
        ))):
    """Configuration of a RouteGuideClient.

    Attributes:
      target: The server address to connect to.
      timeout: The default deadline of calls in seconds, or None.
      wait_for_ready: Whether calls wait for the channel to become ready
        instead of failing fast, or None for the transport default.
    """


ClientConfig.__new__.__defaults__ = (DEFAULT_TARGET, None, None)


def _signal_number(name):
    name = name.upper()
    if not name.startswith('SIG'):
        name = 'SIG' + name
    try:
        return signal.Signals[name]
    except KeyError:
        raise argparse.ArgumentTypeError('unknown signal {}'.format(name))


def _positive_int(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(
            '{} is not a positive integer'.format(value))
    return number


def parse_server_args(argv=None):
    """Builds a ServerConfig from command line arguments."""
    parser = argparse.ArgumentParser(description='The route guide server.')
    parser.add_argument('--address',
                        default=DEFAULT_SERVER_ADDRESS,
                        help='The address to listen on.')
    parser.add_argument('--database',
                        dest='database_path',
                        default=_resources.DEFAULT_DATABASE_PATH,
                        help='The JSON feature database.')
    parser.add_argument('--max-workers',
                        type=_positive_int,
                        default=DEFAULT_MAX_WORKERS,
                        help='The number of threads servicing calls.')
    parser.add_argument('--maximum-concurrent-rpcs',
                        type=_positive_int,
                        default=None,
                        help='The maximum number of concurrent calls.')
    parser.add_argument('--stream-buffer-size',
                        type=_positive_int,
                        default=DEFAULT_STREAM_BUFFER_SIZE,
                        help='Responses buffered per streaming call.')
    parser.add_argument(
        '--shutdown-grace',
        type=float,
        default=None,
        help=('Seconds to wait for calls in flight when stopping. Waits '
              'without bound if not given.'))
    parser.add_argument('--termination-signal',
                        dest='termination_signals',
                        type=_signal_number,
                        action='append',
                        default=None,
                        help='A signal triggering graceful shutdown. '
                        'May be repeated.')
    args = parser.parse_args(argv)
    return ServerConfig(
        address=args.address,
        database_path=args.database_path,
        max_workers=args.max_workers,
        maximum_concurrent_rpcs=args.maximum_concurrent_rpcs,
        stream_buffer_size=args.stream_buffer_size,
        shutdown_grace=args.shutdown_grace,
        termination_signals=(tuple(args.termination_signals)
                             if args.termination_signals else
                             DEFAULT_TERMINATION_SIGNALS))


def parse_client_args(argv=None):
    """Builds a ClientConfig from command line arguments."""
    parser = argparse.ArgumentParser(description='The route guide client.')
    parser.add_argument('--target',
                        default=DEFAULT_TARGET,
                        help='The host-port pair at which to reach the server.')
    parser.add_argument('--timeout',
                        type=float,
                        default=None,
                        help='The deadline of each call in seconds.')
    parser.add_argument('--wait-for-ready',
                        action='store_true',
                        default=None,
                        help='Wait for the server to become reachable.')
    args = parser.parse_args(argv)
    return ClientConfig(target=args.target,
                        timeout=args.timeout,
                        wait_for_ready=args.wait_for_ready)
