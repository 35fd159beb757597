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
"""A route guide server stopped by a termination signal.

Prints the bound port once serving, then 'stopped' once a handled signal has
shut the server down.
"""

import logging
import sys

import routeguide

STOPPED = 'stopped'


def main():
    config = routeguide.ServerConfig(address='localhost:0', shutdown_grace=5)
    server = routeguide.RouteGuideServer(routeguide.RouteGuideServicer(),
                                         config)
    server.stop_on_signals()
    port = server.start()
    sys.stdout.write('{}\n'.format(port))
    sys.stdout.flush()
    server.wait_for_termination()
    sys.stdout.write('{}\n'.format(STOPPED))
    sys.stdout.flush()


if __name__ == '__main__':
    logging.basicConfig()
    main()
