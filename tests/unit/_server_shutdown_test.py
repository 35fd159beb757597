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
"""Tests of graceful server shutdown."""

import logging
import os
import signal
import subprocess
import sys
import threading
import unittest

import grpc

import routeguide

from tests.unit import _server_signal_scenario
from tests.unit import test_common

_WIDE_RECTANGLE = test_common.rectangle(400000000, -750000000, 420000000,
                                        -730000000)
_SCENARIO_PATH = os.path.abspath(
    os.path.realpath(_server_signal_scenario.__file__))
_REPOSITORY_ROOT = os.path.dirname(
    os.path.dirname(os.path.dirname(_SCENARIO_PATH)))


class ServerShutdownTest(unittest.TestCase):

    def setUp(self):
        self._servicer = test_common.BlockingServicer()
        self._server, port = test_common.test_server(self._servicer)
        self._client = test_common.test_client(port)

    def tearDown(self):
        self._servicer.release.set()
        self._client.close()
        self._server.stop(None)

    def _stop_in_background(self, grace):
        thread = threading.Thread(target=self._server.stop, args=(grace,))
        thread.start()
        test_common.wait_until(lambda: not self._server.accepting_calls())
        return thread

    def test_stop_idle_server(self):
        self._server.stop(None)

        self.assertTrue(self._server.wait_for_termination(0))
        self.assertFalse(self._server.accepting_calls())

    def test_drain_waits_for_calls_in_flight(self):
        responses = self._client.list_features(_WIDE_RECTANGLE)
        first = next(responses)
        self.assertTrue(
            self._servicer.entered.wait(test_common.TIME_ALLOWANCE))

        stopper = self._stop_in_background(None)

        self.assertFalse(
            self._server.wait_for_termination(test_common.SHORT_TIMEOUT))
        self.assertEqual(1, self._server.in_flight())
        self._servicer.release.set()
        remainder = list(responses)
        stopper.join(test_common.TIME_ALLOWANCE)

        self.assertFalse(stopper.is_alive())
        self.assertEqual(3, len([first] + remainder))
        self.assertTrue(self._server.wait_for_termination(0))
        self.assertEqual({routeguide.CallState.COMPLETED: 1},
                         self._server.terminal_counts())

    def test_new_calls_refused_while_draining(self):
        responses = self._client.list_features(_WIDE_RECTANGLE)
        next(responses)
        self.assertTrue(
            self._servicer.entered.wait(test_common.TIME_ALLOWANCE))
        stopper = self._stop_in_background(None)

        with self.assertRaises(routeguide.StatusError) as raised:
            self._client.record_route((test_common.MENDHAM,))

        self.assertIs(grpc.StatusCode.UNAVAILABLE, raised.exception.code)
        self._servicer.release.set()
        list(responses)
        stopper.join(test_common.TIME_ALLOWANCE)
        self.assertFalse(stopper.is_alive())

    def test_grace_period_cancels_remaining_calls(self):
        responses = self._client.list_features(_WIDE_RECTANGLE)
        next(responses)
        self.assertTrue(
            self._servicer.entered.wait(test_common.TIME_ALLOWANCE))

        self._server.stop(test_common.SHORT_TIMEOUT)

        self.assertTrue(self._server.wait_for_termination(0))
        with self.assertRaises(routeguide.StatusError) as raised:
            list(responses)
        self.assertIn(raised.exception.code,
                      (grpc.StatusCode.CANCELLED, grpc.StatusCode.UNAVAILABLE))

    def test_stop_clears_note_log(self):
        list(
            self._client.route_chat(
                (test_common.route_note('note', test_common.MENDHAM),)))
        self.assertLess(0, len(self._servicer.note_log))

        self._server.stop(None)

        self.assertEqual(0, len(self._servicer.note_log))

    def test_second_stop_waits_for_first(self):
        responses = self._client.list_features(_WIDE_RECTANGLE)
        next(responses)
        self.assertTrue(
            self._servicer.entered.wait(test_common.TIME_ALLOWANCE))
        first_stopper = self._stop_in_background(None)
        second_stopper = threading.Thread(target=self._server.stop,
                                          args=(0,))
        second_stopper.start()

        second_stopper.join(test_common.SHORT_TIMEOUT)
        self.assertTrue(second_stopper.is_alive())
        self._servicer.release.set()
        list(responses)
        first_stopper.join(test_common.TIME_ALLOWANCE)
        second_stopper.join(test_common.TIME_ALLOWANCE)
        self.assertFalse(second_stopper.is_alive())


@unittest.skipIf(os.name == 'nt', 'POSIX signals only')
class SignalShutdownTest(unittest.TestCase):

    def test_sigterm_stops_server(self):
        env = dict(os.environ)
        env['PYTHONPATH'] = os.pathsep.join(
            path for path in (_REPOSITORY_ROOT, env.get('PYTHONPATH')) if path)
        process = subprocess.Popen((sys.executable, _SCENARIO_PATH),
                                   stdout=subprocess.PIPE,
                                   universal_newlines=True,
                                   env=env)
        try:
            port = int(process.stdout.readline())
            with test_common.test_client(port) as client:
                feature = client.get_feature(
                    routeguide.Point(latitude=409146138,
                                     longitude=-746188906))
            self.assertEqual(
                'Berkshire Valley Management Area Trail, Jefferson, NJ, USA',
                feature.name)

            process.send_signal(signal.SIGTERM)
            out, _ = process.communicate(timeout=test_common.TIME_ALLOWANCE)
        finally:
            if process.poll() is None:
                process.kill()
                process.wait()

        self.assertEqual(0, process.returncode)
        self.assertEqual(_server_signal_scenario.STOPPED, out.strip())


if __name__ == '__main__':
    logging.basicConfig()
    unittest.main(verbosity=2)
