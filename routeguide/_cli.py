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
"""Entry points of the route guide server and demonstration client."""

import logging
import random
import threading

from routeguide import _client
from routeguide import _common
from routeguide import _config
from routeguide import _errors
from routeguide import _protos
from routeguide import _resources
from routeguide import _server
from routeguide import _service
from routeguide import _store
from routeguide import _streams

_LOGGER = logging.getLogger(__name__)


def serve(config):
    """Runs a route guide server until a termination signal stops it."""
    store = _store.FeatureStore(
        _resources.read_route_guide_database(config.database_path))
    _LOGGER.info('Loaded %d features.', len(store))
    server = _server.RouteGuideServer(_service.RouteGuideServicer(store),
                                      config)
    server.stop_on_signals()
    server.start()
    server.wait_for_termination()


def server_main(argv=None):
    logging.basicConfig(level=logging.INFO)
    serve(_config.parse_server_args(argv))


def make_route_note(message, latitude, longitude):
    return _protos.RouteNote(
        message=message,
        location=_protos.Point(latitude=latitude, longitude=longitude))


def guide_get_one_feature(client, point):
    feature = client.get_feature(point)
    if not feature.HasField('location'):
        print('Server returned incomplete feature')
        return

    if feature.name:
        print('Feature called {!r} at {}'.format(
            feature.name, _common.format_point(feature.location)))
    else:
        print('Found no feature at {}'.format(
            _common.format_point(feature.location)))


def guide_get_feature(client):
    guide_get_one_feature(
        client, _protos.Point(latitude=409146138, longitude=-746188906))
    guide_get_one_feature(client, _protos.Point(latitude=0, longitude=0))


def guide_list_features(client):
    rectangle = _protos.Rectangle(
        lo=_protos.Point(latitude=400000000, longitude=-750000000),
        hi=_protos.Point(latitude=420000000, longitude=-730000000))
    print('Looking for features between 40, -75 and 42, -73')

    for feature in client.list_features(rectangle):
        print('Feature called {!r} at {}'.format(
            feature.name, _common.format_point(feature.location)))


def generate_route(feature_list):
    for _ in range(0, 10):
        random_feature = random.choice(feature_list)
        print('Visiting point {}'.format(
            _common.format_point(random_feature.location)))
        yield random_feature.location


def guide_record_route(client):
    feature_list = _resources.read_route_guide_database()

    route_summary = client.record_route(generate_route(feature_list))
    print('Finished trip with {} points '.format(route_summary.point_count))
    print('Passed {} features '.format(route_summary.feature_count))
    print('Travelled {} meters '.format(route_summary.distance))
    print('It took {} seconds '.format(route_summary.elapsed_time))


def generate_messages():
    return (
        make_route_note('First message', 0, 0),
        make_route_note('Second message', 0, 1),
        make_route_note('Third message', 1, 0),
        make_route_note('Fourth message', 0, 0),
        make_route_note('Fifth message', 1, 0),
    )


def guide_route_chat(client):
    notes = _streams.HandoffQueue()
    responses = client.route_chat(notes)
    for note in generate_messages():
        print('Sending {} at {}'.format(note.message,
                                        _common.format_point(note.location)))
        notes.put(note)
    notes.close()
    for response in responses:
        print('Received message {} at {}'.format(
            response.message, _common.format_point(response.location)))


def guide_deferred_route_chat(client):
    operation = client.route_chat(generate_messages(), deferred=True)
    received = []

    def _drain():
        try:
            received.extend(operation.execute())
        except _errors.StatusError as error:
            print('Deferred chat failed with {}: {}'.format(
                error.code, error.details))

    drainer = threading.Thread(target=_drain)
    drainer.start()
    print('Deferred chat dispatched; operation is {}'.format(
        operation.state.value))
    drainer.join()
    print('Deferred chat finished with {} and {} notes'.format(
        operation.status.code, len(received)))


def run(config):
    with _client.RouteGuideClient.from_config(config) as client:
        print('-------------- GetFeature --------------')
        guide_get_feature(client)
        print('-------------- ListFeatures --------------')
        guide_list_features(client)
        print('-------------- RecordRoute --------------')
        guide_record_route(client)
        print('-------------- RouteChat --------------')
        guide_route_chat(client)
        print('-------------- RouteChat (deferred) --------------')
        guide_deferred_route_chat(client)


def client_main(argv=None):
    logging.basicConfig()
    config = _config.parse_client_args(argv)
    try:
        run(config)
    except _errors.StatusError as error:
        print('Call failed with {}: {}'.format(error.code, error.details))
        return 1
    return 0
