"""MqttClient 유닛 테스트."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import paho.mqtt.client as mqtt
import pytest

from robot_drawer.domain.exceptions import (
    LinkAdapterError,
    TransmitFailureError,
)
from robot_drawer.infra.mqtt.mqtt_client import MqttClient
from robot_drawer.usecase.ports.config_port import MqttConfig

SUCCESS = SimpleNamespace(is_failure=False)
FAILURE = SimpleNamespace(is_failure=True)


@pytest.fixture
def config():
    """Create test MQTT configuration."""
    return MqttConfig(
        broker_host='localhost',
        broker_port=1883,
        keepalive_sec=60,
        reconnect_max_delay_sec=30,
    )


@pytest.fixture
def client(config):
    """Create test MQTT client with mocked paho client."""
    with patch(
        'robot_drawer.infra.mqtt.mqtt_client.mqtt.Client'
    ) as MockPaho:
        mock_paho = MagicMock()
        MockPaho.return_value = mock_paho
        mqtt_client = MqttClient(config, client_id='test')
        yield mqtt_client


def _paho(client):
    return client._client


class TestConstruction:
    def test_uses_callback_api_v2(self, config):
        with patch(
            'robot_drawer.infra.mqtt.mqtt_client.mqtt.Client'
        ) as MockPaho:
            MqttClient(config, client_id='drawer')

        args, kwargs = MockPaho.call_args
        assert args[0] == mqtt.CallbackAPIVersion.VERSION2
        assert kwargs['client_id'] == 'drawer'

    def test_reconnect_delay_from_config(self, client):
        _paho(client).reconnect_delay_set.assert_called_once_with(
            min_delay=1, max_delay=30,
        )


class TestSubscribeStoresQos:
    """subscribe() QoS 저장 테스트."""

    def test_subscribe_stores_qos(self, client):
        """subscribe가 callback과 QoS를 함께 저장한다."""
        cb = MagicMock()
        client.subscribe('test/topic', cb, qos=1)

        stored_cb, stored_qos = client._subscriptions['test/topic']
        assert stored_cb is cb
        assert stored_qos == 1
        _paho(client).subscribe.assert_called_with('test/topic', qos=1)

    def test_subscribe_stores_default_qos_0(self, client):
        """기본 QoS 0이 저장된다."""
        client.subscribe('test/topic', MagicMock())

        _, stored_qos = client._subscriptions['test/topic']
        assert stored_qos == 0

    def test_unsubscribe_removes_entry(self, client):
        client.subscribe('test/topic', MagicMock())
        client.unsubscribe('test/topic')

        assert 'test/topic' not in client._subscriptions


class TestOnConnect:
    def test_sets_connected(self, client):
        client._on_connect(_paho(client), None, None, SUCCESS, None)
        assert client.is_connected

    def test_failure_keeps_disconnected(self, client):
        client._on_connect(_paho(client), None, None, FAILURE, None)
        assert not client.is_connected

    def test_resubscribes_with_stored_qos(self, client):
        """재연결 시 저장된 QoS로 다시 구독한다."""
        client.subscribe('a/topic', MagicMock(), qos=1)
        client.subscribe('b/topic', MagicMock(), qos=0)
        _paho(client).subscribe.reset_mock()

        client._on_connect(_paho(client), None, None, SUCCESS, None)

        _paho(client).subscribe.assert_any_call('a/topic', qos=1)
        _paho(client).subscribe.assert_any_call('b/topic', qos=0)


class TestOnDisconnect:
    def test_clears_connected_and_notifies(self, client):
        listener = MagicMock()
        client.add_disconnect_listener(listener)
        client._on_connect(_paho(client), None, None, SUCCESS, None)

        client._on_disconnect(_paho(client), None, None, FAILURE, None)

        assert not client.is_connected
        listener.assert_called_once_with()

    def test_listener_error_is_isolated(self, client):
        failing = MagicMock(side_effect=RuntimeError('boom'))
        listener = MagicMock()
        client.add_disconnect_listener(failing)
        client.add_disconnect_listener(listener)

        client._on_disconnect(_paho(client), None, None, SUCCESS, None)

        listener.assert_called_once_with()


class TestOnMessage:
    def test_wildcard_dispatch(self, client):
        cb = MagicMock()
        client.subscribe('robot_drawer/v1/+/connection', cb)
        msg = MagicMock(
            topic='robot_drawer/v1/Bot/connection', payload=b'ONLINE'
        )

        client._on_message(_paho(client), None, msg)

        cb.assert_called_once_with('robot_drawer/v1/Bot/connection', b'ONLINE')

    def test_unmatched_topic_ignored(self, client):
        cb = MagicMock()
        client.subscribe('robot_drawer/v1/+/connection', cb)
        msg = MagicMock(topic='robot_drawer/v1/Bot/commands', payload=b'x')

        client._on_message(_paho(client), None, msg)

        cb.assert_not_called()

    def test_handler_error_is_isolated(self, client):
        client.subscribe('t', MagicMock(side_effect=ValueError('bad')))
        msg = MagicMock(topic='t', payload=b'x')

        client._on_message(_paho(client), None, msg)


class TestConnect:
    def test_broker_unreachable(self, client):
        _paho(client).connect.side_effect = OSError('refused')

        with pytest.raises(LinkAdapterError):
            client.connect()

    def test_connack_timeout(self, client):
        with pytest.raises(LinkAdapterError):
            client.connect(wait_timeout_sec=0.01)
        _paho(client).loop_start.assert_called_once()

    def test_connect_without_wait(self, client):
        client.connect()

        _paho(client).connect.assert_called_once_with(
            host='localhost', port=1883, keepalive=60,
        )


class TestPublishAndWait:
    def _info(self, rc=mqtt.MQTT_ERR_SUCCESS, published=True):
        info = MagicMock()
        info.rc = rc
        info.is_published.return_value = published
        return info

    def test_success(self, client):
        _paho(client).publish.return_value = self._info()

        client.publish_and_wait('t', b'data', qos=1, timeout_sec=1.0)

        _paho(client).publish.assert_called_once_with('t', b'data', qos=1)

    def test_publish_rc_failure(self, client):
        _paho(client).publish.return_value = self._info(
            rc=mqtt.MQTT_ERR_NO_CONN
        )

        with pytest.raises(TransmitFailureError):
            client.publish_and_wait('t', b'data')

    def test_not_acknowledged(self, client):
        _paho(client).publish.return_value = self._info(published=False)

        with pytest.raises(TransmitFailureError):
            client.publish_and_wait('t', b'data', timeout_sec=0.01)

    def test_wait_raises(self, client):
        info = self._info()
        info.wait_for_publish.side_effect = RuntimeError('queue full')
        _paho(client).publish.return_value = info

        with pytest.raises(TransmitFailureError):
            client.publish_and_wait('t', b'data')
