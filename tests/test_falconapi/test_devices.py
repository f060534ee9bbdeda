"""
Tests for FalconAPI Devices module.

Tests cover: hostname to device ID resolution, the per-hostname cache,
online state lookups and device details.
"""
import pytest

from falcon_admin_rotation.falconapi.devices import Devices
from falcon_admin_rotation.utils.exceptions import ApiError, DeviceNotFoundError
from tests.fixtures.falcon_mocks import MockFalconResponse, create_mock_falcon


class TestGetDeviceId:
    """Test hostname resolution."""

    def test_resolves_hostname(self):
        """Test the first resource is returned as the device ID."""
        falcon = create_mock_falcon({
            'QueryDevicesByFilterScroll': MockFalconResponse.query_devices(['device-1'])
        })

        assert Devices(falcon).get_device_id('WKS01') == 'device-1'

        falcon.command.assert_called_once_with('QueryDevicesByFilterScroll',
                                               limit=1,
                                               sort='last_seen.desc',
                                               filter="hostname:'WKS01'")

    def test_result_is_cached_case_insensitively(self):
        """Test repeated lookups for the same host hit the API once."""
        falcon = create_mock_falcon({
            'QueryDevicesByFilterScroll': MockFalconResponse.query_devices(['device-1'])
        })
        devices = Devices(falcon)

        devices.get_device_id('WKS01')
        devices.get_device_id('wks01')

        assert falcon.command.call_count == 1

    def test_quote_in_hostname_is_escaped(self):
        """Test quotes cannot break out of the FQL filter."""
        falcon = create_mock_falcon({
            'QueryDevicesByFilterScroll': MockFalconResponse.query_devices(['device-1'])
        })

        Devices(falcon).get_device_id("O'Brien-PC")

        assert falcon.command.call_args.kwargs['filter'] == "hostname:'O\\'Brien-PC'"

    def test_unknown_hostname(self):
        """Test an empty result raises DeviceNotFoundError."""
        falcon = create_mock_falcon({
            'QueryDevicesByFilterScroll': MockFalconResponse.query_devices([])
        })

        with pytest.raises(DeviceNotFoundError, match='WKS99'):
            Devices(falcon).get_device_id('WKS99')

    def test_api_error(self):
        """Test a non-200 response raises ApiError and is not cached."""
        falcon = create_mock_falcon({
            'QueryDevicesByFilterScroll': [
                MockFalconResponse.error_403_scope(),
                MockFalconResponse.query_devices(['device-1'])
            ]
        })
        devices = Devices(falcon)

        with pytest.raises(ApiError, match='scope not permitted'):
            devices.get_device_id('WKS01')

        assert devices.get_device_id('WKS01') == 'device-1'


class TestOnlineState:
    """Test online state lookups."""

    @pytest.mark.parametrize('state', ['online', 'offline', 'unknown'])
    def test_state_returned(self, state):
        """Test the reported state is passed through."""
        falcon = create_mock_falcon({
            'GetOnlineState_V1': MockFalconResponse.online_state('device-1', state)
        })

        assert Devices(falcon).get_online_state('device-1') == state
        falcon.command.assert_called_once_with('GetOnlineState_V1', ids=['device-1'])

    def test_no_resources_is_unknown(self):
        """Test an empty response is reported as unknown."""
        falcon = create_mock_falcon({
            'GetOnlineState_V1': MockFalconResponse.success({'resources': []})
        })

        assert Devices(falcon).get_online_state('device-1') == 'unknown'

    def test_api_error(self):
        """Test a non-200 response raises ApiError."""
        falcon = create_mock_falcon({'GetOnlineState_V1': MockFalconResponse.error_403_scope()})

        with pytest.raises(ApiError):
            Devices(falcon).get_online_state('device-1')


class TestDeviceDetails:
    """Test device details lookups."""

    def test_details_returned(self):
        """Test the first detail record is returned."""
        falcon = create_mock_falcon({
            'GetDeviceDetailsV2': MockFalconResponse.device_details('device-1', serial_number='5CG1234XYZ')
        })

        details = Devices(falcon).get_device_details('device-1')

        assert details['serial_number'] == '5CG1234XYZ'
        falcon.command.assert_called_once_with('GetDeviceDetailsV2', ids=['device-1'])

    def test_empty_details(self):
        """Test an empty detail response raises ApiError."""
        falcon = create_mock_falcon({
            'GetDeviceDetailsV2': MockFalconResponse.success({'resources': []})
        })

        with pytest.raises(ApiError, match='No device details'):
            Devices(falcon).get_device_details('device-1')

    def test_api_error(self):
        """Test a non-200 response raises ApiError."""
        falcon = create_mock_falcon({'GetDeviceDetailsV2': MockFalconResponse.error_403_scope()})

        with pytest.raises(ApiError):
            Devices(falcon).get_device_details('device-1')
