import socket

import psutil
import pytest

from conftest import Snic
from ksnowflake import KSnowflake, IdSource
from ksnowflake.common.god import identity
from ksnowflake.common.god.identity import resolve_data_center_id, resolve_machine_id, parse_hardware_address


@pytest.fixture
def fixed_random(monkeypatch):
    monkeypatch.setattr(identity.secrets, 'randbelow', lambda n: n - 1)


def test_data_center_id_from_env(monkeypatch):
    monkeypatch.setenv('DATA_CENTER_ID', '7')
    assert resolve_data_center_id() == (7, IdSource.CONFIGURED)
    assert KSnowflake().data_center_id == 7


@pytest.mark.parametrize('value', ['0', '31', '+12', '007'])
def test_data_center_id_bounds_accepted(monkeypatch, value):
    monkeypatch.setenv('DATA_CENTER_ID', value)
    assert resolve_data_center_id() == (int(value), IdSource.CONFIGURED)


@pytest.mark.parametrize('value', ['99', '32', '-1', 'abc', '', '7.5', ' 12 ', '12\n', '1_5', '0x1f', '+-3'])
def test_invalid_data_center_id_falls_back_to_random(monkeypatch, fixed_random, value):
    monkeypatch.setenv('DATA_CENTER_ID', value)
    assert resolve_data_center_id() == (31, IdSource.RANDOM)


def test_override_with_underscore_or_whitespace_is_rejected(fixed_random):
    assert resolve_data_center_id('1_5') == (31, IdSource.RANDOM)
    assert resolve_data_center_id(' 3') == (31, IdSource.RANDOM)
    assert KSnowflake(data_center_id='1_5').data_center_source == IdSource.RANDOM


def test_invalid_data_center_id_is_logged(monkeypatch, caplog):
    monkeypatch.setenv('DATA_CENTER_ID', 'abc')
    with caplog.at_level('WARNING', logger='ksnowflake.common.god'):
        resolved = resolve_data_center_id()
    assert resolved.source == IdSource.RANDOM
    assert "DATA_CENTER_ID='abc'" in caplog.text


def test_unset_data_center_id_is_random_in_range():
    for _ in range(2):
        snowflake = KSnowflake()
        assert 0 <= snowflake.data_center_id <= 31
        assert snowflake.data_center_source == IdSource.RANDOM


def test_override_takes_precedence_over_env(monkeypatch):
    monkeypatch.setenv('DATA_CENTER_ID', '7')
    assert resolve_data_center_id('4') == (4, IdSource.CONFIGURED)
    assert KSnowflake(data_center_id='4').data_center_id == 4


def test_machine_id_from_first_hardware_address(monkeypatch):
    interfaces = {
        'lo': [Snic(socket.AF_INET, '127.0.0.1'), Snic(psutil.AF_LINK, '00:00:00:00:00:00')],
        'eth0': [Snic(socket.AF_INET, '172.17.0.2'), Snic(psutil.AF_LINK, '02:42:ac:11:00:02')],
        'eth1': [Snic(psutil.AF_LINK, 'ff:ff:ff:ff:ff:ff')],
    }
    monkeypatch.setattr(identity.psutil, 'net_if_addrs', lambda: interfaces)
    # 0x02 + 0x42 + 0xac + 0x11 + 0x00 + 0x02 = 259
    assert resolve_machine_id() == (259 % 32, IdSource.HARDWARE)

    snowflake = KSnowflake()
    assert snowflake.machine_id == 3
    assert snowflake.machine_source == IdSource.HARDWARE


def test_machine_id_without_hardware_address(monkeypatch, fixed_random):
    interfaces = {
        'lo': [Snic(socket.AF_INET, '127.0.0.1'), Snic(psutil.AF_LINK, '00:00:00:00:00:00')],
        'tun0': [Snic(socket.AF_INET, '10.8.0.1'), Snic(psutil.AF_LINK, '')],
    }
    monkeypatch.setattr(identity.psutil, 'net_if_addrs', lambda: interfaces)
    assert resolve_machine_id() == (31, IdSource.RANDOM)


def test_machine_id_when_enumeration_fails(monkeypatch, fixed_random):
    def broken():
        raise OSError('no interfaces')

    monkeypatch.setattr(identity.psutil, 'net_if_addrs', broken)
    assert resolve_machine_id() == (31, IdSource.RANDOM)
    # 构造永远不会失败
    assert KSnowflake().machine_id == 31


def test_parse_hardware_address():
    assert parse_hardware_address('02:42:ac:11:00:02') == bytes([0x02, 0x42, 0xac, 0x11, 0x00, 0x02])
    assert parse_hardware_address('AA-BB-CC-DD-EE-FF') == bytes([0xaa, 0xbb, 0xcc, 0xdd, 0xee, 0xff])
    assert parse_hardware_address(None) is None
    assert parse_hardware_address('') is None
    assert parse_hardware_address('00:00:00:00:00:00') is None
    assert parse_hardware_address('zz:00') is None
    assert parse_hardware_address('100:00') is None
