# test/test_codec.py

import json

import pytest
import yaml

from realm_config.codec import (
    decode_combined,
    decode_endpoint_section,
    decode_log_section,
    encode_combined,
    encode_endpoint_section,
    encode_log_section,
)
from realm_config.errors import DecodeError
from realm_config.model import Configuration, EndpointSettings, LogSettings

SAMPLE = (
    b'{"log":{"level":"info","output":"/var/log/test.log"},"endpoints":'
    b'[{"listen":"0.0.0.0:1234","remote":"example.com:5678"},'
    b'{"listen":"0.0.0.0:4321","remote":"test.example.org:8765"}]}'
)


def test_decode_combined_sample():
    config = decode_combined(SAMPLE)
    assert config.log == LogSettings(level="info", output="/var/log/test.log")
    assert config.endpoints == [
        EndpointSettings("0.0.0.0:1234", "example.com:5678"),
        EndpointSettings("0.0.0.0:4321", "test.example.org:8765"),
    ]


def test_decode_combined_missing_sections_are_empty():
    config = decode_combined(b"{}")
    assert config == Configuration()
    assert config.log.level is None and config.log.output is None


def test_decode_combined_ignores_unknown_keys():
    config = decode_combined(b'{"extra": 1, "endpoints": [{"listen": "a:1", "remote": "b:2", "tag": "x"}]}')
    assert config.endpoints == [EndpointSettings("a:1", "b:2")]


def test_decode_combined_keeps_explicit_empty_string():
    config = decode_combined(b'{"log": {"level": ""}}')
    assert config.log.level == ""
    assert config.log.output is None


@pytest.mark.parametrize("raw", [
    b"{not json",
    b"[]",
    b'{"endpoints": {}}',
    b'{"log": "debug"}',
    b'{"log": {"level": 3}}',
    b'{"endpoints": [{"listen": "0.0.0.0:1"}]}',
    b'{"endpoints": [{"listen": "0.0.0.0:1", "remote": 8080}]}',
    b'{"endpoints": ["a:1"]}',
    b"\xff\xfe",
])
def test_decode_combined_rejects_malformed(raw):
    with pytest.raises(DecodeError):
        decode_combined(raw)


def test_decode_error_names_the_field():
    with pytest.raises(DecodeError) as exc:
        decode_combined(b'{"endpoints": [{"listen": "a:1", "remote": "b:2"}, {"remote": "c:3"}]}')
    assert "endpoints[1]" in str(exc.value)
    assert "listen" in str(exc.value)


def test_encode_combined_layout():
    config = Configuration(
        log=LogSettings(level="warn"),
        endpoints=[EndpointSettings("0.0.0.0:1", "example.com:2")],
    )
    data = encode_combined(config)
    assert data.endswith(b"\n")
    assert list(json.loads(data)) == ["log", "endpoints"]
    assert json.loads(data) == {
        "log": {"level": "warn"},
        "endpoints": [{"listen": "0.0.0.0:1", "remote": "example.com:2"}],
    }
    assert b'\n  "log"' in data


def test_encode_combined_empty():
    assert json.loads(encode_combined(Configuration())) == {"log": {}, "endpoints": []}


def test_log_section_omits_absent_fields():
    data = encode_log_section(LogSettings())
    assert yaml.safe_load(data) == {}
    assert b"level" not in data and b"output" not in data
    assert decode_log_section(data) == LogSettings()


def test_log_section_field_order():
    data = encode_log_section(LogSettings(level="info", output="/var/log/x.log"))
    assert data == b"level: info\noutput: /var/log/x.log\n"


def test_endpoint_section_text():
    data = encode_endpoint_section(EndpointSettings("0.0.0.0:1234", "example.com:5678"))
    assert data == b"listen: 0.0.0.0:1234\nremote: example.com:5678\n"


def test_sections_ignore_comments():
    data = b"# edited by hand\nlevel: debug  # louder\noutput: /tmp/a.log\n"
    assert decode_log_section(data) == LogSettings(level="debug", output="/tmp/a.log")
    ep = decode_endpoint_section(b"# primary\nlisten: 127.0.0.1:80\nremote: host:81\n")
    assert ep == EndpointSettings("127.0.0.1:80", "host:81")


def test_empty_log_section_is_empty_settings():
    assert decode_log_section(b"") == LogSettings()


def test_section_strings_that_look_like_numbers_survive():
    ep = EndpointSettings(listen="10:30", remote="1.5")
    assert decode_endpoint_section(encode_endpoint_section(ep)) == ep


@pytest.mark.parametrize("raw", [
    b"",
    b"listen: 0.0.0.0:1\n",
    b"- listen: a\n",
    b"listen: [a\n",
    b"listen: a:1\nremote: [80]\n",
    b"listen: a:1\nremote: !!int 80\n",
])
def test_endpoint_section_rejects_malformed(raw):
    with pytest.raises(DecodeError):
        decode_endpoint_section(raw)


def test_log_section_rejects_non_scalar_level():
    with pytest.raises(DecodeError):
        decode_log_section(b"level: {name: debug}\n")


@pytest.mark.parametrize("text, level", [
    (b"level: off\n", "off"),
    (b"level: on\n", "on"),
    (b"level: no\n", "no"),
    (b"level: 1.10\n", "1.10"),
    (b"level: \"off\"\n", "off"),
])
def test_hand_typed_log_level_stays_text(text, level):
    assert decode_log_section(text) == LogSettings(level=level)


@pytest.mark.parametrize("text", [b"level: ~\n", b"level: null\n", b"level:\n"])
def test_null_log_level_is_absent(text):
    assert decode_log_section(text) == LogSettings()


def test_hand_typed_numeric_ports_stay_text():
    ep = decode_endpoint_section(b"listen: 10:80\nremote: 8080\n")
    assert ep == EndpointSettings(listen="10:80", remote="8080")


def test_log_level_off_round_trips_through_encode():
    data = encode_log_section(LogSettings(level="off"))
    assert decode_log_section(data) == LogSettings(level="off")
