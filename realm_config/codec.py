# realm_config/codec.py
"""
Decoder/Encoder for the two document families.

spec_legend:
  r: Return value (shape & invariants)
  s: Side effects
  e: Errors/exceptions behavior
  p: Parameters (only non-obvious notes; types are in signature)
  notes: Brief extra context that aids correct use

defaults:
  combined: JSON, UTF-8, indent=2, keys in model order, trailing newline
  section: YAML via SectionLoader (plain scalars stay text) / yaml.safe_dump(sort_keys=False), UTF-8
  invariants:
    - Absent optional fields are omitted on encode and decode to None
    - Unknown keys are ignored
    - Comments in section files are dropped on decode
"""

import json
from typing import Any, Mapping, Optional

import yaml

from realm_config.errors import DecodeError, EncodeError
from realm_config.model import Configuration, EndpointSettings, LogSettings

_NULL_TAG = "tag:yaml.org,2002:null"


class SectionLoader(yaml.SafeLoader):
    """
    SafeLoader that keeps plain scalars as text.

    Only null (`~`, `null`, empty) is resolved implicitly, so hand-typed
    `level: off` or `remote: 8080` load as "off" and "8080" instead of
    bool/int. Explicit tags (`!!int 5`) and collections still load as such.
    """


SectionLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag == _NULL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _optional_str(data: Mapping[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise DecodeError(f"{where}.{key} must be a string, got {type(value).__name__}")


def _required_str(data: Mapping[str, Any], key: str, where: str) -> str:
    if key not in data or data[key] is None:
        raise DecodeError(f"{where}: missing required field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise DecodeError(f"{where}.{key} must be a string, got {type(value).__name__}")
    return value


def _log_from_mapping(data: Any, where: str) -> LogSettings:
    if data is None:
        return LogSettings()
    if not isinstance(data, dict):
        raise DecodeError(f"{where} must be a mapping, got {type(data).__name__}")
    return LogSettings(
        level=_optional_str(data, "level", where),
        output=_optional_str(data, "output", where),
    )


def _endpoint_from_mapping(data: Any, where: str) -> EndpointSettings:
    if not isinstance(data, dict):
        raise DecodeError(f"{where} must be a mapping, got {type(data).__name__}")
    return EndpointSettings(
        listen=_required_str(data, "listen", where),
        remote=_required_str(data, "remote", where),
    )


def _text(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"not valid UTF-8: {e}") from e


def decode_combined(data: bytes) -> Configuration:
    """
    spec:
      name: decode_combined
      signature: decode_combined(data: bytes) -> Configuration
      r: Configuration; missing/null log -> empty LogSettings, missing/null endpoints -> []
      s: []
      e:
        - DecodeError: bad UTF-8/JSON, non-object root, wrong field types,
          endpoint without listen/remote
    """
    try:
        doc = json.loads(_text(data))
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid JSON: {e}") from e
    if not isinstance(doc, dict):
        raise DecodeError(f"combined document must be a JSON object, got {type(doc).__name__}")

    raw_endpoints = doc.get("endpoints")
    if raw_endpoints is None:
        raw_endpoints = []
    elif not isinstance(raw_endpoints, list):
        raise DecodeError(f"endpoints must be an array, got {type(raw_endpoints).__name__}")

    return Configuration(
        log=_log_from_mapping(doc.get("log"), "log"),
        endpoints=[
            _endpoint_from_mapping(item, f"endpoints[{i}]")
            for i, item in enumerate(raw_endpoints)
        ],
    )


def encode_combined(config: Configuration) -> bytes:
    """
    spec:
      name: encode_combined
      signature: encode_combined(config: Configuration) -> bytes
      r: UTF-8 JSON, 2-space indent, newline-terminated
      e:
        - EncodeError: only if the model holds non-serializable values
    """
    try:
        text = json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"failed to encode combined document: {e}") from e
    return (text + "\n").encode("utf-8")


def _load_section(data: bytes) -> Any:
    try:
        return yaml.load(_text(data), Loader=SectionLoader)
    except yaml.YAMLError as e:
        raise DecodeError(f"invalid YAML: {e}") from e


def _dump_section(payload: Mapping[str, Any]) -> bytes:
    try:
        text = yaml.safe_dump(
            dict(payload),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as e:
        raise EncodeError(f"failed to encode section: {e}") from e
    return text.encode("utf-8")


def decode_log_section(data: bytes) -> LogSettings:
    """Decode a log section file. An empty file is an empty LogSettings."""
    return _log_from_mapping(_load_section(data), "log")


def encode_log_section(log_settings: LogSettings) -> bytes:
    return _dump_section(log_settings.to_dict())


def decode_endpoint_section(data: bytes) -> EndpointSettings:
    """Decode one endpoint section file; both fields are required."""
    doc = _load_section(data)
    if doc is None:
        raise DecodeError("endpoint section is empty")
    return _endpoint_from_mapping(doc, "endpoint")


def encode_endpoint_section(endpoint: EndpointSettings) -> bytes:
    return _dump_section(endpoint.to_dict())
