# realm_config/splitter.py
"""
Split a combined realm document into per-section YAML files.

spec_legend:
  r: Return value (shape & invariants)
  s: Side effects (tags: [fs][log])
  e: Errors/exceptions behavior
  notes: Brief extra context that aids correct use

defaults:
  layout: <config_dir>/log.yaml + <config_dir>/endpoint_<i>_<remote>.yaml (i is 1-based)
  overwrite: existing files with the same name are replaced (last write wins)
  rollback: none; a failure on endpoint k leaves files for 1..k-1 on disk
"""

from pathlib import Path
from typing import List, Optional, Union

from realm_config.codec import decode_combined, encode_endpoint_section, encode_log_section
from realm_config.errors import FileIOError, RealmConfigError
from realm_config.logger import log
from realm_config.settings import RealmSettings

PathLike = Union[str, Path]


def sanitize_remote(remote: str) -> str:
    """Replace ':' and '.' with '_' so the remote is usable in a file name."""
    return remote.replace(":", "_").replace(".", "_")


def endpoint_filename(position: int, remote: str, settings: Optional[RealmSettings] = None) -> str:
    """
    spec:
      name: endpoint_filename
      signature: endpoint_filename(position: int, remote: str, settings=None) -> str
      p:
        position: 1-based index in the endpoints sequence (not zero-padded)
      r: "endpoint_<position>_<sanitized remote><ext>"
      notes:
        - Unique per position even when two endpoints share a remote.
        - Unpadded decimals sort wrongly past 9 entries under plain string order.
    """
    settings = settings or RealmSettings()
    return f"{settings.endpoint_prefix}{position}_{sanitize_remote(remote)}{settings.section_ext}"


def _write_section(path: Path, encode, value) -> None:
    try:
        data = encode(value)
    except RealmConfigError as e:
        raise e.in_context("split", str(path)) from e
    try:
        path.write_bytes(data)
    except OSError as e:
        raise FileIOError(f"write failed: {e.strerror or e}", phase="split", path=str(path)) from e


def ensure_config_dir(settings: RealmSettings) -> Path:
    """Create the section directory if missing. Logs only when it was created."""
    root = Path(settings.config_dir)
    if root.is_dir():
        return root
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileIOError(f"cannot create config directory: {e.strerror or e}", phase="split", path=str(root)) from e
    log(f"Created config directory: {root}", "INFO")
    return root


def split_config(combined_file: PathLike, settings: Optional[RealmSettings] = None) -> List[Path]:
    """
    spec:
      name: split_config
      signature: split_config(combined_file, settings=None) -> list[Path]
      p:
        settings: defaults to RealmSettings.from_env()
      r: Paths written, log section first then endpoints in sequence order
      s: [fs][log]
      e:
        - FileIOError: combined file unreadable, directory or section write failed
        - DecodeError: combined document malformed
        - EncodeError: unexpected serialization failure
    """
    settings = settings or RealmSettings.from_env()
    source = Path(combined_file)

    try:
        raw = source.read_bytes()
    except OSError as e:
        raise FileIOError(f"cannot read combined document: {e.strerror or e}", phase="split", path=str(source)) from e

    try:
        config = decode_combined(raw)
    except RealmConfigError as e:
        raise e.in_context("split", str(source)) from e

    root = ensure_config_dir(settings)
    written: List[Path] = []

    log_path = Path(settings.log_path())
    _write_section(log_path, encode_log_section, config.log)
    log(f"Saved log section to {log_path}", "INFO")
    written.append(log_path)

    for i, endpoint in enumerate(config.endpoints, start=1):
        out_path = root / endpoint_filename(i, endpoint.remote, settings)
        _write_section(out_path, encode_endpoint_section, endpoint)
        log(f"Saved endpoint section to {out_path}", "INFO")
        written.append(out_path)

    log(f"Split complete: {len(config.endpoints)} endpoint(s). Edit the files in {root} "
        f"(comments are allowed), then run 'realm-config merge' to rebuild {source.name}.", "INFO")
    return written
