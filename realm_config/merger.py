# realm_config/merger.py
"""
Merge a directory of section files back into one combined document.

spec_legend:
  r: Return value (shape & invariants)
  s: Side effects (tags: [fs][log])
  e: Errors/exceptions behavior
  notes: Brief extra context that aids correct use

defaults:
  order: "lexical" (plain string sort of endpoint file names)
  invariants:
    - Missing log section -> empty LogSettings
    - Only regular files named endpoint_*<ext> are read
    - Lexical order is correct for <= 9 endpoints only; "endpoint_10_..."
      sorts before "endpoint_2_...". order="numeric" sorts on the position prefix.
"""

import glob
import os
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from realm_config.codec import decode_endpoint_section, decode_log_section, encode_combined
from realm_config.errors import DirectoryMissingError, FileIOError, RealmConfigError
from realm_config.logger import log
from realm_config.model import Configuration
from realm_config.settings import RealmSettings

PathLike = Union[str, Path]

ORDERS = ("lexical", "numeric")


def _position_key(name: str, prefix: str) -> Tuple[int, int, str]:
    m = re.match(re.escape(prefix) + r"(\d+)(?:_|\.|$)", name)
    if m:
        return (0, int(m.group(1)), name)
    return (1, 0, name)


def list_endpoint_files(settings: RealmSettings, order: str = "lexical") -> List[Path]:
    """
    spec:
      name: list_endpoint_files
      signature: list_endpoint_files(settings, order="lexical") -> list[Path]
      p:
        order: "lexical" | "numeric"
      r: Endpoint section files in merge order
      e:
        - ValueError: unknown order
      notes:
        - numeric: files without a parsable position come last, by name
    """
    if order not in ORDERS:
        raise ValueError(f"order must be one of {ORDERS}, got {order!r}")
    paths = [Path(p) for p in glob.glob(settings.endpoint_glob()) if os.path.isfile(p)]
    if order == "numeric":
        return sorted(paths, key=lambda p: _position_key(p.name, settings.endpoint_prefix))
    return sorted(paths, key=lambda p: p.name)


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileIOError(f"read failed: {e.strerror or e}", phase="merge", path=str(path)) from e


def load_sections(settings: Optional[RealmSettings] = None, order: str = "lexical") -> Configuration:
    """
    spec:
      name: load_sections
      signature: load_sections(settings=None, order="lexical") -> Configuration
      r: Configuration assembled from the section directory
      s: [fs][log]
      e:
        - DirectoryMissingError: settings.config_dir is not a directory
        - FileIOError / DecodeError: with phase="merge" and the offending path
    """
    settings = settings or RealmSettings.from_env()
    if not os.path.isdir(settings.config_dir):
        raise DirectoryMissingError(
            "config directory does not exist (run split first)",
            phase="merge",
            path=settings.config_dir,
        )

    result = Configuration()

    log_path = Path(settings.log_path())
    if log_path.is_file():
        try:
            result.log = decode_log_section(_read(log_path))
        except RealmConfigError as e:
            raise e.in_context("merge", str(log_path)) from e
        log(f"Loaded log section: {log_path}", "INFO")

    for path in list_endpoint_files(settings, order):
        try:
            result.endpoints.append(decode_endpoint_section(_read(path)))
        except RealmConfigError as e:
            raise e.in_context("merge", str(path)) from e
        log(f"Loaded endpoint section: {path}", "INFO")

    return result


def merge_config(output_file: PathLike, settings: Optional[RealmSettings] = None,
                 order: str = "lexical") -> Configuration:
    """
    spec:
      name: merge_config
      signature: merge_config(output_file, settings=None, order="lexical") -> Configuration
      r: The Configuration that was written
      s: [fs][log]
      e:
        - DirectoryMissingError, FileIOError, DecodeError, EncodeError
      notes:
        - output_file is created or overwritten; its parent must exist
    """
    config = load_sections(settings, order)
    out = Path(output_file)
    try:
        data = encode_combined(config)
    except RealmConfigError as e:
        raise e.in_context("merge", str(out)) from e
    try:
        out.write_bytes(data)
    except OSError as e:
        raise FileIOError(f"write failed: {e.strerror or e}", phase="merge", path=str(out)) from e
    log(f"Merged {len(config.endpoints)} endpoint(s) into {out}", "INFO")
    return config
