# realm_config/model.py
"""
In-memory record model shared by the codec, splitter and merger.

A Configuration is built fresh on every run and thrown away after it is
encoded; nothing here touches the filesystem.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LogSettings:
    """
    spec:
      name: LogSettings
      kind: dataclass
      attributes:
        level: str|None   # None means absent, "" is a present empty value
        output: str|None  # file path
    """
    level: Optional[str] = None
    output: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        # absent fields are omitted, not written as null or ""
        out: Dict[str, Any] = {}
        if self.level is not None:
            out["level"] = self.level
        if self.output is not None:
            out["output"] = self.output
        return out


@dataclass
class EndpointSettings:
    """
    spec:
      name: EndpointSettings
      kind: dataclass
      attributes:
        listen: str  # host:port
        remote: str  # host:port
      notes:
        - No identity beyond position; duplicates are legal and distinct.
    """
    listen: str
    remote: str

    def to_dict(self) -> Dict[str, Any]:
        return {"listen": self.listen, "remote": self.remote}


@dataclass
class Configuration:
    """
    spec:
      name: Configuration
      kind: dataclass
      attributes:
        log: LogSettings
        endpoints: list[EndpointSettings]  # order is significant
    """
    log: LogSettings = field(default_factory=LogSettings)
    endpoints: List[EndpointSettings] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "log": self.log.to_dict(),
            "endpoints": [ep.to_dict() for ep in self.endpoints],
        }
