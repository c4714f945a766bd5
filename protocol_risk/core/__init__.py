"""Core engine components."""

from .cache import TimeBoxedCache, CacheEntry

from .registry import (
    ProtocolRegistry,
    ProtocolMapping,
    PROTOCOL_MAPPING,
    resolve_protocol,
    list_protocols,
)

from .engine import (
    RiskEngine,
    risk_engine,
    get_risk_report,
    get_risk_reports,
)

__all__ = [
    # Cache
    "TimeBoxedCache",
    "CacheEntry",
    # Registry
    "ProtocolRegistry",
    "ProtocolMapping",
    "PROTOCOL_MAPPING",
    "resolve_protocol",
    "list_protocols",
    # Engine
    "RiskEngine",
    "risk_engine",
    "get_risk_report",
    "get_risk_reports",
]
