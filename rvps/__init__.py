"""Reference value provider: provenance verification, reference value storage and digest queries."""

__version__ = "0.1.0"
__all__ = [
    "claims",
    "client",
    "core",
    "extractors",
    "message",
    "pre_processor",
    "reference_value",
    "server_config",
    "store",
]