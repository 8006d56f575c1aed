"""Helper configuration.

HelperConfig is a Pydantic model so settings loaded from application config
(dicts, JSON, env-driven settings objects) are validated before a
QueryHelper is built from them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

DEFAULT_SCHEMA = "public"


class HelperConfig(BaseModel):
    """Configuration for a QueryHelper."""

    model_config = ConfigDict(frozen=True)

    schema_name: str = DEFAULT_SCHEMA
    validate_identifiers: bool = False
