"""Base model for Scrappers wire payloads.

Every inbound and outbound wire model inherits from
:class:`ScrapperBaseModel` which provides:

* frozen instances, so decoded messages can be shared between tasks.
* ``extra="ignore"`` so fields added by newer game servers do not break
  decoding.
* ``populate_by_name=True`` so models can be built in code with
  snake_case field names while the wire keeps its own spelling
  (``PID``, ``BID``, ``FPow``...), declared with explicit aliases.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ScrapperBaseModel(BaseModel):
    """Base for Scrappers wire models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
