"""Ingestion layer.

Adapters that move raw lines from the socket reader to the state store:
a bounded event queue, the two-phase message decoder and the single
state-processing task.
"""

__all__: list[str] = []
