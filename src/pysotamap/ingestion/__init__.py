"""Ingestion layer.

Adapters that read the game's chat logs and snapshot file and emit
normalized :class:`~pysotamap.state.events.PlayerEvent` candidates.
"""

__all__: list[str] = []
