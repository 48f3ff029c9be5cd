"""
Type-safe Quart application class for the essay scoring services.

Replaces setattr()/getattr() access to app-level infrastructure attributes
with declared, typed attributes.
"""

from __future__ import annotations

from typing import Any

from dishka import AsyncContainer
from quart import Quart


class CorretorApp(Quart):
    """Quart application with typed infrastructure attributes.

    GUARANTEED INFRASTRUCTURE (Non-Optional):
        container: Dishka async container for dependency injection
        extensions: Standard Quart extensions dictionary

    The container is NOT created here; it must be assigned in the service's
    app module immediately after construction.
    """

    container: AsyncContainer
    extensions: dict[str, Any]

    def __init__(self, import_name: str, *args: Any, **kwargs: Any) -> None:
        super().__init__(import_name, *args, **kwargs)
        self.extensions = {}
