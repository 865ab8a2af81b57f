"""Store generation orchestrator.

Takes a validated ``StoreRequest`` and writes the complete store directory:
state, shared Firestore actions factory, one action module per collection,
the store index, the optional activity logger and the store guide.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from storegen.config import Config
from storegen.utils import write_text_async

from .action_module import compose_collection_module
from .js_ir import JsPrinter
from .models import ComposedModule, StoreRequest
from .store_composer import (
    compose_activity_logger,
    compose_firestore_util,
    compose_index,
    compose_state,
    compose_store_guide,
)
from .templates import TemplateRenderer


class StoreGenerator:
    """Composes and writes every file of one store.

    All modules are composed in memory before the first write, so a
    composition failure leaves the disk untouched.  Writes then happen one
    at a time in dependency order.
    """

    def __init__(
        self,
        config: Config,
        renderer: Optional[TemplateRenderer] = None,
        printer: Optional[JsPrinter] = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.printer = printer or JsPrinter()

    # -- Public API --------------------------------------------------------

    def compose(self, request: StoreRequest, now: Optional[datetime] = None) -> list[ComposedModule]:
        """Compose every module of *request*, in write order."""
        ext = self.config.file_extension

        # 1. Reactive state
        modules = [compose_state(request, renderer=self.renderer, extension=ext)]

        # 2. Shared Firestore actions factory
        modules.append(compose_firestore_util(request, renderer=self.renderer, extension=ext))

        # 3. One action module per collection
        modules.extend(
            compose_collection_module(spec, extension=ext, printer=self.printer)
            for spec in request.collections
        )

        # 4. Store index
        modules.append(
            compose_index(request, renderer=self.renderer, printer=self.printer, extension=ext)
        )

        # 5. Activity logger (optional)
        logger = compose_activity_logger(request, renderer=self.renderer, extension=ext)
        if logger is not None:
            modules.append(logger)

        # 6. Store guide
        modules.append(
            compose_store_guide(
                request,
                renderer=self.renderer,
                now=now,
                stores_dir=self.config.stores_dir,
                extension=ext,
            )
        )
        return modules

    async def generate(self, request: StoreRequest, now: Optional[datetime] = None) -> list[Path]:
        """Generate the store described by *request*.

        Returns:
            Paths of the written files, in write order.
        """
        store_root = self.config.store_path(request.store_name)
        written: list[Path] = []
        for module in self.compose(request, now=now):
            written.append(await write_text_async(store_root / module.path, module.content))
        return written
