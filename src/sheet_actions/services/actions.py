"""
Action Service
===============
Attaches calculation actions to stored sheets.

Each call runs find, read, helper registration, compile, attach and
write-back for one sheet. Calls for the same sheet are serialized; calls
for different sheets run independently.

Example::

    service = ActionService(references, storage)
    service.attach_calculation(
        sheet_id,
        AbilityModifier(score_field_name="STR", modifier_field_name="STRmod"),
    )
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

from ..builder.script_compiler import CompiledAction, compile_action
from ..config import EngineSettings
from ..errors import SheetNotFound
from ..models.action import CalculationAction
from ..pdf.writer import SheetWriter
from .ports import SheetReferencePort, SheetStoragePort

logger = logging.getLogger(__name__)


class ActionService:
    def __init__(
        self,
        references: SheetReferencePort,
        storage: SheetStoragePort,
        settings: EngineSettings | None = None,
    ) -> None:
        self._references = references
        self._storage = storage
        self._settings = settings or EngineSettings()
        # sheet id -> (lock, number of callers holding or waiting on it)
        self._locks: dict[UUID, tuple[threading.Lock, int]] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _sheet_lock(self, sheet_id: UUID) -> Iterator[None]:
        with self._locks_guard:
            lock, users = self._locks.get(sheet_id, (threading.Lock(), 0))
            self._locks[sheet_id] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._locks_guard:
                lock, users = self._locks[sheet_id]
                if users == 1:
                    del self._locks[sheet_id]
                else:
                    self._locks[sheet_id] = (lock, users - 1)

    def attach_calculation(self, sheet_id: UUID, action: CalculationAction) -> CompiledAction:
        """
        Attach ``action`` to the sheet ``sheet_id`` and persist the result.

        Raises
        ------
        SheetNotFound
            No reference exists for ``sheet_id``.
        InvalidAction, LoadPdfError, InvalidPdfSheet, FieldNotFound, SavePdfError
            Propagated from the compiler and the writer; nothing is written
            back to storage in that case.
        """
        compiled = compile_action(action)
        helper_source = self._settings.helper_script()

        with self._sheet_lock(sheet_id):
            reference = self._references.find_by_id(sheet_id)
            if reference is None:
                logger.error("sheet reference %s not found", sheet_id)
                raise SheetNotFound(sheet_id)
            logger.info("found sheet reference %s at %s", sheet_id, reference.path)

            local_path = self._storage.read(reference.path)
            logger.debug("read sheet %s to %s", sheet_id, local_path)

            with SheetWriter(local_path) as writer:
                writer.register_helper_script(
                    helper_source, self._settings.helper_script_name
                )
                writer.attach_field_calculation(compiled.javascript, compiled.target_field)
                writer.save()

            self._storage.write(local_path, reference.path)
            logger.info(
                "attached %s calculation to field %r of sheet %s",
                action.kind, compiled.target_field, sheet_id,
            )
        return compiled
