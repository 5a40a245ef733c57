from .actions import ActionService
from .ports import SheetReferencePort, SheetStoragePort
from .sheets import SheetService, split_filename

__all__ = [
    "ActionService",
    "SheetReferencePort",
    "SheetStoragePort",
    "SheetService",
    "split_filename",
]
