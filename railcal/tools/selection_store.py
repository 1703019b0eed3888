"""
Last-selection persistence.

Records the most recently chosen travel date and train id for
convenience. Nothing reads it back for correctness, so write failures
are logged and the selection stands.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from railcal.config import settings
from railcal.schemas.selection_schema import DateSelection

logger = logging.getLogger(__name__)


class SelectionStore(Protocol):
    def save(self, selection: DateSelection) -> None: ...

    def load(self) -> Optional[DateSelection]: ...


class MemorySelectionStore:
    def __init__(self) -> None:
        self.last: Optional[DateSelection] = None

    def save(self, selection: DateSelection) -> None:
        self.last = selection

    def load(self) -> Optional[DateSelection]:
        return self.last


class JsonSelectionStore:
    """Keeps the last selection in a small JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def save(self, selection: DateSelection) -> None:
        record = {
            "selected_travel_date": selection.iso_date,
            "selected_train_id": selection.train_id,
            "selection": selection.model_dump(mode="json"),
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(record, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not record last selection to %s: %s", self.path, e)
            return
        logger.debug("Last selection recorded to %s", self.path)

    def load(self) -> Optional[DateSelection]:
        if not self.path.exists():
            return None
        try:
            record = json.loads(self.path.read_text(encoding="utf-8"))
            return DateSelection.model_validate(record["selection"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable selection file %s: %s", self.path, e)
            return None


def store_from_settings() -> Optional[SelectionStore]:
    if settings.session.selection_store_path:
        return JsonSelectionStore(settings.session.selection_store_path)
    return None
