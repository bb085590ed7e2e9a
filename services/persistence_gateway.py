"""
Persistence Gateway - Writes complete division snapshots

Every mutation ends here: the whole division document (teams, pools,
selectors and info blocks) is stamped with lastUpdated and handed to the
repository as one replace. The gateway tracks a save status for the caller
(idle -> saving -> saved | error), which reads idle again once
SAVE_STATUS_RESET_SECONDS have passed after saved or error.
"""

import time
from collections.abc import Callable

from config import settings
from logging_config import logger
from models.rosters import Roster, SaveStatus
from services.roster_repository import RosterRepository
from utils import last_updated_stamp


class PersistenceGateway:
    """Serializes division snapshots into full-document replace calls"""

    def __init__(
        self,
        repository: RosterRepository,
        reset_after: float | None = None,
        on_status: Callable[[SaveStatus], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.repository = repository
        self.reset_after = settings.SAVE_STATUS_RESET_SECONDS if reset_after is None else reset_after
        self.on_status = on_status
        self._clock = clock
        self._status = SaveStatus.IDLE
        self._changed_at = clock()
        self.last_error: str | None = None

    @property
    def status(self) -> SaveStatus:
        if (
            self._status in (SaveStatus.SAVED, SaveStatus.ERROR)
            and self._clock() - self._changed_at >= self.reset_after
        ):
            self._set_status(SaveStatus.IDLE)
        return self._status

    def _set_status(self, status: SaveStatus) -> None:
        self._status = status
        self._changed_at = self._clock()
        if self.on_status:
            self.on_status(status)

    async def save(self, roster: Roster) -> Roster:
        """
        Replace the stored division with this snapshot

        Args:
            roster: Complete division snapshot

        Returns:
            The division as stored (with its new version)

        Raises:
            Whatever the repository raises; the status is left at error
        """
        document = roster.model_copy(update={"lastUpdated": last_updated_stamp()}, deep=True)
        self.last_error = None
        self._set_status(SaveStatus.SAVING)
        try:
            saved = await self.repository.replace(document)
        except Exception as e:
            self.last_error = getattr(e, "message", str(e))
            self._set_status(SaveStatus.ERROR)
            logger.bind(ageGroup=roster.ageGroup, season=roster.season).error(
                f"Saving division failed: {self.last_error}"
            )
            raise

        self._set_status(SaveStatus.SAVED)
        logger.bind(ageGroup=saved.ageGroup, season=saved.season, version=saved.version).debug(
            "Division saved"
        )
        return saved
