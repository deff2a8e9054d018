"""
Show Store

The single source of truth for the list of shows. It ties together the
persistence adapter, the calculator and the audit log.

DESIGN DECISION: The store enforces the boundaries:
- The list only changes through create / update / delete
- Every change is saved immediately, as a whole list
- Totals are recomputed explicitly after every change
- A failed save never rolls back the in-memory change; the user is
  told instead, and the next successful save catches storage up

Newest shows come first.
"""

from datetime import datetime
from typing import Callable, Optional
from uuid import UUID, uuid4

from roadshow.audit import AuditLogger
from roadshow.calculations import aggregate_totals, calculate_metrics
from roadshow.config import RateSettings, get_settings
from roadshow.models.show import (
    AggregateTotals,
    Show,
    ShowFields,
    ShowMetrics,
    utc_now,
)
from roadshow.services.storage import (
    DeserializationError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    PersistenceError,
    ShowPersistenceAdapter,
)


SAVE_FAILED_MESSAGE = (
    "Could not save your shows to local storage. "
    "Your changes are kept for this session only."
)


class ShowStore:
    """
    In-memory show list with automatic persistence.

    Flow for every mutation:
    1. Apply the change in memory
    2. Audit the change
    3. Save the full list (a failure sets `error`)
    4. Recompute totals

    Args:
        persistence: Where the list is loaded from and saved to
        rates: Rate card for derived figures; defaults to settings
        audit_logger: Where events go; a local-only logger if omitted
        clock: Source of creation timestamps
        id_factory: Source of new show IDs
    """

    def __init__(
        self,
        persistence: ShowPersistenceAdapter,
        rates: Optional[RateSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], UUID] = uuid4,
    ):
        self._persistence = persistence
        self._rates = rates if rates is not None else get_settings().rates
        self._audit_logger = audit_logger or AuditLogger()
        self._clock = clock
        self._id_factory = id_factory

        self._shows: list[Show] = self._load()
        self._issued_ids: set[UUID] = {show.id for show in self._shows}
        self._error: Optional[str] = None
        self._totals = AggregateTotals()
        self.recompute()

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    @property
    def shows(self) -> tuple[Show, ...]:
        """Snapshot of the current list, newest first."""
        return tuple(self._shows)

    @property
    def totals(self) -> AggregateTotals:
        """Dashboard totals as of the last recompute()."""
        return self._totals

    @property
    def rates(self) -> RateSettings:
        return self._rates

    @property
    def error(self) -> Optional[str]:
        """User-visible error from the last failed save, if not dismissed."""
        return self._error

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def __len__(self) -> int:
        return len(self._shows)

    def get(self, show_id: UUID) -> Optional[Show]:
        """Look up a show by ID."""
        for show in self._shows:
            if show.id == show_id:
                return show
        return None

    def metrics_for(self, show: ShowFields) -> ShowMetrics:
        """Derived figures for one show at the store's rates."""
        return calculate_metrics(show, self._rates)

    def recompute(self) -> AggregateTotals:
        """Recompute dashboard totals from the current list."""
        self._totals = aggregate_totals(self._shows, self._rates)
        return self._totals

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, data: ShowFields) -> Show:
        """
        Add a new show at the front of the list.

        Args:
            data: Validated form input

        Returns:
            The stored show, with a fresh ID and creation time
        """
        show = Show(
            **{name: getattr(data, name) for name in ShowFields.model_fields},
            id=self._new_id(),
            created_at=self._clock(),
        )
        self._shows.insert(0, show)
        self._audit_logger.log_show_created(show.id, show.destination)
        self._commit()
        return show

    def update(self, show_id: UUID, data: ShowFields) -> Optional[Show]:
        """
        Replace the editable fields of a show.

        ID, creation time and position in the list are kept.

        Returns:
            The updated show, or None if no show has this ID
        """
        for index, show in enumerate(self._shows):
            if show.id == show_id:
                updated = show.with_changes(data)
                self._shows[index] = updated
                self._audit_logger.log_show_updated(updated.id, updated.destination)
                self._commit()
                return updated
        return None

    def delete(self, show_id: UUID) -> bool:
        """
        Remove a show.

        Returns:
            True if a show was removed, False if the ID was unknown
        """
        for index, show in enumerate(self._shows):
            if show.id == show_id:
                del self._shows[index]
                self._audit_logger.log_show_deleted(show.id, show.destination)
                self._commit()
                return True
        return False

    def dismiss_error(self) -> None:
        """Clear the user-visible error."""
        if self._error is not None:
            self._audit_logger.log_error_dismissed(self._error)
        self._error = None

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _load(self) -> list[Show]:
        """Load stored shows; unreadable data is backed up, then we start empty."""
        try:
            shows = self._persistence.load()
        except DeserializationError as e:
            message = str(e)
            try:
                backup_key = self._persistence.back_up_raw()
            except PersistenceError as backup_error:
                backup_key = None
                message = f"{message}; {backup_error}"
            self._audit_logger.log_load_failed(
                self._persistence.key, message, backup_key
            )
            return []
        self._audit_logger.log_shows_loaded(self._persistence.key, len(shows))
        return shows

    def _commit(self) -> None:
        """Persist the full list, then refresh totals."""
        try:
            self._persistence.save(self._shows)
        except PersistenceError as e:
            self._error = SAVE_FAILED_MESSAGE
            self._audit_logger.log_save_failed(
                self._persistence.key, str(e), len(self._shows)
            )
        else:
            self._audit_logger.log_save_succeeded(
                self._persistence.key, len(self._shows)
            )
        self.recompute()

    def _new_id(self) -> UUID:
        """An ID that no show in this store has ever had."""
        new_id = self._id_factory()
        while new_id in self._issued_ids:
            new_id = self._id_factory()
        self._issued_ids.add(new_id)
        return new_id


def create_key_value_store(
    backend: Optional[str] = None,
    data_dir: Optional[str] = None,
) -> KeyValueStoreInterface:
    """Build the configured key-value backend."""
    storage_settings = get_settings().storage
    backend = backend or storage_settings.backend
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "file":
        return JsonFileKeyValueStore(data_dir or storage_settings.data_dir)
    raise ValueError(f"Unknown storage backend: {backend}")


def create_store(
    key_value_store: Optional[KeyValueStoreInterface] = None,
) -> ShowStore:
    """
    Factory function to create a fully wired ShowStore.

    Args:
        key_value_store: Backend to use. Built from settings if omitted.

    Returns:
        A store loaded from the backend
    """
    settings = get_settings()
    persistence = ShowPersistenceAdapter(
        key_value_store or create_key_value_store(),
        key=settings.storage.key,
    )
    return ShowStore(
        persistence=persistence,
        rates=settings.rates,
        audit_logger=AuditLogger(history_size=settings.app.audit_history_size),
    )
