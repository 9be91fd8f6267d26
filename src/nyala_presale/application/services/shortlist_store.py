"""Observable shortlist store shared by every UI surface of a session.

Mutations are synchronous: the set is updated, persisted, and every listener
is notified before the mutating call returns. A mutation made from inside a
listener is applied at once, but its notification is queued behind the pass
in progress, so listeners receive snapshots in mutation order and the last
one they receive is always the current state. Persistence failures never
propagate; the store falls back to memory for the rest of the session.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from nyala_presale.domain.contracts.shortlist_store import (
    ShortlistListener,
    ShortlistStoreProtocol,
    Unsubscribe,
)
from nyala_presale.domain.errors import StorageUnavailable
from nyala_presale.domain.models import ShortlistState, ShortlistStorageReport

if TYPE_CHECKING:
    from nyala_presale.domain.models import Unit
    from nyala_presale.domain.ports import ShortlistPersistence, UnitResolver

logger = logging.getLogger(__name__)

SHARE_LINK_PARAM = "units"
DEFAULT_SHARE_BASE_URL = "http://localhost:8000/explore"


def build_share_link(base_url: str, unit_ids: Iterable[str]) -> str:
    """Build ``<base_url>?units=<sorted, comma-separated ids>``.

    Ids are sorted lexicographically and percent-encoded individually, so the
    result depends only on the set of ids. Other query parameters on the base
    URL are kept; an existing ``units`` parameter is replaced. With no ids the
    base URL is returned unchanged.
    """
    canonical = sorted(set(unit_ids))
    if not canonical:
        return base_url

    scheme, netloc, path, query, fragment = urlsplit(base_url)
    # Other parameters are kept byte for byte
    kept = [
        segment
        for segment in query.split("&")
        if segment and segment.partition("=")[0] != SHARE_LINK_PARAM
    ]
    units_value = ",".join(quote(unit_id, safe="") for unit_id in canonical)
    new_query = "&".join([*kept, f"{SHARE_LINK_PARAM}={units_value}"])
    return urlunsplit((scheme, netloc, path, new_query, fragment))


def parse_share_link(url: str) -> list[str]:
    """Extract the unit ids encoded in a share link, in link order."""
    query = urlsplit(url).query
    for part in query.split("&"):
        key, _, value = part.partition("=")
        if key == SHARE_LINK_PARAM:
            return [unquote(unit_id) for unit_id in value.split(",") if unit_id]
    return []


@dataclass
class _Subscription:
    listener: ShortlistListener
    active: bool = True


class ShortlistStore(ShortlistStoreProtocol):
    """The shortlist of units a visitor is considering."""

    def __init__(
        self,
        persistence: ShortlistPersistence | None = None,
        resolver: UnitResolver | None = None,
        default_base_url: str = DEFAULT_SHARE_BASE_URL,
        on_storage_error: Callable[[StorageUnavailable], None] | None = None,
    ) -> None:
        """Initialize an empty, not yet loaded store.

        Args:
            persistence: Where the shortlist survives reloads. None keeps it in memory.
            resolver: Resolves ids to unit records for ``items``.
            default_base_url: Base URL for share links when none is given.
            on_storage_error: Called whenever a persistence failure is absorbed.
        """
        self._persistence = persistence
        self._resolver = resolver
        self.default_base_url = default_base_url
        self._on_storage_error = on_storage_error
        self._ordered_ids: list[str] = []
        self._subscriptions: list[_Subscription] = []
        self._pending: deque[ShortlistState] = deque()
        self._notifying = False
        self._state = ShortlistState()
        self._initialized = False
        self._storage_errors: list[str] = []
        self._degraded = False

    @property
    def storage_report(self) -> ShortlistStorageReport:
        """Whether persistence degraded to memory, and why."""
        return ShortlistStorageReport(
            is_degraded=self._degraded, errors=tuple(self._storage_errors)
        )

    def init(self) -> ShortlistState:
        """Load the persisted shortlist. Later calls do nothing.

        Returns:
            The snapshot after loading.
        """
        if self._initialized:
            return self._state
        self._initialized = True

        if self._persistence is not None:
            try:
                persisted = self._persistence.load()
            except StorageUnavailable as e:
                self._degrade(e)
            else:
                for unit_id in persisted.unit_ids:
                    if unit_id not in self._ordered_ids:
                        self._ordered_ids.append(unit_id)

        self._state = self._snapshot()
        logger.info(f"Shortlist initialized with {self._state.count} unit(s)")
        return self._state

    def get_shortlist(self) -> ShortlistState:
        """Return the current snapshot."""
        self.init()
        return self._state

    def is_in_shortlist(self, unit_id: str) -> bool:
        """Check whether a unit is shortlisted."""
        return self.get_shortlist().contains(unit_id)

    def add_unit(self, unit_id: str) -> None:
        """Add a unit; no-op without notification if already shortlisted."""
        self.init()
        if unit_id in self._state.unit_ids:
            return
        self._ordered_ids.append(unit_id)
        logger.debug(f"Added {unit_id} to shortlist")
        self._commit()

    def remove_unit(self, unit_id: str) -> None:
        """Remove a unit; no-op without notification if not shortlisted."""
        self.init()
        if unit_id not in self._state.unit_ids:
            return
        self._ordered_ids.remove(unit_id)
        logger.debug(f"Removed {unit_id} from shortlist")
        self._commit()

    def toggle_unit(self, unit_id: str) -> bool:
        """Remove the unit if present, add it otherwise, with one notification.

        Returns:
            True if the unit is shortlisted afterwards.
        """
        self.init()
        if unit_id in self._state.unit_ids:
            self._ordered_ids.remove(unit_id)
            added = False
        else:
            self._ordered_ids.append(unit_id)
            added = True
        logger.debug(f"Toggled {unit_id} {'into' if added else 'out of'} shortlist")
        self._commit()
        return added

    def clear(self) -> None:
        """Empty the shortlist. Always notifies, even when already empty."""
        self.init()
        self._ordered_ids.clear()
        logger.debug("Cleared shortlist")
        self._commit()

    def subscribe(self, listener: ShortlistListener, *, emit_current: bool = False) -> Unsubscribe:
        """Register a listener for every subsequent mutation.

        Args:
            listener: Called with the new snapshot after each mutation.
            emit_current: Also call the listener once now with the current snapshot.

        Returns:
            A function that unregisters the listener. Safe to call more than
            once and from inside a notification.
        """
        subscription = _Subscription(listener)
        self._subscriptions.append(subscription)

        def unsubscribe() -> None:
            if not subscription.active:
                return
            subscription.active = False
            self._subscriptions.remove(subscription)

        if emit_current:
            self._call_listener(subscription, self.get_shortlist())
        return unsubscribe

    @property
    def listener_count(self) -> int:
        """Number of registered listeners."""
        return len(self._subscriptions)

    def generate_share_link(self, base_url: str | None = None) -> str:
        """Build the canonical share link for the current shortlist."""
        return build_share_link(base_url or self.default_base_url, self.get_shortlist().unit_ids)

    def load_from_share_link(self, url: str) -> ShortlistState:
        """Replace the shortlist with the units encoded in a share link.

        Returns:
            The snapshot after loading.
        """
        unit_ids = parse_share_link(url)
        self.clear()
        for unit_id in unit_ids:
            self.add_unit(unit_id)
        logger.info(f"Loaded {len(unit_ids)} unit(s) from share link")
        return self._state

    def _commit(self) -> None:
        self._state = self._snapshot()
        self._save(self._state)
        self._notify(self._state)

    def _snapshot(self) -> ShortlistState:
        ordered = tuple(self._ordered_ids)
        items: tuple[Unit, ...] = ()
        if self._resolver is not None:
            resolved = (self._resolver.resolve(unit_id) for unit_id in ordered)
            items = tuple(unit for unit in resolved if unit is not None)
        return ShortlistState(unit_ids=frozenset(ordered), ordered_ids=ordered, items=items)

    def _save(self, state: ShortlistState) -> None:
        if self._persistence is None or self._degraded:
            return
        try:
            self._persistence.save(state)
        except StorageUnavailable as e:
            self._degrade(e)

    def _degrade(self, error: StorageUnavailable) -> None:
        self._degraded = True
        self._storage_errors.append(str(error))
        logger.warning(f"{error}; keeping shortlist in memory for this session")
        if self._on_storage_error is not None:
            try:
                self._on_storage_error(error)
            except Exception:
                logger.exception("Error in shortlist storage error hook")

    def _notify(self, state: ShortlistState) -> None:
        # Mutations made by listeners are delivered after the current pass
        self._pending.append(state)
        if self._notifying:
            return
        self._notifying = True
        try:
            while self._pending:
                snapshot = self._pending.popleft()
                for subscription in tuple(self._subscriptions):
                    if subscription.active:
                        self._call_listener(subscription, snapshot)
        finally:
            self._notifying = False
            self._pending.clear()

    @staticmethod
    def _call_listener(subscription: _Subscription, state: ShortlistState) -> None:
        try:
            subscription.listener(state)
        except Exception:
            logger.exception("Error in shortlist listener")
