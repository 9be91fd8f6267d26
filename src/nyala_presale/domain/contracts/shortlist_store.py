"""Protocol for the observable shortlist store."""

from collections.abc import Callable
from typing import Protocol

from nyala_presale.domain.models.shortlist_state import ShortlistState

ShortlistListener = Callable[[ShortlistState], None]
Unsubscribe = Callable[[], None]


class ShortlistStoreProtocol(Protocol):
    """Protocol for the shared shortlist that UI surfaces observe."""

    def add_unit(self, unit_id: str) -> None:
        """Add a unit; no-op if already shortlisted."""
        ...

    def remove_unit(self, unit_id: str) -> None:
        """Remove a unit; no-op if not shortlisted."""
        ...

    def toggle_unit(self, unit_id: str) -> bool:
        """Toggle a unit and return whether it is now shortlisted."""
        ...

    def clear(self) -> None:
        """Empty the shortlist."""
        ...

    def subscribe(self, listener: ShortlistListener, *, emit_current: bool = False) -> Unsubscribe:
        """Register a listener and return a function that unregisters it."""
        ...

    def generate_share_link(self, base_url: str | None = None) -> str:
        """Build the canonical share link for the current shortlist."""
        ...

    def get_shortlist(self) -> ShortlistState:
        """Return the current snapshot."""
        ...
