"""
Navigation state for the UI.

The app keeps three values in the Streamlit session:
- view: "list", "detail" or "form"
- selected_show_id: the show open in the detail view
- editing_show_id: the show open in the form, None when adding

These helpers take the session as a plain mapping so the rules can be
tested without a running Streamlit server.
"""

from typing import MutableMapping, Optional
from uuid import UUID

from roadshow.models.show import Show
from roadshow.store import ShowStore


LIST_VIEW = "list"
DETAIL_VIEW = "detail"
FORM_VIEW = "form"


def init_session_state(state: MutableMapping) -> None:
    state.setdefault("view", LIST_VIEW)
    state.setdefault("selected_show_id", None)
    state.setdefault("editing_show_id", None)


def go_to_list(state: MutableMapping) -> None:
    state["view"] = LIST_VIEW
    state["selected_show_id"] = None
    state["editing_show_id"] = None


def open_detail(state: MutableMapping, show_id: UUID) -> None:
    state["view"] = DETAIL_VIEW
    state["selected_show_id"] = show_id


def open_form(state: MutableMapping, show_id: Optional[UUID] = None) -> None:
    """Open the form; with a show_id it edits that show, without it adds one."""
    state["view"] = FORM_VIEW
    state["editing_show_id"] = show_id


def delete_show(store: ShowStore, state: MutableMapping, show_id: UUID) -> bool:
    """Delete a show. If it was open anywhere, return to the list."""
    deleted = store.delete(show_id)
    if show_id in (state.get("selected_show_id"), state.get("editing_show_id")):
        go_to_list(state)
    return deleted


def detail_target(store: ShowStore, state: MutableMapping) -> Optional[Show]:
    """
    The show the detail view should display.

    Returns None, and goes back to the list, if that show no longer exists.
    """
    show_id = state.get("selected_show_id")
    show = store.get(show_id) if show_id is not None else None
    if show is None:
        go_to_list(state)
    return show


def form_target(store: ShowStore, state: MutableMapping) -> tuple[bool, Optional[Show]]:
    """
    Work out what the form should do.

    Returns:
        (ready, show). When adding, (True, None). When editing, (True, show).
        If the show being edited has been deleted in the meantime, the
        state goes back to the list and (False, None) is returned, so the
        form never silently turns an edit into a new show.
    """
    show_id = state.get("editing_show_id")
    if show_id is None:
        return True, None
    show = store.get(show_id)
    if show is None:
        go_to_list(state)
        return False, None
    return True, show
