from typing import MutableMapping

CURRENT_PAGE_KEY = "current_page"


def enter_page(state: MutableMapping, page: str) -> bool:
    """Record the page being rendered.

    Returns True on entry from another page (or on first load), False on a
    rerun of the same page. Cached lists must be dropped on entry.
    """
    entered = state.get(CURRENT_PAGE_KEY) != page
    state[CURRENT_PAGE_KEY] = page
    return entered
