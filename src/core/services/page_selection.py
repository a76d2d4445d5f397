"""Page selection and viewer navigation for per-page snapshots.

The snapshot service loads a document once in the PDF.js viewer and takes the
primary snapshot of page 1. Every further page is an *additional snapshot*
that runs a small script first: it removes the page elements already
captured from `div#viewer` so the next page becomes the first one, and
advances the viewer when only one page element is left. Additional snapshots
run one after another on the same DOM, so each script only has to move from
the previously captured page to the next one.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.domain.models import AdditionalSnapshot

RESTORE_PAGE_STATE_REFERENCE = "restore-page-state"

_ADVANCE_AND_SCROLL = (
    "document.querySelector('div#viewer').children.length == 1\n"
    "  ? document.querySelector('button#next').click()\n"
    "  : document\n"
    "      .querySelector('div#viewer')\n"
    "      .children.item(1)\n"
    "      .scrollIntoView();\n"
    "document\n"
    "  .querySelector('div#viewer')\n"
    "  .children.item(0)\n"
    "  .scrollIntoView();\n"
)

# Advances exactly one page. Shared by every step when no page filter is set.
RESTORE_PAGE_STATE_SCRIPT = (
    "document.querySelector('div#viewer').children.item(0).remove();\n" + _ADVANCE_AND_SCROLL
)

_NAVIGATION_TEMPLATE = (
    "let nextIndex = {next_page};\n"
    "for(currentIndex = {current_page};currentIndex < nextIndex; currentIndex++)\n"
    "{{\n"
    "document.querySelector('div#viewer').children.item(0).remove();\n"
    "}}\n"
)


def select_pages(
    page_count: int,
    include_pages: Sequence[int] | None = None,
    exclude_pages: Sequence[int] | None = None,
) -> list[int]:
    """Pages (beyond page 1) that get an additional snapshot.

    Page 1 is always captured by the primary snapshot and is never part of
    the result. An empty or missing filter does not filter.
    """

    pages = list(range(2, page_count + 1))
    if include_pages:
        wanted = set(include_pages)
        pages = [page for page in pages if page in wanted]
    if exclude_pages:
        unwanted = set(exclude_pages)
        pages = [page for page in pages if page not in unwanted]
    return pages


def build_navigation_script(current_page: int, next_page: int) -> str:
    """Script moving the viewer from `current_page` to `next_page`."""

    if next_page <= current_page:
        raise ValueError(f"next_page ({next_page}) must be after current_page ({current_page})")
    return (
        _NAVIGATION_TEMPLATE.format(current_page=current_page, next_page=next_page)
        + _ADVANCE_AND_SCROLL
    )


def build_additional_snapshots(
    pages: Sequence[int],
    *,
    filtered: bool,
    wait_for_selector: str,
) -> list[AdditionalSnapshot]:
    """One additional snapshot per selected page.

    Without filters the pages are consecutive, so every step reuses the
    shared one-page script. With filters the gaps vary and each step gets
    its own script starting from the previously captured page.
    """

    snapshots: list[AdditionalSnapshot] = []
    previous = 1
    for page in pages:
        if filtered:
            execute = build_navigation_script(previous, page)
        else:
            execute = RESTORE_PAGE_STATE_SCRIPT
        snapshots.append(
            AdditionalSnapshot(
                suffix=f" | Page {page}",
                wait_for_selector=wait_for_selector,
                execute=execute,
            )
        )
        previous = page
    return snapshots


def describe_pages(pages: Iterable[int]) -> str:
    """`[1,2,5]` style summary; page 1 is always listed."""

    return "[" + ",".join(str(page) for page in (1, *pages)) + "]"
