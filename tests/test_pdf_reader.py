from __future__ import annotations

import pytest

from adapters.pdf_reader import PypdfPageCounter
from conftest import write_pdf
from core.errors import PdfReadError
from core.interfaces import PageCounter


def test_counts_pages(tmp_path):
    path = write_pdf(tmp_path / "doc.pdf", pages=4)

    assert PypdfPageCounter().count_pages(path) == 4


def test_satisfies_page_counter_protocol():
    assert isinstance(PypdfPageCounter(), PageCounter)


def test_garbage_file_raises_domain_error(tmp_path):
    path = tmp_path / "broken.pdf"
    path.write_bytes(b"this is not a pdf")

    with pytest.raises(PdfReadError):
        PypdfPageCounter().count_pages(path)
