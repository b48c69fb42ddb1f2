from __future__ import annotations

import pytest

from user_admin.common.pagination import Page, Pageable


def test_offset():
    assert Pageable().offset == 0
    assert Pageable(page=3, per_page=10).offset == 20


@pytest.mark.parametrize("page,per_page", [(0, 10), (1, 0), (-2, 5)])
def test_pageable_rejects_non_positive(page, per_page):
    with pytest.raises(ValueError):
        Pageable(page=page, per_page=per_page)


def test_total_pages_rounds_up():
    assert Page(count=21, per_page=10).total_pages == 3
    assert Page(count=20, per_page=10).total_pages == 2


def test_empty_result_is_one_page():
    page = Page(count=0)

    assert page.total_pages == 1
    assert not page.has_previous
    assert not page.has_next


def test_middle_page_navigation():
    page = Page(count=30, page=2, per_page=10)

    assert page.has_previous
    assert page.has_next
