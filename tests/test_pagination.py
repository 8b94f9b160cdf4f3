from nutrito.utils.pagination import Page, build_pagination, clamp_window


def test_middle_page():
    assert build_pagination(total=45, limit=20, offset=20) == {
        'total': 45, 'limit': 20, 'offset': 20, 'has_next': True, 'has_prev': True,
    }


def test_first_page():
    pagination = build_pagination(total=45, limit=20, offset=0)
    assert pagination['has_next'] is True
    assert pagination['has_prev'] is False


def test_last_page():
    pagination = build_pagination(total=45, limit=20, offset=40)
    assert pagination['has_next'] is False
    assert pagination['has_prev'] is True


def test_exact_fit_has_no_next_page():
    assert build_pagination(total=40, limit=20, offset=20)['has_next'] is False


def test_empty_result():
    assert build_pagination(total=0, limit=20, offset=0) == {
        'total': 0, 'limit': 20, 'offset': 0, 'has_next': False, 'has_prev': False,
    }


def test_clamp_window():
    assert clamp_window(None, None, 20, 100) == (20, 0)
    assert clamp_window(500, 10, 20, 100) == (100, 10)
    assert clamp_window(-3, -1, 20, 100) == (1, 0)


def test_page_exposes_its_pagination():
    page = Page(items=['a', 'b'], total=45, limit=20, offset=20)
    assert page.pagination['has_next'] is True
