from itertools import product

import pytest

from bookstore.domain.schemas import BookSearchParams, PageRequest
from bookstore.repos.book_spec import BookSpecificationBuilder
from bookstore.services.book_service import BookService
from tests.factories import book_request

CATALOG = [
    ("Dune", "Herbert", "111"),
    ("Dune Messiah", "Herbert", "112"),
    ("Emma", "Austen", "221"),
    ("Persuasion", "Austen", "222"),
    ("Dune", "Someone Else", "333"),
]


@pytest.fixture
def catalog(db):
    svc = BookService(db)
    for title, author, isbn in CATALOG:
        svc.create_book(book_request(title=title, author=author, isbn=isbn))
    return svc


def test_empty_params_build_match_all_predicate():
    predicate = BookSpecificationBuilder().build(BookSearchParams())
    assert str(predicate) == "true"


def test_unknown_provider_key():
    with pytest.raises(KeyError):
        BookSpecificationBuilder().provider("publisher")


def test_empty_params_return_all_books(catalog):
    found = catalog.search_books(BookSearchParams(), PageRequest(size=50))
    assert sorted(b.isbn for b in found) == sorted(isbn for _, _, isbn in CATALOG)


def test_blank_values_impose_no_constraint(catalog):
    found = catalog.search_books(BookSearchParams(titles=[""], isbn=""), PageRequest(size=50))
    assert len(found) == len(CATALOG)


TITLE_OPTIONS = [[], ["Dune"], ["Dune", "Emma"], ["Missing"]]
AUTHOR_OPTIONS = [[], ["Herbert"], ["Austen", "Someone Else"]]
ISBN_OPTIONS = [None, "111", "333", "999"]


@pytest.mark.parametrize("titles, authors, isbn", list(product(TITLE_OPTIONS, AUTHOR_OPTIONS, ISBN_OPTIONS)))
def test_search_is_intersection_of_field_matches(catalog, titles, authors, isbn):
    expected = {
        b_isbn
        for title, author, b_isbn in CATALOG
        if (not titles or title in titles)
        and (not authors or author in authors)
        and (isbn is None or b_isbn == isbn)
    }

    found = catalog.search_books(
        BookSearchParams(titles=titles, authors=authors, isbn=isbn),
        PageRequest(size=50),
    )

    assert {b.isbn for b in found} == expected


def test_search_skips_soft_deleted_books(catalog):
    dune = catalog.search_books(BookSearchParams(isbn="111"), PageRequest())[0]
    catalog.delete_book(dune.id)

    found = catalog.search_books(BookSearchParams(titles=["Dune"]), PageRequest())
    assert {b.isbn for b in found} == {"333"}


def test_whitespace_values_impose_no_constraint(catalog):
    params = BookSearchParams(titles=["  "], authors=[" "], isbn="   ")
    found = catalog.search_books(params, PageRequest(size=50))
    assert len(found) == len(CATALOG)
    assert str(BookSpecificationBuilder().build(params)) == "true"
