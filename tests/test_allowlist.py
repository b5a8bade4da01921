"""Tests for allow-list parsing and membership."""

from influxstore.allowlist import AllowList, parse_allow_list


def test_parse_trims_and_drops_empty_elements():
    assert parse_allow_list(' ports , ,processors,, ') == frozenset({'ports', 'processors'})


def test_parse_upper_cases_when_asked():
    assert parse_allow_list('ifName, ifAlias', upper=True) == frozenset({'IFNAME', 'IFALIAS'})


def test_parse_keeps_case_by_default():
    assert parse_allow_list('Ports') == frozenset({'Ports'})


def test_parse_accepts_lists_and_none():
    assert parse_allow_list(['a', ' b ', '']) == frozenset({'a', 'b'})
    assert parse_allow_list(None) == frozenset()


def test_empty_allow_list_allows_everything():
    allow_list = AllowList('')
    assert not allow_list
    assert allow_list.allows('anything')
    assert AllowList(' , ,').allows('anything')


def test_case_sensitive_allow_list_matches_exactly():
    allow_list = AllowList('ports')
    assert allow_list.allows('ports')
    assert not allow_list.allows('Ports')
    assert not allow_list.allows('processors')


def test_case_insensitive_allow_list_matches_any_case():
    allow_list = AllowList('ifname', case_insensitive=True)
    assert allow_list.allows('ifName')
    assert allow_list.allows('IFNAME')
    assert not allow_list.allows('ifAlias')


def test_equality():
    assert AllowList('a,b') == AllowList('b, a')
    assert AllowList('a') != AllowList('a', case_insensitive=True)
