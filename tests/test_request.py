#!/usr/bin/env python3
"""Tests for request descriptors."""

import unittest
from urllib.parse import parse_qs, urlsplit

from speedrun_client.filters import GameFilter, LeaderboardOptions
from speedrun_client.query import Cursor, Direction, Sorting
from speedrun_client.request import Request

from tests.helpers import BASE_URL


class TestRequest(unittest.TestCase):
    """Test Request.url."""

    def test_plain_path(self):
        """Test a request without any query parameters."""
        request = Request("GET", "/games/xyz")
        self.assertEqual(request.url(BASE_URL), BASE_URL + "/games/xyz")

    def test_all_parts_are_applied(self):
        """Test that filter, sort, cursor and embed all end up in the URL."""
        request = Request(
            "GET",
            "/games",
            filter=GameFilter(platform="pc1"),
            sort=Sorting("released", Direction.DESCENDING),
            cursor=Cursor(offset=40, max=20),
            embed=("platforms", "regions"),
        )
        url = request.url(BASE_URL)
        self.assertTrue(url.startswith(BASE_URL + "/games?"))

        query = parse_qs(urlsplit(url).query)
        self.assertEqual(query["platform"], ["pc1"])
        self.assertEqual(query["orderby"], ["released"])
        self.assertEqual(query["direction"], ["desc"])
        self.assertEqual(query["offset"], ["40"])
        self.assertEqual(query["max"], ["20"])
        self.assertEqual(query["embed"], ["platforms,regions"])

    def test_link_query_is_preserved(self):
        """Test that the query of a pagination link is kept unchanged."""
        request = Request("GET", "/games?offset=20&max=20")
        query = parse_qs(urlsplit(request.url(BASE_URL)).query)
        self.assertEqual(query, {"offset": ["20"], "max": ["20"]})

    def test_requests_are_immutable(self):
        """Test that descriptors cannot be changed after creation."""
        request = Request("GET", "/games")
        with self.assertRaises(AttributeError):
            request.path = "/users"

    def test_leaderboard_values_do_not_leak(self):
        """Test that changing the caller's mapping leaves the request alone."""
        values = {"var1": "a"}
        request = Request("GET", "/leaderboards/xyz/category/abc", LeaderboardOptions(values=values))
        before = request.url(BASE_URL)

        values["var1"] = "b"
        values["var2"] = "c"
        self.assertEqual(request.url(BASE_URL), before)
        self.assertEqual(parse_qs(urlsplit(before).query), {"var-var1": ["a"]})

    def test_requests_are_hashable(self):
        """Test that descriptors with options can be hashed."""
        request = Request("GET", "/x", LeaderboardOptions(values={"var1": "a"}))
        self.assertEqual(
            hash(request), hash(Request("GET", "/x", LeaderboardOptions(values={"var1": "a"})))
        )
        self.assertIsInstance(hash(Request("GET", "/x", LeaderboardOptions())), int)


if __name__ == "__main__":
    unittest.main()
