#!/usr/bin/env python3
"""
Tests for the radar loop page scraper
"""

import httpx
import pytest

from bom_radar_viewer.errors import NoDataError, UpstreamFetchError
from bom_radar_viewer.scraper import extract_timestamp, fetch_radar_images, parse_image_names

from conftest import LOOP_HTML

HOST = "https://reg.bom.gov.au"


class TestParseImageNames:
    def test_mixed_quotes_in_document_order(self):
        assert parse_image_names(LOOP_HTML) == [
            "/radar/IDR663.T.202512040100.png",
            "/radar/IDR663.T.202512040106.png",
            "/radar/IDR663.T.202512040112.png",
        ]

    def test_no_assignments(self):
        assert parse_image_names("<html><body>Product unavailable</body></html>") == []

    def test_match_order_not_index_order(self):
        """Indices are ignored; text order wins and duplicates stay"""
        html = """
        theImageNames[5] = "/radar/b.png";
        theImageNames[1]="/radar/a.png";
        theImageNames[5] = "/radar/b.png";
        """
        assert parse_image_names(html) == ["/radar/b.png", "/radar/a.png", "/radar/b.png"]

    def test_other_arrays_ignored(self):
        html = 'theOtherNames[0] = "/radar/x.png"; theImageNames[0] = "/radar/y.png";'
        assert parse_image_names(html) == ["/radar/y.png"]


class TestExtractTimestamp:
    def test_timestamp_from_filename(self):
        assert extract_timestamp("/radar/IDR663.T.202512040100.png") == "202512040100"

    def test_missing_timestamp(self):
        assert extract_timestamp("/radar/IDR663.png") == ""

    def test_wrong_marker_letter(self):
        assert extract_timestamp("/radar/IDR663.X.202512040100.png") == ""

    def test_short_digit_run(self):
        assert extract_timestamp("/radar/IDR663.T.2025.png") == ""


class TestFetchRadarImages:
    @pytest.mark.asyncio
    async def test_returns_absolute_urls_and_timestamps(self, bom, http_client):
        bom.add("/products/IDR663.loop.shtml", text=LOOP_HTML)

        images = await fetch_radar_images(http_client, "IDR663", HOST)

        assert [i.url for i in images] == [
            "https://reg.bom.gov.au/radar/IDR663.T.202512040100.png",
            "https://reg.bom.gov.au/radar/IDR663.T.202512040106.png",
            "https://reg.bom.gov.au/radar/IDR663.T.202512040112.png",
        ]
        assert [i.timestamp for i in images] == ["202512040100", "202512040106", "202512040112"]
        assert bom.paths() == ["/products/IDR663.loop.shtml"]

    @pytest.mark.asyncio
    async def test_empty_page_raises_no_data(self, bom, http_client):
        bom.add("/products/INVALID.loop.shtml", text="<html></html>")

        with pytest.raises(NoDataError):
            await fetch_radar_images(http_client, "INVALID", HOST)

    @pytest.mark.asyncio
    async def test_http_status_raises_fetch_error(self, bom, http_client):
        bom.add("/products/IDR663.loop.shtml", status=503, text="busy")

        with pytest.raises(UpstreamFetchError) as exc_info:
            await fetch_radar_images(http_client, "IDR663", HOST)

        assert exc_info.value.status == 503
        assert exc_info.value.reason == "Service Unavailable"

    @pytest.mark.asyncio
    async def test_network_error_has_no_status(self, bom, http_client):
        bom.add("/products/IDR663.loop.shtml", error=httpx.ConnectError)

        with pytest.raises(UpstreamFetchError) as exc_info:
            await fetch_radar_images(http_client, "IDR663", HOST)

        assert exc_info.value.status is None

    @pytest.mark.asyncio
    async def test_every_call_fetches_again(self, bom, http_client):
        bom.add("/products/IDR663.loop.shtml", text=LOOP_HTML)

        await fetch_radar_images(http_client, "IDR663", HOST)
        await fetch_radar_images(http_client, "IDR663", HOST)

        assert len(bom.calls) == 2
