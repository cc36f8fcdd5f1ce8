import sys
import unittest
from pathlib import Path

import httpx

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.errors import FetchFailed, InvalidInput, ReadFailed  # noqa: E402
from app.services.job_ad_input import (  # noqa: E402
    DEFAULT_MAX_CHARS,
    DIRECT_TEXT_LABEL,
    SourceKind,
    from_text,
    from_url,
)


class _BrokenStream(httpx.AsyncByteStream):
    async def __aiter__(self):
        raise httpx.ReadError("connection reset while reading body")
        yield b""  # pragma: no cover


class _EndlessStream(httpx.AsyncByteStream):
    def __init__(self):
        self.chunks_sent = 0

    async def __aiter__(self):
        while True:
            self.chunks_sent += 1
            yield b"a" * 4096


class FromTextTests(unittest.TestCase):
    def test_trims_and_labels_direct_text(self):
        request = from_text("  Junior Accountant (m/w/d)\nVollzeit in Berlin \n")
        self.assertEqual(request.content, "Junior Accountant (m/w/d)\nVollzeit in Berlin")
        self.assertEqual(request.source_kind, SourceKind.DIRECT_TEXT)
        self.assertEqual(request.source_label, DIRECT_TEXT_LABEL)

    def test_rejects_empty_and_non_string(self):
        for value in (None, "", "   \n\t", 42, ["text"], {"jobText": "x"}):
            with self.subTest(value=value):
                with self.assertRaises(InvalidInput):
                    from_text(value)


class FromUrlTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.calls = []

    def _transport(self, handler):
        def recording(request: httpx.Request) -> httpx.Response:
            self.calls.append(str(request.url))
            return handler(request)

        return httpx.MockTransport(recording)

    async def test_rejects_non_http_urls_before_fetching(self):
        transport = self._transport(lambda request: httpx.Response(200, text="never"))
        for value in ("not-a-url", "ftp://example.com/job", "www.example.com", "", None, 7):
            with self.subTest(value=value):
                with self.assertRaises(InvalidInput):
                    await from_url(value, transport=transport)
        self.assertEqual(self.calls, [])

    async def test_scheme_match_is_case_insensitive(self):
        transport = self._transport(lambda request: httpx.Response(200, text="<h1>Buchhalter (m/w/d)</h1>"))
        request = await from_url("HTTPS://jobs.example.com/42", transport=transport)
        self.assertEqual(request.source_kind, SourceKind.FETCHED_URL)
        self.assertIn("HTTPS://jobs.example.com/42", request.source_label)
        self.assertEqual(request.content, "<h1>Buchhalter (m/w/d)</h1>")

    async def test_follows_redirects(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "https://jobs.example.com/new"})
            return httpx.Response(200, text="Stellenanzeige")

        request = await from_url("https://jobs.example.com/old", transport=self._transport(handler))
        self.assertEqual(request.content, "Stellenanzeige")
        self.assertEqual(len(self.calls), 2)
        self.assertIn("https://jobs.example.com/old", request.source_label)

    async def test_truncates_long_bodies_to_exact_limit(self):
        transport = self._transport(lambda request: httpx.Response(200, text="a" * (DEFAULT_MAX_CHARS + 12_345)))
        request = await from_url("https://jobs.example.com/huge", transport=transport)
        self.assertEqual(len(request.content), DEFAULT_MAX_CHARS)

    async def test_custom_limit_is_respected(self):
        transport = self._transport(lambda request: httpx.Response(200, text="x" * 500))
        request = await from_url("https://jobs.example.com/ad", max_chars=100, transport=transport)
        self.assertEqual(len(request.content), 100)

    async def test_non_success_status_carries_upstream_code(self):
        transport = self._transport(lambda request: httpx.Response(404, text="missing"))
        with self.assertRaises(FetchFailed) as ctx:
            await from_url("https://jobs.example.com/gone", transport=transport)
        self.assertEqual(ctx.exception.upstream_status, 404)
        self.assertIn("404", str(ctx.exception))
        self.assertEqual(len(self.calls), 1)

    async def test_network_error_maps_to_fetch_failed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("name resolution failed", request=request)

        with self.assertRaises(FetchFailed) as ctx:
            await from_url("https://unreachable.example.com", transport=self._transport(handler))
        self.assertIsNone(ctx.exception.upstream_status)
        self.assertEqual(len(self.calls), 1)

    async def test_body_read_error_maps_to_read_failed(self):
        transport = self._transport(lambda request: httpx.Response(200, stream=_BrokenStream()))
        with self.assertRaises(ReadFailed):
            await from_url("https://jobs.example.com/broken", transport=transport)

    async def test_undecodable_body_maps_to_read_failed(self):
        transport = self._transport(
            lambda request: httpx.Response(
                200,
                headers={"Content-Type": "text/html; charset=bogus-xx"},
                content=b"\xff\xfe\x00bad",
            )
        )
        with self.assertRaises(ReadFailed):
            await from_url("https://jobs.example.com/binary", transport=transport)

    async def test_declared_charset_is_used_for_decoding(self):
        transport = self._transport(
            lambda request: httpx.Response(
                200,
                headers={"Content-Type": "text/html; charset=iso-8859-1"},
                content="Bäcker (m/w/d) in Köln".encode("iso-8859-1"),
            )
        )
        request = await from_url("https://jobs.example.com/baecker", transport=transport)
        self.assertEqual(request.content, "Bäcker (m/w/d) in Köln")

    async def test_endless_body_stops_reading_at_limit(self):
        stream = _EndlessStream()
        transport = self._transport(lambda request: httpx.Response(200, stream=stream))
        request = await from_url("https://jobs.example.com/endless", max_chars=10_000, transport=transport)
        self.assertEqual(len(request.content), 10_000)
        self.assertLessEqual(stream.chunks_sent, 3)

    async def test_blank_body_maps_to_read_failed(self):
        transport = self._transport(lambda request: httpx.Response(200, text="   \n"))
        with self.assertRaises(ReadFailed):
            await from_url("https://jobs.example.com/blank", transport=transport)


if __name__ == "__main__":
    unittest.main()
