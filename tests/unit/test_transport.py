import unittest
from dataclasses import dataclass
from unittest import mock

import requests
from requests.structures import CaseInsensitiveDict

from jsonrelay import Dispatcher, Request, RequestsTransport, Transport, TransportError


@dataclass
class Created:
    id: str = ""


def fake_requests_response(status_code: int, content: bytes) -> mock.MagicMock:
    resp = mock.MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.content = content
    resp.headers = CaseInsensitiveDict(
        {"Content-Type": "application/json"}
    )
    return resp


class TestRequestsTransport(unittest.TestCase):
    def setUp(self):
        self.session = mock.MagicMock(spec=requests.Session)
        self.session.headers = {}

    def test_is_a_transport(self):
        self.assertIsInstance(RequestsTransport(session=self.session), Transport)

    def test_send_passes_request_through(self):
        self.session.request.return_value = fake_requests_response(201, b"{}")
        transport = RequestsTransport(session=self.session, timeout=5.0, verify=False)
        request = Request(
            method="POST",
            url="https://x.org/accounts",
            body=b'{"a":1}',
            headers={"Content-Type": "application/json"},
        )

        resp = transport.send(request)

        self.session.request.assert_called_once_with(
            method="POST",
            url="https://x.org/accounts",
            data=b'{"a":1}',
            headers={"Content-Type": "application/json"},
            timeout=5.0,
            verify=False,
            stream=True,
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.headers["content-type"], "application/json")

    def test_empty_body_sends_no_data(self):
        self.session.request.return_value = fake_requests_response(204, b"")
        RequestsTransport(session=self.session).send(
            Request(method="GET", url="https://x.org")
        )
        self.assertIsNone(self.session.request.call_args.kwargs["data"])

    def test_token_applied_to_session(self):
        RequestsTransport(token="secret", session=self.session)
        self.assertEqual(self.session.headers["Authorization"], "Bearer secret")

    def test_connection_error_becomes_transport_error(self):
        cause = requests.ConnectionError("connection refused")
        self.session.request.side_effect = cause
        transport = RequestsTransport(session=self.session)

        with self.assertRaises(TransportError) as cm:
            transport.send(Request(method="GET", url="https://x.org/a"))

        self.assertIs(cm.exception.__cause__, cause)
        self.assertEqual(cm.exception.url, "https://x.org/a")
        self.assertIn("connection refused", str(cm.exception))

    def test_response_released_once_by_dispatcher(self):
        raw = fake_requests_response(201, b'{"id":"42"}')
        self.session.request.return_value = raw
        client = Dispatcher(
            "https://x.org", transport=RequestsTransport(session=self.session)
        )
        created = Created()

        resp = client.post("/accounts", {"name": "n"}, created, {})

        self.assertEqual(created.id, "42")
        self.assertTrue(resp.closed)
        raw.close.assert_called_once_with()

    def test_default_session(self):
        transport = RequestsTransport(token="abc")
        try:
            self.assertIsInstance(transport.session, requests.Session)
            self.assertEqual(transport.session.headers["Authorization"], "Bearer abc")
        finally:
            transport.close()


if __name__ == "__main__":
    unittest.main()
