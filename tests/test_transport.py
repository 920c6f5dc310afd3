import sys
import unittest
from decimal import Decimal
from unittest.mock import MagicMock, patch
from pathlib import Path

CLIENT_SRC = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(CLIENT_SRC))

import requests

from discogs_marketplace import config as discogs_config
from discogs_marketplace.transport import (
    Transport,
    APIError,
    DecodeError,
    NotFoundError,
    RateLimitError,
    UnauthorizedError,
)

URL = "https://api.discogs.com/marketplace/listings/1"


def _response(status_code, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if payload is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response


@patch('discogs_marketplace.transport.requests.get')
class TestTransport(unittest.TestCase):
    def test_headers_without_token(self, mock_get):
        transport = Transport(user_agent="TestAgent/1.0")

        self.assertEqual(transport.headers['User-Agent'], "TestAgent/1.0")
        self.assertEqual(transport.headers['Accept'], "application/json")
        self.assertNotIn('Authorization', transport.headers)

    def test_headers_with_token(self, mock_get):
        transport = Transport(token="abc123")

        self.assertEqual(transport.headers['Authorization'], "Discogs token=abc123")

    @patch('discogs_marketplace.config.load_dotenv')
    def test_from_config(self, mock_load_dotenv, mock_get):
        cfg = discogs_config.Config()
        cfg.discogs_token = "from-env"
        cfg.discogs_user_agent = "EnvAgent/2.0"
        cfg.discogs_timeout = "12"

        transport = Transport.from_config(cfg)

        self.assertEqual(transport.headers['Authorization'], "Discogs token=from-env")
        self.assertEqual(transport.headers['User-Agent'], "EnvAgent/2.0")
        self.assertEqual(transport.timeout, 12.0)

    def test_get_success(self, mock_get):
        mock_get.return_value = _response(200, {'id': 1})
        transport = Transport(timeout=7)

        result = transport.get(URL, params={'curr_abbr': 'USD'})

        self.assertEqual(result, {'id': 1})
        mock_get.assert_called_once_with(
            URL, headers=transport.headers, params={'curr_abbr': 'USD'}, timeout=7
        )
        mock_get.return_value.json.assert_called_once_with(parse_float=Decimal)

    def test_get_returns_non_object_body(self, mock_get):
        mock_get.return_value = _response(200, [{'id': 1}])

        result = Transport().get(URL)

        self.assertEqual(result, [{'id': 1}])

    def test_get_without_params(self, mock_get):
        mock_get.return_value = _response(200, {})

        Transport().get(URL)

        self.assertIsNone(mock_get.call_args.kwargs['params'])

    def test_401_unauthorized(self, mock_get):
        mock_get.return_value = _response(401, {'message': 'You must authenticate to access this resource.'})

        with self.assertRaises(UnauthorizedError) as context:
            Transport().get(URL)

        self.assertEqual(context.exception.status_code, 401)
        self.assertIn("authenticate", str(context.exception))

    def test_403_unauthorized(self, mock_get):
        mock_get.return_value = _response(403, {'message': 'Forbidden'})

        with self.assertRaises(UnauthorizedError):
            Transport().get(URL)

    def test_404_not_found(self, mock_get):
        mock_get.return_value = _response(404, {'message': 'Listing not found.'})

        with self.assertRaises(NotFoundError) as context:
            Transport().get(URL)

        self.assertEqual(str(context.exception), "Listing not found.")
        self.assertEqual(context.exception.url, URL)

    def test_429_rate_limit_not_retried(self, mock_get):
        mock_get.return_value = _response(429, {'message': 'You are making requests too quickly.'})

        with self.assertRaises(RateLimitError):
            Transport().get(URL)

        self.assertEqual(mock_get.call_count, 1)

    def test_500_server_error(self, mock_get):
        mock_get.return_value = _response(500, text="Internal Server Error")

        with self.assertRaises(APIError) as context:
            Transport().get(URL)

        self.assertEqual(context.exception.status_code, 500)
        self.assertIn("500", str(context.exception))
        self.assertEqual(mock_get.call_count, 1)

    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("Network error")

        with self.assertRaises(APIError) as context:
            Transport().get(URL)

        self.assertIsInstance(context.exception.__cause__, requests.exceptions.ConnectionError)
        self.assertIsNone(context.exception.status_code)

    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout("Timeout")

        with self.assertRaises(APIError):
            Transport().get(URL)

    def test_malformed_json(self, mock_get):
        mock_get.return_value = _response(200, text="<html>")

        with self.assertRaises(DecodeError):
            Transport().get(URL)


if __name__ == '__main__':
    unittest.main()
