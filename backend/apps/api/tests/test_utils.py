import unittest
from rest_framework import status
from apps.api.utils import error_response, status_for_code


class ErrorResponseTests(unittest.TestCase):
    def test_default_status_mapping_and_details(self):
        resp = error_response("NOT_FOUND", "missing", {"id": 1})
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["code"], "NOT_FOUND")
        self.assertEqual(resp.data["error"]["status"], status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.data["error"]["details"], {"id": 1})

    def test_invalid_state_maps_to_conflict(self):
        resp = error_response("invalid_state", "Cart is already checked out!")
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(resp.data["error"]["code"], "INVALID_STATE")

    def test_unknown_code_defaults_to_bad_request(self):
        self.assertEqual(status_for_code("SOMETHING_ELSE"), status.HTTP_400_BAD_REQUEST)

    def test_custom_status_override(self):
        resp = error_response("UNKNOWN", "oops", http_status=status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(resp.data["error"]["message"], "oops")

    def test_details_omitted_when_absent(self):
        resp = error_response("SERVER_ERROR", "Something went wrong")
        self.assertNotIn("details", resp.data["error"])
        self.assertEqual(resp.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    def test_rejects_blank_code_and_message(self):
        with self.assertRaises(ValueError):
            error_response("  ", "message")
        with self.assertRaises(ValueError):
            error_response("CODE", "")
        with self.assertRaises(ValueError):
            error_response(None, "message")

    def test_envelope_has_only_documented_keys(self):
        resp = error_response("CONFLICT", "taken", {"name": "Water"})
        self.assertEqual(
            set(resp.data["error"]), {"code", "message", "status", "details"}
        )
