#!/usr/bin/env python3
"""
Unit tests for parameter administration endpoints.
"""

import unittest

from tests import ApiTestCase


class TestParameterEndpoints(ApiTestCase):

    def test_list_and_get(self):
        data = self.client.get("/api/parameters").json()
        names = [p["name"] for p in data["parameters"]]
        self.assertIn("art-course-price", names)
        self.assertEqual(data["count"], len(names))

        price = self.client.get("/api/parameters/art-course-price").json()
        self.assertEqual((price["type"], price["value"]), ("price", "90"))

    def test_get_missing_parameter(self):
        self.assertError(self.client.get("/api/parameters/nope-price"), 404, "not_found")

    def test_update_parameter_bumps_version(self):
        before = self.client.get("/api/parameters/art-course-price").json()

        response = self.client.put("/api/parameters/art-course-price", json={"value": "95.50"})

        self.assertEqual(response.status_code, 200, response.text)
        after = response.json()
        self.assertEqual(after["value"], "95.50")
        self.assertGreater(after["version"], before["version"])

    def test_update_parameter_rejects_bad_value(self):
        response = self.client.put("/api/parameters/refund-time-limit", json={"value": "tomorrow"})
        self.assertError(response, 400, "invalid_parameter")

    def test_single_weight_update_rejected(self):
        response = self.client.put("/api/parameters/learning-style-weight", json={"value": "20"})
        self.assertError(response, 400, "invalid_weights")

    def test_weights_roundtrip(self):
        current = self.client.get("/api/config/matching-weights").json()
        self.assertEqual(
            (current["teacher_rating"], current["interest_match"], current["learning_style"]),
            (60, 30, 10)
        )

    def test_weights_must_sum_to_100(self):
        for bad in ((60, 30, 9), (60, 30, 11)):
            with self.subTest(weights=bad):
                response = self.client.put("/api/config/matching-weights", json={
                    "teacher_rating": bad[0],
                    "interest_match": bad[1],
                    "learning_style": bad[2]
                })
                self.assertError(response, 400, "invalid_weights")

        unchanged = self.client.get("/api/config/matching-weights").json()
        self.assertEqual(unchanged["learning_style"], 10)

    def test_malformed_weight_row_reports_invalid_weights(self):
        self.ctx.parameter_store.set("teacher-rating-weight", "60.5", param_type="config")

        self.assertError(self.client.get("/api/children/Y001/ranked-teachers"), 400, "invalid_weights")
        self.assertError(self.client.get("/api/config/matching-weights"), 400, "invalid_weights")

    def test_weight_update_invalidates_matches(self):
        self.client.get("/api/children/Y001/ranked-teachers")
        before = self.client.get("/api/config/matching-weights").json()

        response = self.client.put("/api/config/matching-weights", json={
            "teacher_rating": 40,
            "interest_match": 40,
            "learning_style": 20
        })

        self.assertEqual(response.status_code, 200, response.text)
        data = response.json()
        self.assertGreater(data["version"], before["version"])
        self.assertEqual(data["invalidated"], 2)

        ranked = self.client.get("/api/children/Y001/ranked-teachers").json()
        self.assertEqual(ranked["weight_version"], data["version"])
        self.assertEqual(ranked["teachers"][0]["score"], 96)

    def test_reset_defaults(self):
        self.client.put("/api/parameters/art-course-price", json={"value": "200"})
        self.client.put("/api/config/matching-weights", json={
            "teacher_rating": 20,
            "interest_match": 40,
            "learning_style": 40
        })

        response = self.client.post("/api/parameters/reset-defaults")

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(self.client.get("/api/parameters/art-course-price").json()["value"], "90")
        weights = self.client.get("/api/config/matching-weights").json()
        self.assertEqual(weights["teacher_rating"], 60)


if __name__ == '__main__':
    unittest.main()
