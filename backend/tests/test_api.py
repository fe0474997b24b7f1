import unittest


class TestChoirSeatingAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        from fastapi.testclient import TestClient

        from backend.app.main import app

        cls.client = TestClient(app)

    def regenerate(self, **body):
        body.setdefault("counts", {"soprano": 2, "alto": 2, "tenor": 0, "bass": 0})
        body.setdefault("rows", 2)
        body.setdefault("mode", "auto")
        r = self.client.post("/layout/regenerate", json=body)
        self.assertEqual(r.status_code, 200, r.text)
        return r.json()

    @staticmethod
    def labels(layout):
        return [[s["label"] if s else None for s in row["slots"]] for row in layout["rows"]]

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"ok": True})

    def test_modes(self):
        modes = {m["value"]: m["min_rows"] for m in self.client.get("/modes").json()}
        self.assertEqual(modes, {"auto": 1, "condition1": 3, "condition2": 4})

    def test_regenerate_and_get(self):
        layout = self.regenerate()
        self.assertEqual(self.labels(layout), [["S0", "A0"], ["S1", "A1"]])
        self.assertEqual(layout["row_length"], 2)
        self.assertEqual(layout["occupied"], 4)
        self.assertEqual(layout["config"]["total"], 4)
        self.assertEqual([r["offset"] for r in layout["rows"]], [0, 55])
        slot = layout["rows"][0]["slots"][0]
        self.assertEqual(slot["part"], "Soprano")
        self.assertEqual(slot["color"], "#ffe0e6")

        current = self.client.get("/layout").json()
        self.assertEqual(current, layout)

    def test_free_form_counts_normalized(self):
        layout = self.regenerate(counts={"soprano": "abc", "alto": "3", "tenor": -2, "bass": ""}, rows="0")
        self.assertEqual(layout["config"]["counts"], {"Soprano": 0, "Alto": 3, "Tenor": 0, "Bass": 0})
        self.assertEqual(layout["config"]["rows"], 1)
        self.assertEqual(self.labels(layout), [["A0", "A1", "A2"]])

    def test_swap(self):
        self.regenerate()
        r = self.client.post(
            "/layout/swap",
            json={"origin": {"row": 0, "index": 0}, "destination": {"row": 1, "index": 0}},
        )
        self.assertEqual(r.status_code, 200)
        self.assertEqual(self.labels(r.json()), [["S1", "A0"], ["S0", "A1"]])

        again = self.client.post(
            "/layout/swap",
            json={"origin": {"row": 0, "index": 0}, "destination": {"row": 1, "index": 0}},
        ).json()
        self.assertEqual(self.labels(again), [["S0", "A0"], ["S1", "A1"]])

    def test_swap_out_of_range_is_rejected(self):
        before = self.regenerate()
        r = self.client.post(
            "/layout/swap",
            json={"origin": {"row": 0, "index": 0}, "destination": {"row": 4, "index": 0}},
        )
        self.assertEqual(r.status_code, 400)
        self.assertEqual(self.client.get("/layout").json(), before)

    def test_mode_needs_rows(self):
        before = self.regenerate()
        r = self.client.post("/layout/regenerate", json={"rows": 2, "mode": "condition2"})
        self.assertEqual(r.status_code, 400)
        self.assertIn("at least 4 rows", r.json()["detail"])
        self.assertEqual(self.labels(self.client.get("/layout").json()), self.labels(before))

    def test_condition1_layout(self):
        layout = self.regenerate(counts={"soprano": 2, "alto": 1, "tenor": 1, "bass": 1}, rows=3, mode="condition1")
        self.assertEqual(self.labels(layout), [["S0", "A0"], ["S1", None], ["T0", "B0"]])

    def test_unknown_mode_rejected(self):
        r = self.client.put("/layout/config", json={"mode": "diagonal"})
        self.assertEqual(r.status_code, 422)

    def test_update_config_does_not_regenerate(self):
        before = self.regenerate()
        r = self.client.put("/layout/config", json={"counts": {"bass": "4"}, "rows": 3})
        self.assertEqual(r.status_code, 200)
        cfg = r.json()
        self.assertEqual(cfg["counts"]["Bass"], 4)
        self.assertEqual(cfg["counts"]["Soprano"], 2)
        self.assertEqual(cfg["rows"], 3)
        self.assertEqual(self.labels(self.client.get("/layout").json()), self.labels(before))

    def test_layout_exposes_empty_color(self):
        layout = self.regenerate(counts={"soprano": 1, "alto": 0, "tenor": 0, "bass": 0}, rows=2)
        self.assertEqual(layout["empty_color"], "#f0f0f0")
        self.assertEqual(self.labels(layout), [["S0"], [None]])

    def test_layout_uses_the_chart_it_is_given(self):
        from backend.app.main import _layout
        from choir_seating.board import SeatingBoard, SeatingConfig
        from choir_seating.chart import Slot
        from choir_seating.roster import Part

        board = SeatingBoard(SeatingConfig(counts={Part.soprano: 2, Part.alto: 2}, rows=2, mode="auto"))
        board.regenerate()
        swapped = board.swap(Slot(0, 0), Slot(1, 0))
        board.regenerate()
        out = _layout(board, swapped).model_dump()
        self.assertEqual(self.labels(out), [["S1", "A0"], ["S0", "A1"]])
        self.assertNotEqual(out["rows"][0]["slots"][0]["id"], board.chart.get(0, 0).id)


if __name__ == "__main__":
    unittest.main()
