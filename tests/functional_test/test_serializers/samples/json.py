from __future__ import annotations

SAMPLES = [
    ("Hi", "string"),
    ("", "empty string"),
    ("Ünïcödé ✓", "non-ascii string"),
    (42, "positive integer"),
    (-4, "negative integer"),
    (3.14, "float"),
    (True, "True"),
    (False, "False"),
    (None, "None"),
    ([], "empty list"),
    ({}, "empty dict"),
    ([1, "two", 3.0, None], "heterogeneous list"),
    (
        {
            "level": "INFO",
            "logger": "app.worker",
            "message": "Job done",
            "pid": 4242,
            "elapsed": 0.125,
            "tags": ["batch", "nightly"],
            "extra": {"job_id": "8f14e45f", "retries": 0, "failed": False, "parent": None},
        },
        "log record",
    ),
]
