"""Locust load testing script for Summarist."""

import random

from locust import HttpUser, between, task

SAMPLE_SEARCHES = ["climate", "python", "market", "health", "history", "the"]
STYLES = ["concise", "detailed", "bullet-points"]

SAMPLE_TEXT = (
    "The quick brown fox jumps over the lazy dog. Foxes are small omnivorous "
    "mammals found on every continent except Antarctica. They adapt well to "
    "urban environments and are known for their cunning."
)


class SummaristUser(HttpUser):
    """Simulated user for load testing Summarist."""

    wait_time = between(1, 3)  # Wait 1-3 seconds between tasks

    def on_start(self) -> None:
        # Each simulated user gets its own rate-limit bucket
        self.client.headers["X-Forwarded-For"] = f"10.0.{random.randint(0, 255)}.{random.randint(1, 254)}"
        self.known_ids: list[str] = []

    @task(4)
    def list_summaries(self) -> None:
        """Fetch newest summaries - most common operation."""
        response = self.client.get("/api/v1/summaries")
        if response.ok:
            self.known_ids = [s["id"] for s in response.json().get("data", [])][:10]

    @task(2)
    def search_summaries(self) -> None:
        """Search summaries by text."""
        term = random.choice(SAMPLE_SEARCHES)
        self.client.get(f"/api/v1/summaries?search={term}", name="/api/v1/summaries?search")

    @task(1)
    def filter_by_style(self) -> None:
        """Filter summaries by style."""
        style = random.choice(STYLES)
        self.client.get(f"/api/v1/summaries?style={style}", name="/api/v1/summaries?style")

    @task(1)
    def fetch_summary(self) -> None:
        """Fetch a single summary seen in an earlier listing."""
        if not self.known_ids:
            return
        summary_id = random.choice(self.known_ids)
        self.client.get(f"/api/v1/summaries/{summary_id}", name="/api/v1/summaries/[id]")

    @task(1)
    def create_summary(self) -> None:
        """Submit text for summarization (rate limited to 10 per 15 min)."""
        with self.client.post(
            "/api/v1/summaries",
            json={"originalText": SAMPLE_TEXT, "summaryStyle": random.choice(STYLES)},
            catch_response=True,
        ) as response:
            if response.status_code == 429:
                response.success()
