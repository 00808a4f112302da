"""Command-line tools for Backend FakeCheck."""
