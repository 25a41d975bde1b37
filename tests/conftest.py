"""Global test fixtures."""

import os

import logfire

# Keep a developer's YAML config out of unit tests that build Config()
os.environ.pop("DELTAINDEX_CONFIG_FILE", None)

logfire.configure(send_to_logfire=False, console=False)
